"""Free-text filtering of result records before pagination."""

from typing import Any, Iterable, List, Optional, Sequence, Tuple

FieldPath = Tuple[str, ...]

# Pools match on either token symbol or the LP token symbol
POOL_FILTER_FIELDS: Sequence[FieldPath] = (
    ('tokenA', 'symbol'),
    ('tokenB', 'symbol'),
    ('lpToken', 'symbol'),
)


def _field_text(record: Any, path: FieldPath) -> str:
    value = record
    for key in path:
        if not isinstance(value, dict):
            return ''
        value = value.get(key)
    return value if isinstance(value, str) else ''


def filter_records(records: Iterable[Any], text: Optional[str], fields: Sequence[FieldPath]) -> List[Any]:
    """
    Keep records where any of `fields` contains `text`, ignoring case.

    An empty or missing filter returns every record.
    """
    if not text:
        return list(records)

    needle = text.lower()
    return [
        record for record in records
        if any(needle in _field_text(record, path).lower() for path in fields)
    ]


def filter_pools(pools: Iterable[Any], text: Optional[str]) -> List[Any]:
    """Filter SaucerSwap pools by token or LP symbol"""
    return filter_records(pools, text, POOL_FILTER_FIELDS)
