"""
Page slicing for cached result collections.

Requests past the last page are clamped to the last page so the agent always
receives real data. Every page carries summary and navigation text because the
agent has to be told explicitly how to ask for the next page.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence


MAX_PAGE_SIZE = 100


def _plural(count: int, word: str) -> str:
    return word if count == 1 else f"{word}s"


@dataclass(frozen=True)
class Page:
    """One page of a collection plus the counts needed to navigate it."""

    items: List[Any]
    page: int
    page_size: int
    total_pages: int
    total_count: int
    start_index: int
    end_index: int
    item_label: str = 'items'

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @property
    def remaining_items(self) -> int:
        return self.total_count - self.end_index

    @property
    def remaining_pages(self) -> int:
        return max(self.total_pages - self.page, 0)

    @property
    def current_range(self) -> str:
        if not self.total_count:
            return "0-0"
        return f"{self.start_index + 1}-{self.end_index}"

    @property
    def summary(self) -> str:
        label = self.item_label
        if not self.total_count:
            return f"No {label} found (page 1 of 1)."
        return (
            f"Showing {label} {self.current_range} of {self.total_count} total {label} "
            f"(page {self.page} of {self.total_pages})."
        )

    @property
    def navigation_guide(self) -> str:
        label = self.item_label
        if not self.total_count:
            return f"There are no {label} to page through."

        parts = []
        if self.has_next_page:
            parts.append(
                f"There {'is' if self.remaining_pages == 1 else 'are'} {self.remaining_pages} more "
                f"{_plural(self.remaining_pages, 'page')} available ({self.remaining_items} more {label}). "
                f"To see more {label}, request page {self.page + 1}."
            )
        else:
            parts.append(f"This is the last page of {label}.")
        if self.has_previous_page:
            parts.append(f"To go back, request page {self.page - 1}.")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Pagination block of the result envelope."""
        return {
            'page': self.page,
            'pageSize': self.page_size,
            'totalPages': self.total_pages,
            'totalCount': self.total_count,
            'hasNextPage': self.has_next_page,
            'hasPreviousPage': self.has_previous_page,
            'paginationSummary': self.summary,
            'navigationGuide': self.navigation_guide,
            'currentRange': self.current_range,
            'remainingItems': self.remaining_items,
            'remainingPages': self.remaining_pages,
        }


def paginate(items: Sequence[Any], page: int, page_size: int, item_label: str = 'items') -> Page:
    """
    Slice one page out of a collection.

    Args:
        items: Already-filtered collection
        page: Requested page (>= 1); clamped to the last page when too large
        page_size: Items per page (1 to MAX_PAGE_SIZE)
        item_label: Plural noun used in the summary text

    Raises:
        ValueError: If page or page_size is out of range
    """
    if page < 1 or not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValueError(f"Invalid page {page} / page size {page_size}")

    total_count = len(items)
    total_pages = math.ceil(total_count / page_size)
    valid_page = min(page, max(total_pages, 1))

    start_index = (valid_page - 1) * page_size
    end_index = min(start_index + page_size, total_count)

    return Page(
        items=list(items[start_index:end_index]),
        page=valid_page,
        page_size=page_size,
        total_pages=total_pages,
        total_count=total_count,
        start_index=start_index,
        end_index=end_index,
        item_label=item_label,
    )
