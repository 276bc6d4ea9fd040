"""
Pydantic schemas for tool arguments and tool responses.

Argument models accept the camelCase keys agents send (`pageSize`) as well
as snake_case names. Every tool answers with a ResultEnvelope serialized to
JSON.
"""

import json
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from hedera_agent.ledger.errors import ErrorCode


ENTITY_ID_PATTERN = r'^\d+\.\d+\.\d+$'
TIMESTAMP_PATTERN = r'^\d+(\.\d{1,9})?$'

CONVERSION_RATE_INTERVALS = ('FIVEMIN', 'HOUR', 'DAY', 'WEEK')


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass; true/false is never a page number or amount
    if isinstance(value, bool):
        raise ValueError("must be an integer, not a boolean")
    return value


class ResultEnvelope(BaseModel):
    """Uniform success/error contract returned by every tool."""

    status: Literal['success', 'error'] = Field(
        description="Outcome of the tool call"
    )
    message: str = Field(
        description="Human-readable summary of the outcome"
    )
    code: Optional[str] = Field(
        default=None,
        description="Error code, present only on errors"
    )
    pagination: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Page metadata for paginated tools"
    )
    filter: Optional[str] = Field(
        default=None,
        description="Filter applied by paginated tools (null when none)"
    )
    data: Any = Field(
        default=None,
        description="Tool payload, present only on success"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "status": "success",
                "message": "SaucerSwap pools retrieved successfully",
                "pagination": {"page": 1, "pageSize": 10, "totalPages": 32, "totalCount": 312},
                "filter": None,
                "data": [],
            }
        }

    @classmethod
    def success(cls, message: str, data: Any = None, **extra: Any) -> 'ResultEnvelope':
        return cls(status='success', message=message, data=data, **extra)

    @classmethod
    def error(cls, message: str, code: Optional[str] = None) -> 'ResultEnvelope':
        return cls(status='error', message=message, code=code or ErrorCode.UNKNOWN_ERROR)

    def to_payload(self) -> Dict[str, Any]:
        """Wire dict: `data` only on success, `code` only on error."""
        payload = self.model_dump()
        if self.status == 'success':
            payload.pop('code')
        else:
            payload.pop('data')
        if self.pagination is None:
            payload.pop('pagination')
            payload.pop('filter')
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), default=str)


class ToolArgs(BaseModel):
    """Base for tool argument records."""

    class Config:
        populate_by_name = True
        extra = 'ignore'


class PoolsPageArgs(ToolArgs):
    page: int = Field(default=1, ge=1, description="Page number to retrieve")
    page_size: int = Field(
        default=10, ge=1, le=100, alias='pageSize',
        description="Number of pools per page (1-100)"
    )
    refresh: bool = Field(
        default=False,
        description="Force refresh data from the API instead of the cached snapshot"
    )
    filter: Optional[str] = Field(
        default="",
        description="Only pools whose token or LP symbol contains this text (case-insensitive)"
    )

    @field_validator('page', 'page_size', mode='before')
    @classmethod
    def _integers_only(cls, value: Any) -> Any:
        return _reject_bool(value)


class PoolRatesArgs(ToolArgs):
    pool_id: str = Field(alias='poolId', min_length=1, description="SaucerSwap pool id")
    interval: Literal['FIVEMIN', 'HOUR', 'DAY', 'WEEK'] = Field(
        default='HOUR', description="Candle interval"
    )
    inverted: bool = Field(default=False, description="Invert the conversion rate")

    @field_validator('pool_id', mode='before')
    @classmethod
    def _pool_id_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator('interval', mode='before')
    @classmethod
    def _interval_upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator('pool_id')
    @classmethod
    def _pool_id_numeric(cls, value: str) -> str:
        if not value.isdigit():
            raise ValueError("pool id must be numeric")
        return value


class AccountArgs(ToolArgs):
    account_id: Optional[str] = Field(
        default=None, alias='accountId', pattern=ENTITY_ID_PATTERN,
        description="Account id (shard.realm.num); defaults to the operator account"
    )


class TokenBalanceArgs(AccountArgs):
    token_id: str = Field(alias='tokenId', pattern=ENTITY_ID_PATTERN, description="Token id")


class TokenHoldersArgs(ToolArgs):
    token_id: str = Field(alias='tokenId', pattern=ENTITY_ID_PATTERN, description="Token id")
    threshold: Optional[int] = Field(
        default=None, ge=0,
        description="Minimum balance in base units"
    )

    @field_validator('threshold', mode='before')
    @classmethod
    def _integer_only(cls, value: Any) -> Any:
        return _reject_bool(value)


class TopicArgs(ToolArgs):
    topic_id: str = Field(alias='topicId', pattern=ENTITY_ID_PATTERN, description="HCS topic id")


class TopicMessagesArgs(TopicArgs):
    lower_timestamp: Optional[str] = Field(
        default=None, alias='lowerTimestamp', pattern=TIMESTAMP_PATTERN,
        description="Only messages at or after this consensus timestamp (seconds.nanos)"
    )
    upper_timestamp: Optional[str] = Field(
        default=None, alias='upperTimestamp', pattern=TIMESTAMP_PATTERN,
        description="Only messages at or before this consensus timestamp (seconds.nanos)"
    )
