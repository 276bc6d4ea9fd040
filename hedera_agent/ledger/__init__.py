"""Ledger access: mirror node and SaucerSwap client plus its exceptions"""

from .errors import (
    ErrorCode,
    LedgerError,
    LedgerConnectionError,
    LedgerHTTPError,
    LedgerNotFoundError,
    LedgerRateLimitError,
)

__all__ = [
    'ErrorCode',
    'LedgerError',
    'LedgerConnectionError',
    'LedgerHTTPError',
    'LedgerNotFoundError',
    'LedgerRateLimitError',
]
