"""Exceptions raised by the ledger client and the error codes tools report."""

from typing import Optional


class ErrorCode:
    """Codes carried in the `code` field of error envelopes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"


class LedgerError(Exception):
    """Base exception for mirror node and SaucerSwap failures"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class LedgerConnectionError(LedgerError):
    """Raised when the remote API cannot be reached"""
    pass


class LedgerHTTPError(LedgerError):
    """Raised when the remote API answers with a non-success status"""

    def __init__(self, message: str, status: int, code: Optional[str] = None):
        super().__init__(message, code=code)
        self.status = status


class LedgerNotFoundError(LedgerHTTPError):
    """Raised on 404 responses"""

    def __init__(self, message: str):
        super().__init__(message, status=404, code=ErrorCode.NOT_FOUND)


class LedgerRateLimitError(LedgerHTTPError):
    """Raised on 429 responses"""

    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message, status=429, code=ErrorCode.RATE_LIMITED)
        self.retry_after = retry_after
