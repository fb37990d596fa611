"""
Gift card error types.
"""

from typing import Any, Optional


class GiftCardError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Any] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code


class InvalidRequestError(GiftCardError):
    """Caller-supplied data failed a precondition. Raised before any I/O."""

    def __init__(self, message: str):
        super().__init__("invalid_request", message)


class TransportError(GiftCardError):
    def __init__(self, message: str, status_code: int = 500):
        super().__init__("transport_error", message, status_code=status_code)


class UpstreamError(GiftCardError):
    """Non-2xx response from the rewards API. ``details`` holds the parsed body."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Any] = None):
        super().__init__("upstream_error", message, details, status_code)


class ResponseFormatError(GiftCardError):
    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__("invalid_response", message, details)
