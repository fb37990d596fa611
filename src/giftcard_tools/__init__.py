"""
giftcard-tools: rewards marketplace client and agent tools.

Balance, reward catalog, order placement and order status for a gift-card
rewards API, exposed as Model Context Protocol tools.
"""

__version__ = "0.1.0"

from giftcard_tools.client import AsyncGiftCard
from giftcard_tools.config import Settings
from giftcard_tools.auth import derive_auth_header
from giftcard_tools.result import Result
from giftcard_tools.errors import (
    GiftCardError,
    InvalidRequestError,
    TransportError,
    UpstreamError,
    ResponseFormatError,
)
from giftcard_tools.tools import ToolRegistry, ToolResult, registry

__all__ = [
    "AsyncGiftCard",
    "Settings",
    "derive_auth_header",
    "Result",
    "GiftCardError",
    "InvalidRequestError",
    "TransportError",
    "UpstreamError",
    "ResponseFormatError",
    "ToolRegistry",
    "ToolResult",
    "registry",
]
