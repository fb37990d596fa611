"""
Turn an ``ApiResponse`` into a ``Result`` of a typed model.
"""

import logging
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from giftcard_tools.errors import GiftCardError, ResponseFormatError, TransportError, UpstreamError
from giftcard_tools.models.envelope import ApiResponse
from giftcard_tools.result import Result

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def error_from_response(response: ApiResponse, message: Optional[str] = None) -> GiftCardError:
    """Build the typed error for a failed response, optionally with a rewritten message."""
    text = message if message is not None else (response.error or "Unknown error occurred")
    if response.transport_failed:
        return TransportError(text)
    return UpstreamError(text, status_code=response.status_code, details=response.body)


def decode_response(response: ApiResponse, model: type[M]) -> Result[M]:
    if response.error is not None:
        return Result.fail(error_from_response(response))
    try:
        return Result.ok(model.model_validate(response.body))
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "body"
        logger.warning("Could not decode %s: %s", model.__name__, e)
        return Result.fail(ResponseFormatError(
            f"Unexpected response from rewards API ({location}: {first['msg']})",
            details=response.body,
        ))
