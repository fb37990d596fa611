"""
Orders API: place reward orders and look up their status.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote, urlencode

from giftcard_tools.decode import decode_response, error_from_response
from giftcard_tools.errors import GiftCardError, InvalidRequestError, ResponseFormatError
from giftcard_tools.models.order import MAX_QUANTITY, MIN_QUANTITY, CreateOrderRequest, OrderResponse
from giftcard_tools.result import Result
from giftcard_tools.transport.http import HttpClient

logger = logging.getLogger(__name__)

# Substring of an upstream 400 message -> message shown to the user. Matching
# depends on upstream wording; unmatched text passes through unchanged.
ORDER_LOOKUP_ERRORS = (
    ("Program ID", "Invalid Program ID"),
    ("Invalid Order ID", "Invalid Order ID"),
    ("reference no", "Invalid reference number"),
)


def validate_order_request(program_id: str, request: CreateOrderRequest) -> Optional[InvalidRequestError]:
    """First failing precondition, or None."""
    if not program_id:
        return InvalidRequestError("Program ID is required")
    if not request.reference_no:
        return InvalidRequestError("Reference number is required")
    if not request.rewards:
        return InvalidRequestError("At least one reward is required")
    for index, reward in enumerate(request.rewards):
        if not reward.id:
            return InvalidRequestError(f"Reward ID is required for reward at index {index}")
        if not MIN_QUANTITY <= reward.quantity <= MAX_QUANTITY:
            return InvalidRequestError(
                f"Invalid quantity for reward at index {index}. "
                f"Must be between {MIN_QUANTITY} and {MAX_QUANTITY}."
            )
    return None


def classify_order_lookup_error(status_code: int, message: str) -> str:
    if status_code != 400:
        return message
    for needle, friendly in ORDER_LOOKUP_ERRORS:
        if needle in message:
            return friendly
    return message


def _unreadable_order_error(body: Any, error: GiftCardError) -> ResponseFormatError:
    """A 2xx create-order reply that failed decoding. The order may exist, so name it."""
    if isinstance(body, dict) and body.get("order_id"):
        logger.error("Order %s was placed but its response could not be decoded", body["order_id"])
        message = (
            f"Failed to create order: order {body['order_id']} was placed "
            f"(status: {body.get('status') or 'unknown'}) but its details could not be read. {error}"
        )
    else:
        message = f"Failed to create order: {error}"
    return ResponseFormatError(message, details=body)


class OrdersAPI:
    def __init__(self, http: HttpClient, stub: str):
        self._http = http
        self._stub = stub.strip("/")

    async def create(self, program_id: str, request: CreateOrderRequest) -> Result[OrderResponse]:
        """Place an order. Invalid requests are rejected before any network call."""
        invalid = validate_order_request(program_id, request)
        if invalid is not None:
            return Result.fail(invalid)

        response = await self._http.post(f"/{self._stub}/{quote(program_id, safe='')}/orders", request.to_payload())
        if response.error is not None:
            return Result.fail(error_from_response(response, f"Failed to create order: {response.error}"))
        result = decode_response(response, OrderResponse)
        if not result.is_ok:
            return Result.fail(_unreadable_order_error(response.body, result.error))
        logger.info("Order %s (%s) placed: %s", result.value.order_id, request.reference_no, result.value.status)
        return result

    async def get(
        self, program_id: str, order_id: str, reference_no: Optional[str] = None,
    ) -> Result[OrderResponse]:
        if not program_id:
            return Result.fail(InvalidRequestError("Program ID is required"))
        if not order_id:
            return Result.fail(InvalidRequestError("Order ID is required"))

        path = f"/{self._stub}/{quote(program_id, safe='')}/orders/{quote(order_id, safe='')}"
        if reference_no:
            path += f"?{urlencode({'reference_no': reference_no})}"

        response = await self._http.get(path)
        if response.error is not None:
            message = classify_order_lookup_error(response.status_code, response.error)
            return Result.fail(error_from_response(response, message))
        return decode_response(response, OrderResponse)
