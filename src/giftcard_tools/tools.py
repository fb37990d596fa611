"""
Tool registry: the four marketplace operations as named, schema-described
tools for an automated agent.

``ToolRegistry.call`` is the single place where an error ``Result`` becomes a
protocol-level failure: it always returns a ``ToolResult`` and never raises.

Usage:
    async with AsyncGiftCard() as client:
        result = await registry.call(client, "get-program-balance", {"programId": "PGM1"})
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from giftcard_tools.client import AsyncGiftCard
from giftcard_tools.formatters import format_balance, format_order_receipt, format_rewards_listing
from giftcard_tools.models.order import MAX_QUANTITY, MIN_QUANTITY, CreateOrderRequest, CustomerDetails, OrderReward
from giftcard_tools.models.reward import RewardsRequestParams, RewardType, SortKey

logger = logging.getLogger(__name__)


class ToolResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def failure(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=True)


ToolHandler = Callable[[AsyncGiftCard, Any], Awaitable[ToolResult]]


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_model: type[BaseModel]
    handler: ToolHandler

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)


def _describe_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        location = ".".join(str(p) for p in err["loc"]) or "arguments"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def tool(self, name: str, description: str, input_model: type[BaseModel]) -> Callable[[ToolHandler], ToolHandler]:
        def decorator(func: ToolHandler) -> ToolHandler:
            if name in self._tools:
                raise ValueError(f"Tool already registered: {name}")
            self._tools[name] = ToolDefinition(name, description, input_model, func)
            return func
        return decorator

    def list_tools(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    async def call(self, client: AsyncGiftCard, name: str, arguments: Optional[dict[str, Any]]) -> ToolResult:
        tool = self._tools.get(name)
        if tool is None:
            return ToolResult.failure(f"Unknown tool: {name}")
        try:
            args = tool.input_model.model_validate(arguments or {})
        except ValidationError as e:
            return ToolResult.failure(f"Invalid arguments for {name}: {_describe_validation_error(e)}")
        try:
            return await tool.handler(client, args)
        except Exception as e:
            logger.exception("Tool %s failed", name)
            return ToolResult.failure(f"Unexpected error in {name}: {e}")


registry = ToolRegistry()


# ---------------------------------------------------------------------------
# Input schemas
# ---------------------------------------------------------------------------

class ToolInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class GetBalanceInput(ToolInput):
    program_id: str = Field(alias="programId", description="The programme ID for which balance has to be checked")


class ListRewardsInput(ToolInput):
    program_id: str = Field(alias="programId", description="The program ID for which to fetch rewards")
    page_id: Optional[str] = Field(None, description="Optional page ID for pagination")
    count: Optional[str] = Field(None, description="Number of rewards to display per page")
    brand_name: Optional[str] = Field(None, description="Filter by brand name")
    category: Optional[str] = Field(None, description="Filter by reward category")
    type: Optional[RewardType] = Field(None, description="Filter by reward type")
    featured: Optional[bool] = Field(None, description="Filter for featured rewards only")
    min_price: Optional[str] = Field(None, description="Filter by minimum price (in rupees)")
    max_price: Optional[str] = Field(None, description="Filter by maximum price (in rupees)")
    denomination: Optional[str] = Field(None, description="Filter by specific denomination. Denomination is in paisa")
    expiry_by: Optional[int] = Field(None, description="Filter by number of days until expiry")
    sort_by: Optional[SortKey] = Field(None, description="Sort results by")

    def to_params(self) -> RewardsRequestParams:
        return RewardsRequestParams(**self.model_dump(exclude={"program_id"}))


class OrderRewardInput(ToolInput):
    id: str = Field(description="Reward ID to purchase, same as ID returned in list-rewards tool")
    denomination: Optional[int] = Field(
        None, description="Denomination amount in paise (required for gift cards). Mandatory for Gift Cards",
    )
    interval: Optional[str] = Field(
        None,
        description="Plan interval (required for memberships like 'Monthly'). Optional for gift cards and offers",
    )
    # Range is enforced by OrdersAPI so the error names the item index.
    quantity: int = Field(
        description=f"Quantity to purchase ({MIN_QUANTITY}-{MAX_QUANTITY})",
        json_schema_extra={"minimum": MIN_QUANTITY, "maximum": MAX_QUANTITY},
    )


class PlaceOrderInput(ToolInput):
    program_id: str = Field(alias="programId", description="The program ID for which to place the order")
    reference_no: str = Field(description="Unique reference number for the order")
    rewards: list[OrderRewardInput] = Field(description="Array of rewards to purchase")
    customer_name: Optional[str] = Field(None, description="Optional customer name")
    customer_email: Optional[str] = Field(
        None, description="Optional customer email", json_schema_extra={"format": "email"},
    )
    customer_contact: Optional[int] = Field(None, description="Optional customer contact number")

    def to_request(self) -> CreateOrderRequest:
        customer = None
        if self.customer_name or self.customer_email or self.customer_contact:
            customer = CustomerDetails(
                name=self.customer_name, email=self.customer_email, contact=self.customer_contact,
            )
        return CreateOrderRequest(
            reference_no=self.reference_no,
            rewards=[OrderReward(**r.model_dump()) for r in self.rewards],
            customer=customer,
        )


class GetOrderStatusInput(ToolInput):
    program_id: str = Field(alias="programId", description="The program ID associated with the order")
    order_id: str = Field(alias="orderId", description="The order ID to fetch the status for")
    reference_no: Optional[str] = Field(
        None, alias="referenceNo", description="Optional reference number for the order",
    )


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

@registry.tool(
    "get-program-balance",
    "Retrieves the current balance of the merchant wallet associated with Razorpay",
    GetBalanceInput,
)
async def get_program_balance(client: AsyncGiftCard, args: GetBalanceInput) -> ToolResult:
    result = await client.balance.get(args.program_id)
    if not result.is_ok:
        return ToolResult.failure(f"Error checking balance: {result.error}")
    return ToolResult.success(format_balance(args.program_id, result.value))


@registry.tool(
    "list-rewards",
    "Retrieves a list of available rewards with filtering options for the given program",
    ListRewardsInput,
)
async def list_rewards(client: AsyncGiftCard, args: ListRewardsInput) -> ToolResult:
    result = await client.rewards.list(args.program_id, args.to_params())
    if not result.is_ok:
        return ToolResult.failure(f"Error fetching rewards: {result.error}")
    return ToolResult.success(format_rewards_listing(args.program_id, result.value))


@registry.tool(
    "place-reward-order",
    "Places an order for one or more rewards such as gift cards, memberships, or offers",
    PlaceOrderInput,
)
async def place_reward_order(client: AsyncGiftCard, args: PlaceOrderInput) -> ToolResult:
    result = await client.orders.create(args.program_id, args.to_request())
    if not result.is_ok:
        return ToolResult.failure(f"Error placing order: {result.error}")
    return ToolResult.success(f"Order placed successfully!\n\n{format_order_receipt(result.value)}")


@registry.tool(
    "get-order-status",
    "Fetches the status of a specific order using the program ID, order ID, and an optional reference number.",
    GetOrderStatusInput,
)
async def get_order_status(client: AsyncGiftCard, args: GetOrderStatusInput) -> ToolResult:
    result = await client.orders.get(args.program_id, args.order_id, args.reference_no)
    if not result.is_ok:
        return ToolResult.failure(f"Error: {result.error}")
    # Only fields the server sent. Nulls are dropped on decode.
    payload = result.value.model_dump(mode="json", exclude_unset=True)
    return ToolResult.success(json.dumps(payload, indent=2, ensure_ascii=False))
