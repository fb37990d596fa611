"""
Order models: POST /{stub}/{program_id}/orders and GET .../orders/{order_id}.

Order items are a tagged union on ``reward_type``; only gift cards carry a
denomination and only memberships carry an interval. Response models keep
fields they do not declare, so a status lookup can be echoed as received.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, field_validator

from giftcard_tools.models.base import OpenWireModel, WireModel

MIN_QUANTITY = 1
MAX_QUANTITY = 4


class CustomerDetails(WireModel):
    name: Optional[str] = None
    email: Optional[str] = None
    contact: Optional[Union[int, str]] = None


class OrderReward(WireModel):
    id: str = ""
    quantity: int = 0
    denomination: Optional[int] = None  # paise, gift cards only
    interval: Optional[str] = None  # memberships only


class CreateOrderRequest(WireModel):
    reference_no: str = ""
    rewards: list[OrderReward] = []
    customer: Optional[CustomerDetails] = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Voucher(OpenWireModel):
    code: Optional[str] = None
    pin: Optional[str] = None
    validity: Optional[int] = None  # unix seconds


class OrderItemBase(OpenWireModel):
    reward_id: str = ""
    quantity: int = 0
    status: str = ""  # "success" | "failed"
    failed_reason: Optional[str] = None
    created_at: Optional[int] = None
    updated_at: Optional[int] = None
    vouchers: list[Voucher] = []

    @field_validator("vouchers", mode="before")
    @classmethod
    def _vouchers_default(cls, v: Any) -> Any:
        return v or []


class GiftCardOrderItem(OrderItemBase):
    reward_type: Literal["gift_card"]
    denomination: Optional[int] = None  # paise
    currency: Optional[str] = None


class MembershipOrderItem(OrderItemBase):
    reward_type: Literal["membership"]
    interval: Optional[str] = None


class OfferOrderItem(OrderItemBase):
    reward_type: Literal["offer"]


OrderItem = Annotated[
    Union[GiftCardOrderItem, MembershipOrderItem, OfferOrderItem],
    Field(discriminator="reward_type"),
]


class OrderCollection(OpenWireModel):
    entity: Optional[str] = None
    count: int = 0
    order_items: list[OrderItem] = []

    @field_validator("order_items", mode="before")
    @classmethod
    def _items_default(cls, v: Any) -> Any:
        return v or []


class OrderResponse(OpenWireModel):
    order_id: Optional[str] = None
    entity: Optional[str] = None
    reference_no: str = ""
    status: str = ""  # "success" | "partial_success" | "failure", as returned
    created_at: Optional[int] = None
    order_amount: Optional[int] = None  # paise, create-order only
    order_success_amount: Optional[int] = None  # paise
    order: OrderCollection = OrderCollection()
