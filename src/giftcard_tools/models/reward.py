"""
Reward catalog models: GET /{stub}/{program_id}/rewards.

Rewards are a tagged union on ``type``. Legacy wire field names are folded into
one canonical field per concept during validation:

- ``categories`` / ``category``                        -> ``categories``
- ``discount.value`` / ``discount.discount_value``     -> ``discount.value``
- ``denomination_type`` + ``eligible_*_denomination``  -> ``GiftCardReward.denomination``
- ``offer_has_code`` ("TRUE"/"FALSE")                  -> ``OfferReward.has_code``
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, field_validator, model_validator

from giftcard_tools.models.base import WireModel

RewardType = Literal["gift_card", "membership", "offer"]
SortKey = Literal["gmv", "units_sold"]


class Brand(WireModel):
    name: str = ""
    website: Optional[str] = None
    description: Optional[str] = None
    background_color: Optional[str] = None
    logo_url: Optional[str] = None


class DisplayParameters(WireModel):
    name: str = ""
    description: Optional[str] = None
    terms: Optional[str] = None
    redemption_channels: list[str] = []
    redemption_url: Optional[str] = None
    redemption_instructions: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("redemption_channels", mode="before")
    @classmethod
    def _channels_default(cls, v: Any) -> Any:
        return v or []


class Discount(WireModel):
    type: Optional[str] = None  # "percentage" | "fixed"
    value: Optional[Union[int, float]] = None  # percent for "percentage", paise for "fixed"

    @model_validator(mode="before")
    @classmethod
    def _merge_legacy_value(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("value") and data.get("discount_value"):
            data = {**data, "value": data["discount_value"]}
        return data


class FixedDenomination(WireModel):
    mode: Literal["fixed"] = "fixed"
    amounts: list[int]


class RangeDenomination(WireModel):
    mode: Literal["range"] = "range"
    minimum: int
    maximum: int


class RewardBase(WireModel):
    id: str
    entity: Optional[str] = None
    currency: str = "INR"
    status: str = ""
    start_date: Optional[str] = None  # unix seconds
    end_date: Optional[str] = None  # unix seconds
    featured: bool = False
    categories: list[str] = []
    display_parameters: DisplayParameters = DisplayParameters()
    brand: Brand = Brand()
    discount: Optional[Discount] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_categories(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = {**data, "categories": data.get("categories") or data.get("category") or []}
        return data

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _timestamp_as_str(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("featured", mode="before")
    @classmethod
    def _featured_flag(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower() == "true"
        return bool(v)


class GiftCardReward(RewardBase):
    type: Literal["gift_card"]
    denomination: Optional[Union[FixedDenomination, RangeDenomination]] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_denomination(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "denomination" in data:
            return data
        mode = data.get("denomination_type")
        fixed = data.get("eligible_fixed_denomination")
        bounds = data.get("eligible_range_denomination")
        denomination: Optional[dict[str, Any]] = None
        if mode == "fixed" and isinstance(fixed, list) and fixed:
            denomination = {"mode": "fixed", "amounts": fixed}
        elif mode == "range" and isinstance(bounds, list) and len(bounds) >= 2:
            denomination = {"mode": "range", "minimum": bounds[0], "maximum": bounds[1]}
        return {**data, "denomination": denomination}


class MembershipReward(RewardBase):
    type: Literal["membership"]
    interval: Optional[str] = None
    amount: Optional[int] = None  # paise


class OfferReward(RewardBase):
    type: Literal["offer"]
    has_code: bool = False

    @model_validator(mode="before")
    @classmethod
    def _normalize_has_code(cls, data: Any) -> Any:
        if isinstance(data, dict) and "has_code" not in data:
            data = {**data, "has_code": str(data.get("offer_has_code", "")).upper() == "TRUE"}
        return data


Reward = Annotated[Union[GiftCardReward, MembershipReward, OfferReward], Field(discriminator="type")]


class RewardsListResponse(WireModel):
    entity: Optional[str] = None
    count: int = 0
    next_page_id: Optional[str] = None
    items: list[Reward] = []

    @field_validator("items", mode="before")
    @classmethod
    def _items_default(cls, v: Any) -> Any:
        return v or []


class RewardsRequestParams(WireModel):
    """Catalog filters. Only present, non-empty values reach the query string."""

    page_id: Optional[str] = None  # id of the last reward on the previous page
    count: Optional[Union[int, str]] = None
    brand_name: Optional[str] = None
    category: Optional[str] = None
    type: Optional[RewardType] = None
    featured: Optional[bool] = None
    min_price: Optional[Union[int, str]] = None
    max_price: Optional[Union[int, str]] = None
    denomination: Optional[Union[int, str]] = None  # paise
    expiry_by: Optional[int] = None  # days until expiry
    sort_by: Optional[SortKey] = None
