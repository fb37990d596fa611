"""
Formatters: human-readable renderings of rewards, orders and balances.

Amounts stay in paise everywhere else; conversion to rupees happens only here.
All functions are pure and degrade to fallback text ("N/A", "Variable",
"No categories") on missing optional fields.
"""

import json
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Sequence, Union

from giftcard_tools.models.balance import BalanceResponse
from giftcard_tools.models.order import GiftCardOrderItem, MembershipOrderItem, OrderResponse
from giftcard_tools.models.reward import (
    FixedDenomination,
    GiftCardReward,
    MembershipReward,
    OfferReward,
    RangeDenomination,
    Reward,
    RewardBase,
    RewardsListResponse,
)

RUPEE = "₹"
FEATURED_MARKER = "⭐ FEATURED"
DATE_FORMAT = "%d/%m/%Y"

TABLE_COLUMNS = (
    ("REWARD NAME", 25),
    ("TYPE", 10),
    ("CATEGORY", 15),
    ("CHANNELS", 25),
    ("BRAND", 15),
    ("PRICE", 12),
    ("ID", 36),
)
ELLIPSIS = "..."

TYPE_LABELS = {"gift_card": "Gift Card", "membership": "Membership", "offer": "Offer"}


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------

def _to_major(paise: Union[int, float], exponent: str) -> Decimal:
    return (Decimal(str(paise)) / Decimal(100)).quantize(Decimal(exponent), rounding=ROUND_HALF_UP)


def format_amount(paise: Union[int, float]) -> str:
    """250 -> "2.50"."""
    return str(_to_major(paise, "0.01"))


def format_whole_amount(paise: Union[int, float]) -> str:
    """25050 -> "251"."""
    return str(_to_major(paise, "1"))


def format_date(unix_seconds: Union[int, str, None]) -> str:
    """Local calendar date for a unix-seconds timestamp."""
    try:
        return datetime.fromtimestamp(int(unix_seconds)).strftime(DATE_FORMAT)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError, OSError):
        return "N/A"


def format_balance(program_id: str, balance: BalanceResponse) -> str:
    item = balance.item
    return f"Program {program_id} has a balance of {RUPEE}{format_amount(item.amount)} {item.currency}"


# ---------------------------------------------------------------------------
# Single reward
# ---------------------------------------------------------------------------

def _discount_line(reward: RewardBase) -> Optional[str]:
    discount = reward.discount
    if discount is None or not discount.type:
        return None
    value = discount.value or 0
    if discount.type == "fixed":
        return f"Discount: {RUPEE}{format_amount(value)} (fixed)"
    return f"Discount: {value:g}% ({discount.type})"


def _denomination_summary(reward: GiftCardReward) -> str:
    denomination = reward.denomination
    if isinstance(denomination, FixedDenomination):
        values = ", ".join(f"{RUPEE}{format_amount(a)}" for a in denomination.amounts)
        return f"Fixed denominations: {values}"
    if isinstance(denomination, RangeDenomination):
        return f"Range: {RUPEE}{format_amount(denomination.minimum)} - {RUPEE}{format_amount(denomination.maximum)}"
    return "Denominations: Variable"


def _type_lines(reward: Reward) -> list[str]:
    if isinstance(reward, GiftCardReward):
        return ["Type: Gift Card", _denomination_summary(reward)]
    if isinstance(reward, MembershipReward):
        lines = ["Type: Membership", f"Interval: {reward.interval or 'N/A'}"]
        if reward.amount:
            lines.append(f"Amount: {RUPEE}{format_amount(reward.amount)} / {reward.interval or 'month'}")
        return lines
    return ["Type: Offer", f"Has Code: {'Yes' if reward.has_code else 'No'}"]


def format_reward_details(reward: Reward) -> str:
    lines: list[str] = []
    if reward.featured:
        lines.append(FEATURED_MARKER)
    lines += [
        f"ID: {reward.id}",
        f"Name: {reward.display_parameters.name or 'N/A'}",
        f"Brand: {reward.brand.name or 'N/A'}",
    ]
    lines += _type_lines(reward)
    discount = _discount_line(reward)
    if discount:
        lines.append(discount)
    lines += [
        f"Status: {reward.status}",
        f"Categories: {', '.join(reward.categories) or 'No categories'}",
        f"Redemption: {', '.join(reward.display_parameters.redemption_channels) or 'N/A'}",
        f"Valid: {format_date(reward.start_date)} - {format_date(reward.end_date)}",
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Reward table
# ---------------------------------------------------------------------------

def truncate(text: str, width: int) -> str:
    """Fit ``text`` in ``width`` characters, ending in "..." when cut."""
    if len(text) <= width:
        return text
    if width <= len(ELLIPSIS):
        return text[:width]
    return text[: width - len(ELLIPSIS)] + ELLIPSIS


def _cell(text: str, width: int) -> str:
    clean = text.replace("|", "/").replace("\r", " ").replace("\n", " ")
    return truncate(clean, width).ljust(width)


def _row(values: Sequence[str]) -> str:
    cells = [_cell(value, width) for value, (_, width) in zip(values, TABLE_COLUMNS)]
    return "| " + " | ".join(cells) + " |"


def reward_price(reward: Reward) -> str:
    if isinstance(reward, GiftCardReward):
        denomination = reward.denomination
        if isinstance(denomination, FixedDenomination):
            if len(denomination.amounts) > 1:
                low, high = min(denomination.amounts), max(denomination.amounts)
                return f"{RUPEE}{format_whole_amount(low)}-{format_whole_amount(high)}"
            return f"{RUPEE}{format_whole_amount(denomination.amounts[0])}"
        if isinstance(denomination, RangeDenomination):
            return f"{RUPEE}{format_whole_amount(denomination.minimum)}-{format_whole_amount(denomination.maximum)}"
        return "N/A"
    if isinstance(reward, MembershipReward):
        if not reward.amount:
            return "N/A"
        period = (reward.interval or "m")[:1].lower()
        return f"{RUPEE}{format_whole_amount(reward.amount)}/{period}"
    discount = reward.discount
    if discount is not None and discount.value:
        if discount.type == "percentage":
            return f"{discount.value:g}% off"
        if discount.type == "fixed":
            return f"{RUPEE}{format_whole_amount(discount.value)} off"
    return "N/A"


def _primary_category(reward: RewardBase) -> str:
    return reward.categories[0] if reward.categories else "N/A"


def format_rewards_table(rewards: Sequence[Reward]) -> str:
    """Fixed-width table in a fenced code block. Rows keep input order."""
    if not rewards:
        return "No rewards found"
    lines = [
        "```",
        _row([label for label, _ in TABLE_COLUMNS]),
        "|" + "|".join("-" * (width + 2) for _, width in TABLE_COLUMNS) + "|",
    ]
    for reward in rewards:
        lines.append(_row([
            reward.display_parameters.name,
            reward.type,
            _primary_category(reward),
            ", ".join(reward.display_parameters.redemption_channels),
            reward.brand.name,
            reward_price(reward),
            reward.id,
        ]))
    lines.append("```")
    return "\n".join(lines)


def _first_denomination(reward: Reward) -> Optional[Union[int, float]]:
    if isinstance(reward, GiftCardReward):
        if isinstance(reward.denomination, FixedDenomination):
            return reward.denomination.amounts[0]
        if isinstance(reward.denomination, RangeDenomination):
            return reward.denomination.minimum
        return None
    if isinstance(reward, MembershipReward):
        return reward.amount or None
    if isinstance(reward, OfferReward) and reward.discount is not None:
        return reward.discount.value or None
    return None


def rewards_table_data(program_id: str, rewards: Sequence[Reward]) -> dict[str, Any]:
    """Structured table for clients that render tables natively."""
    rows = []
    for reward in rewards:
        denomination = _first_denomination(reward)
        name = reward.display_parameters.name
        rows.append([
            name[:50] + (ELLIPSIS if len(name) > 50 else ""),
            reward.type,
            _primary_category(reward),
            ", ".join(reward.display_parameters.redemption_channels),
            reward.brand.name,
            f"{RUPEE}{format_amount(denomination)}" if denomination else "Variable",
            reward.id,
        ])
    return {
        "type": "table",
        "title": f"Rewards for Program {program_id}",
        "columnLabels": ["Reward Name", "Type", "Category", "Channels", "Brand", "Denomination", "ID"],
        "rows": rows,
    }


def format_rewards_listing(program_id: str, listing: RewardsListResponse) -> str:
    """Summary, table, per-reward details, pagination hint and table data."""
    details = "\n\n".join(
        f"## Reward {index}\n{format_reward_details(reward)}"
        for index, reward in enumerate(listing.items, start=1)
    )
    parts = [
        f"Found {listing.count} rewards for program {program_id}",
        f"# Rewards Table\n\n{format_rewards_table(listing.items)}",
        f"# Detailed Information\n\n{details}",
    ]
    if listing.next_page_id:
        parts.append(f'More rewards available. Use page_id: "{listing.next_page_id}" to see more.')
    table_data = json.dumps(rewards_table_data(program_id, listing.items), ensure_ascii=False)
    parts.append(f"<!-- Table Data: {table_data} -->")
    return "\n\n".join(parts)


# ---------------------------------------------------------------------------
# Order receipt
# ---------------------------------------------------------------------------

def _order_total(order: OrderResponse) -> str:
    amount = order.order_success_amount if order.order_success_amount is not None else order.order_amount
    if amount is None:
        return "N/A"
    return f"{RUPEE}{format_amount(amount)}"


def format_order_receipt(order: OrderResponse) -> str:
    """Status is shown exactly as returned; it is never derived from the items."""
    lines: list[str] = []
    if order.order_id:
        lines.append(f"Order ID: {order.order_id}")
    lines += [
        f"Reference No: {order.reference_no}",
        f"Status: {order.status}",
        f"Amount: {_order_total(order)}",
        "",
        f"Order Items ({order.order.count}):",
        "",
    ]
    items = order.order.order_items
    if not items:
        lines.append("No order items found in the response.")
    for index, item in enumerate(items, start=1):
        lines += [
            f"Item {index}:",
            f"- Reward ID: {item.reward_id}",
            f"- Type: {item.reward_type}",
            f"- Quantity: {item.quantity}",
            f"- Status: {item.status}",
        ]
        if isinstance(item, GiftCardOrderItem) and item.denomination:
            lines.append(f"- Denomination: {RUPEE}{format_amount(item.denomination)}")
        if isinstance(item, MembershipOrderItem) and item.interval:
            lines.append(f"- Interval: {item.interval}")
        if item.failed_reason:
            lines.append(f"- Failure Reason: {item.failed_reason}")
        if item.vouchers:
            lines.append("- Vouchers:")
            for v_index, voucher in enumerate(item.vouchers, start=1):
                lines += [
                    f"  Voucher {v_index}:",
                    f"  - Code: {voucher.code or 'N/A'}",
                    f"  - PIN: {voucher.pin or 'N/A'}",
                    f"  - Valid until: {format_date(voucher.validity)}",
                ]
        lines.append("")
    return "\n".join(lines).rstrip("\n") + "\n"
