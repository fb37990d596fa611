"""
Balance models: GET /{stub}/{program_id}/balance.
"""

from typing import Optional

from giftcard_tools.models.base import WireModel


class BalanceItem(WireModel):
    id: Optional[str] = None
    amount: int  # paise
    currency: str = "INR"


class BalanceResponse(WireModel):
    entity: Optional[str] = None
    item: BalanceItem
