"""
AsyncGiftCard: wires configuration, credentials, transport and the
operation clients together.
"""

from typing import Any, Optional

import httpx

from giftcard_tools.auth import derive_auth_header
from giftcard_tools.balance import BalanceAPI
from giftcard_tools.config import Settings
from giftcard_tools.orders import OrdersAPI
from giftcard_tools.rewards import RewardsAPI
from giftcard_tools.transport.http import HttpClient


class AsyncGiftCard:
    """Async rewards marketplace client.

    The Basic auth header is derived once here and reused for every request.
    Pass ``transport`` to route requests somewhere other than the network
    (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or Settings()
        self.auth_header = derive_auth_header(self.settings.merchant_key, self.settings.merchant_secret)

        self.http = HttpClient(
            base_url=self.settings.base_url,
            default_headers={"Authorization": self.auth_header},
            timeout=self.settings.http_timeout,
            transport=transport,
        )
        self.balance = BalanceAPI(self.http, self.settings.stub, self.settings.merchant_id)
        self.rewards = RewardsAPI(self.http, self.settings.stub)
        self.orders = OrdersAPI(self.http, self.settings.stub)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncGiftCard":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
