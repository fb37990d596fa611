from typing import Any, Callable

import httpx
import pytest

from giftcard_tools.client import AsyncGiftCard
from tests.helpers import make_settings


@pytest.fixture
def make_client() -> Callable[..., AsyncGiftCard]:
    """Build an AsyncGiftCard whose requests go to ``handler`` instead of the network."""

    def _make(handler: Callable[[httpx.Request], httpx.Response], **overrides: Any) -> AsyncGiftCard:
        return AsyncGiftCard(make_settings(**overrides), transport=httpx.MockTransport(handler))
    return _make
