import copy
from urllib.parse import parse_qs

import httpx
import pytest

from giftcard_tools.errors import InvalidRequestError, ResponseFormatError, TransportError, UpstreamError
from giftcard_tools.models.order import CreateOrderRequest, OrderReward
from giftcard_tools.models.reward import RewardsRequestParams
from giftcard_tools.orders import classify_order_lookup_error
from giftcard_tools.rewards import build_query_string
from tests.helpers import Recorder
from tests.payloads import BALANCE, ORDER_PARTIAL, ORDER_SUCCESS, REWARDS_LIST


def order_request(**overrides) -> CreateOrderRequest:
    values = {"reference_no": "ref-001", "rewards": [OrderReward(id="rwd_amazon_001", quantity=2, denomination=50000)]}
    values.update(overrides)
    return CreateOrderRequest(**values)


# ---------------------------------------------------------------------------
# Balance
# ---------------------------------------------------------------------------

class TestBalance:
    @pytest.mark.asyncio
    async def test_get_balance(self, make_client):
        recorder = Recorder(200, BALANCE)
        async with make_client(recorder) as client:
            result = await client.balance.get("PGM1")
        assert result.is_ok
        assert result.value.item.amount == 1234550
        assert recorder.last.url.path == "/v1/PGM1/balance"
        assert recorder.last.headers["X-Merchant-Id"] == "merchant_1"
        assert recorder.last.headers["Authorization"].startswith("Basic ")

    @pytest.mark.asyncio
    async def test_upstream_error_message_is_verbatim(self, make_client):
        async with make_client(Recorder(401, {"error": "unauthorized"}, reason="Unauthorized")) as client:
            result = await client.balance.get("PGM1")
        assert isinstance(result.error, UpstreamError)
        assert str(result.error) == "Unauthorized"
        assert result.error.details == {"error": "unauthorized"}

    @pytest.mark.asyncio
    async def test_missing_program_id(self, make_client):
        recorder = Recorder(200, BALANCE)
        async with make_client(recorder) as client:
            result = await client.balance.get("")
        assert isinstance(result.error, InvalidRequestError)
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_bodiless_upstream_500_is_an_upstream_error(self, make_client):
        async with make_client(Recorder(500, reason="Internal Server Error")) as client:
            result = await client.balance.get("PGM1")
        assert isinstance(result.error, UpstreamError)
        assert result.error.code == "upstream_error"
        assert result.error.status_code == 500
        assert str(result.error) == "Internal Server Error"

    @pytest.mark.asyncio
    async def test_unexpected_body_is_a_format_error(self, make_client):
        async with make_client(Recorder(200, {"entity": "balance"})) as client:
            result = await client.balance.get("PGM1")
        assert isinstance(result.error, ResponseFormatError)
        assert "item" in str(result.error)


# ---------------------------------------------------------------------------
# Rewards
# ---------------------------------------------------------------------------

class TestQueryString:
    def test_only_present_values(self):
        query = build_query_string(RewardsRequestParams(type="gift_card", featured=True))
        assert query == "?type=gift_card&featured=true"
        assert "page_id" not in query

    def test_empty_and_none_values_are_omitted(self):
        query = build_query_string({"page_id": "", "brand_name": None, "count": 10, "category": "Food"})
        assert parse_qs(query[1:]) == {"count": ["10"], "category": ["Food"]}

    def test_no_params(self):
        assert build_query_string(None) == ""
        assert build_query_string(RewardsRequestParams()) == ""

    def test_false_is_a_value(self):
        assert build_query_string({"featured": False}) == "?featured=false"

    def test_values_are_encoded(self):
        assert build_query_string({"brand_name": "H&M"}) == "?brand_name=H%26M"


class TestListRewards:
    @pytest.mark.asyncio
    async def test_list_rewards_with_filters(self, make_client):
        recorder = Recorder(200, REWARDS_LIST)
        async with make_client(recorder) as client:
            result = await client.rewards.list("PGM1", RewardsRequestParams(type="gift_card", featured=True))
        assert result.is_ok
        assert len(result.value.items) == 4
        assert recorder.last.url.path == "/v1/PGM1/rewards"
        assert dict(recorder.last.url.params) == {"type": "gift_card", "featured": "true"}

    @pytest.mark.asyncio
    async def test_list_rewards_without_filters(self, make_client):
        recorder = Recorder(200, REWARDS_LIST)
        async with make_client(recorder) as client:
            await client.rewards.list("PGM1")
        assert recorder.last.url.query == b""

    @pytest.mark.asyncio
    async def test_transport_failure(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_client(handler) as client:
            result = await client.rewards.list("PGM1")
        assert isinstance(result.error, TransportError)
        assert str(result.error) == "timed out"


# ---------------------------------------------------------------------------
# Create order
# ---------------------------------------------------------------------------

class TestCreateOrder:
    @pytest.mark.asyncio
    async def test_create_order(self, make_client):
        recorder = Recorder(200, ORDER_SUCCESS)
        async with make_client(recorder) as client:
            result = await client.orders.create("PGM1", order_request())
        assert result.is_ok
        assert result.value.order_id == "order_abc123"
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/v1/PGM1/orders"
        assert recorder.last_json() == {
            "reference_no": "ref-001",
            "rewards": [{"id": "rwd_amazon_001", "quantity": 2, "denomination": 50000}],
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("program_id, request_kwargs, message", [
        ("", {}, "Program ID is required"),
        ("PGM1", {"reference_no": ""}, "Reference number is required"),
        ("PGM1", {"rewards": []}, "At least one reward is required"),
        ("PGM1", {"rewards": [OrderReward(id="a", quantity=1), OrderReward(id="", quantity=1)]},
         "Reward ID is required for reward at index 1"),
        ("PGM1", {"rewards": [OrderReward(id="a", quantity=5)]},
         "Invalid quantity for reward at index 0. Must be between 1 and 4."),
        ("PGM1", {"rewards": [OrderReward(id="a", quantity=1), OrderReward(id="b", quantity=0)]},
         "Invalid quantity for reward at index 1. Must be between 1 and 4."),
        ("", {"reference_no": "", "rewards": []}, "Program ID is required"),
    ])
    async def test_validation_rejects_before_network(self, make_client, program_id, request_kwargs, message):
        recorder = Recorder(200, ORDER_SUCCESS)
        async with make_client(recorder) as client:
            result = await client.orders.create(program_id, order_request(**request_kwargs))
        assert isinstance(result.error, InvalidRequestError)
        assert str(result.error) == message
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_quantity_bounds_are_inclusive(self, make_client):
        recorder = Recorder(200, ORDER_SUCCESS)
        rewards = [OrderReward(id="a", quantity=1), OrderReward(id="b", quantity=4)]
        async with make_client(recorder) as client:
            result = await client.orders.create("PGM1", order_request(rewards=rewards))
        assert result.is_ok
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_upstream_error_is_prefixed(self, make_client):
        async with make_client(Recorder(422, {"error": "x"}, reason="Insufficient balance")) as client:
            result = await client.orders.create("PGM1", order_request())
        assert str(result.error) == "Failed to create order: Insufficient balance"
        assert result.error.status_code == 422

    @pytest.mark.asyncio
    async def test_transport_error_is_prefixed(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            result = await client.orders.create("PGM1", order_request())
        assert isinstance(result.error, TransportError)
        assert str(result.error) == "Failed to create order: connection refused"

    @pytest.mark.asyncio
    async def test_null_voucher_pin_still_succeeds(self, make_client):
        payload = copy.deepcopy(ORDER_SUCCESS)
        payload["order"]["order_items"][0]["vouchers"][0]["pin"] = None
        async with make_client(Recorder(200, payload)) as client:
            result = await client.orders.create("PGM1", order_request())
        assert result.is_ok
        assert result.value.order.order_items[0].vouchers[0].pin is None
        assert result.value.order.order_items[0].vouchers[1].pin == "5678"

    @pytest.mark.asyncio
    async def test_unreadable_success_names_the_placed_order(self, make_client):
        payload = copy.deepcopy(ORDER_SUCCESS)
        payload["order"]["order_items"][0]["reward_type"] = "bundle"
        async with make_client(Recorder(200, payload)) as client:
            result = await client.orders.create("PGM1", order_request())
        assert isinstance(result.error, ResponseFormatError)
        message = str(result.error)
        assert message.startswith("Failed to create order: order order_abc123 was placed (status: success)")
        assert result.error.details == payload

    @pytest.mark.asyncio
    async def test_unreadable_body_without_order_id(self, make_client):
        async with make_client(Recorder(200, ["unexpected"])) as client:
            result = await client.orders.create("PGM1", order_request())
        assert isinstance(result.error, ResponseFormatError)
        assert str(result.error).startswith("Failed to create order: Unexpected response from rewards API")


# ---------------------------------------------------------------------------
# Order status
# ---------------------------------------------------------------------------

class TestOrderStatus:
    @pytest.mark.asyncio
    async def test_get_order(self, make_client):
        recorder = Recorder(200, ORDER_PARTIAL)
        async with make_client(recorder) as client:
            result = await client.orders.get("PGM1", "order_def456", "ref-002")
        assert result.value.status == "partial_success"
        assert recorder.last.url.path == "/v1/PGM1/orders/order_def456"
        assert dict(recorder.last.url.params) == {"reference_no": "ref-002"}

    @pytest.mark.asyncio
    async def test_reference_no_is_optional(self, make_client):
        recorder = Recorder(200, ORDER_PARTIAL)
        async with make_client(recorder) as client:
            await client.orders.get("PGM1", "order_def456")
        assert recorder.last.url.query == b""

    @pytest.mark.asyncio
    async def test_required_ids(self, make_client):
        recorder = Recorder(200, ORDER_PARTIAL)
        async with make_client(recorder) as client:
            no_program = await client.orders.get("", "o1")
            no_order = await client.orders.get("PGM1", "")
        assert str(no_program.error) == "Program ID is required"
        assert str(no_order.error) == "Order ID is required"
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_invalid_order_id_is_reclassified(self, make_client):
        recorder = Recorder(400, {"error": "bad"}, reason="Invalid Order ID supplied")
        async with make_client(recorder) as client:
            result = await client.orders.get("PGM1", "nope")
        assert str(result.error) == "Invalid Order ID"

    @pytest.mark.asyncio
    async def test_unrecognized_400_passes_through(self, make_client):
        async with make_client(Recorder(400, {"error": "bad"}, reason="Something else")) as client:
            result = await client.orders.get("PGM1", "nope")
        assert str(result.error) == "Something else"

    @pytest.mark.asyncio
    async def test_404_passes_through(self, make_client):
        async with make_client(Recorder(404, {"error": "bad"}, reason="Invalid Order ID supplied")) as client:
            result = await client.orders.get("PGM1", "nope")
        assert str(result.error) == "Invalid Order ID supplied"


@pytest.mark.parametrize("status, text, expected", [
    (400, "Invalid Program ID given", "Invalid Program ID"),
    (400, "Program ID missing", "Invalid Program ID"),
    (400, "Invalid Order ID supplied", "Invalid Order ID"),
    (400, "bad reference no", "Invalid reference number"),
    (400, "Bad Request", "Bad Request"),
    (404, "Invalid Order ID supplied", "Invalid Order ID supplied"),
    (500, "reference no", "reference no"),
])
def test_classify_order_lookup_error(status, text, expected):
    assert classify_order_lookup_error(status, text) == expected
