"""
Rewards API: catalog listing with filters and cursor pagination.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union
from urllib.parse import quote, urlencode

from giftcard_tools.decode import decode_response
from giftcard_tools.errors import InvalidRequestError
from giftcard_tools.models.reward import RewardsListResponse, RewardsRequestParams
from giftcard_tools.result import Result
from giftcard_tools.transport.http import HttpClient


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query_string(params: Union[RewardsRequestParams, Mapping[str, Any], None]) -> str:
    """Encode the present, non-empty filters as ``?k=v&...``; "" when none remain."""
    if params is None:
        return ""
    items = params.model_dump() if isinstance(params, RewardsRequestParams) else dict(params)
    pairs = [(key, _query_value(value)) for key, value in items.items() if value is not None and value != ""]
    if not pairs:
        return ""
    return f"?{urlencode(pairs)}"


class RewardsAPI:
    def __init__(self, http: HttpClient, stub: str):
        self._http = http
        self._stub = stub.strip("/")

    async def list(
        self, program_id: str, params: Optional[RewardsRequestParams] = None,
    ) -> Result[RewardsListResponse]:
        if not program_id:
            return Result.fail(InvalidRequestError("Program ID is required"))
        query = build_query_string(params)
        response = await self._http.get(f"/{self._stub}/{quote(program_id, safe='')}/rewards{query}")
        return decode_response(response, RewardsListResponse)
