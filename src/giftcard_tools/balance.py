"""
Balance API: merchant wallet balance for a program.
"""

from urllib.parse import quote

from giftcard_tools.decode import decode_response
from giftcard_tools.errors import InvalidRequestError
from giftcard_tools.models.balance import BalanceResponse
from giftcard_tools.result import Result
from giftcard_tools.transport.http import HttpClient

MERCHANT_ID_HEADER = "X-Merchant-Id"


class BalanceAPI:
    def __init__(self, http: HttpClient, stub: str, merchant_id: str = ""):
        self._http = http
        self._stub = stub.strip("/")
        self._merchant_id = merchant_id

    async def get(self, program_id: str) -> Result[BalanceResponse]:
        """Errors surface with the upstream message unchanged."""
        if not program_id:
            return Result.fail(InvalidRequestError("Program ID is required"))
        response = await self._http.get(
            f"/{self._stub}/{quote(program_id, safe='')}/balance",
            headers={MERCHANT_ID_HEADER: self._merchant_id},
        )
        return decode_response(response, BalanceResponse)
