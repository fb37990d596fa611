"""
REST HTTP client for the rewards API.

``send`` never raises: non-2xx responses and transport failures both come back
as an ``ApiResponse`` carrying an error string.
"""

import logging
from typing import Any, Optional

import httpx

from giftcard_tools.config import DEFAULT_BASE_URL
from giftcard_tools.models.envelope import ApiResponse

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "POST")
TRANSPORT_FAILURE_STATUS = 500


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        default_headers: Optional[dict[str, str]] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._default_headers = {k: v for k, v in (default_headers or {}).items() if v}
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": "giftcard-tools/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self, extra: Optional[dict[str, str]]) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        headers.update(self._default_headers)
        if extra:
            headers.update(extra)
        return headers

    @staticmethod
    def _parse(resp: httpx.Response) -> Any:
        """Decode the body as JSON whatever the status. Empty bodies decode to None."""
        if not resp.content:
            return None
        return resp.json()

    async def send(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> ApiResponse:
        method = method.upper()
        if method not in ALLOWED_METHODS:
            return ApiResponse(
                error=f"Unsupported method: {method}", status_code=TRANSPORT_FAILURE_STATUS, transport_failed=True,
            )

        logger.debug("%s %s%s", method, self._base_url, path)
        try:
            if body is None:
                resp = await self._client.request(method, path, headers=self._headers(headers))
            else:
                resp = await self._client.request(method, path, json=body, headers=self._headers(headers))
            data = self._parse(resp)
        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.warning("%s %s failed: %s", method, path, message)
            return ApiResponse(error=message, status_code=TRANSPORT_FAILURE_STATUS, transport_failed=True)

        if resp.is_success:
            return ApiResponse(body=data, status_code=resp.status_code)

        reason = resp.reason_phrase or f"HTTP {resp.status_code}"
        logger.warning("%s %s returned %d: %s", method, path, resp.status_code, reason)
        return ApiResponse(body=data, error=reason, status_code=resp.status_code)

    async def get(self, path: str, headers: Optional[dict[str, str]] = None) -> ApiResponse:
        return await self.send("GET", path, headers=headers)

    async def post(self, path: str, body: Any, headers: Optional[dict[str, str]] = None) -> ApiResponse:
        return await self.send("POST", path, body, headers)

    async def close(self) -> None:
        await self._client.aclose()
