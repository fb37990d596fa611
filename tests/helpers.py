"""Test helpers: settings factory and a recording MockTransport handler."""

import json
from typing import Any

import httpx

from giftcard_tools.config import Settings

BASE_URL = "https://rewards.test"


def make_settings(**overrides: Any) -> Settings:
    values = {
        "merchant_key": "k",
        "merchant_secret": "s",
        "merchant_id": "merchant_1",
        "base_url": BASE_URL,
        "stub": "v1",
        "http_timeout": 5.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class Recorder:
    """MockTransport handler that records requests and replies with a canned response."""

    def __init__(self, status_code: int = 200, payload: Any = None, reason: str = "", content: bytes = b""):
        self.status_code = status_code
        self.payload = payload
        self.reason = reason
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        extensions = {"reason_phrase": self.reason.encode()} if self.reason else {}
        if self.payload is not None:
            return httpx.Response(self.status_code, json=self.payload, extensions=extensions)
        return httpx.Response(self.status_code, content=self.content, extensions=extensions)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)
