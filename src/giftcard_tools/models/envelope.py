"""
Transport envelope: the uniform result of every HTTP call.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


class ApiResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    body: Optional[Any] = None
    error: Optional[str] = None
    status_code: int
    transport_failed: bool = False  # no HTTP response was received

    @property
    def ok(self) -> bool:
        return self.error is None
