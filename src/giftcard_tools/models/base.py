from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class WireModel(BaseModel):
    """Immutable value decoded from (or encoded to) a rewards API payload."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # A null on the wire means "absent": the field falls back to its default.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class OpenWireModel(WireModel):
    """Wire model that keeps fields it does not declare, so it can be echoed back."""

    model_config = ConfigDict(frozen=True, extra="allow")
