"""API response schemas."""

from typing import Literal

from pydantic import BaseModel


class ProviderInfo(BaseModel):
    """A configured provider."""

    name: str
    url: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["ok"] = "ok"
