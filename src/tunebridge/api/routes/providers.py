"""Configured provider listing."""

from fastapi import APIRouter

from tunebridge.api.dependencies import ConverterDep
from tunebridge.api.schemas import ProviderInfo

router = APIRouter(tags=["providers"])


@router.get("/providers")
async def list_providers(converter: ConverterDep) -> list[ProviderInfo]:
    """List configured providers in result order."""
    return [
        ProviderInfo(name=platform.label, url=platform.home_url)
        for platform in converter.providers
    ]
