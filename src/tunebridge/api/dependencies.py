"""Services container and FastAPI dependency injection.

Services are created once in the application lifespan and stored on
``app.state``. Routes receive them through Annotated dependencies:

    from tunebridge.api.dependencies import ConverterDep

    @router.get("/convert")
    async def convert(converter: ConverterDep, link: str) -> ...:
        ...
"""

import logging
from dataclasses import dataclass
from typing import Annotated

import httpx
from fastapi import Depends, Request

from tunebridge.services import ConversionService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Container for application services with proper lifecycle management.

    All services are created at startup and cleaned up at shutdown.
    """

    converter: ConversionService
    http: httpx.AsyncClient

    async def close(self) -> None:
        """Clean up resources. Called at application shutdown."""
        await self.http.aclose()
        logger.info("Services cleaned up")


def get_services(request: Request) -> Services:
    """Get services from request's app state (dependency injection).

    Raises:
        RuntimeError: If services not initialized (app not running).
    """
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise RuntimeError("Services not initialized. Is the app running?")
    return services


def get_converter(request: Request) -> ConversionService:
    return get_services(request).converter


ConverterDep = Annotated[ConversionService, Depends(get_converter)]
