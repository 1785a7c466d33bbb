"""FastAPI application factory and configuration."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import PackageNotFoundError, version

import httpx
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from rich.console import Console
from rich.logging import RichHandler

from tunebridge import create_converter
from tunebridge.api.dependencies import Services
from tunebridge.api.exceptions import register_exception_handlers
from tunebridge.api.routes import convert, health, providers
from tunebridge.settings import get_settings

logger = logging.getLogger(__name__)

# Loggers that uvicorn configures itself; they get our handler instead
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging() -> None:
    """Route tunebridge and uvicorn logging through a single Rich handler."""
    handler = RichHandler(
        console=Console(force_terminal=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s", datefmt="[%X]"))

    logging.root.handlers = [handler]
    logging.root.setLevel(get_settings().log_level)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = [handler]
        server_logger.propagate = False


def create_services() -> Services:
    """Build the shared HTTP client and the conversion service from settings."""
    settings = get_settings()
    http = httpx.AsyncClient(timeout=settings.http_timeout)
    converter = create_converter(settings.credentials, http, settings.api_config)
    logger.info(
        "Configured providers: %s",
        ", ".join(p.label for p in converter.providers) or "none",
    )
    return Services(converter=converter, http=http)


def create_api_router() -> APIRouter:
    router = APIRouter(prefix="/api")
    for module in (health, convert, providers):
        router.include_router(module.router)
    return router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Own the provider HTTP client for the lifetime of the server."""
    app.state.services = create_services()
    try:
        yield
    finally:
        await app.state.services.close()


def _app_version() -> str:
    try:
        return version("tunebridge")
    except PackageNotFoundError:
        return "0.0.0"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    setup_logging()

    app = FastAPI(
        title="tunebridge",
        description="Music share link converter API",
        version=_app_version(),
        lifespan=lifespan,
        debug=settings.debug,
    )
    register_exception_handlers(app)

    # The API is read-only, so only GET is allowed cross-origin
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(create_api_router())
    return app
