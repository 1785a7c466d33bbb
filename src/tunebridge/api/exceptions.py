"""Error handlers for the API.

All API errors use a consistent response format:
{
    "error": "error_code",
    "message": "Human-readable description",
    "platform": "provider the error came from, when known"
}
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from tunebridge.exceptions import TuneBridgeError


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str
    message: str
    platform: str | None = None


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on the FastAPI app."""

    @app.exception_handler(TuneBridgeError)
    async def tunebridge_error_handler(
        request: Request, exc: TuneBridgeError
    ) -> JSONResponse:
        """Generic handler for all TuneBridgeError subclasses."""
        content: dict[str, str] = {
            "error": exc.error_code,
            "message": exc.message,
        }

        # Add context fields if present on the exception
        platform = getattr(exc, "platform", None)
        if platform is not None:
            content["platform"] = platform.label

        return JSONResponse(status_code=exc.status_code, content=content)
