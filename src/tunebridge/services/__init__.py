"""Services for tunebridge."""

from tunebridge.services.converter import ConversionService

__all__ = ["ConversionService"]
