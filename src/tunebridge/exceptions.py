"""Custom exceptions for tunebridge.

All exceptions include an HTTP status_code and a machine-readable
error_code so the service layer can map them without a lookup table.

Parse errors are always terminal for a conversion. Provider errors are
terminal only for the provider that raised them, unless that provider
owns the link being converted.
"""

from tunebridge.models.enums import Platform


class TuneBridgeError(Exception):
    """Base exception for tunebridge.

    Attributes:
        status_code: HTTP status code for API error responses.
        error_code: Machine-readable error identifier.
    """

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# -- Share link parsing --


class ShareLinkError(TuneBridgeError):
    """Failed to parse a share link."""

    status_code: int = 400  # Bad Request
    error_code: str = "invalid_link"


class InvalidUrlError(ShareLinkError):
    """URL is structurally wrong (scheme or authority)."""

    error_code: str = "invalid_url"


class NotAShareLinkError(ShareLinkError):
    """Well-formed URL whose host is not a supported provider."""

    error_code: str = "not_a_share_link"


class MalformedLinkError(ShareLinkError):
    """Known provider host but the path doesn't follow its link grammar."""

    error_code: str = "malformed_link"


# -- Provider errors --


class ProviderError(TuneBridgeError):
    """Base exception for provider client failures.

    Attributes:
        platform: Platform whose client raised the error, when known.
    """

    status_code: int = 502  # Bad Gateway (upstream failure)
    error_code: str = "provider_error"

    def __init__(self, message: str, platform: Platform | None = None) -> None:
        self.platform = platform
        super().__init__(message)


class TransportError(ProviderError):
    """Network failure or unexpected HTTP status from a provider."""

    error_code: str = "transport_error"


class DecodeError(ProviderError):
    """Provider response could not be decoded into entity data."""

    error_code: str = "decode_error"


class UnsuitableLinkError(ProviderError):
    """Link was handed to a provider or method that can't handle it.

    Always a programming error in the caller, hence the 500.
    """

    status_code: int = 500
    error_code: str = "unsuitable_link"


class AuthorizationError(ProviderError):
    """Token refresh failed or the provider rejected our credentials."""

    error_code: str = "authorization_error"


class UnsupportedFeatureError(ProviderError):
    """Provider or platform doesn't support the requested operation."""

    status_code: int = 501  # Not Implemented
    error_code: str = "unsupported_feature"


class NoMatchFoundError(ProviderError):
    """Provider has no entity equivalent to the one searched for."""

    status_code: int = 404  # Not Found
    error_code: str = "no_match_found"


class SourceNotFoundError(ProviderError):
    """The provider owning a share link doesn't know the linked entity.

    Unlike a target provider's miss, there is nothing left to convert, so
    this is an upstream failure rather than a 404.
    """

    error_code: str = "source_not_found"
