class VidboardError(Exception):
    """Base class for errors the HTTP layer knows how to answer."""


class ConfigError(VidboardError):
    """Raised when a required credential is not configured."""


class ValidationError(VidboardError):
    """Raised when request parameters are malformed."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(VidboardError):
    """Raised when the upstream API (or the store) has nothing for an id."""


class UpstreamError(VidboardError):
    """Raised when an external API call fails."""


class TranscriptUnavailableError(VidboardError):
    """Raised when the rendered watch page carries no transcript."""


class AuthenticationError(VidboardError):
    """Raised when a bearer token is required but missing."""


class ConflictError(VidboardError):
    """Raised when a write would duplicate a unique value."""


class UnprocessableError(UpstreamError):
    """Raised when the upstream data exists but cannot serve the request."""
