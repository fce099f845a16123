"""Custom exception classes for the music explorer gateway."""


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidQueryError(GatewayError):
    """Raised when a search path does not carry both an artist and a song."""

    pass


class AssetForbiddenError(GatewayError):
    """Raised when a requested asset resolves outside the asset root."""

    pass


class AssetNotFoundError(GatewayError):
    """Raised when a requested asset does not exist or is not a regular file."""

    pass
