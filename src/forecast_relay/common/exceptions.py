"""Forecast-Relay exception hierarchy."""

from typing import Optional


class RelayError(Exception):
    """Base exception for all relay errors."""

    def __init__(self, message: str = "", code: str = "RELAY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ConfigurationError(RelayError):
    """Raised when a provider is called without the credentials it needs."""

    def __init__(self, message: str = "Provider not configured"):
        super().__init__(message, code="NOT_CONFIGURED")


class ProviderError(RelayError):
    """Raised when an external provider rejects a call or cannot be reached.

    ``status_code`` is None when no HTTP response was received.
    """

    def __init__(
        self,
        provider: str,
        message: str = "Provider call failed",
        status_code: Optional[int] = None,
    ):
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider}: {message}", code="PROVIDER_ERROR")
