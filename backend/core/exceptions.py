from __future__ import annotations


class AppError(Exception):
    """Base app error."""


class InvalidPointError(AppError, ValueError):
    """Raised when a coordinate is malformed or out of range."""


class InvalidInputError(AppError, ValueError):
    """Raised when a point collection or an option is unusable."""


class ProviderError(AppError):
    """Raised when a routing provider fails (network, status, payload)."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class UnsupportedCapabilityError(AppError):
    """Raised when a provider does not offer the requested operation."""

    def __init__(self, provider: str, capability: str):
        super().__init__(f"{provider} does not support {capability}")
        self.provider = provider
        self.capability = capability
