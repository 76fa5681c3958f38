"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""


class UnknownTargetError(ConfigurationError):
    """Raised when an import target name does not match any configured backend."""

    def __init__(self, name: str, available: tuple[str, ...]) -> None:
        listing = ", ".join(available) or "none"
        super().__init__(f"Unknown target: {name} (configured: {listing})")
        self.name = name
        self.available = available


class MissingTargetTokenError(MissingConfigurationError):
    """Raised when a backend call needs a bearer token the target does not carry."""

    def __init__(self, target: str) -> None:
        super().__init__(f"{target.capitalize()} API token not configured")
        self.target = target
