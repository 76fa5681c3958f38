"""Application configuration helpers."""

from __future__ import annotations

from .discovery import BrowserConfig, DiscoveryConfig, get_discovery_config
from .env import int_env_var, optional_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    MissingConfigurationError,
    MissingTargetTokenError,
    UnknownTargetError,
)
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .targets import (
    ALL_TARGETS,
    LOCAL,
    PRODUCTION,
    STAGE,
    TargetConfig,
    get_import_targets,
    get_target_config,
)
from .venues import DEFAULT_VENUES, load_venues, venue_cities

__all__ = [
    "ALL_TARGETS",
    "DEFAULT_VENUES",
    "LOCAL",
    "PRODUCTION",
    "STAGE",
    "BrowserConfig",
    "CacheConfig",
    "ConfigurationError",
    "DiscoveryConfig",
    "MissingConfigurationError",
    "MissingTargetTokenError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "TargetConfig",
    "UnknownTargetError",
    "configure_logging",
    "get_discovery_config",
    "get_import_targets",
    "get_target_config",
    "int_env_var",
    "load_venues",
    "optional_env_var",
    "require_env_vars",
    "venue_cities",
]
