"""Discovery service settings."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import int_env_var, optional_env_var
from .http_resilience import (
    DEFAULT_USER_AGENT,
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)

DEFAULT_MAX_CONCURRENCY = 5
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3001


@dataclass(frozen=True, slots=True)
class BrowserConfig:
    headless: bool = True
    navigation_timeout_ms: int = 60_000
    selector_timeout_ms: int = 30_000
    detail_timeout_ms: int = 15_000


@dataclass(frozen=True, slots=True)
class DiscoveryConfig:
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    pages: ResilienceConfig = field(default_factory=lambda: ResilienceConfig(name="venue-pages"))


def get_discovery_config() -> DiscoveryConfig:
    headless_flag = (optional_env_var("SHOWSCOUT_BROWSER_HEADLESS") or "true").lower()
    pages = ResilienceConfig(
        name="venue-pages",
        timeout_seconds=float(int_env_var("SHOWSCOUT_HTTP_TIMEOUT", 30, minimum=1)),
        retry=RetryPolicy(total=2),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        cache=CacheConfig(enabled=True, backend="sqlite", default_ttl_seconds=300.0),
        default_headers={"User-Agent": DEFAULT_USER_AGENT},
    )
    return DiscoveryConfig(
        max_concurrency=int_env_var(
            "SHOWSCOUT_MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY, minimum=1
        ),
        host=optional_env_var("SHOWSCOUT_HOST") or DEFAULT_HOST,
        port=int_env_var("SHOWSCOUT_PORT", DEFAULT_PORT, minimum=1),
        browser=BrowserConfig(headless=headless_flag not in {"0", "false", "no"}),
        pages=pages,
    )
