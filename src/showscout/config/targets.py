"""Remote show backend targets."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .errors import MissingTargetTokenError
from .http_resilience import DEFAULT_USER_AGENT, ResilienceConfig, RetryPolicy

STAGE = "stage"
PRODUCTION = "production"
LOCAL = "local"
ALL_TARGETS = "both"

DEFAULT_TARGET_URLS: dict[str, str] = {
    STAGE: "https://stage.api.psychichomily.com",
    PRODUCTION: "https://api.psychichomily.com",
    LOCAL: "http://localhost:8080",
}

# Only reads are retried; a repeated write could import a show twice.
BACKEND_RETRY = RetryPolicy(total=2)


@dataclass(frozen=True, slots=True)
class TargetConfig:
    name: str
    base_url: str
    token: str | None = None
    timeout_seconds: float = 60.0

    def require_token(self) -> str:
        if not self.token:
            raise MissingTargetTokenError(self.name)
        return self.token

    @property
    def resilience(self) -> ResilienceConfig:
        return ResilienceConfig(
            name=f"backend-{self.name}",
            base_url=self.base_url.rstrip("/"),
            timeout_seconds=self.timeout_seconds,
            retry=BACKEND_RETRY,
            cache=None,
            default_headers={"User-Agent": DEFAULT_USER_AGENT, "Accept": "application/json"},
        )


def get_target_config(name: str) -> TargetConfig:
    """Build one target from ``SHOWSCOUT_<NAME>_URL`` and ``SHOWSCOUT_<NAME>_TOKEN``."""

    prefix = f"SHOWSCOUT_{name.upper()}"
    url_var = f"{prefix}_URL"
    base_url = optional_env_var(url_var) or DEFAULT_TARGET_URLS.get(name)
    if base_url is None:
        base_url = require_env_vars([url_var])[url_var]
    return TargetConfig(
        name=name,
        base_url=base_url,
        token=optional_env_var(f"{prefix}_TOKEN"),
    )


def get_import_targets() -> dict[str, TargetConfig]:
    """Return the import targets that ``both`` expands to, in stage-then-production order."""

    return {name: get_target_config(name) for name in (STAGE, PRODUCTION)}
