"""Product Hunt configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import env_flag, env_int, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

PRODUCT_HUNT_API_URL = "https://api.producthunt.com/v2/api/graphql"
PRODUCT_HUNT_TIMEOUT_SECONDS = 30.0
PRODUCT_HUNT_RATE_LIMIT_WINDOW_SECONDS = 60


@dataclass(frozen=True)
class ProductHuntConfig:
    """Holds Product Hunt API configuration values."""

    token: str
    resilience: ResilienceConfig
    sync_enabled: bool = True

    @property
    def api_url(self) -> str:
        return self.resilience.base_url or PRODUCT_HUNT_API_URL


def default_resilience(
    *,
    api_url: str = PRODUCT_HUNT_API_URL,
    retries: int = 0,
    ratelimit: RateLimit | None = None,
) -> ResilienceConfig:
    return ResilienceConfig(
        name="producthunt",
        base_url=api_url,
        timeout_seconds=PRODUCT_HUNT_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=retries),
        ratelimit=ratelimit,
        default_headers={"Content-Type": "application/json", "Accept": "application/json"},
    )


def _ratelimit_from_env() -> RateLimit | None:
    # zero or unset calls means no client-side throttling
    max_calls = env_int("PRODUCT_HUNT_RATE_LIMIT_CALLS", default=0)
    if max_calls <= 0:
        return None
    window = env_int(
        "PRODUCT_HUNT_RATE_LIMIT_SECONDS", default=PRODUCT_HUNT_RATE_LIMIT_WINDOW_SECONDS
    )
    return RateLimit(max_calls=max_calls, per_seconds=float(max(window, 1)))


def get_producthunt_config(*, resilience: ResilienceConfig | None = None) -> ProductHuntConfig:
    values = require_env_vars(("PRODUCT_HUNT_DEVELOPER_TOKEN",))
    api_url = os.getenv("PRODUCT_HUNT_API_URL") or PRODUCT_HUNT_API_URL
    return ProductHuntConfig(
        token=values["PRODUCT_HUNT_DEVELOPER_TOKEN"],
        resilience=resilience
        or default_resilience(
            api_url=api_url,
            retries=env_int("PRODUCT_HUNT_MAX_RETRIES", default=0),
            ratelimit=_ratelimit_from_env(),
        ),
        sync_enabled=env_flag("PRODUCT_HUNT_SYNC_ENABLED"),
    )
