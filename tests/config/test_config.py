from __future__ import annotations

import pytest

from toolsync.config import (
    PRODUCT_HUNT_API_URL,
    ConfigurationError,
    MissingConfigurationError,
    RateLimit,
    env_flag,
    env_int,
    get_producthunt_config,
    require_env_var,
    require_env_vars,
)


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "  ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("1", True), ("Yes", True), ("false", False), ("0", False)],
)
def test_env_flag(monkeypatch: pytest.MonkeyPatch, raw: str, *, expected: bool) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", raw)

    assert env_flag("EXAMPLE_FLAG") is expected


def test_env_int_rejects_non_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_INT", "many")

    with pytest.raises(ConfigurationError):
        env_int("EXAMPLE_INT", default=0)


def test_producthunt_config_requires_token() -> None:
    with pytest.raises(MissingConfigurationError, match="PRODUCT_HUNT_DEVELOPER_TOKEN"):
        get_producthunt_config()


def test_producthunt_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRODUCT_HUNT_DEVELOPER_TOKEN", "secret")

    config = get_producthunt_config()

    assert config.token == "secret"
    assert config.api_url == PRODUCT_HUNT_API_URL
    assert config.sync_enabled is False
    assert config.resilience.retry.total == 0
    assert config.resilience.ratelimit is None


def test_producthunt_config_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRODUCT_HUNT_DEVELOPER_TOKEN", "secret")
    monkeypatch.setenv("PRODUCT_HUNT_SYNC_ENABLED", "true")
    monkeypatch.setenv("PRODUCT_HUNT_API_URL", "https://ph.test/graphql")
    monkeypatch.setenv("PRODUCT_HUNT_MAX_RETRIES", "3")

    config = get_producthunt_config()

    assert config.sync_enabled is True
    assert config.api_url == "https://ph.test/graphql"
    assert config.resilience.retry.total == 3


def test_producthunt_config_builds_rate_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRODUCT_HUNT_DEVELOPER_TOKEN", "secret")
    monkeypatch.setenv("PRODUCT_HUNT_RATE_LIMIT_CALLS", "5")
    monkeypatch.setenv("PRODUCT_HUNT_RATE_LIMIT_SECONDS", "10")

    config = get_producthunt_config()

    assert config.resilience.ratelimit == RateLimit(max_calls=5, per_seconds=10.0)


def test_producthunt_rate_limit_window_defaults_to_a_minute(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("PRODUCT_HUNT_DEVELOPER_TOKEN", "secret")
    monkeypatch.setenv("PRODUCT_HUNT_RATE_LIMIT_CALLS", "30")

    config = get_producthunt_config()

    assert config.resilience.ratelimit == RateLimit(max_calls=30, per_seconds=60.0)


def test_producthunt_rate_limit_disabled_by_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PRODUCT_HUNT_DEVELOPER_TOKEN", "secret")
    monkeypatch.setenv("PRODUCT_HUNT_RATE_LIMIT_CALLS", "0")

    assert get_producthunt_config().resilience.ratelimit is None
