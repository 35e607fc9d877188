"""
Tests for configuration management in `pressocheck/config.py`.

Covers:
- Environment parsing and debug defaults
- Logging level coercion to the expected Literal
- Storage URL and echo parsing
- get_config cache behavior
- AppConfig validation (debug only allowed in development)
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from pressocheck.config import (
    AppConfig,
    StorageConfig,
    TrackerConfig,
    get_config,
    load_config_from_env,
    print_config_summary,
    validate_config,
)


@pytest.fixture(autouse=True)
def clear_config_cache() -> Iterator[None]:
    """Ensure get_config cache is cleared before and after each test."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


def test_load_config_dev_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("RECENT_LIMIT", raising=False)

    config = load_config_from_env()

    assert config.environment == "development"
    assert config.debug is True
    assert config.logging.format == "console"
    assert config.storage.url == "sqlite:///./data/pressocheck.db"
    assert config.tracker.recent_limit == 7


def test_production_uses_json_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "prod")

    config = load_config_from_env()

    assert config.environment == "production"
    assert config.debug is False
    assert config.logging.format == "json"


def test_storage_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite:///tmp/readings.db")
    monkeypatch.setenv("DATABASE_ECHO", "yes")
    monkeypatch.setenv("RECENT_LIMIT", "14")

    config = load_config_from_env()

    assert config.storage.url == "sqlite:///tmp/readings.db"
    assert config.storage.echo is True
    assert config.tracker.recent_limit == 14


def test_logging_level_literal_coercion(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "staging")

    # Unknown level should coerce to INFO
    monkeypatch.setenv("LOG_LEVEL", "unknown")
    config = load_config_from_env()
    assert config.logging.level == "INFO"

    # Known level should pass through
    monkeypatch.setenv("LOG_LEVEL", "error")
    config = load_config_from_env()
    assert config.logging.level == "ERROR"


def test_get_config_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")

    c1 = get_config()
    c2 = get_config()
    assert c1 is c2  # same object due to lru_cache


def test_non_sqlite_url_is_rejected() -> None:
    with pytest.raises(ValueError, match="SQLite"):
        StorageConfig(url="postgresql://localhost/readings")


def test_recent_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        TrackerConfig(recent_limit=0)


def test_app_config_debug_only_in_dev_validation() -> None:
    with pytest.raises(ValueError, match="debug mode is only allowed"):
        AppConfig(environment="production", debug=True)


def test_validate_config_reports_storage(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "stage")
    monkeypatch.setenv("DATABASE_URL", "sqlite://")

    validate_config()

    out = capsys.readouterr().out
    assert "staging environment" in out
    assert "sqlite://" in out


def test_print_config_summary(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("RECENT_LIMIT", "5")

    print_config_summary()

    out = capsys.readouterr().out
    assert "CONFIGURATION SUMMARY" in out
    assert "Debug Mode: True" in out
