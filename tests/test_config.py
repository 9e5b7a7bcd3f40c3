from __future__ import annotations

import pytest

from colormatch.config import GameSettings, settings_from_env
from colormatch.infra.redis_client import create_redis


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "COLORMATCH_LISTENER_TIMEOUT_MS",
        "COLORMATCH_ROLL_STEP_MS",
        "COLORMATCH_LOCK_TTL_MS",
        "COLORMATCH_LOG_LEVEL",
        "REDIS_URL",
    ):
        monkeypatch.delenv(name, raising=False)

    assert settings_from_env() == GameSettings()
    assert GameSettings().listener_timeout_ms == 20_000


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COLORMATCH_LISTENER_TIMEOUT_MS", "15000")
    monkeypatch.setenv("COLORMATCH_ROLL_STEP_MS", "750")
    monkeypatch.setenv("COLORMATCH_LOG_LEVEL", "debug")
    monkeypatch.setenv("REDIS_URL", "redis://cache.internal:6380/2")

    s = settings_from_env()
    assert s.listener_timeout_ms == 15_000
    assert s.roll_step_ms == 750
    assert s.log_level == "DEBUG"
    assert s.redis_url == "redis://cache.internal:6380/2"


@pytest.mark.parametrize("raw", ["soon", "0", "-5"])
def test_invalid_numbers_rejected(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("COLORMATCH_ROLL_STEP_MS", raw)
    with pytest.raises(ValueError) as e:
        settings_from_env()
    assert "COLORMATCH_ROLL_STEP_MS" in str(e.value)


def test_default_redis_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REDIS_URL", raising=False)
    assert settings_from_env().redis_url == "redis://localhost:6379/0"


def test_create_redis_uses_settings_url() -> None:
    client = create_redis(GameSettings(redis_url="redis://cache.internal:6380/2"))
    try:
        kwargs = client.connection_pool.connection_kwargs
        assert kwargs["host"] == "cache.internal"
        assert kwargs["port"] == 6380
        assert kwargs["db"] == 2
        assert kwargs["decode_responses"] is True
    finally:
        client.close()
