from __future__ import annotations

import pytest

from result_ingest.app.core.env import Env, get_env, pick


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("prod", Env.PROD),
        ("Production", Env.PROD),
        ("development", Env.DEV),
        ("preview", Env.TEST),
        (" local ", Env.LOCAL),
    ],
)
def test_get_env_normalizes(monkeypatch, raw, expected):
    monkeypatch.setenv("APP_ENV", raw)
    get_env.cache_clear()

    assert get_env() is expected


def test_get_env_defaults_to_local(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    get_env.cache_clear()

    assert get_env() is Env.LOCAL


def test_unknown_env_warns(monkeypatch):
    monkeypatch.setenv("APP_ENV", "staging-eu")
    get_env.cache_clear()

    with pytest.warns(RuntimeWarning, match="staging-eu"):
        assert get_env() is Env.LOCAL


def test_pick(monkeypatch):
    monkeypatch.setenv("APP_ENV", "prod")
    get_env.cache_clear()
    assert pick(prod="INFO", nonprod="DEBUG") == "INFO"

    monkeypatch.setenv("APP_ENV", "test")
    get_env.cache_clear()
    assert pick(prod="INFO", nonprod="DEBUG") == "DEBUG"
    assert pick(prod="INFO", nonprod="DEBUG", test="WARNING") == "WARNING"
