"""Unit tests for src/core/config.py"""

import logging

import pytest
from pydantic import ValidationError

from src.core.config import Settings, configure_logging


def test_defaults() -> None:
    settings = Settings()
    assert settings.checks_to_win == 3
    assert settings.log_level == "INFO"


def test_from_env() -> None:
    settings = Settings.from_env({"KOTH_CHECKS_TO_WIN": "5", "KOTH_LOG_LEVEL": "debug"})
    assert settings.checks_to_win == 5
    assert settings.log_level == "DEBUG"


def test_from_env_ignores_unrelated_variables() -> None:
    settings = Settings.from_env({"CHECKS_TO_WIN": "5", "PATH": "/usr/bin"})
    assert settings == Settings()


def test_from_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KOTH_CHECKS_TO_WIN", "2")
    monkeypatch.delenv("KOTH_LOG_LEVEL", raising=False)
    settings = Settings.from_env()
    assert settings.checks_to_win == 2
    assert settings.log_level == "INFO"


@pytest.mark.parametrize(
    "environ",
    [
        {"KOTH_CHECKS_TO_WIN": "0"},
        {"KOTH_CHECKS_TO_WIN": "three"},
        {"KOTH_LOG_LEVEL": "chatty"},
    ],
)
def test_invalid_settings(environ: dict[str, str]) -> None:
    with pytest.raises(ValidationError):
        Settings.from_env(environ)


def test_configure_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    configure_logging(Settings(log_level="warning"))
    assert len(calls) == 1
    assert calls[0]["level"] == "WARNING"
