import logging

from bmpstudio.config import AppConfig, configure_logging


def test_defaults():
    config = AppConfig.from_env({})
    assert config == AppConfig()
    assert config.log_level == "WARNING"


def test_env_overrides():
    config = AppConfig.from_env({"BMPSTUDIO_LOG_LEVEL": "debug", "BMPSTUDIO_APPEARANCE": "Dark"})
    assert config.log_level == "DEBUG"
    assert config.appearance_mode == "dark"


def test_configure_logging_accepts_unknown_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    configure_logging("nonsense")
    assert calls["level"] == logging.WARNING
    configure_logging("info")
    assert calls["level"] == logging.INFO
