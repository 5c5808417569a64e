from __future__ import annotations

import logging

import pytest

from tfplayer.config.settings import Settings, load_settings_from_env


def test_should_use_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TFPLAYER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TFPLAYER_IMAGE_EXTENSION", raising=False)

    assert load_settings_from_env() == Settings()


def test_should_read_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TFPLAYER_LOG_LEVEL", "debug")
    monkeypatch.setenv("TFPLAYER_IMAGE_EXTENSION", ".bmp")

    settings = load_settings_from_env()

    assert settings.log_level == logging.DEBUG
    assert settings.image_extension == ".bmp"


def test_should_reject_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TFPLAYER_LOG_LEVEL", "chatty")

    with pytest.raises(ValueError):
        load_settings_from_env()
