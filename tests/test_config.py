"""Tests for faqharvest.config."""

import dataclasses
import logging

import pytest

from faqharvest.config import (
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_CONTENT_LENGTH,
    DEFAULT_MIN_CONTENT_LENGTH,
    ExtractionSettings,
    load_settings,
)

ENV_KEYS = (
    "FAQ_MIN_CONTENT_LENGTH",
    "FAQ_DEFAULT_LANGUAGE",
    "FAQ_MAX_CONTENT_LENGTH",
    "FAQ_MAX_WORKERS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings()
        assert settings.min_content_length == DEFAULT_MIN_CONTENT_LENGTH == 100
        assert settings.default_language == DEFAULT_LANGUAGE == "English"
        assert settings.max_content_length == DEFAULT_MAX_CONTENT_LENGTH
        assert settings.max_workers == 1

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("FAQ_MIN_CONTENT_LENGTH", "150")
        monkeypatch.setenv("FAQ_DEFAULT_LANGUAGE", "German")
        monkeypatch.setenv("FAQ_MAX_WORKERS", "4")
        settings = load_settings()
        assert settings.min_content_length == 150
        assert settings.default_language == "German"
        assert settings.max_workers == 4

    def test_invalid_int_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("FAQ_MIN_CONTENT_LENGTH", "lots")
        with caplog.at_level(logging.WARNING):
            assert load_settings().min_content_length == DEFAULT_MIN_CONTENT_LENGTH
        assert "FAQ_MIN_CONTENT_LENGTH" in caplog.text

    def test_non_positive_int_falls_back(self, monkeypatch):
        monkeypatch.setenv("FAQ_MAX_WORKERS", "0")
        assert load_settings().max_workers == 1

    def test_blank_language_falls_back(self, monkeypatch):
        monkeypatch.setenv("FAQ_DEFAULT_LANGUAGE", "   ")
        assert load_settings().default_language == DEFAULT_LANGUAGE


class TestExtractionSettings:
    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ExtractionSettings().min_content_length = 5
