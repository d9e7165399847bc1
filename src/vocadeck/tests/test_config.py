"""Tests for configuration settings."""
import os

import pytest

from vocadeck.config import Settings, settings


def test_base_directories_exist():
    """Test that all required directories exist."""
    from vocadeck.config import (
        BASE_DIR,
        DATA_DIR,
        MEDIA_DIR,
        SPEECH_DIR,
    )

    assert BASE_DIR.exists()
    assert DATA_DIR.exists()
    assert MEDIA_DIR.exists()
    assert SPEECH_DIR.exists()


def test_settings_defaults():
    """Test default settings values."""
    assert settings.deck.default_type_filter == "all"
    assert settings.deck.default_gender_mode == "both"
    assert settings.speech.enabled is True
    assert settings.monitoring.metrics_port == 0
    assert settings.paths.words_file.name == "words.json"


def test_settings_from_env(monkeypatch):
    """Test that settings can be overridden by environment variables."""
    monkeypatch.setenv("SHUFFLE_SEED", "99")

    test_settings = Settings()

    assert test_settings.deck.shuffle_seed == 99


def test_shuffle_seed_unset(monkeypatch):
    """Test that an empty seed means unseeded shuffles."""
    monkeypatch.setenv("SHUFFLE_SEED", "")
    assert Settings().deck.shuffle_seed is None


def test_validate_rejects_unknown_defaults():
    """Test validation of deck defaults."""
    test_settings = Settings()
    test_settings.deck.default_type_filter = "adverb"
    with pytest.raises(ValueError):
        test_settings.validate()

    test_settings = Settings()
    test_settings.deck.default_gender_mode = "n"
    with pytest.raises(ValueError):
        test_settings.validate()


def test_bot_token_required():
    """Test that the bot refuses to start without a token."""
    test_settings = Settings()
    test_settings.bot.token = ""
    with pytest.raises(ValueError):
        test_settings.bot.validate()


if __name__ == "__main__":
    pytest.main([__file__])
