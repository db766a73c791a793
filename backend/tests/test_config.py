import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError
from relay_server.config import (
    ConfigurationError,
    Settings,
    load_settings,
    load_settings_or_exit,
)


@patch("relay_server.config.load_dotenv")
def test_load_settings_requires_api_key(mock_load_dotenv):
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            load_settings()

    mock_load_dotenv.assert_called_once()


@patch("relay_server.config.load_dotenv")
def test_load_settings_or_exit_exits_without_key(mock_load_dotenv):
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(SystemExit) as exc_info:
            load_settings_or_exit()

    assert exc_info.value.code == 1


@patch("relay_server.config.load_dotenv")
def test_load_settings_defaults(mock_load_dotenv):
    with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"}, clear=True):
        settings = load_settings()

    assert settings.openai_api_key == "sk-test"
    assert settings.chat_model == "gpt-4o-mini"
    assert settings.stt_model == "whisper-1"
    assert settings.tts_model == "tts-1"
    assert settings.tts_voice == "alloy"
    assert settings.max_attempts == 3
    assert settings.port == 3001
    assert settings.cors_origins == ["*"]


@patch("relay_server.config.load_dotenv")
def test_load_settings_accepts_vite_key(mock_load_dotenv):
    with patch.dict(os.environ, {"VITE_OPENAI_API_KEY": "sk-vite"}, clear=True):
        settings = load_settings()

    assert settings.openai_api_key == "sk-vite"


@patch("relay_server.config.load_dotenv")
def test_load_settings_overrides(mock_load_dotenv):
    env = {
        "OPENAI_API_KEY": "sk-test",
        "CHAT_MODEL": "gpt-4o",
        "RELAY_MAX_ATTEMPTS": "5",
        "RELAY_BACKOFF_SECONDS": "0.25",
        "PORT": "8015",
        "CHECK_UPSTREAM_ON_STARTUP": "false",
        "CORS_ORIGINS": "http://localhost:5173, https://example.github.io",
    }
    with patch.dict(os.environ, env, clear=True):
        settings = load_settings()

    assert settings.chat_model == "gpt-4o"
    assert settings.max_attempts == 5
    assert settings.backoff_seconds == 0.25
    assert settings.port == 8015
    assert settings.check_upstream_on_startup is False
    assert settings.cors_origins == ["http://localhost:5173", "https://example.github.io"]


def test_settings_are_explicit_objects():
    first = Settings(openai_api_key="one")
    second = Settings(openai_api_key="two", chat_model="gpt-4o")

    assert first.chat_model == "gpt-4o-mini"
    assert second.chat_model == "gpt-4o"


@patch("relay_server.config.load_dotenv")
def test_load_settings_or_exit_exits_on_invalid_value(mock_load_dotenv, caplog):
    env = {"OPENAI_API_KEY": "sk-test", "PORT": "not-a-port"}
    with patch.dict(os.environ, env, clear=True):
        with pytest.raises(SystemExit) as exc_info:
            load_settings_or_exit()

    assert exc_info.value.code == 1
    assert "PORT" in caplog.text or "port" in caplog.text


@patch("relay_server.config.load_dotenv")
def test_load_settings_rejects_zero_attempts(mock_load_dotenv):
    env = {"OPENAI_API_KEY": "sk-test", "RELAY_MAX_ATTEMPTS": "0"}
    with patch.dict(os.environ, env, clear=True):
        with pytest.raises(PydanticValidationError):
            load_settings()


@patch("relay_server.config.load_dotenv")
def test_empty_values_keep_defaults(mock_load_dotenv):
    env = {"OPENAI_API_KEY": "sk-test", "CHAT_MODEL": "", "CORS_ORIGINS": ""}
    with patch.dict(os.environ, env, clear=True):
        settings = load_settings()

    assert settings.chat_model == "gpt-4o-mini"
    assert settings.cors_origins == ["*"]
