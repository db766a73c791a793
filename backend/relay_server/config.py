import logging
from typing import Annotated

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when a required setting is missing."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore", env_ignore_empty=True, populate_by_name=True
    )

    openai_api_key: str = Field(
        "", validation_alias=AliasChoices("OPENAI_API_KEY", "VITE_OPENAI_API_KEY")
    )
    openai_base_url: str | None = None

    chat_model: str = "gpt-4o-mini"
    chat_temperature: float = 0.7
    chat_max_tokens: int = 500
    chat_timeout_seconds: float = 60.0

    vision_model: str = "gpt-4o-mini"
    vision_max_tokens: int = 3000
    vision_timeout_seconds: float = 120.0
    vision_prompt: str = (
        "You are a helpful assistant. Analyze the image and explain what it means. "
        "Give a general overview or summary of what you see."
    )

    stt_model: str = "whisper-1"
    stt_timeout_seconds: float = 300.0

    tts_model: str = "tts-1"
    tts_voice: str = "alloy"
    tts_timeout_seconds: float = 60.0

    max_attempts: int = Field(3, ge=1, validation_alias="RELAY_MAX_ATTEMPTS")
    backoff_seconds: float = Field(1.0, ge=0, validation_alias="RELAY_BACKOFF_SECONDS")

    # comma separated in the environment
    cors_origins: Annotated[list[str], NoDecode] = ["*"]
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3001
    check_upstream_on_startup: bool = True

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        if isinstance(value, str):
            origins = [origin.strip() for origin in value.split(",") if origin.strip()]
            return origins or ["*"]
        return value


def load_settings() -> Settings:
    """
    Build settings from the environment (and a `.env` file if present).

    Raises ConfigurationError when no OpenAI API key is configured and
    pydantic's ValidationError when a value does not parse.
    """
    load_dotenv()

    settings = Settings()
    if not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY is not set")
    return settings


def load_settings_or_exit() -> Settings:
    try:
        return load_settings()
    except ConfigurationError as e:
        logger.critical("Cannot start relay server: %s", e)
        raise SystemExit(1) from e
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        logger.critical("Cannot start relay server, invalid settings: %s", problems)
        raise SystemExit(1) from e
