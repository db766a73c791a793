from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOCAL_API_URL = "http://localhost:3001"


class ClientConfig(BaseSettings):
    """
    Client settings, read from USE_LOCAL_API, LOCAL_API_URL, BACKEND_URL and
    LOG_LEVEL. The timeouts cover the relay's full retry budget (three
    attempts at its per-call timeout plus backoff), so the client never gives
    up while the relay is still retrying.
    """

    model_config = SettingsConfigDict(extra="ignore", env_ignore_empty=True)

    use_local_api: bool = False
    local_api_url: str = DEFAULT_LOCAL_API_URL
    backend_url: str | None = None

    # chat: 3 x 60s, tts: 3 x 60s, stt: 3 x 300s (vision: 3 x 120s)
    chat_timeout_seconds: float = 190.0
    speech_timeout_seconds: float = 190.0
    upload_timeout_seconds: float = 910.0
    log_level: str = "INFO"

    @property
    def base_url(self) -> str:
        """Relay base URL; falls back to the local relay when no deployed one is set."""
        if self.use_local_api or not self.backend_url:
            return self.local_api_url.rstrip("/")
        return self.backend_url.rstrip("/")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        load_dotenv()
        return cls()
