import logging

import requests
from chat_client.config import ClientConfig

logger = logging.getLogger(__name__)


class RelayRequestError(Exception):
    """Any failed call to the relay server."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_text(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return f"HTTP {response.status_code}"


class RelayClient:
    """Talks to the relay server chosen by `ClientConfig.use_local_api`."""

    def __init__(self, config: ClientConfig):
        self.config = config

    def make_api_request(
        self, method: str, endpoint: str, timeout: float, **kwargs
    ) -> requests.Response:
        """Make API request to the relay, raising RelayRequestError on any failure"""
        url = f"{self.config.base_url}{endpoint}"
        logger.debug("%s %s", method, url)
        try:
            response = requests.request(method, url, timeout=timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            raise RelayRequestError(f"Request to {endpoint} timed out") from e
        except requests.exceptions.ConnectionError as e:
            raise RelayRequestError(
                f"Could not connect to the relay server at {self.config.base_url}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise RelayRequestError(f"Request to {endpoint} failed: {e}") from e

        if not response.ok:
            message = _error_text(response)
            logger.warning(
                "%s %s failed with %s: %s", method, endpoint, response.status_code, message
            )
            raise RelayRequestError(message, status_code=response.status_code)
        return response

    def _json(self, response: requests.Response, field: str):
        try:
            value = response.json()[field]
        except (ValueError, KeyError, TypeError) as e:
            raise RelayRequestError(f"Malformed relay response: missing '{field}'") from e
        return value

    def ping(self) -> dict:
        return self.make_api_request("GET", "/api/test", timeout=5).json()

    def chat(self, message: str, history: list[dict]) -> dict:
        response = self.make_api_request(
            "POST",
            "/api/chat",
            timeout=self.config.chat_timeout_seconds,
            json={"message": message, "conversationHistory": history},
        )
        reply = self._json(response, "message")
        if not reply:
            raise RelayRequestError("Relay returned an empty reply")
        return response.json()

    def speech_to_text(
        self, audio: bytes, file_name: str = "audio.wav", mime_type: str = "audio/wav"
    ) -> str:
        response = self.make_api_request(
            "POST",
            "/api/stt",
            timeout=self.config.upload_timeout_seconds,
            files={"file": (file_name, audio, mime_type)},
        )
        return self._json(response, "text")

    def text_to_speech(self, text: str, voice: str | None = None) -> bytes:
        payload = {"text": text}
        if voice:
            payload["voice"] = voice
        response = self.make_api_request(
            "POST",
            "/api/tts",
            timeout=self.config.speech_timeout_seconds,
            json=payload,
        )
        return response.content

    def analyze_image(
        self, image: bytes, file_name: str, mime_type: str = "image/jpeg"
    ) -> str:
        response = self.make_api_request(
            "POST",
            "/api/analyze-image",
            timeout=self.config.upload_timeout_seconds,
            files={"file": (file_name, image, mime_type)},
        )
        return self._json(response, "result")
