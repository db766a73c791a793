from openai import AsyncOpenAI
from relay_server.config import Settings
from relay_server.helpers.upstream import call_upstream


async def generate_speech(
    client: AsyncOpenAI,
    text: str,
    voice_name: str,
    settings: Settings,
    file_format: str = "mp3",
) -> bytes:
    async def create():
        return await client.audio.speech.create(
            model=settings.tts_model,
            voice=voice_name,
            input=text,
            response_format=file_format,
            timeout=settings.tts_timeout_seconds,
        )

    binary_response = await call_upstream(
        "speech synthesis",
        create,
        max_attempts=settings.max_attempts,
        backoff_seconds=settings.backoff_seconds,
    )

    return binary_response.content
