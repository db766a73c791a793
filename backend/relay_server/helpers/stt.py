from openai import AsyncOpenAI
from relay_server.config import Settings
from relay_server.helpers.upstream import call_upstream


async def transcribe(
    client: AsyncOpenAI,
    audio_file: bytes,
    settings: Settings,
    filename: str = "audio.wav",
    mime_type: str = "audio/wav",
) -> str:
    async def create():
        return await client.audio.transcriptions.create(
            model=settings.stt_model,
            file=(filename, audio_file, mime_type),
            timeout=settings.stt_timeout_seconds,
        )

    transcript = await call_upstream(
        "transcription",
        create,
        max_attempts=settings.max_attempts,
        backoff_seconds=settings.backoff_seconds,
    )

    return transcript.text
