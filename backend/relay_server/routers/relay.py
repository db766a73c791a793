import logging

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import Response
from openai import AsyncOpenAI
from relay_server.config import Settings
from relay_server.errors import ValidationError
from relay_server.helpers.chat_llm import chat_with_llm
from relay_server.helpers.stt import transcribe
from relay_server.helpers.tts import generate_speech
from relay_server.helpers.vision import analyze_image
from relay_server.schemas.api_chat import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    ImageAnalysisResponse,
    SpeechRequest,
    TranscriptionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["relay"])

# Provider error statuses (401, 429, 5xx...) are passed through unchanged.
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid input"},
    401: {"model": ErrorResponse, "description": "Provider rejected the API key"},
    429: {"model": ErrorResponse, "description": "Provider rate limit reached"},
    500: {"model": ErrorResponse, "description": "Network failure or unexpected error"},
    502: {"model": ErrorResponse, "description": "Provider returned an empty result"},
    504: {"model": ErrorResponse, "description": "Provider timed out"},
}


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_client(request: Request) -> AsyncOpenAI:
    return request.app.state.openai_client


async def _read_upload(file: UploadFile | None) -> bytes:
    """Read an uploaded file, rejecting absent or empty uploads."""
    if file is None:
        raise ValidationError("No file uploaded.")
    content = await file.read()
    if not content:
        raise ValidationError("Uploaded file is empty.")
    return content


@router.get("/test")
async def liveness():
    logger.debug("Liveness probe")
    return {"message": "Relay server is running"}


@router.post(
    "/chat",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def chat(
    payload: ChatRequest,
    settings: Settings = Depends(get_settings),
    client: AsyncOpenAI = Depends(get_client),
):
    """
    Relay one chat turn.

    The upstream conversation is the given history followed by the new user
    message. Role ordering is not checked.
    """
    logger.info(
        "Chat request: %d history turns, message of %d chars",
        len(payload.conversation_history),
        len(payload.message),
    )

    messages = [turn.model_dump() for turn in payload.conversation_history]
    messages.append({"role": "user", "content": payload.message})

    response = await chat_with_llm(client, messages, settings)
    logger.info("Chat reply of %d chars from %s", len(response.message), response.model)
    return response


@router.post("/stt", response_model=TranscriptionResponse, responses=ERROR_RESPONSES)
async def speech_to_text(
    file: UploadFile | None = File(None),
    settings: Settings = Depends(get_settings),
    client: AsyncOpenAI = Depends(get_client),
):
    audio = await _read_upload(file)
    logger.info(
        "Received audio %s (%s, %d bytes)", file.filename, file.content_type, len(audio)
    )

    text = await transcribe(
        client,
        audio,
        settings,
        filename=file.filename or "audio.wav",
        mime_type=file.content_type or "application/octet-stream",
    )
    return TranscriptionResponse(text=text)


@router.post(
    "/tts",
    response_class=Response,
    responses={200: {"content": {"audio/mpeg": {}}}, **ERROR_RESPONSES},
)
async def text_to_speech(
    payload: SpeechRequest,
    settings: Settings = Depends(get_settings),
    client: AsyncOpenAI = Depends(get_client),
):
    if not payload.text or not payload.text.strip():
        raise ValidationError("Missing text content.")

    voice = payload.voice or settings.tts_voice
    logger.info("Speech request: %d chars, voice %s", len(payload.text), voice)

    audio = await generate_speech(client, payload.text, voice, settings)
    return Response(content=audio, media_type="audio/mpeg")


@router.post(
    "/analyze-image", response_model=ImageAnalysisResponse, responses=ERROR_RESPONSES
)
async def analyze_image_upload(
    file: UploadFile | None = File(None),
    settings: Settings = Depends(get_settings),
    client: AsyncOpenAI = Depends(get_client),
):
    image = await _read_upload(file)
    mime_type = file.content_type or "image/jpeg"
    logger.info("Received image %s (%s, %d bytes)", file.filename, mime_type, len(image))

    result = await analyze_image(client, image, mime_type, settings)
    return ImageAnalysisResponse(result=result)
