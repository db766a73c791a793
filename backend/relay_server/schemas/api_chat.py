from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(min_length=1)
    conversation_history: list[Message] = Field(alias="conversationHistory")


class ChatResponse(BaseModel):
    message: str
    usage: dict[str, Any] | None = None
    model: str | None = None


class SpeechRequest(BaseModel):
    text: str | None = None
    voice: str | None = None


class TranscriptionResponse(BaseModel):
    text: str


class ImageAnalysisResponse(BaseModel):
    result: str


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
