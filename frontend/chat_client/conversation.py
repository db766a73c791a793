import logging
import random
from datetime import datetime
from typing import Literal

from chat_client.helpers.images import ImageCompressionError, compress_image
from chat_client.helpers.language import is_english, is_latin_sentence
from chat_client.recorder import Recording
from chat_client.utils.api import RelayClient, RelayRequestError
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

APOLOGY = "Sorry, something went wrong. Please try again later."
VOICE_PLACEHOLDER = "[Voice message]"
SUMMARY_PROMPT = "Please briefly summarize the following text:\n{text}"


class ConversationTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    audio: bytes | None = None
    image: bytes | None = None
    is_image_analysis: bool = False

    def as_message(self) -> dict:
        return {"role": self.role, "content": self.content}


class ImageAnalysis(BaseModel):
    file_name: str
    result: str

    def as_context(self) -> dict:
        return {
            "role": "assistant",
            "content": f"Image analysis result ({self.file_name}): {self.result}",
        }


class ChatSession:
    """
    Conversation state for one client session.

    Turns are only ever appended. Every public method records a failure as an
    apology turn instead of raising, so the caller can keep taking input.
    """

    def __init__(self, relay: RelayClient, rng: random.Random | None = None):
        self.relay = relay
        self.turns: list[ConversationTurn] = []
        self.image_analyses: list[ImageAnalysis] = []
        self._rng = rng

    def _append(self, role: str, content: str, **extra) -> ConversationTurn:
        turn = ConversationTurn(role=role, content=content, **extra)
        self.turns.append(turn)
        return turn

    def _apologize(self, error: Exception) -> ConversationTurn:
        logger.warning("Relay call failed: %s", error)
        return self._append("assistant", APOLOGY)

    def build_history(self) -> list[dict]:
        """Image analyses first, then the turns (analysis turns are already covered)."""
        history = [analysis.as_context() for analysis in self.image_analyses]
        history.extend(
            turn.as_message()
            for turn in self.turns
            if turn.content and not turn.is_image_analysis
        )
        return history

    def send(self, text: str, audio: bytes | None = None) -> ConversationTurn | None:
        text = (text or "").strip()
        if not text:
            return None

        history = self.build_history()
        self._append("user", text, audio=audio)

        try:
            reply = self.relay.chat(text, history)["message"]
        except RelayRequestError as e:
            return self._apologize(e)

        speech = None
        if is_english(reply, self._rng):
            try:
                speech = self.relay.text_to_speech(reply)
            except RelayRequestError as e:
                logger.warning("Speech synthesis skipped: %s", e)
        else:
            logger.debug("Reply is not English, no speech synthesis")

        return self._append("assistant", reply, audio=speech)

    def send_voice(self, recording: Recording) -> ConversationTurn | None:
        """Transcribe a recording and send the transcript like typed text."""
        try:
            transcript = self.relay.speech_to_text(
                recording.data, file_name="audio.wav", mime_type=recording.mime_type
            )
        except RelayRequestError as e:
            self._append("user", VOICE_PLACEHOLDER, audio=recording.data)
            return self._apologize(e)

        if not transcript or not transcript.strip():
            self._append("user", VOICE_PLACEHOLDER, audio=recording.data)
            return self._apologize(RelayRequestError("Empty transcript"))

        return self.send(transcript, audio=recording.data)

    def submit_image(self, image: bytes, file_name: str) -> ConversationTurn:
        """Compress, analyze and remember an image for later turns."""
        try:
            compressed = compress_image(image)
        except ImageCompressionError as e:
            self._append("user", f"Image file: {file_name}")
            return self._apologize(e)

        logger.info(
            "Compressed %s from %d to %d bytes", file_name, len(image), len(compressed)
        )
        self._append("user", f"Image file: {file_name}", image=compressed)

        try:
            result = self.relay.analyze_image(compressed, file_name, "image/jpeg")
        except RelayRequestError as e:
            return self._apologize(e)

        self.image_analyses.append(ImageAnalysis(file_name=file_name, result=result))
        return self._append(
            "assistant",
            f"Image analysis result ({file_name}):\n{result}",
            is_image_analysis=True,
        )

    def submit_audio_file(
        self, audio: bytes, file_name: str, mime_type: str
    ) -> ConversationTurn:
        """Transcribe an uploaded audio or video file and summarize it."""
        self._append("user", f"Audio file: {file_name}", audio=audio)

        try:
            transcription = self.relay.speech_to_text(audio, file_name, mime_type)
            summary = self.relay.chat(SUMMARY_PROMPT.format(text=transcription), [])[
                "message"
            ]
        except RelayRequestError as e:
            return self._apologize(e)

        if is_latin_sentence(transcription):
            content = f"1. Summary:\n{summary}\n\n2. Original audio text:\n{transcription}"
        else:
            content = f"1. 概括：\n{summary}\n\n2. 音频原文：\n{transcription}"
        return self._append("assistant", content)

    def forward(self, turn: ConversationTurn) -> ConversationTurn | None:
        return self.send(turn.content)
