import time
from enum import Enum
from typing import Callable

from pydantic import BaseModel


class RecorderState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    STOPPED = "stopped"


class RecorderStateError(RuntimeError):
    pass


class Recording(BaseModel):
    data: bytes
    mime_type: str
    duration: float  # seconds


class VoiceRecorder:
    """
    Collects captured audio chunks.

    idle -> recording -> stopped, with `reset()` returning to idle. Stopping
    emits exactly one completion event carrying the whole recording.
    """

    def __init__(
        self,
        on_complete: Callable[[Recording], None] | None = None,
        mime_type: str = "audio/wav",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.on_complete = on_complete
        self.mime_type = mime_type
        self._clock = clock
        self._chunks: list[bytes] = []
        self._started_at: float | None = None
        self.state = RecorderState.IDLE
        self.recording: Recording | None = None

    def start(self) -> None:
        if self.state == RecorderState.RECORDING:
            raise RecorderStateError("Recorder is already recording")
        self._chunks = []
        self.recording = None
        self._started_at = self._clock()
        self.state = RecorderState.RECORDING

    def write(self, chunk: bytes) -> None:
        if self.state != RecorderState.RECORDING:
            raise RecorderStateError(f"Cannot write while {self.state.value}")
        if chunk:
            self._chunks.append(chunk)

    def stop(self) -> Recording:
        if self.state != RecorderState.RECORDING:
            raise RecorderStateError(f"Cannot stop while {self.state.value}")

        duration = round(self._clock() - self._started_at, 1)
        self.recording = Recording(
            data=b"".join(self._chunks), mime_type=self.mime_type, duration=duration
        )
        self._chunks = []
        self.state = RecorderState.STOPPED

        if self.on_complete is not None:
            self.on_complete(self.recording)
        return self.recording

    def reset(self) -> None:
        """Discard any recording and return to idle."""
        self._chunks = []
        self._started_at = None
        self.recording = None
        self.state = RecorderState.IDLE
