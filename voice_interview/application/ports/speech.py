from abc import ABC, abstractmethod
from typing import Callable


class SpeechOutputPort(ABC):
    @abstractmethod
    def is_available(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def speak(self, text: str) -> None:
        """Speak `text`, cancelling any utterance still pending."""
        raise NotImplementedError

    @abstractmethod
    def cancel(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release the output device; the default holds nothing to release."""
        self.cancel()


class CaptureListener(ABC):
    """Receives the events of one capture session."""

    @abstractmethod
    def on_interim(self, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def on_final(self, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def on_error(self, code: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def on_end(self) -> None:
        raise NotImplementedError


class VoiceCapturePort(ABC):
    @abstractmethod
    def is_available(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def start(self, listener: CaptureListener) -> None:
        """
        Begin a capture session, aborting any active one first.

        Raises:
            CapabilityUnavailableError: speech capture is not supported on this host
        """
        raise NotImplementedError

    @abstractmethod
    def abort(self) -> None:
        """End the active capture session. No-op when nothing is active."""
        raise NotImplementedError


# (kind, payload) where kind is one of "interim", "final", "error", "end"
RecognitionEmit = Callable[[str, str], None]


class RecognitionBackend(ABC):
    """Host speech-to-text engine driven by VoiceCaptureAdapter."""

    @abstractmethod
    def is_available(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def begin(self, emit: RecognitionEmit) -> None:
        """Start listening; report every event through `emit` on the session's thread of control."""
        raise NotImplementedError

    @abstractmethod
    def cancel(self) -> None:
        raise NotImplementedError
