from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

try:
    import pyttsx3
except ImportError:  # installed with the "voice" extra
    pyttsx3 = None

from voice_interview.application.ports.speech import SpeechOutputPort


class LoggingSpeechOutput(SpeechOutputPort):
    """Mock speech output: logs each utterance and keeps the history for inspection."""

    def __init__(self, echo: bool = False) -> None:
        self.spoken: list[str] = []
        self.cancel_count = 0
        self._echo = echo
        self._logger = logging.getLogger(__name__)

    def is_available(self) -> bool:
        return True

    def speak(self, text: str) -> None:
        self.cancel()
        self.spoken.append(text)
        self._logger.info("Mock speak", extra={"text": text})
        if self._echo:
            print(f"\n(interviewer) {text}")

    def cancel(self) -> None:
        self.cancel_count += 1


class Pyttsx3SpeechOutput(SpeechOutputPort):
    """Offline text-to-speech through pyttsx3; utterances run on one worker thread."""

    def __init__(self, rate_wpm: int = 180) -> None:
        self._rate_wpm = rate_wpm
        self._engine = None
        self._worker = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tts")
        self._logger = logging.getLogger(__name__)

    def is_available(self) -> bool:
        if pyttsx3 is None:
            return False
        if self._engine is None:
            try:
                self._engine = pyttsx3.init()
                self._engine.setProperty("rate", self._rate_wpm)
            except (RuntimeError, OSError, ImportError) as e:
                self._logger.warning("Text-to-speech engine unavailable", extra={"error": str(e)})
                return False
        return True

    def speak(self, text: str) -> None:
        if not self.is_available():
            return
        self.cancel()
        self._worker.submit(self._say, text)

    def cancel(self) -> None:
        if self._engine is not None:
            self._engine.stop()

    def _say(self, text: str) -> None:
        self._engine.say(text)
        self._engine.runAndWait()

    def close(self) -> None:
        # Pending utterances are dropped; the one playing is stopped.
        self.cancel()
        self._worker.shutdown(wait=True, cancel_futures=True)
