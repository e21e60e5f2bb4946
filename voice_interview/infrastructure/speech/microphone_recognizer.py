from __future__ import annotations

import asyncio
import logging

try:
    import speech_recognition as sr
except ImportError:  # installed with the "voice" extra
    sr = None

from voice_interview.application.exceptions import CapabilityUnavailableError
from voice_interview.application.ports.speech import RecognitionBackend, RecognitionEmit


class MicrophoneRecognitionBackend(RecognitionBackend):
    """
    Microphone capture through `speech_recognition`, recognized with the Google web recognizer.

    Each capture listens for one phrase in a worker thread and reports the result
    back on the event loop. The recognizer has no partial results, so no interim
    events are produced.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        language: str = "en-US",
        timeout: float = 8.0,
        phrase_time_limit: float = 30.0,
    ) -> None:
        self._loop = loop
        self._language = language
        self._timeout = timeout
        self._phrase_time_limit = phrase_time_limit
        self._generation = 0
        self._available: bool | None = None
        self._logger = logging.getLogger(__name__)

    def is_available(self) -> bool:
        if self._available is None:
            self._available = self._probe()
        return self._available

    def _probe(self) -> bool:
        if sr is None:
            self._logger.warning("speech_recognition not installed")
            return False
        try:
            names = sr.Microphone.list_microphone_names()
        except (AttributeError, OSError) as e:
            # AttributeError: PyAudio missing
            self._logger.warning("Microphone unavailable", extra={"error": str(e)})
            return False
        return bool(names)

    def begin(self, emit: RecognitionEmit) -> None:
        if sr is None:
            raise CapabilityUnavailableError("speech_recognition is not installed.")
        self._generation += 1
        generation = self._generation
        future = self._loop.run_in_executor(None, self._listen_once)
        future.add_done_callback(lambda f: self._deliver(generation, emit, f))

    def cancel(self) -> None:
        # The worker finishes its phrase; its result is discarded.
        self._generation += 1

    def _listen_once(self) -> tuple[str, str]:
        recognizer = sr.Recognizer()
        try:
            with sr.Microphone() as source:
                recognizer.adjust_for_ambient_noise(source, duration=0.3)
                audio = recognizer.listen(
                    source,
                    timeout=self._timeout,
                    phrase_time_limit=self._phrase_time_limit,
                )
            text = recognizer.recognize_google(audio, language=self._language)
        except sr.WaitTimeoutError:
            return ("error", "no-speech")
        except sr.UnknownValueError:
            return ("error", "no-match")
        except sr.RequestError as e:
            self._logger.warning("Speech recognition request failed", extra={"error": str(e)})
            return ("error", "network")
        except OSError as e:
            self._logger.warning("Audio capture failed", extra={"error": str(e)})
            return ("error", "audio-capture")
        return ("final", text)

    def _deliver(self, generation: int, emit: RecognitionEmit, future: asyncio.Future) -> None:
        if generation != self._generation or future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._logger.error("Speech recognition failed", extra={"error": repr(error)})
            emit("error", "aborted")
            emit("end", "")
            return
        kind, payload = future.result()
        if kind != "final" or payload.strip():
            emit(kind, payload)
        emit("end", "")
