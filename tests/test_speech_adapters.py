"""
Tests for the microphone recognition backend and pyttsx3 speech output, driven through fake modules.
"""

from __future__ import annotations

import asyncio
import threading
import time
from types import SimpleNamespace

import pytest

from fakes import RecordingListener
from voice_interview.application.exceptions import CapabilityUnavailableError
from voice_interview.application.use_cases.interview_session import InterviewSession
from voice_interview.domain.entities.session_state import SENTINEL_RESPONSE, SessionStatus
from voice_interview.infrastructure.scheduling.asyncio_scheduler import AsyncioScheduler
from voice_interview.infrastructure.speech import microphone_recognizer, speech_output
from voice_interview.infrastructure.speech.microphone_recognizer import MicrophoneRecognitionBackend
from voice_interview.infrastructure.speech.speech_output import LoggingSpeechOutput, Pyttsx3SpeechOutput
from voice_interview.infrastructure.speech.voice_capture import VoiceCaptureAdapter


class _WaitTimeoutError(Exception):
    pass


class _UnknownValueError(Exception):
    pass


class _RequestError(Exception):
    pass


def _fake_sr(outcome, microphones=("Built-in Microphone",)):
    """A stand-in for the speech_recognition module; `outcome` is the recognized text or an exception."""

    class Microphone:
        @staticmethod
        def list_microphone_names():
            if isinstance(microphones, BaseException):
                raise microphones
            return list(microphones)

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

    class Recognizer:
        def adjust_for_ambient_noise(self, source, duration=1.0):
            pass

        def listen(self, source, timeout=None, phrase_time_limit=None):
            return b"audio"

        def recognize_google(self, audio, language="en-US"):
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome

    return SimpleNamespace(
        Microphone=Microphone,
        Recognizer=Recognizer,
        WaitTimeoutError=_WaitTimeoutError,
        UnknownValueError=_UnknownValueError,
        RequestError=_RequestError,
    )


async def _capture_events(outcome, monkeypatch) -> list[tuple[str, str]]:
    monkeypatch.setattr(microphone_recognizer, "sr", _fake_sr(outcome))
    loop = asyncio.get_running_loop()
    adapter = VoiceCaptureAdapter(MicrophoneRecognitionBackend(loop))
    listener = RecordingListener()
    adapter.start(listener)

    async def _poll() -> None:
        while not listener.events or listener.events[-1][0] != "end":
            await asyncio.sleep(0.01)

    await asyncio.wait_for(_poll(), 2.0)
    return listener.events


def test_microphone_delivers_recognized_phrase(monkeypatch):
    events = asyncio.run(_capture_events("a hash map stores key value pairs", monkeypatch))

    assert events == [("final", "a hash map stores key value pairs"), ("end", "")]


def test_microphone_blank_recognition_ends_without_final(monkeypatch):
    assert asyncio.run(_capture_events("   ", monkeypatch)) == [("end", "")]


@pytest.mark.parametrize(
    "raised, code",
    [
        (_WaitTimeoutError("listening timed out"), "no-speech"),
        (_UnknownValueError(), "no-match"),
        (_RequestError("service unreachable"), "network"),
        (OSError("device busy"), "audio-capture"),
    ],
)
def test_microphone_maps_recognizer_errors_to_codes(monkeypatch, raised, code):
    assert asyncio.run(_capture_events(raised, monkeypatch)) == [("error", code), ("end", "")]


def test_microphone_unexpected_failure_still_ends_capture(monkeypatch):
    events = asyncio.run(_capture_events(ValueError("unexpected response payload"), monkeypatch))

    assert events == [("error", "aborted"), ("end", "")]


def test_session_advances_past_unexpected_recognizer_failure(monkeypatch):
    monkeypatch.setattr(microphone_recognizer, "sr", _fake_sr(ValueError("unexpected response payload")))

    async def run():
        loop = asyncio.get_running_loop()
        scheduler = AsyncioScheduler(loop)
        done = loop.create_future()
        session = InterviewSession(
            questions=["Explain TCP slow start."],
            speech=LoggingSpeechOutput(),
            capture=VoiceCaptureAdapter(MicrophoneRecognitionBackend(loop)),
            scheduler=scheduler,
            listen_delay=0,
            advance_delay=0,
            on_complete=lambda state: done.set_result(state),
        )
        session.start()
        return await asyncio.wait_for(done, 2.0)

    state = asyncio.run(run())

    assert state.status is SessionStatus.COMPLETED
    assert state.responses == (SENTINEL_RESPONSE,)


def test_microphone_result_after_cancel_is_discarded(monkeypatch):
    monkeypatch.setattr(microphone_recognizer, "sr", _fake_sr("late answer"))

    async def run():
        loop = asyncio.get_running_loop()
        backend = MicrophoneRecognitionBackend(loop)
        emitted = []
        backend.begin(lambda kind, payload="": emitted.append((kind, payload)))
        backend.cancel()
        await asyncio.sleep(0.2)
        return emitted

    assert asyncio.run(run()) == []


def test_microphone_availability(monkeypatch):
    loop = asyncio.new_event_loop()
    try:
        monkeypatch.setattr(microphone_recognizer, "sr", None)
        assert MicrophoneRecognitionBackend(loop).is_available() is False

        monkeypatch.setattr(microphone_recognizer, "sr", _fake_sr("x", microphones=AttributeError("no PyAudio")))
        assert MicrophoneRecognitionBackend(loop).is_available() is False

        monkeypatch.setattr(microphone_recognizer, "sr", _fake_sr("x", microphones=()))
        assert MicrophoneRecognitionBackend(loop).is_available() is False

        monkeypatch.setattr(microphone_recognizer, "sr", _fake_sr("x"))
        assert MicrophoneRecognitionBackend(loop).is_available() is True
    finally:
        loop.close()


def test_microphone_begin_without_library_raises(monkeypatch):
    monkeypatch.setattr(microphone_recognizer, "sr", None)
    loop = asyncio.new_event_loop()
    try:
        with pytest.raises(CapabilityUnavailableError):
            MicrophoneRecognitionBackend(loop).begin(lambda kind, payload="": None)
    finally:
        loop.close()


class _FakeEngine:
    def __init__(self) -> None:
        self.events: list[str] = []
        self.properties: dict = {}
        self._lock = threading.Lock()

    def _record(self, event: str) -> None:
        with self._lock:
            self.events.append(event)

    def setProperty(self, name, value):
        self.properties[name] = value

    def say(self, text):
        self._record(f"say:{text}")

    def runAndWait(self):
        self._record("run")

    def stop(self):
        self._record("stop")


def _wait_for_runs(engine: _FakeEngine, count: int, timeout: float = 2.0) -> None:
    deadline = time.monotonic() + timeout
    while engine.events.count("run") < count:
        assert time.monotonic() < deadline, engine.events
        time.sleep(0.01)


def test_pyttsx3_speak_stops_previous_utterance(monkeypatch):
    engine = _FakeEngine()
    monkeypatch.setattr(speech_output, "pyttsx3", SimpleNamespace(init=lambda: engine))
    output = Pyttsx3SpeechOutput(rate_wpm=150)

    assert output.is_available() is True
    output.speak("What is a hash map?")
    _wait_for_runs(engine, 1)
    output.speak("Explain TCP slow start.")
    _wait_for_runs(engine, 2)
    output.close()

    assert engine.properties == {"rate": 150}
    assert engine.events == [
        "stop",
        "say:What is a hash map?",
        "run",
        "stop",
        "say:Explain TCP slow start.",
        "run",
        "stop",
    ]


def test_pyttsx3_unavailable_without_library_or_engine(monkeypatch):
    monkeypatch.setattr(speech_output, "pyttsx3", None)
    output = Pyttsx3SpeechOutput()
    assert output.is_available() is False
    output.speak("ignored")
    output.close()

    def broken_init():
        raise RuntimeError("no speech driver")

    monkeypatch.setattr(speech_output, "pyttsx3", SimpleNamespace(init=broken_init))
    output = Pyttsx3SpeechOutput()
    assert output.is_available() is False
    output.close()
