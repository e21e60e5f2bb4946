"""
End-to-end session runs on a real event loop with the asyncio scheduler.
"""

from __future__ import annotations

import asyncio

from fakes import RecordingListener
from voice_interview.application.use_cases.interview_session import InterviewSession
from voice_interview.domain.entities.session_state import SENTINEL_RESPONSE, SessionStatus
from voice_interview.infrastructure.scheduling.asyncio_scheduler import AsyncioScheduler
from voice_interview.infrastructure.speech.console_recognizer import ConsoleRecognitionBackend
from voice_interview.infrastructure.speech.scripted_recognizer import (
    ScriptedRecognitionBackend,
    answer_script,
)
from voice_interview.infrastructure.speech.speech_output import LoggingSpeechOutput
from voice_interview.infrastructure.speech.voice_capture import VoiceCaptureAdapter


async def _wait_for_end(listener: RecordingListener, timeout: float = 2.0) -> None:
    async def _poll() -> None:
        while not listener.events or listener.events[-1][0] != "end":
            await asyncio.sleep(0.01)

    await asyncio.wait_for(_poll(), timeout)


def test_scripted_session_completes_on_event_loop():
    async def run():
        loop = asyncio.get_running_loop()
        scheduler = AsyncioScheduler(loop)
        done = loop.create_future()
        session = InterviewSession(
            questions=["Q1", "Q2", "Q3"],
            speech=LoggingSpeechOutput(),
            capture=VoiceCaptureAdapter(
                ScriptedRecognitionBackend(
                    [answer_script("one", interims=["o"]), [("end", "")], answer_script("three")],
                    scheduler,
                    step=0.001,
                )
            ),
            scheduler=scheduler,
            listen_delay=0.005,
            advance_delay=0.005,
            on_complete=lambda state: done.set_result(state),
        )
        session.start()
        return await asyncio.wait_for(done, 2.0)

    state = asyncio.run(run())

    assert state.status is SessionStatus.COMPLETED
    assert state.responses == ("one", SENTINEL_RESPONSE, "three")


def test_console_backend_delivers_typed_answer():
    async def run():
        loop = asyncio.get_running_loop()
        adapter = VoiceCaptureAdapter(ConsoleRecognitionBackend(loop, input_func=lambda prompt: "  typed answer "))
        listener = RecordingListener()
        adapter.start(listener)
        await _wait_for_end(listener)
        return listener.events

    assert asyncio.run(run()) == [("final", "typed answer"), ("end", "")]


def test_console_backend_blank_line_ends_without_final():
    async def run():
        loop = asyncio.get_running_loop()
        adapter = VoiceCaptureAdapter(ConsoleRecognitionBackend(loop, input_func=lambda prompt: "   "))
        listener = RecordingListener()
        adapter.start(listener)
        await _wait_for_end(listener)
        return listener.events

    assert asyncio.run(run()) == [("end", "")]


def test_console_backend_closed_input_reports_error():
    def closed(prompt: str) -> str:
        raise EOFError

    async def run():
        loop = asyncio.get_running_loop()
        adapter = VoiceCaptureAdapter(ConsoleRecognitionBackend(loop, input_func=closed))
        listener = RecordingListener()
        adapter.start(listener)
        await _wait_for_end(listener)
        return listener.events

    assert asyncio.run(run()) == [("error", "aborted"), ("end", "")]
