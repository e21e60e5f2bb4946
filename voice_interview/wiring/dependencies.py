from __future__ import annotations

import asyncio
import logging
from functools import lru_cache

from voice_interview.application.ports.answer_store import AnswerStorePort
from voice_interview.application.ports.llm import LLMPort
from voice_interview.application.ports.speech import RecognitionBackend, SpeechOutputPort
from voice_interview.application.use_cases.evaluate_answer import EvaluateAnswerUseCase
from voice_interview.application.use_cases.interview_session import InterviewSession, StateCallback
from voice_interview.application.use_cases.score_answers import ScoreAnswersUseCase
from voice_interview.core.config import settings
from voice_interview.infrastructure.llm.mock_llm import MockLLM
from voice_interview.infrastructure.llm.openai_llm import OpenAILLM
from voice_interview.infrastructure.scheduling.asyncio_scheduler import AsyncioScheduler
from voice_interview.infrastructure.speech.console_recognizer import ConsoleRecognitionBackend
from voice_interview.infrastructure.speech.microphone_recognizer import MicrophoneRecognitionBackend
from voice_interview.infrastructure.speech.speech_output import LoggingSpeechOutput, Pyttsx3SpeechOutput
from voice_interview.infrastructure.speech.voice_capture import VoiceCaptureAdapter
from voice_interview.infrastructure.store.json_store import JsonAnswerStore
from voice_interview.infrastructure.store.memory_store import MemoryAnswerStore

logger = logging.getLogger(__name__)

_answer_store: AnswerStorePort | None = None


@lru_cache
def get_llm() -> LLMPort:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        logger.info("Using OpenAILLM", extra={"provider": "openai"})
        return OpenAILLM()
    logger.info("Using MockLLM (OPENAI_API_KEY missing)", extra={"provider": "mock"})
    return MockLLM()


def get_answer_store() -> AnswerStorePort:
    global _answer_store
    if _answer_store is None:
        if settings.ENV.lower() in {"dev", "local"}:
            _answer_store = JsonAnswerStore(path=settings.ANSWER_STORE_PATH)
        else:
            _answer_store = MemoryAnswerStore()
    return _answer_store


def get_evaluate_use_case() -> EvaluateAnswerUseCase:
    return EvaluateAnswerUseCase(
        llm=get_llm(),
        store=get_answer_store(),
        temperature=settings.OPENAI_TEMPERATURE_EVALUATE,
        max_tokens=settings.OPENAI_MAX_TOKENS_EVALUATE,
    )


def get_score_use_case() -> ScoreAnswersUseCase:
    return ScoreAnswersUseCase(evaluator=get_evaluate_use_case())


def get_speech_output(mock: bool = False) -> SpeechOutputPort:
    if mock:
        return LoggingSpeechOutput(echo=True)
    return Pyttsx3SpeechOutput(rate_wpm=settings.TTS_RATE_WPM)


def get_recognition_backend(loop: asyncio.AbstractEventLoop, mode: str = "console") -> RecognitionBackend:
    if mode == "microphone":
        return MicrophoneRecognitionBackend(
            loop=loop,
            language=settings.SPEECH_LANGUAGE,
            timeout=settings.CAPTURE_TIMEOUT_SECONDS,
            phrase_time_limit=settings.CAPTURE_PHRASE_TIME_LIMIT_SECONDS,
        )
    if mode == "console":
        return ConsoleRecognitionBackend(loop=loop)
    raise ValueError(f"Unknown recognition backend: {mode}")


def build_interview_session(
    questions: list[str],
    loop: asyncio.AbstractEventLoop,
    speech: SpeechOutputPort,
    backend: RecognitionBackend,
    on_update: StateCallback | None = None,
    on_complete: StateCallback | None = None,
) -> InterviewSession:
    return InterviewSession(
        questions=questions,
        speech=speech,
        capture=VoiceCaptureAdapter(backend),
        scheduler=AsyncioScheduler(loop),
        listen_delay=settings.SESSION_LISTEN_DELAY_SECONDS,
        advance_delay=settings.SESSION_ADVANCE_DELAY_SECONDS,
        on_update=on_update,
        on_complete=on_complete,
    )
