from __future__ import annotations

import logging
from typing import Callable, Sequence

from voice_interview.application.exceptions import CapabilityUnavailableError
from voice_interview.application.ports.scheduler import SchedulerPort
from voice_interview.application.ports.speech import CaptureListener, SpeechOutputPort, VoiceCapturePort
from voice_interview.application.utils.session_transitions import (
    advance,
    apply_interim,
    begin,
    record_response,
)
from voice_interview.domain.entities.session_state import (
    SENTINEL_RESPONSE,
    SessionState,
    SessionStatus,
)

DEFAULT_LISTEN_DELAY_SECONDS = 3.0
DEFAULT_ADVANCE_DELAY_SECONDS = 1.0

logger = logging.getLogger(__name__)

StateCallback = Callable[[SessionState], None]


class _TurnListener(CaptureListener):
    """Capture listener bound to one turn; events for any other turn are ignored by the session."""

    def __init__(self, session: "InterviewSession", turn: int) -> None:
        self._session = session
        self._turn = turn

    def on_interim(self, text: str) -> None:
        self._session._handle_interim(self._turn, text)

    def on_final(self, text: str) -> None:
        self._session._handle_final(self._turn, text)

    def on_error(self, code: str) -> None:
        self._session._handle_error(self._turn, code)

    def on_end(self) -> None:
        self._session._handle_end(self._turn)


class InterviewSession:
    """
    Single-shot spoken interview over a fixed list of questions.

    NOT_STARTED -> IN_PROGRESS(i) -> COMPLETED. Each turn speaks the question,
    starts capture after `listen_delay`, records exactly one response (the final
    transcript or SENTINEL_RESPONSE) and advances after `advance_delay`.

    The session owns its SessionState; capture events and timers only reach it
    through the handlers below, which swap in the result of a pure transition.
    """

    def __init__(
        self,
        questions: Sequence[str],
        speech: SpeechOutputPort,
        capture: VoiceCapturePort,
        scheduler: SchedulerPort,
        listen_delay: float = DEFAULT_LISTEN_DELAY_SECONDS,
        advance_delay: float = DEFAULT_ADVANCE_DELAY_SECONDS,
        on_update: StateCallback | None = None,
        on_complete: StateCallback | None = None,
    ) -> None:
        self._state = SessionState(questions=tuple(questions))
        self._speech = speech
        self._capture = capture
        self._scheduler = scheduler
        self._listen_delay = listen_delay
        self._advance_delay = advance_delay
        self._on_update = on_update
        self._on_complete = on_complete
        self._completed_notified = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    def transcript(self) -> list[tuple[str, str]]:
        """(question, response) pairs; unanswered questions pair with an empty string."""
        responses = self._state.responses
        return [
            (question, responses[i] if i < len(responses) else "")
            for i, question in enumerate(self._state.questions)
        ]

    def start(self) -> None:
        """
        Start the interview.

        Raises:
            ValueError: already started, or no questions
            CapabilityUnavailableError: speech output or capture missing on this host
        """
        started = begin(self._state)
        if not self._speech.is_available():
            raise CapabilityUnavailableError("Speech output is not supported on this host.")
        if not self._capture.is_available():
            raise CapabilityUnavailableError("Speech recognition is not supported on this host.")

        self._state = started
        logger.info("Interview started", extra={"items": len(started.questions)})
        self._notify()
        self._run_turn()

    def _run_turn(self) -> None:
        if self._state.status is SessionStatus.COMPLETED:
            self._complete()
            return

        turn = self._state.current_index
        logger.info("Asking question", extra={"question_index": turn})
        self._speech.speak(self._state.questions[turn])
        self._scheduler.call_later(self._listen_delay, lambda: self._begin_capture(turn))

    def _begin_capture(self, turn: int) -> None:
        if not self._is_current(turn) or self._is_recorded(turn):
            return
        try:
            self._capture.start(_TurnListener(self, turn))
        except CapabilityUnavailableError as e:
            logger.error("Speech capture unavailable", extra={"turn": turn, "error": str(e)})
            self._finish_turn(turn, SENTINEL_RESPONSE)

    def _handle_interim(self, turn: int, text: str) -> None:
        if not self._is_current(turn) or self._is_recorded(turn):
            return
        self._state = apply_interim(self._state, text)
        self._notify()

    def _handle_final(self, turn: int, text: str) -> None:
        self._finish_turn(turn, text)

    def _handle_error(self, turn: int, code: str) -> None:
        if not self._is_current(turn) or self._is_recorded(turn):
            return
        logger.warning("Speech capture error", extra={"turn": turn, "error": code})
        self._finish_turn(turn, SENTINEL_RESPONSE)

    def _handle_end(self, turn: int) -> None:
        if not self._is_current(turn) or self._is_recorded(turn):
            return
        logger.info("Capture ended without a final transcript", extra={"turn": turn})
        self._finish_turn(turn, SENTINEL_RESPONSE)

    def _finish_turn(self, turn: int, text: str) -> None:
        if not self._is_current(turn) or self._is_recorded(turn):
            return
        self._state = record_response(self._state, text)
        self._notify()
        self._scheduler.call_later(self._advance_delay, lambda: self._advance_from(turn))

    def _advance_from(self, turn: int) -> None:
        # Timers cannot be cancelled; a stale one finds the turn already moved on.
        if not self._is_current(turn):
            return
        self._state = advance(self._state)
        self._notify()
        self._run_turn()

    def _complete(self) -> None:
        if self._completed_notified:
            return
        self._completed_notified = True
        self._capture.abort()
        logger.info(
            "Interview completed",
            extra={"items": len(self._state.responses), "status": self._state.status.value},
        )
        if self._on_complete is not None:
            self._on_complete(self._state)

    def _is_current(self, turn: int) -> bool:
        return self._state.status is SessionStatus.IN_PROGRESS and self._state.current_index == turn

    def _is_recorded(self, turn: int) -> bool:
        return len(self._state.responses) > turn

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update(self._state)
