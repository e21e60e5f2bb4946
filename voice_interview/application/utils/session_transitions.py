from __future__ import annotations

from dataclasses import replace

from voice_interview.domain.entities.session_state import SessionState, SessionStatus


def begin(state: SessionState) -> SessionState:
    """NOT_STARTED -> IN_PROGRESS(0)."""
    if state.started:
        raise ValueError("Interview session already started.")
    if not state.questions:
        raise ValueError("Interview session needs at least one question.")
    return replace(state, started=True, current_index=0, responses=(), live_transcript="")


def apply_interim(state: SessionState, text: str) -> SessionState:
    """Replace (never append) the live transcript of the current turn."""
    if state.status is not SessionStatus.IN_PROGRESS:
        return state
    return replace(state, live_transcript=text)


def record_response(state: SessionState, text: str) -> SessionState:
    """Store the response for the current turn and clear the live transcript."""
    if state.status is not SessionStatus.IN_PROGRESS:
        return state
    if len(state.responses) > state.current_index:
        return state
    return replace(state, responses=state.responses + (text,), live_transcript="")


def advance(state: SessionState) -> SessionState:
    """IN_PROGRESS(i) -> IN_PROGRESS(i+1), or COMPLETED once i+1 == len(questions)."""
    if state.status is not SessionStatus.IN_PROGRESS:
        return state
    return replace(state, current_index=state.current_index + 1, live_transcript="")
