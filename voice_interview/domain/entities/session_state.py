from dataclasses import dataclass
from enum import Enum

SENTINEL_RESPONSE = "[Could not understand response]"


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class SessionState:
    questions: tuple[str, ...] = ()
    current_index: int = 0
    responses: tuple[str, ...] = ()  # aligned by index with questions
    live_transcript: str = ""
    started: bool = False

    @property
    def status(self) -> SessionStatus:
        if not self.started:
            return SessionStatus.NOT_STARTED
        if self.current_index >= len(self.questions):
            return SessionStatus.COMPLETED
        return SessionStatus.IN_PROGRESS

    @property
    def current_question(self) -> str | None:
        if self.status is not SessionStatus.IN_PROGRESS:
            return None
        return self.questions[self.current_index]
