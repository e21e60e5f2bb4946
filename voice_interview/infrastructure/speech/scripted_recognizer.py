from __future__ import annotations

from collections import deque
from typing import Sequence

from voice_interview.application.ports.scheduler import SchedulerPort
from voice_interview.application.ports.speech import RecognitionBackend, RecognitionEmit

ScriptEvent = tuple[str, str]

SILENT_SCRIPT: tuple[ScriptEvent, ...] = (("error", "no-speech"), ("end", ""))


def answer_script(text: str, interims: Sequence[str] = ()) -> list[ScriptEvent]:
    """Script for a turn where the candidate says `text`, optionally preceded by interim guesses."""
    return [("interim", i) for i in interims] + [("final", text), ("end", "")]


class ScriptedRecognitionBackend(RecognitionBackend):
    """Replays one prepared script of events per capture, spaced `step` seconds apart."""

    def __init__(
        self,
        scripts: Sequence[Sequence[ScriptEvent]],
        scheduler: SchedulerPort,
        step: float = 0.0,
        available: bool = True,
    ) -> None:
        self._scripts = deque(list(s) for s in scripts)
        self._scheduler = scheduler
        self._step = step
        self._available = available
        self._generation = 0
        self.begin_count = 0
        self.cancel_count = 0

    def is_available(self) -> bool:
        return self._available

    def begin(self, emit: RecognitionEmit) -> None:
        self.begin_count += 1
        self._generation += 1
        generation = self._generation
        script = deque(self._scripts.popleft() if self._scripts else SILENT_SCRIPT)
        self._scheduler.call_later(self._step, lambda: self._replay(generation, emit, script))

    def cancel(self) -> None:
        self.cancel_count += 1
        self._generation += 1

    def _replay(self, generation: int, emit: RecognitionEmit, script: deque) -> None:
        # Events are chained one timer at a time so they keep script order.
        if generation != self._generation or not script:
            return
        kind, payload = script.popleft()
        emit(kind, payload)
        if script:
            self._scheduler.call_later(self._step, lambda: self._replay(generation, emit, script))
