from __future__ import annotations

import asyncio
import logging
from typing import Callable

from voice_interview.application.ports.speech import RecognitionBackend, RecognitionEmit


class ConsoleRecognitionBackend(RecognitionBackend):
    """Local harness backend: the candidate types the answer instead of speaking it."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        prompt: str = "your answer> ",
        input_func: Callable[[str], str] = input,
    ) -> None:
        self._loop = loop
        self._prompt = prompt
        self._input = input_func
        self._generation = 0
        self._logger = logging.getLogger(__name__)

    def is_available(self) -> bool:
        return True

    def begin(self, emit: RecognitionEmit) -> None:
        self._generation += 1
        generation = self._generation
        future = self._loop.run_in_executor(None, self._input, self._prompt)
        future.add_done_callback(lambda f: self._deliver(generation, emit, f))

    def cancel(self) -> None:
        # input() cannot be interrupted; the pending line is discarded when it arrives.
        self._generation += 1

    def _deliver(self, generation: int, emit: RecognitionEmit, future: asyncio.Future) -> None:
        if generation != self._generation or future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._logger.info("Console input closed", extra={"error": str(error)})
            emit("error", "aborted")
            emit("end", "")
            return
        text = (future.result() or "").strip()
        if text:
            emit("final", text)
        emit("end", "")
