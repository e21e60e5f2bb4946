from __future__ import annotations

import asyncio
from typing import Callable

from voice_interview.application.ports.scheduler import SchedulerPort


class AsyncioScheduler(SchedulerPort):
    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        self._loop.call_later(max(0.0, delay), callback)
