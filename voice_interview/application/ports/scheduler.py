from abc import ABC, abstractmethod
from typing import Callable


class SchedulerPort(ABC):
    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Run `callback` once after `delay` seconds. Scheduled calls are not cancellable."""
        raise NotImplementedError
