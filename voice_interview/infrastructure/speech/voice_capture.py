from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass

from voice_interview.application.exceptions import CapabilityUnavailableError
from voice_interview.application.ports.speech import (
    CaptureListener,
    RecognitionBackend,
    VoiceCapturePort,
)


@dataclass
class _Capture:
    capture_id: int
    listener: CaptureListener
    final_sent: bool = False
    error_sent: bool = False
    ended: bool = False


class VoiceCaptureAdapter(VoiceCapturePort):
    """
    Turns raw backend events into the capture contract:
    interim zero or more times, final at most once, end exactly once and last.
    Events of an aborted capture are dropped.
    """

    def __init__(self, backend: RecognitionBackend) -> None:
        self._backend = backend
        self._active: _Capture | None = None
        self._ids = itertools.count(1)
        self._logger = logging.getLogger(__name__)

    @property
    def active(self) -> bool:
        return self._active is not None

    def is_available(self) -> bool:
        return self._backend.is_available()

    def start(self, listener: CaptureListener) -> None:
        if not self._backend.is_available():
            raise CapabilityUnavailableError("Speech recognition is not supported on this host.")

        self.abort()
        capture = _Capture(capture_id=next(self._ids), listener=listener)
        self._active = capture
        try:
            self._backend.begin(lambda kind, payload="": self._dispatch(capture, kind, payload))
        except Exception:
            if self._active is capture:
                self._active = None
            raise
        self._logger.debug("Capture started", extra={"capture_id": capture.capture_id})

    def abort(self) -> None:
        capture = self._active
        if capture is None:
            return
        self._active = None
        self._backend.cancel()
        self._logger.debug("Capture aborted", extra={"capture_id": capture.capture_id})

    def _dispatch(self, capture: _Capture, kind: str, payload: str) -> None:
        if capture is not self._active or capture.ended:
            return

        listener = capture.listener
        if kind == "interim":
            if not capture.final_sent:
                listener.on_interim(payload)
        elif kind == "final":
            if not capture.final_sent:
                capture.final_sent = True
                listener.on_final(payload)
        elif kind == "error":
            if not capture.error_sent:
                capture.error_sent = True
                listener.on_error(payload)
        elif kind == "end":
            capture.ended = True
            self._active = None
            listener.on_end()
        else:
            self._logger.warning("Unknown recognition event", extra={"reason": kind})
