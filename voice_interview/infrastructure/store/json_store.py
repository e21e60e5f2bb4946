from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from voice_interview.application.ports.answer_store import AnswerStorePort
from voice_interview.infrastructure.store.memory_store import normalize_question_key


class JsonAnswerStore(AnswerStorePort):
    """Ideal answers keyed by normalized question text, kept in a single JSON file."""

    def __init__(self, path: str = "./data/ideal_answers.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _load(self) -> dict[str, Any]:
        """Load store data from JSON file, return default if missing or corrupted."""
        if not self._path.exists():
            return {"answers": {}, "version": 1}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            self._logger.warning("Answer store unreadable, starting empty", extra={"error": str(e)})
            return {"answers": {}, "version": 1}
        if not isinstance(data, dict) or not isinstance(data.get("answers"), dict):
            return {"answers": {}, "version": 1}
        return data

    def _save(self, data: dict[str, Any]) -> None:
        """Save store data to JSON file atomically."""
        temp_path = self._path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise

    def store_generated_qa(self, question: str, ideal_answer: str) -> None:
        with self._lock:
            data = self._load()
            data["answers"][normalize_question_key(question)] = {
                "question": question,
                "ideal_answer": ideal_answer,
                "stored_at": datetime.now(timezone.utc).isoformat(),
            }
            self._save(data)

    def get_stored_answer(self, question: str) -> str | None:
        with self._lock:
            entry = self._load()["answers"].get(normalize_question_key(question))
        if not isinstance(entry, dict):
            return None
        return entry.get("ideal_answer")
