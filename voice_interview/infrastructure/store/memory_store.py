from __future__ import annotations

from voice_interview.application.ports.answer_store import AnswerStorePort


def normalize_question_key(question: str) -> str:
    return " ".join((question or "").split()).lower()


class MemoryAnswerStore(AnswerStorePort):
    def __init__(self) -> None:
        self._answers: dict[str, tuple[str, str]] = {}

    def store_generated_qa(self, question: str, ideal_answer: str) -> None:
        self._answers[normalize_question_key(question)] = (question, ideal_answer)

    def get_stored_answer(self, question: str) -> str | None:
        entry = self._answers.get(normalize_question_key(question))
        return entry[1] if entry else None

    def all_pairs(self) -> list[tuple[str, str]]:
        return list(self._answers.values())
