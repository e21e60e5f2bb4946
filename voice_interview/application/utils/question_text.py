from __future__ import annotations

MIN_QUESTION_LENGTH = 4


def parse_question_lines(text: str | None) -> list[str]:
    """Split generated question text into one question per line, dropping fragments of 3 chars or fewer."""
    lines = (text or "").split("\n")
    return [line.strip() for line in lines if len(line.strip()) >= MIN_QUESTION_LENGTH]
