from __future__ import annotations

import re

from voice_interview.domain.entities.evaluation import (
    DEFAULT_CORRECT_ANSWER,
    DEFAULT_FEEDBACK,
    DEFAULT_SCORE,
    EvaluationResult,
)

# Best-effort extraction from free-form evaluator prose, not a strict grammar.
# First match wins for every field; fields are searched independently.
SCORE_PATTERN = re.compile(r"\b(?:score:?\s*)?(\d+(?:\.\d+)?)\s*(?:/\s*10)?\b", re.IGNORECASE)
FEEDBACK_PATTERN = re.compile(r"feedback:?(.*?)(?:\n|$)", re.IGNORECASE)
IDEAL_ANSWER_PATTERN = re.compile(r"ideal answer:?(.*?)(?:\n|$)", re.IGNORECASE)


def extract_score(text: str) -> float:
    """First numeral in the text (optionally labelled "score" / suffixed "/10"), else 0."""
    match = SCORE_PATTERN.search(text)
    return float(match.group(1)) if match else DEFAULT_SCORE


def extract_feedback(text: str) -> str:
    match = FEEDBACK_PATTERN.search(text)
    return match.group(1).strip() if match else ""


def extract_ideal_answer(text: str) -> str:
    match = IDEAL_ANSWER_PATTERN.search(text)
    return match.group(1).strip() if match else ""


def parse_evaluation(text: str | None) -> EvaluationResult:
    """Parse evaluator text into an EvaluationResult. Never raises; misses fall back to defaults."""
    raw = text or ""
    return EvaluationResult(
        score=extract_score(raw) or DEFAULT_SCORE,
        feedback=extract_feedback(raw) or DEFAULT_FEEDBACK,
        correct_answer=extract_ideal_answer(raw) or DEFAULT_CORRECT_ANSWER,
    )
