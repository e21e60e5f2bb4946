from dataclasses import dataclass

DEFAULT_SCORE = 0.0
DEFAULT_FEEDBACK = "No feedback provided"
DEFAULT_CORRECT_ANSWER = "No ideal answer available"


@dataclass(frozen=True)
class EvaluationResult:
    score: float = DEFAULT_SCORE
    feedback: str = DEFAULT_FEEDBACK
    correct_answer: str = DEFAULT_CORRECT_ANSWER


@dataclass(frozen=True)
class ScoredItem:
    question: str
    user_answer: str
    analysis: EvaluationResult


@dataclass(frozen=True)
class BatchSummary:
    total_questions: int
    average_score: float  # NaN when no item was scored


@dataclass(frozen=True)
class BatchResult:
    results: list[ScoredItem]
    summary: BatchSummary
