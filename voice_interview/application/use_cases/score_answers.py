from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from voice_interview.application.exceptions import InvalidInputError
from voice_interview.application.use_cases.evaluate_answer import EvaluateAnswerUseCase
from voice_interview.domain.entities.evaluation import BatchResult, BatchSummary, ScoredItem

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return not value


def validate_batch(questions: Any, answers: Any) -> None:
    """Fail fast before any evaluation work is done."""
    if not isinstance(questions, (list, tuple)) or not isinstance(answers, (list, tuple)):
        raise InvalidInputError("not-a-list", "Questions and answers must be arrays")
    if len(questions) == 0 or len(answers) == 0:
        raise InvalidInputError("empty", "Questions and answers cannot be empty")
    if len(questions) != len(answers):
        raise InvalidInputError("length-mismatch", "Number of questions and answers must match")


@dataclass
class ScoreAnswersUseCase:
    evaluator: EvaluateAnswerUseCase

    async def execute(self, questions: Any, answers: Any) -> BatchResult:
        validate_batch(questions, answers)

        results: list[ScoredItem] = []
        for index, (question, answer) in enumerate(zip(questions, answers)):
            if _is_blank(question) or _is_blank(answer):
                logger.debug("Skipping blank pair", extra={"question_index": index})
                continue

            # One completion call in flight per batch; results keep input order.
            analysis = await self.evaluator.execute(str(question), str(answer))
            results.append(ScoredItem(question=str(question), user_answer=str(answer), analysis=analysis))

        if results:
            average = sum(item.analysis.score for item in results) / len(results)
        else:
            average = math.nan

        logger.info(
            "Scored batch",
            extra={"items": len(results), "total_questions": len(questions)},
        )
        return BatchResult(
            results=results,
            summary=BatchSummary(total_questions=len(questions), average_score=average),
        )
