from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from voice_interview.application.ports.answer_store import AnswerStorePort
from voice_interview.application.ports.llm import LLMPort
from voice_interview.application.utils.response_parser import parse_evaluation
from voice_interview.domain.entities.evaluation import EvaluationResult

SYSTEM_PROMPT = (
    "You are an expert technical interviewer. "
    "Generate an ideal answer and evaluate the candidate's response."
)
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 500


def build_user_prompt(question: str, answer: str) -> str:
    return f"Question: {question}\nCandidate's Answer: {answer}"


@dataclass
class EvaluateAnswerUseCase:
    llm: LLMPort
    store: AnswerStorePort
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    _logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__), repr=False)

    async def execute(self, question: str, answer: str) -> EvaluationResult:
        """
        Evaluate one question/answer pair.

        LLM failures propagate to the caller. The ideal answer is written to the
        answer store on a best-effort basis: store failures are logged, never raised.
        """
        text = await self.llm.complete(
            system_prompt=SYSTEM_PROMPT,
            user_prompt=build_user_prompt(question, answer),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        analysis = parse_evaluation(text)

        try:
            await asyncio.to_thread(self.store.store_generated_qa, question, analysis.correct_answer)
        except Exception as e:
            self._logger.warning("Failed to store ideal answer", extra={"error": str(e)})

        return analysis
