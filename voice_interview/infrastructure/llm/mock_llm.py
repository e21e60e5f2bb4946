from __future__ import annotations

import re

from voice_interview.application.ports.llm import LLMPort

_QUESTION_PATTERN = re.compile(r"^Question: (.*)$", re.MULTILINE)
_ANSWER_PATTERN = re.compile(r"^Candidate's Answer: (.*)$", re.MULTILINE | re.DOTALL)


class MockLLM(LLMPort):
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        question_match = _QUESTION_PATTERN.search(user_prompt)
        answer_match = _ANSWER_PATTERN.search(user_prompt)
        question = question_match.group(1).strip() if question_match else "the question"
        answer = answer_match.group(1).strip() if answer_match else ""

        score = 7 if len(answer) > 20 else 5
        return (
            f"Score: {score}/10\n"
            f"Feedback: Mock feedback for an answer of {len(answer)} characters.\n"
            f"Ideal Answer: A complete answer to '{question}' covers the core concept and a concrete example."
        )
