from abc import ABC, abstractmethod


class LLMPort(ABC):
    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Run one chat completion and return its free-text content.

        Requirements:
        - Return the raw completion text; callers do all parsing
        - Raise LLMUpstreamError on provider failures (network, quota, model errors)
        - Raise LLMContractError if the provider returns no text

        Args:
            system_prompt: Fixed instruction for the evaluator role
            user_prompt: Per-item prompt (question + candidate answer)
            temperature: Sampling temperature
            max_tokens: Output token cap

        Returns:
            Completion text (non-empty)
        """
        raise NotImplementedError
