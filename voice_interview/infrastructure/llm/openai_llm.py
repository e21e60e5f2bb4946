from __future__ import annotations

import logging

from openai import AsyncOpenAI

from voice_interview.application.exceptions import LLMContractError, LLMUpstreamError
from voice_interview.application.ports.llm import LLMPort
from voice_interview.core.config import settings


class OpenAILLM(LLMPort):
    """
    OpenAI-backed adapter implementing LLMPort.

    Contract guarantees:
    - complete returns non-empty completion text
    - Raises:
        LLMUpstreamError: networking/provider failures
        LLMContractError: empty completion
    """

    def __init__(self, client: AsyncOpenAI | None = None, model: str | None = None) -> None:
        self.client = client or AsyncOpenAI(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
        )
        self.model = model or settings.OPENAI_MODEL_EVALUATE
        self._logger = logging.getLogger(__name__)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            self._logger.error("OpenAI completion failed", extra={"provider": "openai", "error": str(e)})
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise LLMContractError("LLM returned empty response text.")

        return content
