"""Single-shot LLM completion via pydantic-ai."""

from __future__ import annotations

import asyncio
from typing import Any

from pydantic_ai import Agent
from pydantic_ai.settings import ModelSettings

from neta.core.config import PipelineConfig
from neta.core.errors import ProviderError
from neta.core.logging import get_logger
from neta.services.llm_models import build_pydantic_model
from neta.services.llm_prompts import GUIDE_SYSTEM_PROMPT

logger = get_logger(__name__)


def build_text_agent(
    model_spec: str,
    api_key: str,
    *,
    system_prompt: str = GUIDE_SYSTEM_PROMPT,
    max_tokens: int = 4096,
) -> Agent[None, str]:
    """Build a plain-text agent; parsing the JSON is left to the caller."""
    model = build_pydantic_model(model_spec, api_key)
    return Agent(
        model,
        output_type=str,
        system_prompt=system_prompt,
        model_settings=ModelSettings(max_tokens=max_tokens),
    )


class CompletionClient:
    """Submits one prompt and returns the raw text. Exactly one attempt per call.

    The instance is shared across concurrent item pipelines and keeps no
    per-call state.
    """

    def __init__(self, agent: Any, *, model_spec: str, timeout: float = 60.0):
        self._agent = agent
        self.model_spec = model_spec
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: PipelineConfig) -> CompletionClient:
        agent = build_text_agent(
            config.model_spec, config.llm_api_key, max_tokens=config.completion_max_tokens
        )
        logger.info(f"Initialized completion client for {config.model_spec}")
        return cls(agent, model_spec=config.model_spec, timeout=config.completion_timeout_seconds)

    async def complete(self, prompt: str) -> str:
        """Return the model's text for ``prompt``.

        Raises:
            ProviderError: On transport/provider failure, timeout, or empty text.
        """
        try:
            result = await asyncio.wait_for(self._agent.run(prompt), timeout=self.timeout)
        except TimeoutError as e:
            raise ProviderError(f"{self.model_spec} timed out after {self.timeout:g}s") from e
        except Exception as e:  # noqa: BLE001
            raise ProviderError(f"{self.model_spec} request failed: {e}") from e

        text = getattr(result, "output", None)
        if not isinstance(text, str) or not text.strip():
            raise ProviderError(f"{self.model_spec} returned an empty response")
        return text
