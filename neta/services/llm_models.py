"""Shared pydantic-ai model construction helpers."""

from __future__ import annotations

from enum import Enum

from pydantic_ai.models import Model
from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.anthropic import AnthropicProvider
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.openai import OpenAIProvider

from neta.core.errors import ConfigurationError


class LLMProvider(str, Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"


PROVIDER_PREFIXES: dict[str, str] = {
    LLMProvider.OPENAI.value: "openai",
    LLMProvider.ANTHROPIC.value: "anthropic",
    LLMProvider.GOOGLE.value: "google-gla",
}

PROVIDER_DEFAULTS: dict[str, str] = {
    LLMProvider.OPENAI.value: "openai:gpt-5-mini",
    LLMProvider.ANTHROPIC.value: "anthropic:claude-sonnet-4-20250514",
    LLMProvider.GOOGLE.value: "google-gla:gemini-2.5-flash",
}

DEFAULT_PROVIDER = LLMProvider.ANTHROPIC.value
PREFIX_TO_PROVIDER: dict[str, str] = {
    prefix: provider for provider, prefix in PROVIDER_PREFIXES.items()
}


def resolve_model(
    provider: LLMProvider | str | None,
    model_hint: str | None,
) -> tuple[str, str]:
    """Resolve provider + model hint into canonical provider and full model spec.

    Args:
        provider: Optional provider enum/string (openai|anthropic|google). Defaults to anthropic.
        model_hint: Optional specific model name or already-prefixed model spec.

    Returns:
        Tuple of (canonical_provider_name, model_spec).
    """
    if provider is None:
        provider_name = DEFAULT_PROVIDER
    else:
        raw = provider.value if isinstance(provider, Enum) else str(provider)
        provider_name = PREFIX_TO_PROVIDER.get(raw, raw)

    if model_hint and ":" in model_hint:
        provider_prefix = model_hint.split(":", 1)[0]
        hinted_provider = PREFIX_TO_PROVIDER.get(provider_prefix, provider_prefix)
        canonical_provider = (
            hinted_provider if hinted_provider in PROVIDER_DEFAULTS else provider_name
        )
        return canonical_provider, model_hint

    model_prefix = PROVIDER_PREFIXES.get(provider_name, provider_name)
    if model_hint:
        return provider_name, f"{model_prefix}:{model_hint}"

    return provider_name, PROVIDER_DEFAULTS.get(provider_name, PROVIDER_DEFAULTS[DEFAULT_PROVIDER])


def build_pydantic_model(model_spec: str, api_key: str) -> Model:
    """Construct a pydantic-ai Model with an explicit provider.

    Args:
        model_spec: Full model spec string (e.g., ``anthropic:claude-sonnet-4-20250514``).
        api_key: Credential for the provider named by the spec prefix.

    Raises:
        ConfigurationError: If the key is empty or the prefix is unknown.
    """
    if not api_key:
        raise ConfigurationError(f"No API key configured for model {model_spec}")

    provider_prefix, _, model_name = model_spec.partition(":")
    if not model_name:
        raise ConfigurationError(f"Model spec must be '<provider>:<model>' (got {model_spec!r})")

    if provider_prefix == "anthropic":
        return AnthropicModel(model_name, provider=AnthropicProvider(api_key=api_key))

    if provider_prefix == "openai":
        return OpenAIChatModel(model_name, provider=OpenAIProvider(api_key=api_key))

    if provider_prefix in {"google-gla", "google"}:
        return GoogleModel(model_name, provider=GoogleProvider(api_key=api_key))

    raise ConfigurationError(f"Unsupported model provider prefix: {provider_prefix!r}")
