"""Resolve settings into the immutable configuration the pipeline runs with."""

from __future__ import annotations

from dataclasses import dataclass

from neta.core.errors import ConfigurationError
from neta.core.settings import Settings
from neta.services.llm_models import PREFIX_TO_PROVIDER, resolve_model

SUPPORTED_SOURCES = ("newsdata", "rss")

# Provider name -> (settings attribute, environment variable)
PROVIDER_KEYS: dict[str, tuple[str, str]] = {
    "anthropic": ("anthropic_api_key", "ANTHROPIC_API_KEY"),
    "openai": ("openai_api_key", "OPENAI_API_KEY"),
    "google": ("google_api_key", "GOOGLE_API_KEY"),
}


@dataclass(frozen=True)
class PipelineConfig:
    """Everything the source adapter and completion client need, resolved once."""

    news_source: str
    newsdata_api_key: str | None
    newsdata_country: str
    newsdata_language: str
    batch_size: int
    llm_provider: str
    llm_model: str | None
    model_spec: str
    llm_api_key: str
    http_timeout_seconds: float
    completion_timeout_seconds: float
    completion_max_tokens: int


def _require(value: str | None, env_name: str) -> str:
    if value is None or not value.strip():
        raise ConfigurationError(f"{env_name} is not configured")
    return value.strip()


def _resolve_model_spec(provider: str, model_hint: str | None) -> str:
    """Full model spec for the configured provider.

    A prefixed LLM_MODEL must name LLM_PROVIDER; the key is looked up for
    LLM_PROVIDER only, so any other prefix would send it to the wrong vendor.
    """
    hint = (model_hint or "").strip() or None
    if hint and ":" in hint:
        prefix = hint.split(":", 1)[0]
        if PREFIX_TO_PROVIDER.get(prefix, prefix) != provider:
            raise ConfigurationError(
                f"LLM_MODEL {hint!r} does not belong to LLM_PROVIDER {provider!r}"
            )
    _, model_spec = resolve_model(provider, hint)
    return model_spec


def resolve_pipeline_config(settings: Settings) -> PipelineConfig:
    """Validate credentials and build a PipelineConfig.

    Raises:
        ConfigurationError: If the source or provider is unknown, or a key the
            selected source/provider needs is missing, or LLM_MODEL names a
            different provider.
    """
    source = settings.news_source
    if source not in SUPPORTED_SOURCES:
        raise ConfigurationError(
            f"NEWS_SOURCE must be one of {', '.join(SUPPORTED_SOURCES)} (got {source!r})"
        )

    newsdata_key = None
    if source == "newsdata":
        newsdata_key = _require(settings.newsdata_api_key, "NEWSDATA_API_KEY")

    provider = settings.llm_provider
    if provider not in PROVIDER_KEYS:
        raise ConfigurationError(
            f"LLM_PROVIDER must be one of {', '.join(PROVIDER_KEYS)} (got {provider!r})"
        )
    model_spec = _resolve_model_spec(provider, settings.llm_model)
    attr, env_name = PROVIDER_KEYS[provider]
    llm_key = _require(getattr(settings, attr), env_name)

    return PipelineConfig(
        news_source=source,
        newsdata_api_key=newsdata_key,
        newsdata_country=settings.newsdata_country,
        newsdata_language=settings.newsdata_language,
        batch_size=settings.batch_size,
        llm_provider=provider,
        llm_model=settings.llm_model,
        model_spec=model_spec,
        llm_api_key=llm_key,
        http_timeout_seconds=settings.http_timeout_seconds,
        completion_timeout_seconds=settings.completion_timeout_seconds,
        completion_max_tokens=settings.completion_max_tokens,
    )
