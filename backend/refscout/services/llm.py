"""
LLM Client Management

Provides cached chat model instances for the OpenAI-compatible endpoint
used by source selection. Uses lru_cache so the same client is reused for
identical configurations.
"""
from functools import lru_cache
from typing import Optional

from langchain_openai import ChatOpenAI

from refscout.core.config import Settings, settings as default_settings


@lru_cache(maxsize=4)
def get_llm(
    model: str,
    base_url: str,
    api_key: Optional[str] = None,
    temperature: float = 0.0
) -> ChatOpenAI:
    """
    Get a cached LLM instance.

    Args:
        model: Model name on the endpoint (e.g., "deepseek-ai/DeepSeek-V3")
        base_url: OpenAI-compatible API base URL
        api_key: Endpoint API key
        temperature: Temperature for generation (0 = deterministic)

    Returns:
        Cached ChatOpenAI instance
    """
    return ChatOpenAI(
        model=model,
        base_url=base_url,
        api_key=api_key,
        temperature=temperature,
    )


def get_llm_for(config: Optional[Settings] = None) -> ChatOpenAI:
    """Get the cached LLM described by a Settings object."""
    config = config or default_settings
    return get_llm(config.llm_model, config.llm_base_url, config.LLM_API_KEY)


def get_structured_llm(output_schema, config: Optional[Settings] = None):
    """
    Get an LLM configured for structured output.

    with_structured_output returns a new object each time; the underlying
    HTTP client is still shared.
    """
    return get_llm_for(config).with_structured_output(output_schema)


def clear_llm_cache():
    """Clear the LLM client cache."""
    get_llm.cache_clear()
