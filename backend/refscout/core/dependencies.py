"""
FastAPI Dependencies

Dependency providers for configuration and the retrieval services.
Using Depends() keeps construction explicit and lets tests override it.
"""
from functools import lru_cache

from fastapi import Depends

from refscout.core.config import Settings
from refscout.services.aggregator import SearchAggregator
from refscout.services.retrieval import LLMSelectionOracle, RetrievalWorkflow


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings.

    Uses lru_cache to ensure settings are only loaded once.
    Can be overridden in tests using app.dependency_overrides.
    """
    return Settings()


def get_aggregator(settings: Settings = Depends(get_settings)) -> SearchAggregator:
    """Aggregator over the default providers."""
    return SearchAggregator(settings)


def get_workflow(
    settings: Settings = Depends(get_settings),
    aggregator: SearchAggregator = Depends(get_aggregator),
) -> RetrievalWorkflow:
    return RetrievalWorkflow(aggregator, settings)


def get_selection_oracle(settings: Settings = Depends(get_settings)) -> LLMSelectionOracle:
    """
    LLM-backed selection oracle.

    Override in tests to avoid model calls:
        app.dependency_overrides[get_selection_oracle] = lambda: fake_oracle
    """
    return LLMSelectionOracle(settings)
