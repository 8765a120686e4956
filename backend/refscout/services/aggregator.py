"""
Search Aggregator

Runs every registered provider for one query in parallel, merges their
results in registration order and removes duplicate URLs. Also exposes
full-content extraction for the retrieval workflow.
"""
import asyncio
from typing import Iterable, List, Optional

import httpx

from refscout.core.config import Settings
from refscout.core.logging import get_logger
from refscout.schemas.search import CandidateResult
from refscout.services.fulltext import FullTextService
from refscout.services.providers import BaseProvider, build_default_providers

logger = get_logger(__name__)


def deduplicate_by_url(results: Iterable[CandidateResult]) -> List[CandidateResult]:
    """
    Remove candidates whose URL was already seen.

    Comparison is exact string equality; the first occurrence wins and
    relative order is preserved.
    """
    seen_urls = set()
    unique_results = []

    for result in results:
        if result.url in seen_urls:
            continue
        seen_urls.add(result.url)
        unique_results.append(result)

    return unique_results


class SearchAggregator:
    """Fan-out search across providers plus full-content extraction."""

    def __init__(
        self,
        settings: Settings,
        providers: Optional[List[BaseProvider]] = None,
        fulltext: Optional[FullTextService] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.providers = providers if providers is not None else build_default_providers(settings, transport)
        self.fulltext = fulltext or FullTextService(settings, transport=transport)

    @property
    def provider_names(self) -> List[str]:
        return [p.name for p in self.providers]

    async def search(self, query: str, count: Optional[int] = None) -> List[CandidateResult]:
        """
        Search all providers in parallel and merge the results.

        Waits for every provider. A provider that raises despite its
        soft-fail contract contributes nothing.
        """
        if not self.providers:
            logger.warning("No search providers registered!")
            return []

        results = await asyncio.gather(
            *(self._search_provider(provider, query, count) for provider in self.providers)
        )

        all_results: List[CandidateResult] = []
        for result in results:
            all_results.extend(result)

        unique_results = deduplicate_by_url(all_results)
        logger.info(f"Aggregated '{query[:50]}': {len(all_results)} results, {len(unique_results)} unique")
        return unique_results

    async def _search_provider(
        self,
        provider: BaseProvider,
        query: str,
        count: Optional[int]
    ) -> List[CandidateResult]:
        try:
            return list(await provider.search(query, count))
        except Exception as e:
            logger.error(f"{provider.name} raised during search: {e!r}")
            return []

    async def fetch_full_content(self, url: str) -> str:
        """Full page text for `url`, or an empty string."""
        return await self.fulltext.fetch_full_content(url)
