"""
Retrieval workflow.

Orchestrates one retrieval call:
1. Timeout-bounded aggregated search per query, all queries in parallel
2. Global URL deduplication
3. One selection oracle call over the first candidates
4. Concurrent full-content enrichment of the selected candidates
5. Ordered result assembly with fallbacks

Every failure is recovered inside the call. The worst outcome for the caller
is an empty or unenriched list.
"""
import asyncio
import inspect
import time
from typing import List, Optional

import httpx

from refscout.core.config import Settings
from refscout.core.exceptions import SearchTimeoutError
from refscout.core.logging import get_logger
from refscout.schemas.events import ProgressStep
from refscout.schemas.search import CandidateResult, SourceSelection
from refscout.services.aggregator import SearchAggregator, deduplicate_by_url

from .selection import build_selection_batch, parse_selection, valid_indices
from .types import ProgressCallback, SelectionOracle, _noop_callback

logger = get_logger(__name__)


class RetrievalWorkflow:
    """
    Search, select and enrich reference candidates for a set of queries.

    Holds no per-call state; one instance can serve concurrent calls.
    """

    def __init__(self, aggregator: SearchAggregator, settings: Settings):
        self.aggregator = aggregator
        self.settings = settings

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "RetrievalWorkflow":
        """Build a workflow with the default providers."""
        return cls(SearchAggregator(settings, transport=transport), settings)

    async def run(
        self,
        queries: List[str],
        oracle: SelectionOracle,
        on_progress: ProgressCallback = _noop_callback
    ) -> List[CandidateResult]:
        """
        Full retrieval pipeline.

        Args:
            queries: Free-text search queries
            oracle: Callable returning {"indices": [...]} for a selection batch
            on_progress: Callback function for progress updates

        Returns:
            Selected candidates in oracle order, with snippets replaced by page
            text where extraction produced enough of it. Falls back to the
            first candidates when selection is empty or fails.
        """
        logger.info(f"RETRIEVAL: {len(queries)} queries")
        start_time = time.time()

        self._notify(on_progress, ProgressStep.SEARCHING, "Searching all providers...", f"{len(queries)} queries")
        candidates = await self._search_all(queries)

        elapsed = time.time() - start_time
        logger.info(f"---TOTAL CANDIDATES: {len(candidates)} (fetched in {elapsed:.1f}s)---")
        self._notify(on_progress, ProgressStep.AGGREGATED, "Merged search results", f"{len(candidates)} unique results")

        if not candidates:
            self._notify(on_progress, ProgressStep.DONE, "No results found", None)
            return []

        self._notify(on_progress, ProgressStep.SELECTING, "Selecting sources...", None)
        selection = await self._select(candidates, oracle)

        if selection is None:
            fallback = candidates[:self.settings.selection_failure_fallback]
            self._notify(on_progress, ProgressStep.DONE, "Selection failed, using top results", f"{len(fallback)} results")
            return fallback

        indices = valid_indices(selection.indices, len(candidates))
        logger.info(f"Selected indices: {indices} (oracle returned {selection.indices})")

        if indices:
            self._notify(on_progress, ProgressStep.ENRICHING, "Fetching full content...", f"{len(indices)} sources")
            await self._enrich(candidates, indices)

        results = [candidates[i] for i in indices]
        if not results:
            results = candidates[:self.settings.empty_selection_fallback]
            logger.info(f"Empty selection, falling back to top {len(results)}")

        self._notify(on_progress, ProgressStep.DONE, "Retrieval complete", f"{len(results)} results")
        return results

    @staticmethod
    def _notify(
        on_progress: ProgressCallback,
        step: ProgressStep,
        message: str,
        detail: Optional[str]
    ) -> None:
        """Report progress; a failing callback is logged and ignored."""
        try:
            on_progress(step, message, detail)
        except Exception as e:
            logger.warning(f"Progress callback failed at '{step.value}': {e}")

    async def _search_all(self, queries: List[str]) -> List[CandidateResult]:
        per_query = await asyncio.gather(*(self._search_with_timeout(q) for q in queries))
        flat = [result for results in per_query for result in results]
        return deduplicate_by_url(flat)

    async def _search_with_timeout(self, query: str) -> List[CandidateResult]:
        """
        Aggregated search for one query, bounded by search_timeout_seconds.

        On timeout the in-flight search is cancelled and the query contributes
        nothing.
        """
        timeout = self.settings.search_timeout_seconds
        try:
            return list(await asyncio.wait_for(self.aggregator.search(query), timeout=timeout))
        except asyncio.TimeoutError:
            logger.warning(str(SearchTimeoutError(query, timeout)))
            return []
        except Exception as e:
            logger.error(f"Search for '{query[:50]}' failed: {e}")
            return []

    async def _select(
        self,
        candidates: List[CandidateResult],
        oracle: SelectionOracle
    ) -> Optional[SourceSelection]:
        """Invoke the oracle once. Returns None on any failure."""
        batch = build_selection_batch(candidates, self.settings.selection_batch_size)
        logger.info(f"Found {len(candidates)} results. Selecting from top {len(batch)}...")

        try:
            raw = oracle(batch)
            if inspect.isawaitable(raw):
                raw = await raw
            return parse_selection(raw)
        except Exception as e:
            logger.error(f"Source selection failed: {e}")
            return None

    async def _enrich(self, candidates: List[CandidateResult], indices: List[int]) -> None:
        """Fetch content for every index concurrently, then write back in place."""
        enriched = await asyncio.gather(
            *(self._enrich_one(index, candidates[index]) for index in indices)
        )

        replaced = 0
        for index, candidate in zip(indices, enriched):
            if candidate is not candidates[index]:
                replaced += 1
            candidates[index] = candidate

        logger.info(f"FULL CONTENT ENRICHMENT: {replaced}/{len(indices)} candidates")

    async def _enrich_one(self, index: int, candidate: CandidateResult) -> CandidateResult:
        if not candidate.url:
            return candidate

        try:
            logger.debug(f"Fetching full content for [{index}] {candidate.url}...")
            content = await self.aggregator.fetch_full_content(candidate.url)
        except Exception as e:
            logger.warning(f"Error fetching {candidate.url}: {e}")
            return candidate

        length = len(content) if isinstance(content, str) else 0
        logger.debug(f"Fetched content length for [{index}]: {length}")

        if length > self.settings.enrichment_min_chars:
            return candidate.model_copy(update={"snippet": content})
        return candidate


def retrieve_sync(
    workflow: RetrievalWorkflow,
    queries: List[str],
    oracle: SelectionOracle,
    on_progress: ProgressCallback = _noop_callback
) -> List[CandidateResult]:
    """
    Sync wrapper around RetrievalWorkflow.run.

    Uses asyncio.run(), so it must be called from a thread without a
    running event loop.
    """
    return asyncio.run(workflow.run(queries, oracle, on_progress))
