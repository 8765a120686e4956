"""
Source selection.

Builds the capped batch shown to a selection oracle, validates what the
oracle returns, and provides the LLM-backed oracle used by the API.
"""
import json
from typing import Any, List, Optional, Sequence

from pydantic import ValidationError

from refscout.core.config import Settings
from refscout.core.exceptions import SelectionError
from refscout.core.logging import get_logger
from refscout.schemas.search import CandidateResult, SelectionItem, SourceSelection
from refscout.services.llm import get_structured_llm

logger = get_logger(__name__)


SELECT_SOURCES_PROMPT = """You are a meticulous researcher.
Your task is to analyze the search results provided below and select the most high-quality, relevant, and authoritative sources to read in full depth.

CRITERIA FOR SELECTION:
1. RELEVANCE: The source must be directly related to the user's topic and queries.
2. QUALITY: Prefer deep analysis, technical documentation, case studies, or reputable news/blogs over SEO farms or short marketing blurbs.
3. DIVERSITY: Select a mix of theoretical, practical, and data-driven sources if possible.

CRITICAL EXCLUSION CRITERIA (Discard these immediately):
- Empty or Content-Poor Pages: pages that are primarily lists of links, navigation menus, or search interfaces without a substantial main article body.
- List/Index Pages: reference tools, directories, or category listings, even on reputable sites.
- Homepages/Portals: root URLs or generic landing pages.
- Functional Pages: login, register, paywall, shopping cart, "About Us", "Contact".
- Irrelevant Snippets: results whose snippet shows only navigation text or unrelated keywords.

Return a JSON object with an "indices" field containing the array of 0-based indices of the selected results.

Search Results:
{results}"""


def build_selection_batch(candidates: Sequence[CandidateResult], limit: int) -> List[SelectionItem]:
    """Reduce the first `limit` candidates to the fields the oracle sees."""
    return [
        SelectionItem(
            index=i,
            title=c.title,
            snippet=c.snippet,
            source_tag=c.source_tag,
        )
        for i, c in enumerate(candidates[:limit])
    ]


def parse_selection(raw: Any) -> SourceSelection:
    """
    Coerce an oracle answer into a SourceSelection.

    Raises:
        SelectionError: If the answer has no usable indices list
    """
    if isinstance(raw, SourceSelection):
        return raw
    if raw is None:
        raise SelectionError("Selection oracle returned nothing")
    if isinstance(raw, dict) and "indices" not in raw:
        raise SelectionError(f"Selection has no 'indices' field: {list(raw)[:5]}")
    try:
        return SourceSelection.model_validate(raw)
    except ValidationError as e:
        raise SelectionError(f"Unusable selection: {e.error_count()} validation errors")


def valid_indices(indices: Sequence[Any], size: int) -> List[int]:
    """
    Keep indices that address an existing candidate.

    Only whole numbers within [0, size) survive; an integral float such as
    2.0 counts as 2. Repeats keep their first position.
    """
    seen = set()
    kept = []
    for index in indices:
        if isinstance(index, bool) or not isinstance(index, (int, float)):
            continue
        if isinstance(index, float):
            if not index.is_integer():
                continue
            index = int(index)
        if index < 0 or index >= size or index in seen:
            continue
        seen.add(index)
        kept.append(index)
    return kept


class LLMSelectionOracle:
    """
    Selection oracle backed by an OpenAI-compatible chat model.

    Errors from the model call propagate; the workflow treats them as a
    selection failure.
    """

    def __init__(self, config: Optional[Settings] = None, llm=None):
        self.config = config
        self._llm = llm

    @property
    def llm(self):
        if self._llm is None:
            self._llm = get_structured_llm(SourceSelection, self.config)
        return self._llm

    def build_prompt(self, batch: List[SelectionItem]) -> str:
        results = json.dumps(
            [item.model_dump(mode="json") for item in batch],
            ensure_ascii=False,
        )
        return SELECT_SOURCES_PROMPT.replace("{results}", results)

    async def __call__(self, batch: List[SelectionItem]) -> SourceSelection:
        prompt = self.build_prompt(batch)
        logger.debug(f"Selecting sources from {len(batch)} candidates")
        return await self.llm.ainvoke(prompt)
