"""
Reference Retrieval Workflow

This package gathers source material for a set of queries by:
1. Searching every provider for every query in parallel, with a per-query timeout
2. Deduplicating results by URL
3. Asking a selection oracle which candidates are worth reading
4. Replacing the selected snippets with full page text

Package Structure:
- workflow.py: RetrievalWorkflow orchestration and sync wrapper
- selection.py: Selection batch, index validation and the LLM oracle
- types.py: Callback and oracle types
"""

from .workflow import RetrievalWorkflow, retrieve_sync
from .selection import (
    LLMSelectionOracle,
    build_selection_batch,
    parse_selection,
    valid_indices,
)
from .types import ProgressCallback, SelectionOracle, _noop_callback

__all__ = [
    "RetrievalWorkflow",
    "retrieve_sync",
    "LLMSelectionOracle",
    "build_selection_batch",
    "parse_selection",
    "valid_indices",
    "ProgressCallback",
    "SelectionOracle",
]
