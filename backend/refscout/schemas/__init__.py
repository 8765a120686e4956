"""
Schemas Module

Contains all Pydantic models for:
- Normalized search candidates
- Selection oracle input/output
- API request/response validation
- Progress steps
"""
from .search import (
    SourceTag,
    CandidateResult,
    SelectionItem,
    SourceSelection,
    SearchRequest,
    RetrieveRequest,
    SearchResponse,
    ConnectivitySummary,
    ConnectivityReport,
)
from .events import ProgressStep

__all__ = [
    "SourceTag",
    "CandidateResult",
    "SelectionItem",
    "SourceSelection",
    "SearchRequest",
    "RetrieveRequest",
    "SearchResponse",
    "ConnectivitySummary",
    "ConnectivityReport",
    "ProgressStep",
]
