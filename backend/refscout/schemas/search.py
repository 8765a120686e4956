"""
Search Schemas

Pydantic models shared by the provider adapters, the aggregator and the
retrieval workflow.
"""
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt


class SourceTag(str, Enum):
    """Category of the backend a candidate came from."""
    WEB = "web"
    WECHAT = "wechat"


class CandidateResult(BaseModel):
    """
    One normalized search hit.

    `id` is tagged with the provider name and its position in that provider's
    response, so it is only unique within a single response.
    """
    id: str
    title: str = ""
    url: str
    snippet: str = ""
    source_tag: SourceTag
    published_at: Optional[str] = None


class SelectionItem(BaseModel):
    """Reduced view of a candidate handed to the selection oracle."""
    index: int = Field(description="Position of the candidate in the deduplicated list")
    title: str
    snippet: str
    source_tag: SourceTag


class SourceSelection(BaseModel):
    """Structured output for source selection"""
    indices: List[Union[StrictInt, StrictFloat]] = Field(
        default_factory=list,
        description="0-based indices of the search results worth reading in full"
    )


# === HTTP request/response models ===

class SearchRequest(BaseModel):
    query: str
    count: Optional[int] = Field(default=None, gt=0, le=50)


class RetrieveRequest(BaseModel):
    queries: List[str] = Field(min_length=1, max_length=10)


class SearchResponse(BaseModel):
    results: List[CandidateResult]


class ConnectivitySummary(BaseModel):
    total: int
    by_source: Dict[str, int]


class ConnectivityReport(BaseModel):
    status: str
    query: str
    summary: ConnectivitySummary
    results: List[CandidateResult]
