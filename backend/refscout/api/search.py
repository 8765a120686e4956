"""
Search API Routes

FastAPI routes for raw aggregated search and for the full retrieval workflow.
"""
from collections import Counter

from fastapi import APIRouter, Depends, HTTPException

from refscout.core.dependencies import get_aggregator, get_selection_oracle, get_workflow
from refscout.core.logging import get_logger
from refscout.schemas.search import (
    ConnectivityReport,
    ConnectivitySummary,
    RetrieveRequest,
    SearchRequest,
    SearchResponse,
)
from refscout.services.aggregator import SearchAggregator
from refscout.services.retrieval import RetrievalWorkflow, SelectionOracle

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["search"])

CONNECTIVITY_QUERY = "人工智能发展趋势"


@router.post("/search", response_model=SearchResponse)
async def search(request: SearchRequest, aggregator: SearchAggregator = Depends(get_aggregator)):
    """
    Search every provider for one query.
    Returns merged, URL-deduplicated candidates without selection or enrichment.
    """
    if not request.query.strip():
        raise HTTPException(status_code=400, detail="Query is required")

    try:
        results = await aggregator.search(request.query, request.count or aggregator.settings.default_result_count)
    except Exception as e:
        logger.error(f"Search API error: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return SearchResponse(results=results)


@router.get("/search/connectivity", response_model=ConnectivityReport)
async def connectivity(aggregator: SearchAggregator = Depends(get_aggregator)):
    """
    Run a fixed test query against all providers.
    Reports how many results each source tag contributed.
    """
    logger.info(f"Testing search with query: '{CONNECTIVITY_QUERY}'")

    try:
        results = await aggregator.search(CONNECTIVITY_QUERY)
    except Exception as e:
        logger.error(f"Connectivity test failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    counts = Counter(r.source_tag.value for r in results)
    return ConnectivityReport(
        status="success",
        query=CONNECTIVITY_QUERY,
        summary=ConnectivitySummary(total=len(results), by_source=dict(counts)),
        results=results[:4],
    )


@router.post("/retrieve", response_model=SearchResponse)
async def retrieve(
    request: RetrieveRequest,
    workflow: RetrievalWorkflow = Depends(get_workflow),
    oracle: SelectionOracle = Depends(get_selection_oracle),
):
    """
    Run the retrieval workflow for a set of queries.
    Returns the selected candidates, enriched with page text where available.
    """
    queries = [q for q in request.queries if q.strip()]
    if not queries:
        raise HTTPException(status_code=400, detail="At least one non-empty query is required")

    results = await workflow.run(queries, oracle)
    return SearchResponse(results=results)
