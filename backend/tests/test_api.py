"""Tests for API endpoints."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from refscout.core.dependencies import get_aggregator, get_selection_oracle, get_workflow
from refscout.schemas.search import SourceSelection, SourceTag


def _override(test_client, dependency, value):
    test_client.app.dependency_overrides[dependency] = lambda: value


class TestHealthCheck:
    """Test the health check endpoint."""

    def test_health_check_returns_200(self, test_client):
        assert test_client.get("/").status_code == 200

    def test_health_check_returns_status(self, test_client):
        data = test_client.get("/").json()

        assert data["status"] == "active"
        assert data["project"] == "RefScout"

    def test_health_check_reports_providers(self, test_client):
        data = test_client.get("/").json()

        assert set(data["providers"]) == {"bocha", "onebound"}

    def test_health_check_returns_endpoints(self, test_client):
        data = test_client.get("/").json()

        assert data["endpoints"]["retrieve"] == "/api/retrieve"


class TestSearchEndpoint:
    """Test the raw aggregated search endpoint."""

    def test_search_returns_results(self, test_client, make_candidate):
        aggregator = MagicMock()
        aggregator.settings.default_result_count = 10
        aggregator.search = AsyncMock(return_value=[make_candidate(0), make_candidate(1)])
        _override(test_client, get_aggregator, aggregator)

        response = test_client.post("/api/search", json={"query": "AI education", "count": 5})

        assert response.status_code == 200
        assert [r["url"] for r in response.json()["results"]] == [
            "https://example.com/0", "https://example.com/1"
        ]
        aggregator.search.assert_awaited_once_with("AI education", 5)

    def test_search_blank_query_is_400(self, test_client):
        aggregator = MagicMock()
        aggregator.search = AsyncMock(return_value=[])
        _override(test_client, get_aggregator, aggregator)

        response = test_client.post("/api/search", json={"query": "   "})

        assert response.status_code == 400
        aggregator.search.assert_not_called()

    def test_search_missing_query_is_422(self, test_client):
        assert test_client.post("/api/search", json={}).status_code == 422

    def test_search_error_is_500(self, test_client):
        aggregator = MagicMock()
        aggregator.settings.default_result_count = 10
        aggregator.search = AsyncMock(side_effect=RuntimeError("unexpected"))
        _override(test_client, get_aggregator, aggregator)

        response = test_client.post("/api/search", json={"query": "q"})

        assert response.status_code == 500


class TestConnectivityEndpoint:
    """Test the provider connectivity check."""

    def test_connectivity_counts_by_source(self, test_client, make_candidate):
        results = [make_candidate(i) for i in range(3)] + [
            make_candidate(i, source_tag=SourceTag.WECHAT, provider="onebound") for i in range(3, 6)
        ]
        aggregator = MagicMock()
        aggregator.search = AsyncMock(return_value=results)
        _override(test_client, get_aggregator, aggregator)

        data = test_client.get("/api/search/connectivity").json()

        assert data["status"] == "success"
        assert data["summary"] == {"total": 6, "by_source": {"web": 3, "wechat": 3}}
        assert len(data["results"]) == 4


class TestRetrieveEndpoint:
    """Test the full retrieval endpoint."""

    def test_retrieve_runs_workflow(self, test_client, make_candidate):
        oracle = AsyncMock(return_value=SourceSelection(indices=[0]))
        workflow = MagicMock()
        workflow.run = AsyncMock(return_value=[make_candidate(0)])
        _override(test_client, get_workflow, workflow)
        _override(test_client, get_selection_oracle, oracle)

        response = test_client.post("/api/retrieve", json={"queries": ["AI education", " "]})

        assert response.status_code == 200
        assert response.json()["results"][0]["url"] == "https://example.com/0"
        workflow.run.assert_awaited_once_with(["AI education"], oracle)

    def test_retrieve_requires_queries(self, test_client):
        assert test_client.post("/api/retrieve", json={"queries": []}).status_code == 422

    def test_retrieve_blank_queries_is_400(self, test_client):
        workflow = MagicMock()
        workflow.run = AsyncMock(return_value=[])
        _override(test_client, get_workflow, workflow)
        _override(test_client, get_selection_oracle, AsyncMock())

        response = test_client.post("/api/retrieve", json={"queries": ["  "]})

        assert response.status_code == 400
