"""
Pytest fixtures and configuration for backend tests.

Provides reusable fixtures for settings, candidates, HTTP mocking and the
API test client.
"""
import os
import sys
from typing import Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Must be set before refscout.core.config builds its module-level settings
os.environ.setdefault("LLM_API_KEY", "test-key-not-real")
os.environ.setdefault("OPENAI_API_KEY", "test-key-not-real")


@pytest.fixture
def test_settings():
    """Settings with fake credentials and a short search timeout."""
    from refscout.core.config import Settings

    return Settings(
        _env_file=None,
        bocha_api_key="test-bocha-key",
        onebound_api_key="test-onebound-key",
        onebound_api_secret="test-onebound-secret",
        search_timeout_seconds=0.2,
    )


@pytest.fixture
def unconfigured_settings():
    """Settings with no provider credentials at all."""
    from refscout.core.config import Settings

    return Settings(_env_file=None, bocha_api_key=None, onebound_api_key=None, onebound_api_secret=None)


@pytest.fixture
def make_candidate() -> Callable:
    """Factory for CandidateResult objects."""
    from refscout.schemas.search import CandidateResult, SourceTag

    def _make(n: int, url: Optional[str] = None, snippet: Optional[str] = None,
              source_tag: SourceTag = SourceTag.WEB, provider: str = "bocha"):
        return CandidateResult(
            id=f"{provider}-{n}",
            title=f"Result {n}",
            url=url or f"https://example.com/{n}",
            snippet=snippet if snippet is not None else f"snippet {n}",
            source_tag=source_tag,
        )

    return _make


@pytest.fixture
def sample_candidates(make_candidate) -> List:
    """Ten distinct candidates."""
    return [make_candidate(i) for i in range(10)]


@pytest.fixture
def routed_transport() -> Callable:
    """
    Build an httpx.MockTransport from a {url_prefix: handler} mapping.

    Handlers receive the request and return an httpx.Response. Requests to
    unknown URLs get a 404.
    """
    def _build(routes: Dict[str, Callable[[httpx.Request], httpx.Response]]) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            for prefix, route in routes.items():
                if url.startswith(prefix):
                    return route(request)
            return httpx.Response(404, text="not found")

        return httpx.MockTransport(handler)

    return _build


@pytest.fixture
def test_client():
    """Create a test client for API testing."""
    from refscout.main import app

    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
