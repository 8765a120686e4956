"""
Base types and interfaces for search providers.

Every provider turns one backend's response into CandidateResult objects.
Providers never raise out of `search`: missing credentials, HTTP errors and
unexpected response shapes are logged and produce an empty list.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from refscout.core.config import Settings
from refscout.core.exceptions import ProviderConfigError, ProviderError, ProviderParseError
from refscout.core.logging import get_logger
from refscout.schemas.search import CandidateResult, SourceTag

logger = get_logger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of normalizing one provider response."""
    candidates: List[CandidateResult] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, candidates: List[CandidateResult]) -> "ParseResult":
        return cls(candidates=candidates)

    @classmethod
    def failure(cls, error: str) -> "ParseResult":
        return cls(error=error)


def first_field(item: Dict[str, Any], keys: Sequence[str], allow_numbers: bool = False) -> str:
    """
    Return the first non-empty string value among `keys`, in priority order.

    Values of any other type are skipped so the next key is tried. With
    `allow_numbers`, int and float values (numeric timestamps) are accepted
    and stringified.
    """
    for key in keys:
        value = item.get(key)
        if isinstance(value, str):
            value = value.strip()
            if value:
                return value
        elif allow_numbers and isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
    return ""


def find_result_list(data: Dict[str, Any], paths: Sequence[Tuple[str, ...]]) -> Optional[List[Any]]:
    """
    Walk each nesting path in order and return the first one that ends in a list.

    Returns None when no documented path matches.
    """
    for path in paths:
        node: Any = data
        for key in path:
            if not isinstance(node, dict):
                node = None
                break
            node = node.get(key)
        if isinstance(node, list):
            return node
    return None


class BaseProvider(ABC):
    """
    Abstract base class for all search providers.

    Subclasses implement the credential check, the HTTP call and a strict
    `normalize` routine. The public `search` method wraps them with the
    shared soft-fail policy.

    To add a new provider:
    1. Create a class that inherits from BaseProvider
    2. Implement name, source_tag, _check_credentials, _fetch and normalize
    3. Register it in build_default_providers()
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    @property
    @abstractmethod
    def name(self) -> str:
        """Short provider identifier, also used as the candidate id prefix."""
        pass

    @property
    @abstractmethod
    def source_tag(self) -> SourceTag:
        """Tag stamped on every candidate from this provider."""
        pass

    @abstractmethod
    def _check_credentials(self) -> None:
        """Raise ProviderConfigError when required credentials are absent."""
        pass

    @abstractmethod
    async def _fetch(self, query: str, count: int) -> Any:
        """Perform the HTTP call and return the decoded JSON body."""
        pass

    @abstractmethod
    def normalize(self, data: Any) -> ParseResult:
        """Convert a decoded response body to candidates. Must not raise."""
        pass

    @property
    def is_configured(self) -> bool:
        try:
            self._check_credentials()
        except ProviderConfigError:
            return False
        return True

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.provider_timeout_seconds,
            transport=self._transport,
        )

    def _decode_json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ProviderParseError(self.name, f"invalid JSON ({e})")

    def _make_candidate(self, position: int, title: str, url: str, snippet: str,
                        published_at: str) -> CandidateResult:
        return CandidateResult(
            id=f"{self.name}-{position}",
            title=title,
            url=url,
            snippet=snippet,
            source_tag=self.source_tag,
            published_at=published_at or None,
        )

    async def search(self, query: str, count: Optional[int] = None) -> List[CandidateResult]:
        """
        Search this provider for results matching the query.

        Args:
            query: Search query string
            count: Number of results to request (provider default when None)

        Returns:
            List of candidates with non-empty URLs; empty on any failure
        """
        count = count or self.settings.default_result_count
        logger.info(f"---SEARCHING {self.name.upper()}: {query[:50]}...---")

        try:
            self._check_credentials()
            data = await self._fetch(query, count)
            parsed = self.normalize(data)
            if not parsed.ok:
                raise ProviderParseError(self.name, parsed.error)
        except ProviderConfigError as e:
            logger.warning(str(e))
            return []
        except httpx.TimeoutException:
            logger.error(f"{self.name} search timeout")
            return []
        except ProviderError as e:
            logger.error(str(e))
            return []
        except Exception as e:
            logger.error(f"{self.name} search failed: {e}")
            return []

        logger.info(f"  {self.name}: {len(parsed.candidates)} results")
        return parsed.candidates
