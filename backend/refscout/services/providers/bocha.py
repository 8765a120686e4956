"""
Bocha web search provider.

General web search with page summaries.
- Requires BOCHA_API_KEY (bearer token)
- Results are tagged as "web"

Uses httpx.AsyncClient for non-blocking HTTP requests.
"""
from typing import Any

from refscout.core.exceptions import ProviderConfigError, ProviderHTTPError
from refscout.schemas.search import SourceTag
from .base import BaseProvider, ParseResult, find_result_list, first_field


BOCHA_API_URL = "https://api.bochaai.com/v1/web-search"

RESULT_PATHS = (
    ("data", "webPages", "value"),
    ("results",),
)
TITLE_FIELDS = ("name", "title")
URL_FIELDS = ("url", "link")
SNIPPET_FIELDS = ("snippet", "summary", "body")
DATE_FIELDS = ("datePublished", "date_published")


class BochaProvider(BaseProvider):
    """Search via the Bocha web search API."""

    @property
    def name(self) -> str:
        return "bocha"

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.WEB

    def _check_credentials(self) -> None:
        if not self.settings.BOCHA_API_KEY:
            raise ProviderConfigError(self.name, "BOCHA_API_KEY")

    async def _fetch(self, query: str, count: int) -> Any:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.BOCHA_API_KEY}",
        }
        payload = {
            "query": query,
            "freshness": "noLimit",
            "summary": True,
            "count": count,
        }

        async with self._client() as client:
            response = await client.post(BOCHA_API_URL, json=payload, headers=headers)

            if response.status_code != 200:
                raise ProviderHTTPError(self.name, response.status_code, response.text[:200])

            return self._decode_json(response)

    def normalize(self, data: Any) -> ParseResult:
        if not isinstance(data, dict):
            return ParseResult.failure(f"expected JSON object, got {type(data).__name__}")

        items = find_result_list(data, RESULT_PATHS)
        if items is None:
            return ParseResult.failure("no result list at data.webPages.value or results")

        candidates = []
        for position, item in enumerate(items):
            if not isinstance(item, dict):
                continue
            url = first_field(item, URL_FIELDS)
            if not url:
                continue
            candidates.append(self._make_candidate(
                position,
                title=first_field(item, TITLE_FIELDS),
                url=url,
                snippet=first_field(item, SNIPPET_FIELDS),
                published_at=first_field(item, DATE_FIELDS, allow_numbers=True),
            ))

        return ParseResult.success(candidates)
