"""
OneBound WeChat article search provider.

Searches public WeChat articles through the OneBound API gateway.
- Requires ONEBOUND_API_KEY, ONEBOUND_API_SECRET is optional
- Body-level error codes other than "0000" are failures
- Results are tagged as "wechat"
"""
from typing import Any

from refscout.core.exceptions import ProviderAPIError, ProviderConfigError, ProviderHTTPError
from refscout.schemas.search import SourceTag
from .base import BaseProvider, ParseResult, find_result_list, first_field


ONEBOUND_API_URL = "https://api-gw.onebound.cn/weixin/item_search"
SUCCESS_CODE = "0000"

# { items: { item: [...] } }, { item: [...] } or { items: [...] }
RESULT_PATHS = (
    ("items", "item"),
    ("item",),
    ("items",),
)
TITLE_FIELDS = ("title",)
URL_FIELDS = ("z_url", "url", "detail_url")
# Title doubles as the snippet when the article has no description
SNIPPET_FIELDS = ("desc", "description", "title")
DATE_FIELDS = ("publish_time", "publish_date")


class OneBoundProvider(BaseProvider):
    """Search WeChat articles via OneBound."""

    def __init__(self, settings, transport=None, page: int = 1):
        super().__init__(settings, transport)
        self.page = page

    @property
    def name(self) -> str:
        return "onebound"

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.WECHAT

    def _check_credentials(self) -> None:
        if not self.settings.ONEBOUND_API_KEY:
            raise ProviderConfigError(self.name, "ONEBOUND_API_KEY")

    async def _fetch(self, query: str, count: int) -> Any:
        # The gateway pages by `page` only; count is not forwarded
        params = {"key": self.settings.ONEBOUND_API_KEY}
        if self.settings.ONEBOUND_API_SECRET:
            params["secret"] = self.settings.ONEBOUND_API_SECRET
        params["q"] = query
        params["page"] = str(self.page)

        async with self._client() as client:
            response = await client.get(ONEBOUND_API_URL, params=params)

            if response.status_code != 200:
                raise ProviderHTTPError(self.name, response.status_code)

            data = self._decode_json(response)

        if isinstance(data, dict):
            error_code = data.get("error_code")
            if error_code and str(error_code) != SUCCESS_CODE:
                raise ProviderAPIError(self.name, str(error_code), data.get("reason"))

        return data

    def normalize(self, data: Any) -> ParseResult:
        if not isinstance(data, dict):
            return ParseResult.failure(f"expected JSON object, got {type(data).__name__}")

        items = find_result_list(data, RESULT_PATHS)
        if items is None:
            return ParseResult.failure("no result list at items.item, item or items")

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
