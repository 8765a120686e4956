"""
Full-Content Extraction Service

Fetches readable page text for a URL.
Tries the reader service first, then a direct fetch with local HTML
main-content extraction.
"""
import re
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from refscout.core.config import Settings
from refscout.core.exceptions import ExtractionError, ReaderServiceError
from refscout.core.logging import get_logger

logger = get_logger(__name__)


NOISE_SELECTOR = "script, style, nav, footer, header, ads, .ads, #ads, .cookie-banner"
CONTENT_SELECTOR = "article, main, .content, .post-content, #content, .js-content"

_WHITESPACE = re.compile(r"\s+")


def extract_main_text(html: str) -> str:
    """
    Extract the main readable text from an HTML document.

    Noise elements are removed first. Text comes from content containers
    when any exist, otherwise from the whole body. Whitespace runs are
    collapsed to single spaces.
    """
    soup = BeautifulSoup(html, "html.parser")

    for element in soup.select(NOISE_SELECTOR):
        element.decompose()

    containers = soup.select(CONTENT_SELECTOR)
    # Nested matches (an article inside main) would repeat their text
    matched = {id(el) for el in containers}
    outermost = [
        el for el in containers
        if not any(id(parent) in matched for parent in el.parents)
    ]
    text = " ".join(el.get_text(" ") for el in outermost)

    if not text.strip():
        root = soup.body or soup
        text = root.get_text(" ")

    return _WHITESPACE.sub(" ", text).strip()


class FullTextService:
    """Two-tier page text extraction: reader service, then direct fetch."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.fetch_timeout_seconds,
            follow_redirects=True,
            transport=self._transport,
            headers={"User-Agent": self.settings.user_agent},
        )

    def reader_url(self, url: str) -> str:
        return f"{self.settings.reader_base_url}{url}"

    async def fetch_full_content(self, url: str) -> str:
        """
        Get the full text of a page.

        Returns:
            Extracted text, or an empty string when both tiers fail
        """
        try:
            return await self._fetch_via_reader(url)
        except Exception as e:
            logger.debug(f"Reader failed for {url}: {e}")

        try:
            return await self._fetch_directly(url)
        except Exception as e:
            logger.warning(f"Failed to fetch full content directly for {url}: {e}")
            return ""

    async def _fetch_via_reader(self, url: str) -> str:
        async with self._client() as client:
            response = await client.get(
                self.reader_url(url),
                headers={"X-Return-Format": "text"},
            )
            if not response.is_success:
                raise ReaderServiceError(url, response.status_code)
            return response.text.strip()

    async def _fetch_directly(self, url: str) -> str:
        async with self._client() as client:
            response = await client.get(url)
            if not response.is_success:
                raise ExtractionError(url, f"HTTP {response.status_code}")
            html = response.text

        return extract_main_text(html)
