# filmwiki/wiki_client.py
from __future__ import annotations

import logging
from typing import Any

import requests

from filmwiki import config
from filmwiki.datatypes import ParsedPage, SearchHit, SectionMeta
from filmwiki.errors import UpstreamError
from filmwiki.search import error_info, search_pages

logger = logging.getLogger(__name__)


class WikiClient:
    """
    Thin, typed wrapper around the MediaWiki action API.
    One requests.Session per client; sends a descriptive User-Agent
    as Wikimedia etiquette asks.
    """

    def __init__(
        self,
        *,
        api_url: str = config.DEFAULT_API_URL,
        user_agent: str = config.DEFAULT_UA,
        timeout: float = config.DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {"User-Agent": user_agent, "Accept": "application/json"}
        )

    def __enter__(self) -> "WikiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def _call(self, params: dict[str, Any]) -> dict[str, Any]:
        """
        GET the action API and return the decoded JSON object.
        Any transport, status or payload problem becomes an UpstreamError.
        """
        query = {**params, "format": "json"}
        try:
            resp = self._session.get(self.api_url, params=query, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as exc:
            raise UpstreamError(f"Wikipedia request failed: {exc}") from exc
        except ValueError as exc:
            raise UpstreamError("Malformed Wikipedia response") from exc

        if not isinstance(data, dict):
            raise UpstreamError("Malformed Wikipedia response")
        if "error" in data:
            info = error_info(data.get("error"))
            raise UpstreamError(f"Wikipedia API error: {info}")
        return data

    def _page_entry(self, params: dict[str, Any], page_id: int) -> dict[str, Any]:
        data = self._call({"action": "query", "pageids": str(page_id), **params})
        query = data.get("query") or {}
        pages = (query.get("pages") or {}) if isinstance(query, dict) else None
        if not isinstance(pages, dict):
            raise UpstreamError(f"Malformed page info for {page_id}")
        page = pages.get(str(page_id))
        return page if isinstance(page, dict) else {}

    def search(self, query: str, *, limit: int = config.SEARCH_LIMIT) -> list[SearchHit]:
        return search_pages(
            query,
            session=self._session,
            api_url=self.api_url,
            limit=limit,
            timeout=self.timeout,
        )

    def is_disambiguation(self, page_id: int) -> bool:
        """
        Category-based disambiguation check.
        Fails open: a lookup that errors counts as "not a disambiguation page".
        """
        try:
            page = self._page_entry({"prop": "categories", "cllimit": "max"}, page_id)
        except UpstreamError as exc:
            logger.debug("Category lookup for %s failed (%s); assuming article", page_id, exc)
            return False

        return any(
            "disambiguation" in str(category.get("title", "")).lower()
            for category in page.get("categories") or []
            if isinstance(category, dict)
        )

    def get_summary(self, page_id: int) -> str | None:
        """
        Plain-text intro of a page (prop=extracts), or None when unavailable.
        """
        try:
            page = self._page_entry(
                {"prop": "extracts", "exintro": "1", "explaintext": "1"}, page_id
            )
        except UpstreamError as exc:
            logger.debug("Summary lookup for %s failed: %s", page_id, exc)
            return None
        return page.get("extract") or None

    def get_page_url(self, page_id: int) -> str | None:
        page = self._page_entry({"prop": "info", "inprop": "url"}, page_id)
        return page.get("fullurl") or None

    def parse_page(self, page_id: int) -> ParsedPage:
        """
        Rendered HTML plus section and image metadata (action=parse).
        """
        data = self._call(
            {"action": "parse", "pageid": str(page_id), "prop": "text|sections|images"}
        )
        parsed = data.get("parse")
        if not isinstance(parsed, dict):
            raise UpstreamError(f"No parse output for page {page_id}")

        images = parsed.get("images")
        text = parsed.get("text") or {}
        html = text.get("*", "") if isinstance(text, dict) else str(text)
        sections = [
            SectionMeta.from_api(item, position)
            for position, item in enumerate(parsed.get("sections") or [])
            if isinstance(item, dict)
        ]
        return ParsedPage(
            title=parsed.get("title") or "",
            page_id=int(parsed.get("pageid") or page_id),
            html=html,
            sections=sections,
            images=[str(image) for image in images] if isinstance(images, list) else [],
        )
