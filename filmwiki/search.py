# filmwiki/search.py
from __future__ import annotations

from typing import Any

import requests

from filmwiki import config
from filmwiki.datatypes import SearchHit
from filmwiki.errors import UpstreamError


def error_info(error: Any) -> str:
    """
    Message of a MediaWiki `error` member: normally {"code", "info"}, occasionally a bare string.
    """
    if isinstance(error, dict):
        return str(error.get("info") or error.get("code") or "unknown error")
    return str(error or "unknown error")


def search_pages(
    query: str,
    *,
    session: requests.Session,
    api_url: str = config.DEFAULT_API_URL,
    limit: int = config.SEARCH_LIMIT,
    timeout: float = config.DEFAULT_TIMEOUT,
) -> list[SearchHit]:
    """
    Full-text search through the action API (action=query&list=search).

    - Returns hits in Wikipedia's ranking order.
    - 'limit' is clamped to [1, 50].
    - Raises UpstreamError on network failures, non-2xx statuses or bad JSON.
    """
    limit = max(1, min(50, limit))
    params = {
        "action": "query",
        "list": "search",
        "srsearch": query,
        "srlimit": str(limit),
        "format": "json",
    }

    try:
        resp = session.get(api_url, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as exc:
        raise UpstreamError(f"Wikipedia search failed for {query!r}: {exc}") from exc
    except ValueError as exc:
        raise UpstreamError(f"Malformed search response for {query!r}") from exc

    if not isinstance(data, dict):
        raise UpstreamError(f"Malformed search response for {query!r}")
    if "error" in data:
        raise UpstreamError(f"Wikipedia search error: {error_info(data.get('error'))}")

    body = data.get("query") or {}
    results = (body.get("search") or []) if isinstance(body, dict) else None
    if not isinstance(results, list):
        raise UpstreamError(f"Malformed search response for {query!r}")

    hits: list[SearchHit] = []
    for item in results:
        if not isinstance(item, dict):
            continue
        # Fields per action API: ns, title, pageid, size, wordcount, snippet, timestamp
        title = item.get("title")
        page_id = item.get("pageid")
        if not title or page_id is None:
            continue
        hits.append(
            SearchHit(title=title, page_id=int(page_id), snippet=item.get("snippet") or "")
        )

    return hits
