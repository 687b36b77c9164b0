# filmwiki/handler.py
# filmwiki/handler.py
"""Top-level request handling: query generation, resolution, extraction, assembly.

A request ends in exactly one of three states:

- FOUND: 200 with the structured (or plain-text) result. Zero usable
  sections is still FOUND, flagged with ``isLimited``.
- NOT_FOUND: 404 with ``{"error": "not_found", ...}``.
- ERROR: 500 with ``{"error": <message>}`` for bad input, upstream failures
  and anything unexpected.

Nothing is retried; the resolver's loop over queries broadens the search,
it does not recover from errors.
"""

from __future__ import annotations

import logging
from typing import Any

from filmwiki import config
from filmwiki.datatypes import (
    LegacyResult,
    ParsedPage,
    ResolvedPage,
    SearchRequest,
    WikipediaFullResult,
)
from filmwiki.errors import FilmWikiError, NotFoundError
from filmwiki.extract import extract, extract_plain_sections
from filmwiki.queries import generate_queries
from filmwiki.resolver import resolve
from filmwiki.wiki_client import WikiClient

logger = logging.getLogger(__name__)


def fallback_url(page_id: int) -> str:
    return f"{config.WIKI_BASE_URL}/?curid={page_id}"


def find_page(request: SearchRequest, *, client: WikiClient) -> ResolvedPage:
    queries = generate_queries(request.title, request.year, request.media_type)
    page = resolve(
        queries, request.title, request.year, request.media_type, client=client
    )
    if page is None:
        logger.info("No Wikipedia article found for %r", request.title)
        raise NotFoundError(config.NOT_FOUND_MESSAGE)
    return page


def build_full_result(page: ResolvedPage, parsed: ParsedPage, url: str) -> WikipediaFullResult:
    content = extract(page.page_id, parsed.html, parsed.sections)
    return WikipediaFullResult(
        title=page.title,
        page_id=page.page_id,
        url=url,
        infobox=content.infobox,
        lead_section=content.lead_section,
        sections=content.sections,
        toc=content.toc,
        images=parsed.images[: config.MAX_IMAGES],
    )


def build_legacy_result(
    page: ResolvedPage, parsed: ParsedPage, url: str, *, client: WikiClient
) -> LegacyResult:
    sections = extract_plain_sections(page.page_id, parsed.html, parsed.sections)
    is_limited = not sections
    if not sections:
        summary = client.get_summary(page.page_id)
        if summary:
            sections[config.OVERVIEW_SECTION] = summary
    return LegacyResult(
        title=page.title,
        page_id=page.page_id,
        url=url,
        sections=sections,
        is_limited=is_limited,
    )


def lookup(
    request: SearchRequest, *, client: WikiClient
) -> WikipediaFullResult | LegacyResult:
    """
    Run the whole pipeline for one request.
    Raises NotFoundError when no article matches, UpstreamError on API failures.
    """
    logger.info(
        "Searching Wikipedia for: %s (%s) - %s [fullContent: %s]",
        request.title,
        request.year,
        request.type_suffix,
        request.full_content,
    )
    page = find_page(request, client=client)

    logger.info("Fetching content for page: %s (ID: %s)", page.title, page.page_id)
    parsed = client.parse_page(page.page_id)
    url = client.get_page_url(page.page_id) or fallback_url(page.page_id)

    if request.full_content:
        return build_full_result(page, parsed, url)
    return build_legacy_result(page, parsed, url, client=client)


def not_found_body() -> dict[str, str]:
    return {"error": "not_found", "message": config.NOT_FOUND_MESSAGE}


def handle(payload: Any, *, client: WikiClient) -> tuple[int, dict[str, Any]]:
    """
    Map a decoded JSON body to (status code, response body).
    """
    try:
        request = SearchRequest.from_payload(payload)
        result = lookup(request, client=client)
    except NotFoundError:
        return 404, not_found_body()
    except FilmWikiError as exc:
        logger.error("Error in wikipedia lookup: %s", exc)
        return 500, {"error": str(exc)}
    except Exception as exc:
        logger.exception("Unexpected failure in wikipedia lookup")
        return 500, {"error": str(exc) or "Unknown error"}
    return 200, result.to_dict()
