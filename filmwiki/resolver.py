# filmwiki/resolver.py
"""
Pick the one Wikipedia article that matches a film or TV title.

TMDB titles and Wikipedia titles rarely line up exactly (subtitles,
"(film)" qualifiers, release years for remakes), so matching is layered:
an exact or type/year-confirmed hit wins outright, otherwise the first hit
containing the title, otherwise the first hit that is not a disambiguation
page. Disambiguation pages are never returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from filmwiki import config
from filmwiki.datatypes import MediaType, ResolvedPage, SearchHit, type_suffix
from filmwiki.wiki_client import WikiClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HitMatch:
    """
    How a search hit's title relates to the requested title.
    """

    is_exact_match: bool
    contains_title: bool
    contains_media_type: bool
    contains_year: bool

    @property
    def accepted(self) -> bool:
        return self.is_exact_match or (
            self.contains_title and (self.contains_media_type or self.contains_year)
        )


def match_hit(
    hit_title: str, title: str, year: str | None, media_type: MediaType | str
) -> HitMatch:
    """
    Case-insensitive comparison of one hit title against the request.
    """
    found = hit_title.lower()
    wanted = title.lower()
    qualified = f"{wanted} ({type_suffix(media_type).lower()})"
    media_word = "series" if media_type == "tv" else "film"

    return HitMatch(
        is_exact_match=(
            found == wanted or found.startswith(wanted + " (") or found == qualified
        ),
        contains_title=wanted in found,
        contains_media_type=media_word in found,
        contains_year=bool(year) and year in found,
    )


def _resolved(hit: SearchHit) -> ResolvedPage:
    return ResolvedPage(title=hit.title, page_id=hit.page_id)


def resolve(
    queries: Iterable[str],
    title: str,
    year: str | None,
    media_type: MediaType | str,
    *,
    client: WikiClient,
    max_attempts: int = config.MAX_SEARCH_ATTEMPTS,
    limit: int = config.SEARCH_LIMIT,
) -> ResolvedPage | None:
    """
    Search each query in order and return the first acceptable article.

    `max_attempts` caps the number of search calls over the whole resolution,
    not per query. A round that yields any candidate ends the search.
    """
    attempts = 0
    for query in queries:
        if attempts >= max_attempts:
            logger.info("Search budget of %d queries exhausted", max_attempts)
            break
        attempts += 1

        logger.info("Trying search query: %s", query)
        hits = client.search(query, limit=limit)

        weak: SearchHit | None = None
        first_article: SearchHit | None = None
        for hit in hits:
            if "disambiguation" in hit.title.lower():
                continue
            if client.is_disambiguation(hit.page_id):
                logger.info("Skipping disambiguation page: %s", hit.title)
                continue
            if first_article is None:
                first_article = hit

            match = match_hit(hit.title, title, year, media_type)
            if match.accepted:
                logger.info("Found matching page: %s", hit.title)
                return _resolved(hit)
            if weak is None and match.contains_title:
                weak = hit

        fallback = weak or first_article
        if fallback is not None:
            logger.info("No confident match for %r; using %s", query, fallback.title)
            return _resolved(fallback)

    return None
