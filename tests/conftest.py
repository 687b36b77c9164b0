"""Shared fixtures: a scripted stand-in for WikiClient and parsed article fixtures."""

from typing import Dict, Iterable, List, Optional

import pytest

from filmwiki.datatypes import ParsedPage, SearchHit, SectionMeta
from filmwiki.errors import UpstreamError
from tests.fixtures.pages import (
    MATRIX_HTML,
    MATRIX_IMAGES,
    MATRIX_PAGE_ID,
    MATRIX_SECTIONS,
)


class FakeWikiClient:
    """Answers WikiClient calls from canned data and records every call made."""

    def __init__(
        self,
        results: Optional[Dict[str, List[SearchHit]]] = None,
        disambiguation: Iterable[int] = (),
        parsed: Optional[Dict[int, ParsedPage]] = None,
        urls: Optional[Dict[int, str]] = None,
        summaries: Optional[Dict[int, str]] = None,
    ) -> None:
        self.results = results or {}
        self.disambiguation = set(disambiguation)
        self.parsed = parsed or {}
        self.urls = urls or {}
        self.summaries = summaries or {}
        self.searched: List[str] = []
        self.category_checks: List[int] = []

    def __enter__(self) -> "FakeWikiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        pass

    def search(self, query: str, *, limit: int = 10) -> List[SearchHit]:
        self.searched.append(query)
        return list(self.results.get(query, []))[:limit]

    def is_disambiguation(self, page_id: int) -> bool:
        self.category_checks.append(page_id)
        return page_id in self.disambiguation

    def parse_page(self, page_id: int) -> ParsedPage:
        if page_id not in self.parsed:
            raise UpstreamError(f"No parse output for page {page_id}")
        return self.parsed[page_id]

    def get_page_url(self, page_id: int) -> Optional[str]:
        return self.urls.get(page_id)

    def get_summary(self, page_id: int) -> Optional[str]:
        return self.summaries.get(page_id)


def hit(title: str, page_id: int, snippet: str = "") -> SearchHit:
    return SearchHit(title=title, page_id=page_id, snippet=snippet)


@pytest.fixture
def matrix_sections() -> List[SectionMeta]:
    return [SectionMeta.from_api(item, i) for i, item in enumerate(MATRIX_SECTIONS)]


@pytest.fixture
def matrix_page(matrix_sections) -> ParsedPage:
    return ParsedPage(
        title="The Matrix",
        page_id=MATRIX_PAGE_ID,
        html=MATRIX_HTML,
        sections=matrix_sections,
        images=list(MATRIX_IMAGES),
    )


@pytest.fixture
def matrix_client(matrix_page) -> FakeWikiClient:
    return FakeWikiClient(
        results={
            "The Matrix 1999 film": [
                hit("The Matrix (disambiguation)", 1),
                hit("Matrix (mathematics)", 2),
                hit("The Matrix", MATRIX_PAGE_ID),
                hit("The Matrix Reloaded", 3),
            ]
        },
        parsed={MATRIX_PAGE_ID: matrix_page},
        urls={MATRIX_PAGE_ID: "https://en.wikipedia.org/wiki/The_Matrix"},
        summaries={MATRIX_PAGE_ID: "The Matrix is a 1999 science fiction action film."},
    )
