# filmwiki/datatypes.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from filmwiki.errors import InputError
from filmwiki.sanitize import strip_tags

MediaType = Literal["movie", "tv"]


def type_suffix(media_type: MediaType | str) -> str:
    """
    Qualifier Wikipedia puts on film and TV titles: "film" or "TV series".
    """
    return "TV series" if media_type == "tv" else "film"


def _safe_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """
    A single lookup request, built once from the caller's JSON body.
    """

    title: str
    year: str | None = None
    media_type: MediaType = "movie"
    full_content: bool = False

    @property
    def type_suffix(self) -> str:
        return type_suffix(self.media_type)

    @classmethod
    def from_payload(cls, payload: Any) -> "SearchRequest":
        """
        Validate a decoded JSON body.
        Raises InputError when the body is not an object or the title is missing.
        """
        if not isinstance(payload, Mapping):
            raise InputError("Request body must be a JSON object")

        title = payload.get("title")
        title = str(title).strip() if title is not None else ""
        if not title:
            raise InputError("Title is required")

        year = payload.get("year")
        year = str(year).strip() if year is not None else ""

        media_type: MediaType = "tv" if payload.get("mediaType") == "tv" else "movie"
        return cls(
            title=title,
            year=year or None,
            media_type=media_type,
            full_content=bool(payload.get("fullContent", False)),
        )


@dataclass(frozen=True, slots=True)
class SearchHit:
    """
    A single hit from the MediaWiki full-text search (list=search)
    """

    title: str
    page_id: int
    snippet: str = ""


@dataclass(frozen=True, slots=True)
class ResolvedPage:
    """
    The article chosen by the resolver; handed to the content extractor.
    """

    title: str
    page_id: int


@dataclass(frozen=True, slots=True)
class SectionMeta:
    """
    Section metadata as returned by action=parse&prop=sections.
    `level` is the heading level (2 for ==Plot==), `toc_level` the TOC nesting depth.
    """

    title: str
    anchor: str
    toc_level: int
    level: int
    order_index: int

    @classmethod
    def from_api(cls, item: Mapping[str, Any], position: int) -> "SectionMeta":
        return cls(
            title=strip_tags(str(item.get("line", ""))),
            anchor=str(item.get("anchor", "")),
            toc_level=_safe_int(item.get("toclevel"), 1),
            level=_safe_int(item.get("level"), 2) or 2,
            # transcluded sections carry indexes like "T-1"
            order_index=_safe_int(item.get("index"), position + 1),
        )


@dataclass(frozen=True, slots=True)
class ParsedPage:
    """
    One action=parse response: rendered HTML plus section and image metadata.
    """

    title: str
    page_id: int
    html: str
    sections: list[SectionMeta] = field(default_factory=list)
    images: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ExtractedSection:
    id: str  # the section anchor
    title: str
    level: int
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "level": self.level,
            "content": self.content,
        }


@dataclass(frozen=True, slots=True)
class Infobox:
    raw_html: str
    data: dict[str, str]

    def to_dict(self) -> dict[str, Any]:
        return {"rawHtml": self.raw_html, "data": dict(self.data)}


@dataclass(frozen=True, slots=True)
class TocItem:
    id: str
    title: str
    level: int  # TOC nesting level

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "level": self.level}


@dataclass(frozen=True, slots=True)
class ExtractedContent:
    """
    Everything the content extractor pulls out of one article.
    """

    infobox: Infobox | None
    lead_section: str
    sections: list[ExtractedSection]
    toc: list[TocItem]


@dataclass(frozen=True, slots=True)
class WikipediaFullResult:
    """
    Structured-mode response. An empty `sections` list is a degraded but
    successful result: the caller falls back to the lead and the external link.
    """

    title: str
    page_id: int
    url: str
    infobox: Infobox | None
    lead_section: str
    sections: list[ExtractedSection]
    toc: list[TocItem]
    images: list[str]

    @property
    def has_sections(self) -> bool:
        return len(self.sections) > 0

    @property
    def is_limited(self) -> bool:
        return not self.has_sections

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "pageId": self.page_id,
            "url": self.url,
            "infobox": self.infobox.to_dict() if self.infobox else None,
            "leadSection": self.lead_section,
            "sections": [s.to_dict() for s in self.sections],
            "toc": [t.to_dict() for t in self.toc],
            "images": list(self.images),
            "hasSections": self.has_sections,
            "isLimited": self.is_limited,
        }


@dataclass(frozen=True, slots=True)
class LegacyResult:
    """
    Plain-text response: section name -> cleaned text.
    """

    title: str
    page_id: int
    url: str
    sections: dict[str, str]
    is_limited: bool

    @property
    def has_sections(self) -> bool:
        return len(self.sections) > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "pageId": self.page_id,
            "url": self.url,
            "sections": dict(self.sections),
            "hasSections": self.has_sections,
            "isLimited": self.is_limited,
        }
