# filmwiki/extract.py
from __future__ import annotations

import logging
from typing import Iterable

from filmwiki import config
from filmwiki.datatypes import ExtractedContent, SectionMeta
from filmwiki.infobox import extract_infobox, extract_lead
from filmwiki.sanitize import content_root, parse_html, sanitize
from filmwiki.sections import build_toc, extract_legacy_sections, extract_sections

logger = logging.getLogger(__name__)


def extract(
    page_id: int,
    html: str,
    sections_meta: Iterable[SectionMeta],
    *,
    min_chars: int = config.MIN_SECTION_CHARS,
) -> ExtractedContent:
    """
    Decompose a parsed article into infobox, lead, body sections and TOC.
    The tree is sanitized once up front, so every HTML fragment returned is cleaned.
    """
    metas = list(sections_meta)
    root = sanitize(content_root(parse_html(html)))

    infobox = extract_infobox(root)
    lead = extract_lead(root)
    sections = extract_sections(root, metas, min_chars=min_chars)
    toc = build_toc(metas)

    logger.info(
        "Page %s: kept %d of %d sections (infobox: %s)",
        page_id,
        len(sections),
        len(metas),
        "yes" if infobox else "no",
    )
    return ExtractedContent(
        infobox=infobox, lead_section=lead, sections=sections, toc=toc
    )


def extract_plain_sections(
    page_id: int,
    html: str,
    sections_meta: Iterable[SectionMeta],
    *,
    min_chars: int = config.MIN_SECTION_CHARS,
    max_chars: int = config.LEGACY_MAX_SECTION_CHARS,
) -> dict[str, str]:
    """
    Plain-text variant: well-known film/TV sections only, as cleaned text.
    """
    metas = list(sections_meta)
    root = sanitize(content_root(parse_html(html)))
    sections = extract_legacy_sections(
        root, metas, min_chars=min_chars, max_chars=max_chars
    )
    logger.info("Page %s: kept %d plain-text sections", page_id, len(sections))
    return sections
