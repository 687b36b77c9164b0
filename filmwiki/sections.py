# filmwiki/sections.py
"""
Section scoping over the flat list of MediaWiki section metadata.

Sections are not modelled as a tree. A section runs from its own heading up
to the heading of the next later section whose level is the same or higher
(numerically <=), so subsections stay inside their parent.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from bs4.element import PageElement, Tag

from filmwiki import config
from filmwiki.datatypes import ExtractedSection, SectionMeta, TocItem
from filmwiki.sanitize import (
    nodes_to_html,
    nodes_to_plain_text,
    top_level_block,
    visible_text,
)

logger = logging.getLogger(__name__)

_HEADING_TAG_RE = re.compile(r"^h[1-6]$")


def sort_sections(metas: Iterable[SectionMeta]) -> list[SectionMeta]:
    return sorted(metas, key=lambda meta: meta.order_index)


def is_skipped(title: str) -> bool:
    return title.strip().lower() in config.SKIP_SECTIONS


def is_target_section(title: str) -> bool:
    """
    Loose keyword match used by the plain-text extraction:
    "Critical reception" matches "reception", "Cast" matches "cast and characters".
    """
    name = title.strip().lower()
    if not name:
        return False
    return any(
        name == target or target in name or name in target
        for target in config.TARGET_SECTIONS
    )


def find_anchor(root: Tag, anchor: str) -> Tag | None:
    """
    Locate a section anchor: <span id>, then a heading id, then any element id.
    """
    if not anchor:
        return None
    node = root.find("span", id=anchor)
    if node is None:
        node = root.find(_HEADING_TAG_RE, id=anchor)
    if node is None:
        node = root.find(id=anchor)
    return node if isinstance(node, Tag) else None


def _contains_anchor(node: Tag, anchors: set[str]) -> bool:
    if node.get("id") in anchors:
        return True
    found = node.find(id=lambda value: isinstance(value, str) and value in anchors)
    return found is not None


def section_nodes(
    root: Tag, ordered: Sequence[SectionMeta], position: int
) -> list[PageElement] | None:
    """
    Top-level nodes belonging to `ordered[position]`, excluding its own heading.
    Returns None when the section's anchor is missing from the HTML.
    """
    current = ordered[position]
    start = top_level_block(root, find_anchor(root, current.anchor))
    if start is None:
        return None

    boundaries = {
        meta.anchor
        for meta in ordered[position + 1 :]
        if meta.level <= current.level and meta.anchor
    }

    nodes: list[PageElement] = []
    for node in start.next_siblings:
        if boundaries and isinstance(node, Tag) and _contains_anchor(node, boundaries):
            break
        nodes.append(node)
    return nodes


def extract_sections(
    root: Tag,
    metas: Iterable[SectionMeta],
    *,
    min_chars: int = config.MIN_SECTION_CHARS,
) -> list[ExtractedSection]:
    """
    Structured extraction: every non-boilerplate section with enough text,
    content kept as (already sanitized) HTML.
    """
    ordered = sort_sections(metas)
    extracted: list[ExtractedSection] = []

    for position, meta in enumerate(ordered):
        if is_skipped(meta.title):
            continue

        nodes = section_nodes(root, ordered, position)
        if nodes is None:
            logger.debug("Anchor %r not found; skipping %r", meta.anchor, meta.title)
            continue

        if len(visible_text(nodes)) < min_chars:
            logger.debug("Section %r below %d chars; dropped", meta.title, min_chars)
            continue

        extracted.append(
            ExtractedSection(
                id=meta.anchor,
                title=meta.title,
                level=meta.level,
                content=nodes_to_html(nodes),
            )
        )

    return extracted


def build_toc(metas: Iterable[SectionMeta]) -> list[TocItem]:
    return [
        TocItem(id=meta.anchor, title=meta.title, level=meta.toc_level)
        for meta in sort_sections(metas)
        if not is_skipped(meta.title)
    ]


def extract_legacy_sections(
    root: Tag,
    metas: Iterable[SectionMeta],
    *,
    min_chars: int = config.MIN_SECTION_CHARS,
    max_chars: int = config.LEGACY_MAX_SECTION_CHARS,
) -> dict[str, str]:
    """
    Plain-text extraction limited to the well-known film/TV section names.
    Returns section title -> text, in document order.
    """
    ordered = sort_sections(metas)
    extracted: dict[str, str] = {}

    for position, meta in enumerate(ordered):
        if meta.title in extracted or not is_target_section(meta.title):
            continue

        nodes = section_nodes(root, ordered, position)
        if nodes is None:
            continue

        text = nodes_to_plain_text(nodes)
        if len(text) < min_chars:
            continue
        extracted[meta.title] = text[:max_chars]

    return extracted
