# filmwiki/infobox.py
from __future__ import annotations

import re

from bs4.element import Tag

from filmwiki.datatypes import Infobox
from filmwiki.sanitize import collapse_whitespace, heading_level

# elements that may sit between lead paragraphs without ending the lead
_TRANSPARENT_TAGS = ("link", "meta")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([),.;:])")
_SPACE_AFTER_PAREN_RE = re.compile(r"\(\s+")


def _tidy(text: str) -> str:
    text = collapse_whitespace(text)
    text = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", text)
    return _SPACE_AFTER_PAREN_RE.sub("(", text)


def _cell_text(cell: Tag) -> str:
    """
    Value text of an infobox cell; list cells (cast, release dates) become "a, b, c".
    """
    items = [li for li in cell.find_all("li") if li.find_parent("li") is None]
    if items:
        return ", ".join(text for text in (_tidy(li.get_text(" ")) for li in items) if text)
    return _tidy(cell.get_text(" "))


def _is_infobox_class(value: object) -> bool:
    return isinstance(value, str) and "infobox" in value


def find_infobox_table(root: Tag) -> Tag | None:
    """
    First <table> whose class contains "infobox" (e.g. "infobox vevent").
    """
    table = root.find("table", class_=_is_infobox_class)
    return table if isinstance(table, Tag) else None


def _holds_infobox(node: Tag) -> bool:
    if node.name == "table" and any(_is_infobox_class(c) for c in node.get("class") or []):
        return True
    return find_infobox_table(node) is not None


def extract_infobox(root: Tag) -> Infobox | None:
    """
    Parse the infobox into label -> value pairs.
    Rows without both a <th> label and a <td> value (titles, images) are ignored.
    """
    table = find_infobox_table(root)
    if table is None:
        return None

    data: dict[str, str] = {}
    for row in table.find_all("tr"):
        header = row.find("th")
        cell = row.find("td")
        if header is None or cell is None:
            continue
        label = collapse_whitespace(header.get_text(" "))
        value = _cell_text(cell)
        if label and value:
            data[label] = value

    return Infobox(raw_html=str(table), data=data)


def extract_lead(root: Tag) -> str:
    """
    Lead section HTML: the first contiguous run of paragraphs before the
    first level-2 heading. An infobox above that heading is stepped over;
    infoboxes further down (soundtrack albums, sequels) never matter.
    """
    paragraphs: list[Tag] = []
    for node in root.children:
        if heading_level(node) == 2:
            break
        if not isinstance(node, Tag) or node.name in _TRANSPARENT_TAGS:
            continue
        if node.name == "p":
            # MediaWiki emits empty <p class="mw-empty-elt"> placeholders
            if node.get_text(strip=True):
                paragraphs.append(node)
            continue
        if _holds_infobox(node):
            continue
        if paragraphs:
            break

    return "".join(str(p) for p in paragraphs)
