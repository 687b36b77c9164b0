# filmwiki/sanitize.py
"""
HTML clean-up and text helpers shared by the content extractor.

Everything here works on BeautifulSoup trees built from the `text` field of
an action=parse response. `sanitize` is a pre-pass only: whoever renders the
HTML still has to run it through an allow-list sanitizer.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, PageElement, Tag

from filmwiki import config

_WS_RE = re.compile(r"\s+")
_REF_MARK_RE = re.compile(r"\[\d+\]")
_HEADING_RE = re.compile(r"^h([1-6])$")
_HIDDEN_STYLE_RE = re.compile(r"display\s*:\s*none", re.IGNORECASE)

# edit links, navigation boxes, hidden categories, citation-needed and reference marks
_DROP_SELECTORS = (
    ".mw-editsection",
    ".navbox",
    ".metadata",
    ".catlinks",
    ".mw-hidden-catlinks",
    "sup.noprint",
    "sup.reference",
)
_UNWRAP_SELECTORS = ("span.IPA", "span.nowrap")
_CONTAINER_TAGS = ("div", "section", "blockquote")
_BLOCK_TAGS = ["p", "ul", "ol", "dl", "table", "h2", "h3", "h4", "h5", "h6", "div"]


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def strip_reference_marks(text: str) -> str:
    """
    Remove bare footnote markers such as "[12]" left in plain text.
    """
    return _REF_MARK_RE.sub("", text)


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def strip_tags(html: str) -> str:
    """
    Drop markup and decode entities, e.g. "<i>Plot</i> &amp; cast" -> "Plot & cast".
    """
    if "<" not in html and "&" not in html:
        return collapse_whitespace(html)
    return collapse_whitespace(parse_html(html).get_text())


def content_root(soup: BeautifulSoup) -> Tag:
    """
    Return the element whose children are the article's top-level blocks.
    """
    root = soup.find("div", class_="mw-parser-output")
    if isinstance(root, Tag):
        return root
    return soup.body or soup


def heading_level(node: PageElement) -> int | None:
    """
    Heading level of a top-level block, or None if it is not a heading.
    Handles both <h2 id=...> and the newer <div class="mw-heading"><h2 ...></div> markup.
    """
    if not isinstance(node, Tag):
        return None
    match = _HEADING_RE.match(node.name or "")
    if match:
        return int(match.group(1))
    if "mw-heading" in (node.get("class") or []):
        inner = node.find(_HEADING_RE)
        if isinstance(inner, Tag):
            return int(inner.name[1])
    return None


def top_level_block(root: Tag, node: PageElement | None) -> PageElement | None:
    """
    Walk up from `node` to the ancestor that is a direct child of `root`.
    """
    while node is not None and node.parent is not root:
        node = node.parent
    return node


def _drop(tags: Iterable[Tag]) -> None:
    for tag in tags:
        # a tag inside an already removed subtree is gone with it
        if not tag.decomposed:
            tag.decompose()


def sanitize(root: Tag) -> Tag:
    """
    Clean a parsed article in place and return it.
    """
    _drop(root.find_all(["script", "style"]))
    _drop(root.select(", ".join(_DROP_SELECTORS)))
    _drop(root.find_all(style=_HIDDEN_STYLE_RE))

    for span in root.select(", ".join(_UNWRAP_SELECTORS)):
        span.unwrap()

    for link in root.find_all("a", href=True):
        href = link["href"]
        if isinstance(href, str) and href.startswith("/wiki/"):
            link["href"] = config.WIKI_BASE_URL + href

    return root


def nodes_to_html(nodes: Iterable[PageElement]) -> str:
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Comment):
            continue
        if isinstance(node, Tag):
            parts.append(str(node))
        elif isinstance(node, NavigableString):
            # bare text between blocks must stay escaped
            parts.append(node.output_ready())
    return "".join(parts).strip()


def visible_text(nodes: Iterable[PageElement]) -> str:
    """
    Text of a run of nodes with whitespace collapsed; used for length thresholds.
    """
    parts: list[str] = []
    for node in nodes:
        if isinstance(node, Comment):
            continue
        if isinstance(node, Tag):
            parts.append(node.get_text())
        elif isinstance(node, NavigableString):
            parts.append(str(node))
    return collapse_whitespace(" ".join(parts))


def _node_lines(node: PageElement) -> Iterator[str]:
    if isinstance(node, Comment):
        return
    if isinstance(node, NavigableString):
        text = collapse_whitespace(str(node))
        if text:
            yield text
        return
    if not isinstance(node, Tag):
        return

    if heading_level(node) is not None:
        yield f"**{collapse_whitespace(node.get_text())}**"
    elif node.name in ("ul", "ol"):
        for item in node.find_all("li", recursive=False):
            text = collapse_whitespace(item.get_text())
            if text:
                yield f"• {text}"
    elif node.name in _CONTAINER_TAGS and node.find(_BLOCK_TAGS) is not None:
        for child in node.children:
            yield from _node_lines(child)
    else:
        text = collapse_whitespace(node.get_text())
        if text:
            yield text


def nodes_to_plain_text(nodes: Iterable[PageElement]) -> str:
    """
    Render a run of nodes as plain text:
    headings become "**Heading**" lines, list items "• item" lines.
    """
    lines: list[str] = []
    for node in nodes:
        for line in _node_lines(node):
            line = collapse_whitespace(strip_reference_marks(line))
            if line:
                lines.append(line)
    return "\n".join(lines)
