"""Tests for HTML clean-up and text helpers."""

from filmwiki.sanitize import (
    content_root,
    heading_level,
    nodes_to_plain_text,
    parse_html,
    sanitize,
    strip_reference_marks,
    strip_tags,
    visible_text,
)


def clean(html):
    return str(sanitize(parse_html(html)))


def test_removes_scripts_styles_and_edit_links():
    html = (
        '<div><script>alert(1)</script><style>p{color:red}</style>'
        '<h2 id="Plot">Plot<span class="mw-editsection">[edit]</span></h2><p>Text</p></div>'
    )

    cleaned = clean(html)

    assert "alert" not in cleaned
    assert "color:red" not in cleaned
    assert "[edit]" not in cleaned
    assert "<p>Text</p>" in cleaned


def test_removes_navboxes_metadata_and_hidden_elements():
    html = (
        '<div class="navbox">Films by year</div>'
        '<table class="navbox"><tr><td>More films</td></tr></table>'
        '<div class="metadata">Stub notice</div>'
        '<div class="catlinks">Categories: 1999 films</div>'
        '<span style="display: none">hidden</span>'
        "<p>Visible</p>"
    )

    cleaned = clean(html)

    for text in ("Films by year", "More films", "Stub notice", "Categories", "hidden"):
        assert text not in cleaned
    assert "Visible" in cleaned


def test_strips_citation_needed_and_reference_numbers():
    html = (
        '<p>Claim.<sup class="noprint Inline-Template">[citation needed]</sup>'
        ' Fact.<sup class="reference"><a href="#cite_note-1">[1]</a></sup></p>'
    )

    cleaned = clean(html)

    assert "citation needed" not in cleaned
    assert "[1]" not in cleaned
    assert "Claim." in cleaned and "Fact." in cleaned


def test_unwraps_ipa_and_nowrap_spans():
    html = '<p>Pronounced <span class="IPA">/ˈmeɪtrɪks/</span> in <span class="nowrap">the US</span>.</p>'

    cleaned = clean(html)

    assert "<span" not in cleaned
    assert "/ˈmeɪtrɪks/" in cleaned
    assert "the US" in cleaned


def test_rewrites_internal_links():
    cleaned = clean(
        '<p><a href="/wiki/Keanu_Reeves">Keanu</a> <a href="https://example.com/">x</a></p>'
    )

    assert 'href="https://en.wikipedia.org/wiki/Keanu_Reeves"' in cleaned
    assert 'href="https://example.com/"' in cleaned


def test_nested_removals_do_not_fail():
    html = '<div class="navbox"><sup class="reference">[1]</sup><script>x()</script></div><p>ok</p>'

    assert clean(html) == "<p>ok</p>"


def test_strip_tags_decodes_entities():
    assert strip_tags("<i>Cast</i> &amp; crew") == "Cast & crew"
    assert strip_tags("  Plot   summary ") == "Plot summary"


def test_strip_reference_marks():
    assert strip_reference_marks("Released in 1999.[12][13]") == "Released in 1999."


def test_content_root_prefers_parser_output():
    soup = parse_html('<p>outside</p><div class="mw-content-ltr mw-parser-output"><p>inside</p></div>')

    assert content_root(soup).get_text() == "inside"


def test_heading_level_handles_both_markups():
    soup = parse_html(
        '<div class="mw-heading mw-heading3"><h3 id="Casting">Casting</h3></div>'
        '<h2><span class="mw-headline" id="Plot">Plot</span></h2><p>x</p>'
    )
    new_style, old_style, paragraph = soup.contents

    assert heading_level(new_style) == 3
    assert heading_level(old_style) == 2
    assert heading_level(paragraph) is None


def test_visible_text_collapses_whitespace():
    soup = parse_html("\n<p>Hello <b>world</b>.</p>\n<p>  Again </p>\n")

    assert visible_text(soup.contents) == "Hello world. Again"


def test_plain_text_renders_headings_and_bullets():
    soup = parse_html(
        '<p>Intro &amp; more.[3]</p>'
        '<div class="mw-heading mw-heading3"><h3 id="Casting">Casting</h3></div>'
        "<ul><li>Keanu Reeves as Neo</li><li>Carrie-Anne Moss as Trinity</li></ul>"
    )

    text = nodes_to_plain_text(soup.contents)

    assert text == (
        "Intro & more.\n"
        "**Casting**\n"
        "• Keanu Reeves as Neo\n"
        "• Carrie-Anne Moss as Trinity"
    )
