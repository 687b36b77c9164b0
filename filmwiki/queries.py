# filmwiki/queries.py
from __future__ import annotations

import re

from filmwiki.datatypes import MediaType, type_suffix

_SUBTITLE_RE = re.compile(r":\s+.+$")
_DASH_SUFFIX_RE = re.compile(r"\s+[-–—]\s+.+$")


def clean_title(title: str) -> str:
    """
    Strip a subtitle or dash suffix: "Mission: Impossible - Fallout" -> "Mission".
    """
    cleaned = _SUBTITLE_RE.sub("", title)
    cleaned = _DASH_SUFFIX_RE.sub("", cleaned)
    return cleaned.strip()


def generate_queries(
    title: str, year: str | None, media_type: MediaType | str
) -> list[str]:
    """
    Candidate search strings, most specific first:
    title+year+type, then title+type, then the bare title.
    Each tier repeats with the cleaned title when it differs.
    """
    title = title.strip()
    suffix = type_suffix(media_type)
    short = clean_title(title)
    titles = [title] if short in ("", title) else [title, short]

    queries: list[str] = []
    if year:
        for name in titles:
            queries.append(f"{name} {year} {suffix}")
            queries.append(f"{name} ({year} {suffix})")
    for name in titles:
        queries.append(f"{name} {suffix}")
        queries.append(f"{name} ({suffix})")
    queries.extend(titles)

    # dedupe, keep first-seen order
    return [q for q in dict.fromkeys(queries) if q.strip()]
