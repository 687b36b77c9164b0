# filmwiki/config.py
from __future__ import annotations

import os

# MediaWiki action API configuration
DEFAULT_API_URL = os.environ.get("FILMWIKI_API_URL", "https://en.wikipedia.org/w/api.php")
WIKI_BASE_URL = "https://en.wikipedia.org"
DEFAULT_UA = os.environ.get(
    "FILMWIKI_USER_AGENT", "filmwiki/0.1 (film and TV article extraction)"
)
DEFAULT_TIMEOUT = float(os.environ.get("FILMWIKI_TIMEOUT", "10"))

# Candidate resolution
MAX_SEARCH_ATTEMPTS = 10
SEARCH_LIMIT = 10

# Content extraction
MIN_SECTION_CHARS = 100
LEGACY_MAX_SECTION_CHARS = 8000
MAX_IMAGES = 10

SKIP_SECTIONS = (
    "see also",
    "references",
    "external links",
    "notes",
    "further reading",
    "bibliography",
)

# Section names kept by the plain-text (legacy) extraction
TARGET_SECTIONS = (
    "plot",
    "synopsis",
    "premise",
    "summary",
    "story",
    "storyline",
    "episodes",
    "episode list",
    "series overview",
    "production",
    "development",
    "filming",
    "music",
    "casting",
    "cast",
    "cast and characters",
    "release",
    "broadcast",
    "distribution",
    "marketing",
    "box office",
    "reception",
    "critical response",
    "reviews",
    "ratings",
    "themes",
    "analysis",
    "awards",
    "awards and nominations",
    "accolades",
    "legacy",
    "impact",
    "influence",
)

OVERVIEW_SECTION = "Overview"
NOT_FOUND_MESSAGE = "No Wikipedia article found for this title"

# HTTP surface
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
