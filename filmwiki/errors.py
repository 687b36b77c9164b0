# filmwiki/errors.py
"""Exception hierarchy for the filmwiki pipeline.

Every failure raised by the package derives from :class:`FilmWikiError`, so
callers can catch one base class while still telling a missing input, a
missing article and a broken upstream apart.
"""

from __future__ import annotations


class FilmWikiError(Exception):
    """Base exception for filmwiki failures."""


class InputError(FilmWikiError):
    """Raised when a request lacks a required field or is not a JSON object."""


class NotFoundError(FilmWikiError):
    """Raised when no acceptable article is found for a title."""


class UpstreamError(FilmWikiError):
    """Raised when a Wikipedia API call fails or returns an unusable payload."""


__all__ = ["FilmWikiError", "InputError", "NotFoundError", "UpstreamError"]
