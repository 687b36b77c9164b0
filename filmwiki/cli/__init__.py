# filmwiki/cli/__init__.py
from __future__ import annotations
from filmwiki.cli.generic import app
from filmwiki.cli.server import serve

app.command()(serve)

# Expose the main app only
__all__ = ["app"]
