# filmwiki/utils.py
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False) -> None:
    """
    Route the package's log records through rich.
    INFO shows each search query and the chosen page; --verbose adds DEBUG detail.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        ],
        force=True,
    )
    # urllib3 debug lines drown out the pipeline's own
    logging.getLogger("urllib3").setLevel(logging.WARNING)
