"""Open files with the OS default application."""

import logging
from pathlib import Path

import typer

logger = logging.getLogger(__name__)


def open_path(path: str | Path) -> bool:
    """Launch `path` with its default handler. Returns False if it is gone."""
    p = Path(path)
    if not p.exists():
        logger.warning("Cannot open missing file: %s", p)
        return False
    logger.info("Opening %s", p)
    typer.launch(str(p))
    return True
