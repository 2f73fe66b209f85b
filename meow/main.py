"""Entry point: configure logging, then hand over to the typer app."""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

import typer
from pydantic import ValidationError

from .cli import app
from .config import Settings, get_settings

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3

FILE_HANDLER_NAME = "meow-file"
CONSOLE_HANDLER_NAME = "meow-console"


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        typer.secho(
            f"Ignoring invalid MEOW_* settings for logging: {e.error_count()} error(s)",
            fg=typer.colors.YELLOW,
            err=True,
        )
        return Settings.model_construct()


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Send everything to the rotating log file and warnings to stderr.

    Safe to call more than once; meow's own handlers are replaced, not stacked.
    """
    settings = settings or _load_settings()
    settings.log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() in (FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME):
            root.removeHandler(handler)
            handler.close()

    file_handler = RotatingFileHandler(
        settings.log_file,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    # Search output goes to stdout; only problems reach the terminal here
    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    root.setLevel(getattr(logging, settings.log_level))
    root.addHandler(file_handler)
    root.addHandler(console_handler)

    # One line per Ollama request otherwise
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def main() -> None:
    """Console script `meow`."""
    setup_logging()
    app()


if __name__ == "__main__":
    main()
