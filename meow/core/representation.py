"""Describe a file in plain words so it can be embedded.

The description is only ever fed to the embedding model; it is never shown.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# Cap on raw content appended for text-like files (8 KiB)
CONTENT_CAP_BYTES = 8 * 1024

IMAGE_EXTENSIONS = frozenset(
    {"png", "jpg", "jpeg", "gif", "bmp", "webp", "tif", "tiff", "heic", "svg", "ico"}
)
TEXT_CONTENT_EXTENSIONS = frozenset(
    {"txt", "md", "json", "log", "csv", "rs", "js", "ts", "py"}
)

_IMAGE_HINT = "It is an image or photo, such as a picture, wallpaper or camera shot."
_IMAGE_STEM_HINTS = (
    ("logo", "It looks like a logo or brand graphic."),
    ("screenshot", "It looks like a screenshot of a screen, window or app."),
    ("icon", "It looks like an icon or small symbol graphic."),
)
_PDF_HINT = "It is a PDF document, such as a report, form, invoice, receipt or notes."
_TEXT_HINT = "It is a text document with written notes or content."
_INSTALLER_HINT = "It is a software installer or setup program."


def _readable_stem(stem: str) -> str:
    for sep in ("_", "-", "."):
        stem = stem.replace(sep, " ")
    return stem


def _category_hints(ext: str, stem: str) -> list[str]:
    if ext in IMAGE_EXTENSIONS:
        hints = [_IMAGE_HINT]
        lowered = stem.lower()
        hints.extend(hint for word, hint in _IMAGE_STEM_HINTS if word in lowered)
        return hints
    if ext == "pdf":
        return [_PDF_HINT]
    if ext in ("txt", "md"):
        return [_TEXT_HINT]
    if ext in ("exe", "msi"):
        return [_INSTALLER_HINT]
    return []


def _read_head(path: Path, limit: int = CONTENT_CAP_BYTES) -> str:
    """Read up to `limit` bytes as text; unreadable files give ''."""
    try:
        with open(path, "rb") as f:
            raw = f.read(limit)
    except OSError as e:
        logger.debug("Content skipped for %s: %s", path, e)
        return ""
    return raw.decode("utf-8", errors="ignore")


def build_representation(path: Path, ext: str) -> str:
    """Build the embedding text for one file.

    Args:
        path: File path (only name and parent folder are used, plus content
            for text-like extensions).
        ext: Extension without the dot, as it should appear in the text.

    Returns:
        A short description: base sentence, category hints, optional content.
    """
    path = Path(path)
    ext_key = ext.lower()
    parts = [
        f"This is a {ext} file named {_readable_stem(path.stem)} "
        f"located in {path.parent.name} folder."
    ]
    parts.extend(_category_hints(ext_key, path.stem))

    if ext_key in TEXT_CONTENT_EXTENSIONS:
        content = _read_head(path)
        if content:
            parts.append(content)

    return " ".join(parts)
