"""Filesystem scoping: which folder to search, which files it holds, time filters."""

import os
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

FOLDER_HINTS = {
    "downloads": "Downloads",
    "pictures": "Pictures",
    "documents": "Documents",
    "desktop": "Desktop",
}


def walk_files(root: Path) -> list[Path]:
    """Recursively collect regular files under `root` as absolute paths.

    Unreadable directories and broken entries are skipped silently.
    Directory symlinks are not followed.
    """
    root = Path(root).expanduser().absolute()
    out: list[Path] = []
    # os.walk ignores listing errors unless onerror is given
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.is_file():
                out.append(path)
    return out


def resolve_scope_root(
    folder_hint: Optional[str],
    query: Optional[str],
    home: Optional[Path] = None,
) -> Path:
    """Pick the directory a search is scoped to.

    Known folder hints map to home subfolders; otherwise the raw query is
    scanned for keywords; otherwise the current directory is used.
    """
    home = home or Path.home()

    if folder_hint:
        sub = FOLDER_HINTS.get(folder_hint.strip().lower())
        if sub:
            return home / sub

    if query:
        q = query.lower()
        if "download" in q:
            return home / "Downloads"
        if "photo" in q or "picture" in q or "image" in q:
            return home / "Pictures"

    return Path(".")


def matches_time(path: Path, time_filter: str, today: Optional[date] = None) -> bool:
    """Check a file's local mtime date against "today" / "yesterday".

    Other filter values pass everything through. Files whose metadata
    cannot be read never match a real filter.
    """
    key = time_filter.strip().lower()
    if key not in ("today", "yesterday"):
        return True
    try:
        mtime = os.stat(path).st_mtime
    except OSError:
        return False
    modified = datetime.fromtimestamp(mtime).date()
    today = today or date.today()
    target = today if key == "today" else today - timedelta(days=1)
    return modified == target


def filter_by_time(
    files: list[Path], time_filter: Optional[str], today: Optional[date] = None
) -> list[Path]:
    if not time_filter:
        return files
    return [p for p in files if matches_time(p, time_filter, today=today)]


def find_by_name(root: Path, text: str) -> list[Path]:
    """Files and folders under `root` whose name contains `text` (case-insensitive)."""
    needle = text.lower()
    results: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(Path(root).expanduser()):
        dirnames.sort()
        for name in sorted(dirnames + filenames):
            if needle in name.lower():
                results.append(Path(dirpath) / name)
    return results
