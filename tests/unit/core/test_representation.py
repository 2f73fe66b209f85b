"""Tests for the file description used as embedding input."""

import os
import sys
from pathlib import Path

import pytest

from meow.core.representation import CONTENT_CAP_BYTES, build_representation


def test_base_sentence_for_unknown_extension(tmp_path: Path) -> None:
    path = tmp_path / "Projects" / "my_data-set.v2.xyz"
    text = build_representation(path, "xyz")
    assert text == "This is a xyz file named my data set v2 located in Projects folder."


def test_pdf_gets_document_hint(tmp_path: Path) -> None:
    text = build_representation(tmp_path / "Downloads" / "hostel_fees.pdf", "pdf")
    assert text.startswith(
        "This is a pdf file named hostel fees located in Downloads folder."
    )
    assert "PDF document" in text


def test_image_hints_follow_stem(tmp_path: Path) -> None:
    text = build_representation(tmp_path / "Pictures" / "Company_Logo.png", "png")
    assert "image or photo" in text
    assert "logo" in text.lower()
    assert "screenshot" not in text

    shot = build_representation(tmp_path / "Screenshot 2024-01-01.jpg", "jpg")
    assert "screenshot of a screen" in shot


def test_installer_hint(tmp_path: Path) -> None:
    text = build_representation(tmp_path / "setup.exe", "exe")
    assert "installer" in text


def test_text_content_is_appended_and_capped(tmp_path: Path) -> None:
    note = tmp_path / "notes.txt"
    note.write_text("hostel fees due friday " * 1000)
    text = build_representation(note, "txt")
    assert "text document" in text
    assert "hostel fees due friday" in text
    base = build_representation(tmp_path / "missing.txt", "txt")
    assert len(text) - len(base) <= CONTENT_CAP_BYTES + 1


def test_missing_text_file_is_not_an_error(tmp_path: Path) -> None:
    text = build_representation(tmp_path / "gone.md", "md")
    assert text.endswith("It is a text document with written notes or content.")


@pytest.mark.skipif(
    sys.platform == "win32" or os.geteuid() == 0,
    reason="permission bits are not enforced",
)
def test_unreadable_content_is_ignored(tmp_path: Path) -> None:
    secret = tmp_path / "secret.json"
    secret.write_text('{"token": "abc"}')
    secret.chmod(0)
    try:
        text = build_representation(secret, "json")
    finally:
        secret.chmod(0o600)
    assert "token" not in text


def test_deterministic(tmp_path: Path) -> None:
    path = tmp_path / "a-b.log"
    path.write_text("line")
    assert build_representation(path, "log") == build_representation(path, "log")
