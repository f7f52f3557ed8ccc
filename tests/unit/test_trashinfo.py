from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pytest

from rrm.services.errors import ConflictError
from rrm.services.trashinfo import (
    format_trashinfo,
    parse_trashinfo,
    read_trashinfo,
    record_metadata,
    write_trashinfo,
)

WHEN = datetime(2025, 5, 28, 14, 3, 9)


def test_format_trashinfo_layout() -> None:
    assert format_trashinfo(Path("/a/b/c.txt"), WHEN) == (
        "[Trash Info]\nPath=/a/b/c.txt\nDeletionDate=2025-05-28T14:03:09\n"
    )


def test_format_trashinfo_percent_encodes_path() -> None:
    body = format_trashinfo("/home/me/My Notes/100%.txt", WHEN)
    assert "Path=/home/me/My%20Notes/100%25.txt\n" in body


def test_undecodable_path_survives_a_round_trip() -> None:
    original = os.fsdecode(b"/home/me/caf\xe9.txt")

    body = format_trashinfo(original, WHEN)

    assert "Path=/home/me/caf%E9.txt\n" in body
    assert parse_trashinfo(body).path == original


def test_non_ascii_path_is_utf8_encoded() -> None:
    body = format_trashinfo("/home/me/café.txt", WHEN)
    assert "Path=/home/me/caf%C3%A9.txt\n" in body


def test_parse_decodes_path_and_ignores_other_sections() -> None:
    text = (
        "# comment\n"
        "[Other]\nPath=/wrong\n"
        "[Trash Info]\n"
        "Path=/home/me/My%20Notes/a.txt\n"
        "DeletionDate=2025-05-28T14:03:09\n"
    )
    info = parse_trashinfo(text)
    assert info.path == "/home/me/My Notes/a.txt"
    assert info.deletion_date == WHEN


@pytest.mark.parametrize(
    "text",
    [
        "",
        "[Trash Info]\nPath=/x\n",
        "[Trash Info]\nDeletionDate=2025-05-28T14:03:09\n",
        "[Trash Info]\nPath=/x\nDeletionDate=yesterday\n",
    ],
)
def test_read_trashinfo_malformed_returns_none(tmp_path: Path, text: str) -> None:
    path = tmp_path / "bad.trashinfo"
    path.write_text(text)
    assert read_trashinfo(path) is None


def test_read_trashinfo_missing_returns_none(tmp_path: Path) -> None:
    assert read_trashinfo(tmp_path / "absent.trashinfo") is None


def test_write_trashinfo_creates_info_root(tmp_path: Path) -> None:
    info_root = tmp_path / "Trash" / "info"

    path = write_trashinfo(info_root, Path("/a/b/c.txt"), "c.txt", WHEN)

    assert path == info_root / "c.txt.trashinfo"
    info = read_trashinfo(path)
    assert info is not None
    assert info.path == "/a/b/c.txt"
    assert info.deletion_date == WHEN


def test_write_trashinfo_never_overwrites_a_record(tmp_path: Path) -> None:
    stale = tmp_path / "c.txt.trashinfo"
    stale.write_text("stale")

    with pytest.raises(ConflictError):
        write_trashinfo(tmp_path, Path("/a/c.txt"), "c.txt", WHEN)

    assert stale.read_text() == "stale"


def test_write_trashinfo_fills_reserved_placeholder(tmp_path: Path) -> None:
    (tmp_path / "c.txt.trashinfo").touch()

    path = write_trashinfo(tmp_path, Path("/a/c.txt"), "c.txt", WHEN, reserved=True)

    info = read_trashinfo(path)
    assert info is not None and info.path == "/a/c.txt"


def test_record_metadata_success(tmp_path: Path) -> None:
    outcome = record_metadata(tmp_path, Path("/a/c.txt"), "c.txt", WHEN)
    assert outcome.ok
    assert outcome.info_path == tmp_path / "c.txt.trashinfo"


def test_record_metadata_downgrades_failures(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    outcome = record_metadata(blocker / "info", Path("/a/c.txt"), "c.txt", WHEN)

    assert not outcome.ok
    assert outcome.info_path is None
    assert isinstance(outcome.error, OSError)


def test_record_metadata_downgrades_trash_errors(tmp_path: Path) -> None:
    (tmp_path / "c.txt.trashinfo").write_text("stale")

    outcome = record_metadata(tmp_path, Path("/a/c.txt"), "c.txt", WHEN)

    assert isinstance(outcome.error, ConflictError)
