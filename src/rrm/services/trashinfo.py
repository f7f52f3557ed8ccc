# Filename: trashinfo.py
# Author: Rich Lewis @RichLewis007
# Description: Reading and writing ``.trashinfo`` sidecar files. Records the original path and
#              deletion time of each trashed entry in the freedesktop trash format.

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Final
from urllib.parse import quote, unquote_to_bytes

from .errors import ConflictError, TrashError, from_os_error

logger = logging.getLogger(__name__)

INFO_SUFFIX: Final[str] = ".trashinfo"
HEADER: Final[str] = "[Trash Info]"
DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S"


@dataclass(frozen=True, slots=True)
class TrashInfo:
    # Parsed content of one sidecar.

    path: str
    deletion_date: datetime


@dataclass(frozen=True, slots=True)
class MetadataOutcome:
    # Result of a best-effort metadata write: exactly one field is set.

    info_path: Path | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def info_name(entry_name: str) -> str:
    return f"{entry_name}{INFO_SUFFIX}"


def format_trashinfo(original: Path | str, deleted_at: datetime) -> str:
    # Render the sidecar body; the path bytes are percent-encoded with ``/`` kept literal.
    encoded = quote(os.fsencode(str(original)), safe="/")
    return (
        f"{HEADER}\n"
        f"Path={encoded}\n"
        f"DeletionDate={deleted_at.strftime(DATE_FORMAT)}\n"
    )


def parse_trashinfo(text: str) -> TrashInfo:
    # Parse a sidecar body; raise ValueError when a required field is missing or invalid.
    fields: dict[str, str] = {}
    in_section = False
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("["):
            in_section = line == HEADER
            continue
        if not in_section or "=" not in line:
            continue
        key, _, value = line.partition("=")
        fields.setdefault(key.strip(), value.strip())

    if "Path" not in fields or "DeletionDate" not in fields:
        raise ValueError("trashinfo record is missing Path or DeletionDate")
    return TrashInfo(
        path=os.fsdecode(unquote_to_bytes(fields["Path"])),
        deletion_date=datetime.strptime(fields["DeletionDate"], DATE_FORMAT),
    )


def read_trashinfo(path: Path) -> TrashInfo | None:
    # Load a sidecar, returning None when it is absent or malformed.
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Unreadable trashinfo %s: %s", path, exc)
        return None
    try:
        return parse_trashinfo(text)
    except ValueError as exc:
        logger.debug("Malformed trashinfo %s: %s", path, exc)
        return None


def write_trashinfo(
    info_root: Path,
    original: Path | str,
    entry_name: str,
    deleted_at: datetime | None = None,
    *,
    reserved: bool = False,
) -> Path:
    """Write ``<entry_name>.trashinfo`` under ``info_root`` and return its path.

    The sidecar is created exclusively, so an existing record is never
    overwritten (ConflictError). Pass ``reserved`` when the caller already
    holds an empty placeholder for that name.
    """
    if deleted_at is None:
        deleted_at = datetime.now()
    info_root.mkdir(parents=True, exist_ok=True)

    target = info_root / info_name(entry_name)
    body = format_trashinfo(original, deleted_at)
    try:
        with open(target, "w" if reserved else "x", encoding="utf-8") as handle:
            handle.write(body)
            handle.flush()
            os.fsync(handle.fileno())
    except FileExistsError as exc:
        raise ConflictError(f"{target} already exists", path=target) from exc
    except OSError as exc:
        remove_trashinfo(target)
        raise from_os_error(exc, target) from exc

    logger.debug("Wrote %s for %s", target, original)
    return target


def record_metadata(
    info_root: Path,
    original: Path | str,
    entry_name: str,
    deleted_at: datetime | None = None,
    *,
    reserved: bool = False,
) -> MetadataOutcome:
    # Best-effort write: failures come back on the outcome instead of raising.
    try:
        path = write_trashinfo(info_root, original, entry_name, deleted_at, reserved=reserved)
    except (OSError, TrashError) as exc:
        logger.info("Could not record trash metadata for %s: %s", original, exc)
        return MetadataOutcome(error=exc)
    return MetadataOutcome(info_path=path)


def remove_trashinfo(info_path: Path) -> None:
    # Delete a sidecar; used for rollback and restore.
    try:
        info_path.unlink()
    except FileNotFoundError:
        pass


__all__ = [
    "DATE_FORMAT",
    "INFO_SUFFIX",
    "MetadataOutcome",
    "TrashInfo",
    "format_trashinfo",
    "info_name",
    "parse_trashinfo",
    "read_trashinfo",
    "record_metadata",
    "remove_trashinfo",
    "write_trashinfo",
]
