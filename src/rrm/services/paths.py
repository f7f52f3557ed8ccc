# Filename: paths.py
# Author: Rich Lewis @RichLewis007
# Description: Path expansion and classification for trash requests. Turns user-supplied
#              operands into absolute paths and decides whether each is a file, directory or link.

from __future__ import annotations

import enum
import os
import stat
from dataclasses import dataclass
from pathlib import Path

from .errors import InvalidInputError, NotFoundError


class EntryKind(enum.Enum):
    MISSING = "missing"
    SYMLINK = "symlink"
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class ResolvedSource:
    # A classified operand ready for relocation.

    raw: str
    path: Path
    name: str
    kind: EntryKind


def expand_path(raw: str) -> Path:
    # Expand ``~`` and make the path absolute without following the last component.
    expanded = Path(os.path.expanduser(raw))
    if not expanded.is_absolute():
        expanded = Path.cwd() / expanded
    return Path(os.path.normpath(expanded))


def classify(path: Path) -> EntryKind:
    # lstat so that a link (even a dangling one) is reported as a link.
    try:
        mode = path.lstat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        return EntryKind.MISSING

    if stat.S_ISLNK(mode):
        return EntryKind.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    return EntryKind.FILE


def entry_name(raw: str, path: Path) -> str:
    # Final name component of the operand, as used for the trash entry.
    stripped = raw.rstrip("/")
    candidate = os.path.basename(stripped) if stripped else ""
    if candidate in {"", ".", ".."} or path == Path(path.anchor):
        raise InvalidInputError(
            f"cannot remove '{raw}': path has no file name",
            path=raw,
        )
    return path.name


def resolve_source(raw: str) -> ResolvedSource:
    # Expand, name and classify an operand; a missing path is an error.
    path = expand_path(raw)
    name = entry_name(raw, path)
    kind = classify(path)
    if kind is EntryKind.MISSING:
        raise NotFoundError(
            f"cannot remove '{raw}': No such file or directory",
            path=raw,
        )
    return ResolvedSource(raw=raw, path=path, name=name, kind=kind)


def canonicalize(path: Path) -> Path:
    # Fully resolved absolute path; raises NotFoundError when it cannot be stat'ed.
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise NotFoundError(f"cannot canonicalize {path}: {exc}", path=path) from exc
