# Filename: naming.py
# Author: Rich Lewis @RichLewis007
# Description: Collision-free naming inside trash directories. Generates ``name(1).ext`` style
#              candidates and claims one atomically so concurrent removals never share a slot.

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Final

from .errors import ConflictError, from_os_error

logger = logging.getLogger(__name__)

MAX_CANDIDATES: Final[int] = 10_000


def split_name(name: str) -> tuple[str, str]:
    """Split ``name`` into stem and extension (extension keeps its dot).

    A leading dot is part of the stem, so ``.bashrc`` has no extension and
    ``archive.tar.gz`` splits into ``archive.tar`` and ``.gz``.
    """
    index = name.rfind(".")
    if index <= 0:
        return name, ""
    return name[:index], name[index:]


def candidate_names(name: str, *, limit: int = MAX_CANDIDATES) -> Iterator[str]:
    # Yield ``name`` followed by ``stem(1)ext``, ``stem(2)ext``, ...
    yield name
    stem, ext = split_name(name)
    for counter in range(1, limit):
        yield f"{stem}({counter}){ext}"


def resolve_conflict(directory: Path, name: str, *, limit: int = MAX_CANDIDATES) -> str:
    # Return the first candidate not currently present in ``directory``.
    for candidate in candidate_names(name, limit=limit):
        if not os.path.lexists(directory / candidate):
            return candidate
    raise ConflictError(
        f"no free name for '{name}' in {directory} after {limit} attempts",
        path=directory / name,
    )


def _reserve(path: Path, *, as_directory: bool) -> None:
    # Atomically create an empty placeholder; FileExistsError if taken.
    if as_directory:
        os.mkdir(path, 0o700)
        return
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    os.close(fd)


def claim_pair(
    files_dir: Path,
    info_dir: Path,
    name: str,
    *,
    sidecar_suffix: str,
    as_directory: bool = False,
    limit: int = MAX_CANDIDATES,
) -> tuple[str, bool]:
    """Reserve an entry name in ``files_dir`` together with its sidecar in ``info_dir``.

    A candidate whose sidecar name is already held (for example by a stale
    record) is released and skipped, so an entry and its sidecar always share
    a stem. Returns the entry name and whether the sidecar placeholder was
    created. When ``info_dir`` refuses the placeholder for another reason the
    entry stays claimed and the flag is False.
    """
    for candidate in candidate_names(name, limit=limit):
        target = files_dir / candidate
        try:
            _reserve(target, as_directory=as_directory)
        except FileExistsError:
            continue
        except OSError as exc:
            raise from_os_error(exc, target) from exc

        sidecar = info_dir / f"{candidate}{sidecar_suffix}"
        try:
            _reserve(sidecar, as_directory=False)
        except FileExistsError:
            logger.debug("Sidecar %s already exists, skipping %s", sidecar, candidate)
            release_name(files_dir, candidate)
            continue
        except OSError as exc:
            logger.info("Could not reserve %s: %s", sidecar, exc)
            return candidate, False
        if candidate != name:
            logger.debug("Name %s taken in %s, using %s", name, files_dir, candidate)
        return candidate, True
    raise ConflictError(
        f"no free name for '{name}' in {files_dir} after {limit} attempts",
        path=files_dir / name,
    )


def release_name(directory: Path, name: str) -> None:
    # Remove a placeholder created by claim_pair; missing is fine.
    target = directory / name
    try:
        if target.is_dir() and not target.is_symlink():
            target.rmdir()
        else:
            target.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not release placeholder %s: %s", target, exc)


__all__ = [
    "MAX_CANDIDATES",
    "candidate_names",
    "claim_pair",
    "release_name",
    "resolve_conflict",
    "split_name",
]
