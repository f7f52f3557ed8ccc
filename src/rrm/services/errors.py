# Filename: errors.py
# Author: Rich Lewis @RichLewis007
# Description: Exception hierarchy for trash operations. Each error names the path it concerns
#              so per-item failures can be reported without extra bookkeeping.

from __future__ import annotations

import errno
from pathlib import Path


class TrashError(Exception):
    # Base class for every failure raised by the trash engine.

    def __init__(self, message: str, *, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class NotFoundError(TrashError):
    # Source path (or home directory, or trash entry) does not exist.
    pass


class InvalidInputError(TrashError):
    # Request is malformed: no filename component, or a directory without -r.
    pass


class PermissionDeniedError(TrashError):
    # The filesystem refused the operation.
    pass


class TrashIOError(TrashError):
    # Any other filesystem failure.
    pass


class CrossDeviceError(TrashIOError):
    # Source and trash live on different filesystems, so rename cannot be atomic.
    pass


class ConflictError(TrashError):
    # No free destination name could be found.
    pass


class ConfigurationError(TrashError):
    # Fatal for the whole run: no home directory or an uncreatable trash root.
    pass


def from_os_error(exc: OSError, path: Path | str) -> TrashError:
    # Map an OSError onto the matching TrashError subclass.
    reason = exc.strerror or str(exc)
    if exc.errno == errno.EXDEV:
        return CrossDeviceError(
            f"cannot move across filesystems: {reason}",
            path=path,
        )
    if isinstance(exc, FileNotFoundError):
        return NotFoundError(reason, path=path)
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(reason, path=path)
    return TrashIOError(reason, path=path)


__all__ = [
    "ConfigurationError",
    "ConflictError",
    "CrossDeviceError",
    "InvalidInputError",
    "NotFoundError",
    "PermissionDeniedError",
    "TrashError",
    "TrashIOError",
    "from_os_error",
]
