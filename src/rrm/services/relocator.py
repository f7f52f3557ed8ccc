# Filename: relocator.py
# Author: Rich Lewis @RichLewis007
# Description: Moves a single filesystem entry into the trash. Handles symlinks, the directory
#              guard, permanent deletion, confirmation, metadata recording and the final rename.

from __future__ import annotations

import enum
import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from . import naming, paths, trashinfo
from .config import TrashStore
from .errors import InvalidInputError, NotFoundError, from_os_error
from .prompt import confirm as default_confirm

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]
EchoFn = Callable[[str], None]


class Outcome(enum.Enum):
    TRASHED = "trashed"
    SYMLINK_REMOVED = "symlink-removed"
    DELETED = "deleted"
    DECLINED = "declined"


@dataclass(frozen=True, slots=True)
class RelocationOptions:
    # Flags shared by every item of a run.

    recursive: bool = False
    skip_trash: bool = False
    interactive: bool = False
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class RelocationRequest:
    source: str
    options: RelocationOptions = field(default_factory=RelocationOptions)


@dataclass(slots=True)
class RelocationResult:
    # What happened to one source path.

    source: str
    outcome: Outcome
    entry_name: str | None = None
    info_path: Path | None = None
    metadata_error: Exception | None = None

    @property
    def trashed(self) -> bool:
        return self.outcome is Outcome.TRASHED


class TrashRelocator:
    """Move entries into a :class:`TrashStore`.

    The relocator holds no per-item state, so one instance can serve every
    worker thread of a batch.
    """

    def __init__(
        self,
        store: TrashStore,
        *,
        confirm: ConfirmFn | None = None,
        echo: EchoFn | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._confirm = confirm or default_confirm
        self._echo = echo or print
        self._clock = clock

    @property
    def store(self) -> TrashStore:
        return self._store

    def relocate(self, request: RelocationRequest) -> RelocationResult:
        # Run the full decision sequence for one source path.
        options = request.options
        self._store.ensure()

        source = paths.resolve_source(request.source)
        logger.debug("Classified %s as %s", source.path, source.kind.value)

        if source.kind is paths.EntryKind.SYMLINK:
            return self._remove_symlink(source, options)

        is_dir = source.kind is paths.EntryKind.DIRECTORY
        if is_dir and not options.recursive:
            raise InvalidInputError(
                f"cannot remove '{source.raw}': Is a directory",
                path=source.raw,
            )

        if options.skip_trash:
            return self._delete_permanently(source, options)

        if options.interactive and not self._confirm(self._question(source)):
            logger.info("Kept %s (declined)", source.path)
            return RelocationResult(source=source.raw, outcome=Outcome.DECLINED)

        return self._move_to_trash(source, options, is_dir=is_dir)

    # ------------------------------------------------------------------
    # Branches

    def _remove_symlink(
        self, source: paths.ResolvedSource, options: RelocationOptions
    ) -> RelocationResult:
        # The link itself is removed; its target is never touched.
        if options.interactive and not self._confirm(f"remove symbolic link '{source.raw}'?"):
            return RelocationResult(source=source.raw, outcome=Outcome.DECLINED)
        try:
            source.path.unlink()
        except OSError as exc:
            raise from_os_error(exc, source.raw) from exc
        if options.verbose:
            self._echo(f"removed symbolic link '{source.raw}'")
        logger.info("Removed symbolic link %s", source.path)
        return RelocationResult(source=source.raw, outcome=Outcome.SYMLINK_REMOVED)

    def _delete_permanently(
        self, source: paths.ResolvedSource, options: RelocationOptions
    ) -> RelocationResult:
        if options.interactive and not self._confirm(
            f"permanently delete '{source.raw}'?"
        ):
            return RelocationResult(source=source.raw, outcome=Outcome.DECLINED)
        try:
            if source.kind is paths.EntryKind.DIRECTORY:
                shutil.rmtree(source.path)
            else:
                source.path.unlink()
        except OSError as exc:
            raise from_os_error(exc, source.raw) from exc
        if options.verbose:
            self._echo(f"removed '{source.raw}'")
        logger.info("Permanently deleted %s", source.path)
        return RelocationResult(source=source.raw, outcome=Outcome.DELETED)

    def _move_to_trash(
        self,
        source: paths.ResolvedSource,
        options: RelocationOptions,
        *,
        is_dir: bool,
    ) -> RelocationResult:
        files_root = self._store.files_root
        info_root = self._store.info_root
        entry, reserved = naming.claim_pair(
            files_root,
            info_root,
            source.name,
            sidecar_suffix=trashinfo.INFO_SUFFIX,
            as_directory=is_dir,
        )
        destination = files_root / entry
        sidecar = info_root / trashinfo.info_name(entry)

        # Every exit short of a completed rename drops both placeholders.
        moved = False
        try:
            outcome = self._record(source, entry, reserved=reserved)
            if reserved and outcome.info_path is None:
                trashinfo.remove_trashinfo(sidecar)
            try:
                os.rename(source.path, destination)
            except OSError as exc:
                raise from_os_error(exc, source.raw) from exc
            moved = True
        finally:
            if not moved:
                naming.release_name(files_root, entry)
                if reserved:
                    trashinfo.remove_trashinfo(sidecar)

        if options.verbose:
            self._echo(f"trashed '{source.raw}' -> {entry}")
        logger.info("Moved %s to %s", source.path, destination)
        return RelocationResult(
            source=source.raw,
            outcome=Outcome.TRASHED,
            entry_name=entry,
            info_path=outcome.info_path,
            metadata_error=outcome.error,
        )

    def _record(
        self, source: paths.ResolvedSource, entry: str, *, reserved: bool
    ) -> trashinfo.MetadataOutcome:
        # Canonicalize and write the sidecar; both failures downgrade to a warning.
        try:
            original = paths.canonicalize(source.path)
        except NotFoundError as exc:
            logger.info("Skipping metadata for %s: %s", source.raw, exc)
            return trashinfo.MetadataOutcome(error=exc)
        return trashinfo.record_metadata(
            self._store.info_root, original, entry, self._clock(), reserved=reserved
        )

    @staticmethod
    def _question(source: paths.ResolvedSource) -> str:
        if source.kind is paths.EntryKind.DIRECTORY:
            return f"move directory '{source.raw}' to the trash?"
        return f"move '{source.raw}' to the trash?"


def relocate(
    source: str,
    store: TrashStore,
    options: RelocationOptions | None = None,
) -> RelocationResult:
    # Convenience wrapper for a single non-interactive call.
    request = RelocationRequest(source=source, options=options or RelocationOptions())
    return TrashRelocator(store).relocate(request)


__all__ = [
    "Outcome",
    "RelocationOptions",
    "RelocationRequest",
    "RelocationResult",
    "TrashRelocator",
    "relocate",
]
