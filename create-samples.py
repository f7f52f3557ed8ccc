"""Create a populated sample trash for trying out ``rrm-gui`` and ``rrm --view-trash``.

This utility mirrors the integration-test fixture and is helpful for manual QA
or demonstrations. Usage examples:

    uv run --extra dev python create-samples.py
    uv run --extra dev python create-samples.py --output ./temp/home --force
    HOME=./temp/home uv run rrm --view-trash
    uv run rrm-gui --home ./temp/home

The ``--extra dev`` flag ensures optional development dependencies are available.
"""

from __future__ import annotations

import argparse
import shutil
from pathlib import Path
from typing import Protocol, cast

from rrm.services.config import TrashStore
from rrm.services.relocator import RelocationOptions, RelocationRequest, TrashRelocator
from rrm.workers.batch_executor import run_batch
from tests.integration.test_trash_lifecycle import fixture_sample_tree

# Everything the fixture creates except the links, which rrm unlinks instead of trashing.
_TRASHABLE = [
    "notes.txt",
    ".bashrc",
    "backup.tar.gz",
    "with space.md",
    "alpha/notes.txt",
    "beta/notes.txt",
    "gamma/notes.txt",
    "project",
]


def create_samples(destination: Path, *, force: bool) -> TrashStore:
    """Create a fake home at ``destination`` whose trash holds the sample tree.

    Args:
        destination: Directory used as the home directory.
        force: If True, overwrite the destination when it already exists.

    Returns:
        The trash store that was populated.
    """
    if destination.exists():
        if not force:
            raise FileExistsError(
                f"Destination {destination} already exists. Use --force to overwrite."
            )
        shutil.rmtree(destination)

    destination.mkdir(parents=True, exist_ok=True)

    class _SampleTreeFactory(Protocol):
        def __call__(self, *, tmp_path: Path) -> Path: ...

    factory = cast(_SampleTreeFactory, getattr(fixture_sample_tree, "__wrapped__", None))
    if factory is None:
        raise RuntimeError("fixture_sample_tree.__wrapped__ is unavailable.")
    samples = factory(tmp_path=destination)

    store = TrashStore.from_home(destination.resolve())
    store.ensure()
    relocator = TrashRelocator(store, echo=print)
    result = run_batch(
        [str(samples / rel) for rel in _TRASHABLE],
        RelocationOptions(recursive=True, verbose=True),
        relocator,
    )
    for failure in result.failed:
        print(f"Could not trash {failure.source}: {failure.message}")

    # One entry without restore information, to show the "Unknown" placeholder.
    orphan = samples / "orphan.log"
    orphan.write_text("trashed by hand\n")
    orphan.rename(store.files_root / orphan.name)

    # A second draft of notes.txt lands under a suffixed name.
    (samples / "notes.txt").write_text("notes, second draft")
    relocator.relocate(RelocationRequest(source=str(samples / "notes.txt")))

    return store


def main() -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Create a sample home directory with a populated trash.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("./temp/home"),
        help="Directory used as the sample home (default: %(default)s).",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the destination directory if it already exists.",
    )

    args = parser.parse_args()
    store = create_samples(args.output, force=args.force)
    print(f"Created sample trash at {store.base}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
