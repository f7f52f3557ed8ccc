"""Shared fixtures: an isolated home directory, its trash store and a working directory."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from rrm.services.config import TrashStore


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    # The CLI reconfigures the root logger; put it back after each test.
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(name="home")
def fixture_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A throwaway home directory that ``Path.home()`` and ``~`` resolve to."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("XDG_STATE_HOME", "XDG_DATA_HOME", "XDG_CONFIG_HOME", "XDG_CACHE_HOME"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture(name="store")
def fixture_store(home: Path) -> TrashStore:
    return TrashStore.from_home(home)


@pytest.fixture(name="workdir")
def fixture_workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Directory holding the files under test; also the current directory."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


@pytest.fixture(name="trash_contents")
def fixture_trash_contents(store: TrashStore) -> Callable[[], tuple[list[str], list[str]]]:
    """Return a callable listing the sorted names under (files, info)."""

    def names(directory: Path) -> list[str]:
        if not directory.is_dir():
            return []
        return sorted(child.name for child in directory.iterdir())

    def contents() -> tuple[list[str], list[str]]:
        return names(store.files_root), names(store.info_root)

    return contents
