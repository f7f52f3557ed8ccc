from __future__ import annotations

import errno
import threading
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from rrm.services import relocator as relocator_module
from rrm.services import trashinfo
from rrm.services.config import TrashStore
from rrm.services.errors import CrossDeviceError, InvalidInputError, NotFoundError
from rrm.services.relocator import (
    Outcome,
    RelocationOptions,
    RelocationRequest,
    TrashRelocator,
)

Contents = Callable[[], tuple[list[str], list[str]]]


class Recorder:
    # Scripted confirm/echo collaborator.

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.prompts: list[str] = []
        self.messages: list[str] = []

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answer

    def echo(self, message: str) -> None:
        self.messages.append(message)


def make_relocator(store: TrashStore, recorder: Recorder | None = None) -> TrashRelocator:
    recorder = recorder or Recorder()
    return TrashRelocator(store, confirm=recorder.confirm, echo=recorder.echo)


def request(source: str | Path, **flags: bool) -> RelocationRequest:
    return RelocationRequest(source=str(source), options=RelocationOptions(**flags))


def test_trash_regular_file(store: TrashStore, workdir: Path) -> None:
    source = workdir / "c.txt"
    source.write_text("hello")
    expected_origin = source.resolve()

    before = datetime.now().replace(microsecond=0)
    result = make_relocator(store).relocate(request("c.txt"))
    after = datetime.now()

    assert result.outcome is Outcome.TRASHED
    assert result.entry_name == "c.txt"
    assert result.metadata_error is None
    assert not source.exists()
    assert (store.files_root / "c.txt").read_text() == "hello"

    info = trashinfo.read_trashinfo(store.info_root / "c.txt.trashinfo")
    assert info is not None
    assert info.path == str(expected_origin)
    assert before - timedelta(seconds=2) <= info.deletion_date <= after + timedelta(seconds=2)
    assert result.info_path == store.info_root / "c.txt.trashinfo"


def test_trashinfo_body_matches_layout(store: TrashStore, workdir: Path) -> None:
    (workdir / "c.txt").write_text("x")
    relocator = TrashRelocator(store, clock=lambda: datetime(2025, 5, 17, 9, 30, 0))

    relocator.relocate(request(workdir / "c.txt"))

    body = (store.info_root / "c.txt.trashinfo").read_text()
    assert body == (
        "[Trash Info]\n"
        f"Path={workdir.resolve()}/c.txt\n"
        "DeletionDate=2025-05-17T09:30:00\n"
    )


def test_same_name_from_two_places(
    store: TrashStore, workdir: Path, trash_contents: Contents
) -> None:
    for folder in ("one", "two", "three"):
        (workdir / folder).mkdir()
        (workdir / folder / "c.txt").write_text(folder)

    relocator = make_relocator(store)
    names = [
        relocator.relocate(request(f"{folder}/c.txt")).entry_name
        for folder in ("one", "two", "three")
    ]

    assert names == ["c.txt", "c(1).txt", "c(2).txt"]
    files, info = trash_contents()
    assert files == ["c(1).txt", "c(2).txt", "c.txt"]
    assert info == ["c(1).txt.trashinfo", "c(2).txt.trashinfo", "c.txt.trashinfo"]
    assert (store.files_root / "c(1).txt").read_text() == "two"


def test_symlink_is_unlinked_not_trashed(
    store: TrashStore, workdir: Path, trash_contents: Contents
) -> None:
    target = workdir / "target"
    target.mkdir()
    (target / "keep.txt").write_text("keep")
    link = workdir / "link"
    link.symlink_to(target)

    result = make_relocator(store).relocate(request("link"))

    assert result.outcome is Outcome.SYMLINK_REMOVED
    assert not link.is_symlink()
    assert (target / "keep.txt").read_text() == "keep"
    assert trash_contents() == ([], [])


def test_dangling_symlink_is_removed(
    store: TrashStore, workdir: Path, trash_contents: Contents
) -> None:
    link = workdir / "dangling"
    link.symlink_to(workdir / "missing")

    result = make_relocator(store).relocate(request("dangling"))

    assert result.outcome is Outcome.SYMLINK_REMOVED
    assert not link.is_symlink()
    assert trash_contents() == ([], [])


def test_directory_without_recursive_is_untouched(
    store: TrashStore, workdir: Path, trash_contents: Contents
) -> None:
    folder = workdir / "project"
    (folder / "src").mkdir(parents=True)
    (folder / "src" / "main.py").write_text("print('hi')")

    with pytest.raises(InvalidInputError, match="Is a directory"):
        make_relocator(store).relocate(request("project"))

    assert (folder / "src" / "main.py").read_text() == "print('hi')"
    assert trash_contents() == ([], [])


def test_directory_with_recursive(store: TrashStore, workdir: Path) -> None:
    folder = workdir / "project"
    (folder / "src").mkdir(parents=True)
    (folder / "src" / "main.py").write_text("print('hi')")

    result = make_relocator(store).relocate(request("project", recursive=True))

    assert result.outcome is Outcome.TRASHED
    assert not folder.exists()
    assert (store.files_root / "project" / "src" / "main.py").read_text() == "print('hi')"
    assert (store.info_root / "project.trashinfo").is_file()


def test_directory_conflict_gets_suffix(store: TrashStore, workdir: Path) -> None:
    store.ensure()
    (store.files_root / "project").mkdir()
    (store.files_root / "project" / "old.txt").write_text("old")
    (workdir / "project").mkdir()
    (workdir / "project" / "new.txt").write_text("new")

    result = make_relocator(store).relocate(request("project", recursive=True))

    assert result.entry_name == "project(1)"
    assert (store.files_root / "project" / "old.txt").read_text() == "old"
    assert (store.files_root / "project(1)" / "new.txt").read_text() == "new"


@pytest.mark.parametrize(
    "flags",
    [
        {"skip_trash": True},
        {"skip_trash": True, "recursive": True},
        {"skip_trash": True, "recursive": True, "verbose": True, "interactive": True},
    ],
)
def test_skip_trash_never_touches_store(
    store: TrashStore, workdir: Path, trash_contents: Contents, flags: dict[str, bool]
) -> None:
    (workdir / "f.txt").write_text("x")
    folder = workdir / "d"
    folder.mkdir()
    (folder / "inner.txt").write_text("y")

    relocator = make_relocator(store, Recorder(answer=True))
    file_result = relocator.relocate(request("f.txt", **flags))

    assert file_result.outcome is Outcome.DELETED
    assert not (workdir / "f.txt").exists()
    if flags.get("recursive"):
        assert relocator.relocate(request("d", **flags)).outcome is Outcome.DELETED
        assert not folder.exists()
    assert trash_contents() == ([], [])


def test_interactive_decline_leaves_source(
    store: TrashStore, workdir: Path, trash_contents: Contents
) -> None:
    source = workdir / "precious.bin"
    payload = bytes(range(256)) * 4
    source.write_bytes(payload)
    recorder = Recorder(answer=False)

    result = make_relocator(store, recorder).relocate(request("precious.bin", interactive=True))

    assert result.outcome is Outcome.DECLINED
    assert source.read_bytes() == payload
    assert trash_contents() == ([], [])
    assert recorder.prompts == ["move 'precious.bin' to the trash?"]


def test_interactive_accept_moves(store: TrashStore, workdir: Path) -> None:
    (workdir / "a.txt").write_text("a")
    recorder = Recorder(answer=True)

    result = make_relocator(store, recorder).relocate(request("a.txt", interactive=True))

    assert result.outcome is Outcome.TRASHED
    assert len(recorder.prompts) == 1


def test_verbose_reports_item(store: TrashStore, workdir: Path) -> None:
    (workdir / "a.txt").write_text("a")
    recorder = Recorder()

    make_relocator(store, recorder).relocate(request("a.txt", verbose=True))

    assert recorder.messages == ["trashed 'a.txt' -> a.txt"]


def test_missing_source(store: TrashStore, workdir: Path) -> None:
    with pytest.raises(NotFoundError):
        make_relocator(store).relocate(request("ghost.txt"))


def test_metadata_failure_does_not_block_move(
    store: TrashStore, workdir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (workdir / "a.txt").write_text("a")

    def broken(*_args: object, **_kwargs: object) -> Path:
        raise PermissionError(errno.EACCES, "Permission denied")

    monkeypatch.setattr(trashinfo, "write_trashinfo", broken)

    result = make_relocator(store).relocate(request("a.txt"))

    assert result.outcome is Outcome.TRASHED
    assert isinstance(result.metadata_error, PermissionError)
    assert result.info_path is None
    assert (store.files_root / "a.txt").read_text() == "a"
    assert not (store.info_root / "a.txt.trashinfo").exists()


def test_failed_rename_rolls_back(
    store: TrashStore,
    workdir: Path,
    trash_contents: Contents,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    source = workdir / "a.txt"
    source.write_text("a")

    def cross_device(_src: object, _dst: object) -> None:
        raise OSError(errno.EXDEV, "Invalid cross-device link")

    monkeypatch.setattr(relocator_module.os, "rename", cross_device)

    recorder = Recorder()
    with pytest.raises(CrossDeviceError):
        make_relocator(store, recorder).relocate(request("a.txt", verbose=True))

    monkeypatch.undo()
    assert source.read_text() == "a"
    assert trash_contents() == ([], [])
    assert recorder.messages == []


def test_unexpected_error_while_recording_rolls_back(
    store: TrashStore,
    workdir: Path,
    trash_contents: Contents,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    source = workdir / "a.txt"
    source.write_text("a")

    def explode(*_args: object, **_kwargs: object) -> trashinfo.MetadataOutcome:
        raise RuntimeError("boom")

    monkeypatch.setattr(trashinfo, "record_metadata", explode)

    with pytest.raises(RuntimeError):
        make_relocator(store).relocate(request("a.txt"))

    assert source.read_text() == "a"
    assert trash_contents() == ([], [])


def test_stale_sidecar_keeps_entry_and_record_in_step(
    store: TrashStore, workdir: Path, trash_contents: Contents
) -> None:
    store.ensure()
    (store.info_root / "c.txt.trashinfo").write_text(
        "[Trash Info]\nPath=/elsewhere/c.txt\nDeletionDate=2020-01-01T00:00:00\n"
    )
    (workdir / "c.txt").write_text("fresh")

    result = make_relocator(store).relocate(request("c.txt"))

    assert result.entry_name == "c(1).txt"
    assert result.info_path == store.info_root / "c(1).txt.trashinfo"
    assert trash_contents() == (["c(1).txt"], ["c(1).txt.trashinfo", "c.txt.trashinfo"])
    info = trashinfo.read_trashinfo(store.info_root / "c(1).txt.trashinfo")
    assert info is not None and info.path == str(workdir.resolve() / "c.txt")


def test_concurrent_first_use_creates_roots_once(home: Path, workdir: Path) -> None:
    store = TrashStore.from_home(home)
    assert not store.files_root.exists()
    for name in ("x.txt", "y.txt"):
        (workdir / name).write_text(name)

    relocator = make_relocator(store)
    barrier = threading.Barrier(2)
    errors: list[BaseException] = []

    def run(name: str) -> None:
        barrier.wait()
        try:
            relocator.relocate(request(workdir / name))
        except BaseException as exc:  # pragma: no cover - reported below
            errors.append(exc)

    threads = [threading.Thread(target=run, args=(name,)) for name in ("x.txt", "y.txt")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert sorted(child.name for child in store.files_root.iterdir()) == ["x.txt", "y.txt"]
