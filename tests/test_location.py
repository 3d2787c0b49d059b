# tests/test_location.py

from __future__ import annotations

import zlib
from pathlib import Path

import pytest

from weeklyctl.engine.config import StoreConfig
from weeklyctl.engine.errors import ChecksumError
from weeklyctl.engine.location import FileLocation, resolve_location

from .conftest import MONDAY


def test_paths_without_group(store_root: Path) -> None:
    loc = FileLocation(root=store_root, group=None, monday=MONDAY)
    assert loc.todolist_path == store_root / "2024-03-11.todolist"
    assert loc.memo_path == store_root / "2024-03-11.memo"
    assert loc.checksum_path == store_root / "2024-03-11.checksum"


def test_paths_with_group(store_root: Path) -> None:
    loc = FileLocation(root=store_root, group="work", monday=MONDAY)
    assert loc.todolist_path == store_root / "work" / "2024-03-11.todolist"
    assert loc.name == str(store_root / "work" / "2024-03-11")


def test_resolve_creates_root_and_group_dirs(store_root: Path) -> None:
    assert not store_root.exists()
    loc = resolve_location(StoreConfig(root=store_root, group="home"), MONDAY)
    assert (store_root / "home").is_dir()
    assert loc.directory == store_root / "home"


def test_consistent_without_task_list(config: StoreConfig) -> None:
    loc = resolve_location(config, MONDAY)
    loc.memo_path.write_text("memo only\n", encoding="utf-8")
    assert loc.check_consistency() is True


def test_update_is_skipped_without_task_list(config: StoreConfig) -> None:
    loc = resolve_location(config, MONDAY)
    loc.write_memo("memo only\n")
    loc.update_on_changes()
    assert not loc.checksum_path.exists()


def test_update_writes_decimal_crc_of_memo_then_tasks(config: StoreConfig) -> None:
    loc = resolve_location(config, MONDAY)
    loc.write_memo("notes\n")
    loc.write_task_lines(["2024-03-11:A:one", "2024-03-11:C:two"])
    loc.update_on_changes()

    expected = zlib.crc32(b"notes\n2024-03-11:A:one\n2024-03-11:C:two\n")
    assert loc.checksum_path.read_text(encoding="utf-8").strip() == str(expected)
    assert loc.check_consistency() is True


def test_tampering_is_detected(config: StoreConfig) -> None:
    loc = resolve_location(config, MONDAY)
    loc.write_task_lines(["2024-03-11:A:one"])
    loc.update_on_changes()

    loc.todolist_path.write_text("2024-03-11:C:one\n", encoding="utf-8")
    assert loc.check_consistency() is False


def test_memo_change_is_detected(config: StoreConfig) -> None:
    loc = resolve_location(config, MONDAY)
    loc.write_task_lines(["2024-03-11:A:one"])
    loc.update_on_changes()

    loc.write_memo("sneaky")
    assert loc.check_consistency() is False


def test_missing_checksum_with_task_list_is_an_error(config: StoreConfig) -> None:
    loc = resolve_location(config, MONDAY)
    loc.write_task_lines(["2024-03-11:A:one"])

    with pytest.raises(ChecksumError):
        loc.check_consistency()


@pytest.mark.parametrize("content", ["", "abc\n", "-5\n", "99999999999\n"])
def test_unparsable_checksum_is_an_error(config: StoreConfig, content: str) -> None:
    loc = resolve_location(config, MONDAY)
    loc.write_task_lines(["2024-03-11:A:one"])
    loc.checksum_path.write_text(content, encoding="utf-8")

    with pytest.raises(ChecksumError):
        loc.check_consistency()


def test_memo_and_task_io(config: StoreConfig) -> None:
    loc = resolve_location(config, MONDAY)
    assert loc.read_memo() is None
    assert loc.read_task_lines() is None

    loc.write_memo("line 1\nline 2\n")
    loc.write_task_lines(["2024-03-11:A:one"])
    assert loc.read_memo() == "line 1\nline 2\n"
    assert loc.read_task_lines() == ["2024-03-11:A:one"]

    loc.delete_memo()
    loc.delete_memo()  # idempotent
    assert loc.read_memo() is None


def test_task_lines_split_on_newline_only(config: StoreConfig) -> None:
    loc = resolve_location(config, MONDAY)
    loc.todolist_path.write_bytes("2024-03-11:A:a\u2028b\n2024-03-11:A:c\x0cd\n".encode("utf-8"))

    assert loc.read_task_lines() == ["2024-03-11:A:a\u2028b", "2024-03-11:A:c\x0cd"]


def test_memo_is_read_and_written_verbatim(config: StoreConfig) -> None:
    loc = resolve_location(config, MONDAY)
    loc.write_memo("a\r\nb\rc\n")

    assert loc.memo_path.read_bytes() == b"a\r\nb\rc\n"
    assert loc.read_memo() == "a\r\nb\rc\n"
