# src/weeklyctl/engine/location.py

"""
Weekly file triple and its checksum.

Every week is stored as three sibling files named after its Monday:

    <root>/[<group>/]YYYY-MM-DD.todolist   one task per line
    <root>/[<group>/]YYYY-MM-DD.memo       raw memo text (optional)
    <root>/[<group>/]YYYY-MM-DD.checksum   decimal CRC-32 of memo ++ todolist

The store only talks to these files through the `WeekFiles` protocol,
so it can run against an in-memory double in tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Final, Optional, Protocol

from .checksum import crc32_files
from .config import StoreConfig
from .dates import format_date
from .errors import ChecksumError

logger = logging.getLogger(__name__)

EXT_TODOLIST: Final[str] = ".todolist"
EXT_MEMO: Final[str] = ".memo"
EXT_CHECKSUM: Final[str] = ".checksum"


# ---------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------

class WeekFiles(Protocol):
    """
    What the weekly store needs from its storage.
    """

    @property
    def name(self) -> str: ...

    def check_consistency(self) -> bool: ...

    def update_on_changes(self) -> None: ...

    def read_memo(self) -> Optional[str]: ...

    def write_memo(self, text: str) -> None: ...

    def delete_memo(self) -> None: ...

    def read_task_lines(self) -> Optional[list[str]]: ...

    def write_task_lines(self, lines: list[str]) -> None: ...


# ---------------------------------------------------------------------
# Filesystem implementation
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FileLocation:
    """
    The file triple for one week. `monday` must already be a week start.
    """

    root: Path
    group: Optional[str]
    monday: date

    @property
    def directory(self) -> Path:
        return self.root / self.group if self.group else self.root

    @property
    def basename(self) -> str:
        return format_date(self.monday)

    @property
    def name(self) -> str:
        return str(self.directory / self.basename)

    @property
    def todolist_path(self) -> Path:
        return self.directory / (self.basename + EXT_TODOLIST)

    @property
    def memo_path(self) -> Path:
        return self.directory / (self.basename + EXT_MEMO)

    @property
    def checksum_path(self) -> Path:
        return self.directory / (self.basename + EXT_CHECKSUM)

    # -----------------------------------------------------------------
    # Checksum
    # -----------------------------------------------------------------

    def compute_checksum(self) -> int:
        return crc32_files((self.memo_path, self.todolist_path))

    def read_checksum(self) -> int:
        path = self.checksum_path
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ChecksumError(str(path), f"Cannot read checksum: {e}") from e

        raw = text.strip()
        try:
            value = int(raw)
        except ValueError as e:
            raise ChecksumError(str(path), f"Checksum is not an integer: '{raw}'") from e

        if not 0 <= value <= 0xFFFFFFFF:
            raise ChecksumError(str(path), f"Checksum out of range: {value}")

        return value

    def check_consistency(self) -> bool:
        """
        Return True if the stored checksum matches the files.

        A week without a task list has nothing to check.
        """
        if not self.todolist_path.exists():
            return True

        stored = self.read_checksum()
        actual = self.compute_checksum()
        if stored != actual:
            logger.warning(
                "Checksum mismatch for %s: stored %d, computed %d",
                self.name,
                stored,
                actual,
            )
            return False
        return True

    def update_on_changes(self) -> None:
        """
        Rewrite the checksum file. Skipped while no task list exists.
        """
        if not self.todolist_path.exists():
            return

        value = self.compute_checksum()
        self.checksum_path.write_text(f"{value}\n", encoding="utf-8")
        logger.debug("Checksum %d written to %s", value, self.checksum_path)

    # -----------------------------------------------------------------
    # Memo
    # -----------------------------------------------------------------

    def read_memo(self) -> Optional[str]:
        path = self.memo_path
        if not path.is_file():
            return None
        return _read_exact(path)

    def write_memo(self, text: str) -> None:
        _write_exact(self.memo_path, text)

    def delete_memo(self) -> None:
        self.memo_path.unlink(missing_ok=True)

    # -----------------------------------------------------------------
    # Task list
    # -----------------------------------------------------------------

    def read_task_lines(self) -> Optional[list[str]]:
        """
        Return the task list split on '\\n' only, without the empty tail
        after the final newline.
        """
        path = self.todolist_path
        if not path.is_file():
            return None
        lines = _read_exact(path).split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return lines

    def write_task_lines(self, lines: list[str]) -> None:
        _write_exact(self.todolist_path, "".join(f"{ln}\n" for ln in lines))


# ---------------------------------------------------------------------
# Text I/O
# ---------------------------------------------------------------------

# Decoding raw bytes keeps the text identical to what the checksum covers.

def _read_exact(path: Path) -> str:
    return path.read_bytes().decode("utf-8")


def _write_exact(path: Path, text: str) -> None:
    path.write_bytes(text.encode("utf-8"))


# ---------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------

def resolve_location(config: StoreConfig, monday: date) -> FileLocation:
    """
    Return the file triple for `monday`, creating the store directory
    (and group subdirectory) if needed.
    """
    loc = FileLocation(root=config.root, group=config.group, monday=monday)
    if not loc.directory.is_dir():
        loc.directory.mkdir(parents=True, exist_ok=True)
        logger.info("Created store directory %s", loc.directory)
    return loc
