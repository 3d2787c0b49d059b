# src/weeklyctl/engine/checksum.py

"""
CRC-32 (reflected, polynomial 0xEDB88320).

Results can be chained: pass the previous result as `seed` to continue
the computation over more data, so several files hash as if they were
concatenated. A zero seed starts a fresh computation.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Final

POLY: Final[int] = 0xEDB88320
MASK: Final[int] = 0xFFFFFFFF

_CHUNK_SIZE: Final[int] = 64 * 1024


def _make_table() -> tuple[int, ...]:
    table: list[int] = []
    for i in range(256):
        crc = i
        for _ in range(8):
            crc = (crc >> 1) ^ POLY if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_TABLE: Final[tuple[int, ...]] = _make_table()


def crc32(seed: int, data: bytes) -> int:
    """
    Continue a CRC-32 computation from `seed` over `data`.
    """
    crc = (seed ^ MASK) if seed else MASK
    for byte in data:
        crc = _TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ MASK


def crc32_file(seed: int, path: str | Path) -> int:
    """
    Continue a CRC-32 computation over the contents of a file.

    A missing file contributes no bytes: the seed is returned unchanged.
    """
    p = Path(path)
    if not p.is_file():
        return seed

    crc = seed
    with p.open("rb") as fh:
        while chunk := fh.read(_CHUNK_SIZE):
            crc = crc32(crc, chunk)
    return crc


def crc32_files(paths: Iterable[str | Path]) -> int:
    """Checksum of several files taken in order, as if concatenated."""
    crc = 0
    for p in paths:
        crc = crc32_file(crc, p)
    return crc
