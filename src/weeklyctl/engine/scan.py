# src/weeklyctl/engine/scan.py

"""
Filesystem scanning utilities.

Discovers task groups: every subdirectory of the store root is a group
holding its own weekly files.

It performs *no parsing* and *no rendering*.
"""

import os
from collections.abc import Iterator
from pathlib import Path


def iter_groups(root: str | Path) -> Iterator[str]:
    """
    Yield group names under `root` in alphabetical order.

    Only directories we can read and write count as groups.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        return

    try:
        entries = sorted(root_path.iterdir(), key=lambda p: p.name)
    except PermissionError:
        # Non-fatal: an unreadable root has no visible groups.
        return

    for entry in entries:
        if not entry.is_dir():
            continue
        if not os.access(entry, os.R_OK | os.W_OK):
            continue
        yield entry.name
