# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date
from pathlib import Path

import pytest

from weeklyctl.engine import dates
from weeklyctl.engine.config import StoreConfig

# Wednesday; its week starts on Monday 2024-03-11.
TODAY = date(2024, 3, 13)
MONDAY = date(2024, 3, 11)


class Clock:
    """
    Settable replacement for `dates.now`.
    """

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture()
def clock(monkeypatch: pytest.MonkeyPatch) -> Clock:
    """
    Pin "today" for the engine and the CLI.

    Everything reads the current date through `dates.now`, so patching
    that single function freezes editability checks and task dates.
    """
    c = Clock(TODAY)
    monkeypatch.setattr(dates, "now", c)
    return c


@pytest.fixture()
def store_root(tmp_path: Path) -> Path:
    return tmp_path / "store"


@pytest.fixture()
def config(store_root: Path) -> StoreConfig:
    return StoreConfig(root=store_root)


@pytest.fixture()
def restore_root_logger() -> Iterator[None]:
    """Undo handlers installed by setup_logging()."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
