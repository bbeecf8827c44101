# tests/conftest.py

from __future__ import annotations

import pytest

from board import Board
from storage import MemoryMedium, TaskStore

TODAY = "2025-01-01"


@pytest.fixture()
def medium() -> MemoryMedium:
    return MemoryMedium()


@pytest.fixture()
def store(medium: MemoryMedium) -> TaskStore:
    store = TaskStore(medium)
    store.load()
    return store


@pytest.fixture()
def board(store: TaskStore) -> Board:
    """Board with a fixed clock so overdue checks do not depend on the real date."""
    return Board(store, today=lambda: TODAY)
