from __future__ import annotations

import csv
from collections.abc import Callable
from pathlib import Path

import pytest

from geocraft.constants.data_constants import CATALOG_COLUMNS, NO_SAVED_SESSION
from geocraft.core.services.account_store import AccountStore, PlayerAccount
from geocraft.core.services.country_catalog import CountryCatalog

CATALOG_ROWS = [
    ("France", "1", "Yes", "Europe", "Yes", "No", "Eiffel Tower\nParis is the capital\nWine\nCheese"),
    ("Peru", "2", "Yes", "Americas", "Yes", "No", "Machu Picchu"),
    ("Japan", "3", "Yes", "Asia", "Yes", "No", ""),
    ("Kenya", "4", "No", "Africa", "Yes", "No", "Nairobi"),
    ("Canada", "5", "Yes", "Americas", "Yes", "No", "Maple leaf"),
    ("Chile", "6", "Yes", "Americas", "Yes", "No", "Andes"),
    ("India", "7", "Yes", "Asia", "No", "No", "Taj Mahal"),
    ("China", "8", "Yes", "Asia", "No", "No", "Great Wall"),
    ("Spain", "9", "Yes", "Europe", "No", "No", "Madrid"),
    ("Monaco", "10", "No", "Europe", "No", "Yes", "Riviera"),
    ("Malta", "11", "No", "Europe", "No", "Yes", "Valletta"),
    ("Nauru", "12", "No", "Oceania", "No", "Yes", "Phosphate"),
]

GLOBAL_NAMES = {"France", "Peru", "Japan", "Kenya", "Canada", "Chile"}


class FakeScheduler:
    """Collects delayed callbacks so tests decide when they fire."""

    def __init__(self) -> None:
        self.pending: list[tuple[int, Callable[[], None]]] = []

    def __call__(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.pending.append((delay_ms, callback))

    def run_pending(self) -> None:
        pending, self.pending = self.pending, []
        for _delay, callback in pending:
            callback()


class MemoryPlayer:
    """In-memory stand-in for PlayerAccount, for loops that would rewrite the CSV thousands of times."""

    def __init__(self, username: str = "alice") -> None:
        self.username = username
        self.high_score = 0
        self.accuracy = 100.0
        self.games_played = 0
        self.saved_session = NO_SAVED_SESSION

    def adjust_high_score(self, delta: int) -> int:
        self.high_score += delta
        return self.high_score


def write_catalog(path: Path, rows=CATALOG_ROWS) -> Path:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(CATALOG_COLUMNS)
        writer.writerows(rows)
    return path


@pytest.fixture
def catalog(tmp_path: Path) -> CountryCatalog:
    return CountryCatalog(write_catalog(tmp_path / "countries.csv"))


@pytest.fixture
def store(tmp_path: Path) -> AccountStore:
    return AccountStore(tmp_path / "database.csv")


@pytest.fixture
def player(store: AccountStore) -> PlayerAccount:
    assert store.register("alice", "secret1").approved
    return PlayerAccount(store, "alice")


@pytest.fixture
def fake_scheduler() -> FakeScheduler:
    return FakeScheduler()
