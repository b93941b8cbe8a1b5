from __future__ import annotations

import dataclasses

import pytest

from geocraft.core.services.leaderboard import Leaderboard


@pytest.fixture
def ranked_store(store):
    for name, score in (("anna", 15), ("bert", 40), ("carl", 5), ("dora", 25), ("emil", -3)):
        store.register(name, "secret1")
        store.set_high_score(name, score)
    return store


def test_first_page(ranked_store):
    page = Leaderboard(ranked_store, page_size=2).get_page(0)
    assert [(row.rank, row.username, row.high_score) for row in page.rows] == [
        (1, "bert", 40),
        (2, "dora", 25),
    ]
    assert not page.has_previous
    assert page.has_next
    assert page.total_players == 5


def test_last_page_continues_ranks(ranked_store):
    page = Leaderboard(ranked_store, page_size=2).get_page(2)
    assert [(row.rank, row.username) for row in page.rows] == [(5, "emil")]
    assert page.has_previous
    assert not page.has_next


def test_page_past_the_end_is_empty(ranked_store):
    page = Leaderboard(ranked_store, page_size=2).get_page(9)
    assert page.rows == []
    assert not page.has_next


def test_default_page_size_fits_all_five(ranked_store):
    page = Leaderboard(ranked_store).get_page(0)
    assert len(page.rows) == 5
    assert not page.has_next


def test_top_players(ranked_store):
    assert [row.username for row in Leaderboard(ranked_store).get_top(3)] == ["bert", "dora", "anna"]


def test_invalid_arguments(ranked_store):
    with pytest.raises(ValueError):
        Leaderboard(ranked_store, page_size=0)
    with pytest.raises(ValueError):
        Leaderboard(ranked_store).get_page(-1)


def test_page_reads_the_table_once(ranked_store, monkeypatch):
    reads = []
    original = ranked_store._read_rows

    def counting_read():
        reads.append(1)
        return original()

    monkeypatch.setattr(ranked_store, "_read_rows", counting_read)
    page = Leaderboard(ranked_store, page_size=3).get_page(0)
    assert [row.high_score for row in page.rows] == [40, 25, 15]
    assert len(reads) == 1


def test_rows_are_frozen(ranked_store):
    row = Leaderboard(ranked_store).get_top(1)[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        row.high_score = 0
