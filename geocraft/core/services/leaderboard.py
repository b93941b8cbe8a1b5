"""Service for paging through the high score ranking."""

from __future__ import annotations

from dataclasses import dataclass

from geocraft.constants.game_constants import LEADERBOARD_PAGE_SIZE
from geocraft.core.services.account_store import AccountStore


@dataclass(frozen=True, slots=True)
class LeaderboardRow:
    """Immutable snapshot returned to consumers."""

    rank: int
    username: str
    high_score: int


@dataclass(slots=True)
class LeaderboardPage:
    page: int
    rows: list[LeaderboardRow]
    has_previous: bool
    has_next: bool
    total_players: int


class Leaderboard:
    """Ranks players by the high score kept in the account table."""

    def __init__(self, store: AccountStore, page_size: int = LEADERBOARD_PAGE_SIZE) -> None:
        if page_size <= 0:
            raise ValueError("Page size must be a positive integer.")
        self._store = store
        self._page_size = page_size

    @property
    def page_size(self) -> int:
        return self._page_size

    def get_page(self, page: int) -> LeaderboardPage:
        """Return one page of ranked rows; ranks continue across pages."""
        if page < 0:
            raise ValueError("Page number cannot be negative.")
        rows = self._ranked_rows()
        start = page * self._page_size
        end = start + self._page_size
        return LeaderboardPage(
            page=page,
            rows=rows[start:end],
            has_previous=page > 0,
            has_next=end < len(rows),
            total_players=len(rows),
        )

    def get_top(self, limit: int = 3) -> list[LeaderboardRow]:
        return self._ranked_rows()[:limit]

    def _ranked_rows(self) -> list[LeaderboardRow]:
        return [
            LeaderboardRow(rank=position, username=username, high_score=score)
            for position, (username, score) in enumerate(self._store.ranked_high_scores(), start=1)
        ]
