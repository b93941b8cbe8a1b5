"""FastAPI server exposing the read-only leaderboard endpoints."""

from __future__ import annotations

import logging
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel
import uvicorn

from geocraft.constants.about import APP_NAME, APP_VERSION
from geocraft.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from geocraft.core.game_manager import GameManager

logger = logging.getLogger(__name__)


class LeaderboardRowModel(BaseModel):
    rank: int
    username: str
    high_score: int


class LeaderboardPageModel(BaseModel):
    """One page of the ranking; ranks continue across pages."""

    page: int
    rows: list[LeaderboardRowModel]
    has_previous: bool
    has_next: bool
    total_players: int


class PlayerStatsModel(BaseModel):
    """Public account figures. The password column is never exposed."""

    username: str
    games_played: int
    accuracy: float
    high_score: int
    has_saved_game: bool


def _get_game_manager_dependency(game_manager: GameManager):
    def dependency() -> GameManager:
        return game_manager

    return dependency


def create_api_app(game_manager: GameManager) -> FastAPI:
    """Create a FastAPI application wired to the provided game manager."""
    app = FastAPI(title=f"{APP_NAME} Leaderboard", version=APP_VERSION)
    game_manager_dep = _get_game_manager_dependency(game_manager)

    @app.get("/leaderboard", response_model=LeaderboardPageModel)
    def get_leaderboard(
        page: int = Query(0, ge=0),
        manager: GameManager = Depends(game_manager_dep),
    ) -> LeaderboardPageModel:
        leaderboard_page = manager.get_leaderboard_page(page)
        return LeaderboardPageModel(
            page=leaderboard_page.page,
            rows=[
                LeaderboardRowModel(rank=row.rank, username=row.username, high_score=row.high_score)
                for row in leaderboard_page.rows
            ],
            has_previous=leaderboard_page.has_previous,
            has_next=leaderboard_page.has_next,
            total_players=leaderboard_page.total_players,
        )

    @app.get("/players/{username}", response_model=PlayerStatsModel)
    def get_player(
        username: str,
        manager: GameManager = Depends(game_manager_dep),
    ) -> PlayerStatsModel:
        record = manager.get_player_record(username)
        if record is None:
            raise HTTPException(status_code=404, detail=f"Unknown player: {username}")
        return PlayerStatsModel(
            username=record.username,
            games_played=record.games_played,
            accuracy=record.accuracy,
            high_score=record.high_score,
            has_saved_game=record.saved_game,
        )

    return app


def start_api_server(
    game_manager: GameManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(game_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="GeocraftApiServer", daemon=True)
    thread.start()
    logger.info("Leaderboard API listening on http://%s:%d/", host, port)
    return thread
