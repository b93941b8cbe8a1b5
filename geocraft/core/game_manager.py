"""Business logic shared between the Qt UI and the leaderboard API."""

from __future__ import annotations

from collections.abc import Callable
import logging
import random
from threading import RLock

from geocraft.constants.game_constants import (
    CONTINENTAL_UNLOCK_SCORE,
    CONTINENTS,
    CREDENTIAL_MAX_LENGTH,
    CREDENTIAL_MIN_LENGTH,
    MICRO_NATION_UNLOCK_SCORE,
)
from geocraft.constants.data_constants import NO_SAVED_SESSION
from geocraft.core.errors import ModeLockedError, NoActiveSessionError, NotLoggedInError, SessionDecodeError
from geocraft.core.models import (
    AccountRecord,
    ChoiceOutcome,
    GameMode,
    GameType,
    RegistrationResult,
    RoundView,
    SessionSummary,
)
from geocraft.core.services.account_store import AccountStore, PlayerAccount
from geocraft.core.services.country_catalog import CountryCatalog
from geocraft.core.services.leaderboard import Leaderboard, LeaderboardPage, LeaderboardRow
from geocraft.core.services.session_engine import QuizSessionEngine, Scheduler, run_immediately
from geocraft.core.session_codec import has_saved_session

logger = logging.getLogger(__name__)

_UNLOCK_SCORES: dict[GameMode, int] = {
    GameMode.CONTINENTAL: CONTINENTAL_UNLOCK_SCORE,
    GameMode.MICRO_NATION: MICRO_NATION_UNLOCK_SCORE,
}


class GameManager:
    """Facade for game services: Catalog, AccountStore, Leaderboard and the session engine."""

    def __init__(
        self,
        store: AccountStore | None = None,
        catalog: CountryCatalog | None = None,
        *,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._lock = RLock()

        # Services
        self._store = store or AccountStore()
        self._catalog = catalog or CountryCatalog()
        self._leaderboard = Leaderboard(self._store)
        self._scheduler = scheduler or run_immediately
        self._rng = rng

        self._player: PlayerAccount | None = None
        self._engine: QuizSessionEngine | None = None
        self._listeners: list[Callable[[], None]] = []

    # --- Accounts ---

    def register(self, username: str, password: str) -> RegistrationResult:
        with self._lock:
            return self._store.register(username, password)

    def login(self, username: str, password: str) -> bool:
        with self._lock:
            if not self._store.authenticate(username, password):
                logger.info("Rejected login for %s", username)
                return False
            self._engine = None
            self._player = PlayerAccount(self._store, username)
            logger.info("Player %s logged in", username)
            return True

    def logout(self) -> None:
        with self._lock:
            self._engine = None
            self._player = None

    def is_logged_in(self) -> bool:
        with self._lock:
            return self._player is not None

    def get_current_username(self) -> str | None:
        with self._lock:
            return self._player.username if self._player else None

    def change_password(self, old_password: str, new_password: str, confirm_password: str) -> bool:
        with self._lock:
            player = self._require_player()
            if not self._store.authenticate(player.username, old_password):
                return False
            if new_password != confirm_password:
                return False
            if not CREDENTIAL_MIN_LENGTH <= len(new_password) <= CREDENTIAL_MAX_LENGTH:
                return False
            self._store.set_password(player.username, new_password)
            logger.info("Password changed for %s", player.username)
            return True

    def get_player_record(self, username: str | None = None) -> AccountRecord | None:
        with self._lock:
            if username is None:
                username = self._require_player().username
            return self._store.get_record(username)

    # --- Mode selection ---

    def get_continents(self) -> tuple[str, ...]:
        return CONTINENTS

    def get_unlock_score(self, mode: GameMode) -> int | None:
        return _UNLOCK_SCORES.get(mode)

    def is_mode_unlocked(self, mode: GameMode) -> bool:
        with self._lock:
            return _is_unlocked(self._require_player(), mode)

    # --- Session delegation ---

    def add_state_listener(self, listener: Callable[[], None]) -> None:
        with self._lock:
            self._listeners.append(listener)

    def start_session(
        self,
        mode: GameMode,
        game_type: GameType,
        continent: str | None = None,
    ) -> RoundView:
        with self._lock:
            player = self._require_player()
            if not _is_unlocked(player, mode):
                raise ModeLockedError(
                    f"{mode.value} unlocks at a high score of {_UNLOCK_SCORES[mode]}."
                )
            engine = self._new_engine(player)
            engine.begin_session(mode, game_type, continent)
            self._engine = engine
            engine.advance_round(resume=False)
            return engine.view()

    def has_saved_session(self) -> bool:
        with self._lock:
            return has_saved_session(self._require_player().saved_session)

    def resume_saved_session(self) -> RoundView:
        with self._lock:
            player = self._require_player()
            saved = player.saved_session
            if not has_saved_session(saved):
                raise SessionDecodeError("There is no saved session to load.")
            engine = self._new_engine(player)
            try:
                engine.resume_session(saved)
            except SessionDecodeError:
                logger.warning("Discarding unreadable saved session for %s", player.username)
                player.saved_session = NO_SAVED_SESSION
                raise
            self._engine = engine
            return engine.view()

    def has_active_session(self) -> bool:
        with self._lock:
            return self._engine is not None and not self._engine.is_ended

    def get_round_view(self) -> RoundView | None:
        with self._lock:
            if self._engine is None:
                return None
            return self._engine.view()

    def get_session_summary(self) -> SessionSummary | None:
        with self._lock:
            if self._engine is None:
                return None
            return self._engine.summary

    def submit_choice(self, choice_text: str) -> ChoiceOutcome:
        with self._lock:
            return self._require_engine().submit_choice(choice_text)

    def reveal_hint(self) -> bool:
        with self._lock:
            return self._require_engine().reveal_hint()

    def reveal_flag(self) -> bool:
        with self._lock:
            return self._require_engine().reveal_flag()

    def tick(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.tick()

    def end_session(self) -> SessionSummary:
        with self._lock:
            return self._require_engine().end_session()

    def leave_session(self) -> None:
        """Drop the running session; its last save stays in the account table."""
        with self._lock:
            self._engine = None

    # --- Leaderboard delegation ---

    def get_leaderboard_page(self, page: int) -> LeaderboardPage:
        with self._lock:
            return self._leaderboard.get_page(page)

    def get_top_players(self, limit: int) -> list[LeaderboardRow]:
        with self._lock:
            return self._leaderboard.get_top(limit)

    # --- Internals ---

    def _new_engine(self, player: PlayerAccount) -> QuizSessionEngine:
        return QuizSessionEngine(
            self._catalog,
            player,
            rng=self._rng,
            scheduler=self._schedule_locked,
            on_state_change=self._notify_listeners,
        )

    def _schedule_locked(self, delay_ms: int, callback: Callable[[], None]) -> None:
        def run() -> None:
            with self._lock:
                callback()

        self._scheduler(delay_ms, run)

    def _notify_listeners(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _require_player(self) -> PlayerAccount:
        if self._player is None:
            raise NotLoggedInError("No player is logged in.")
        return self._player

    def _require_engine(self) -> QuizSessionEngine:
        if self._engine is None:
            raise NoActiveSessionError("No session is running.")
        return self._engine


def _is_unlocked(player: PlayerAccount, mode: GameMode) -> bool:
    threshold = _UNLOCK_SCORES.get(mode)
    return threshold is None or player.high_score >= threshold
