"""Quiz session state machine shared by all three game types.

Phases: AWAITING_ROUND -> ROUND_ACTIVE -> ROUND_RESOLVED ->
(AWAITING_ROUND | SESSION_ENDED). Every accepted state change is written to
the player's row as a save string so the session can be resumed later.
"""

from __future__ import annotations

from collections.abc import Callable, Collection
import logging
import random

from geocraft.constants.data_constants import NO_SAVED_SESSION
from geocraft.constants.game_constants import (
    ADVANCE_DELAY_MS,
    CHOICES_PER_ROUND,
    CORRECT_ANSWER_POINTS,
    REVEAL_PENALTY,
    WRONG_ANSWER_PENALTY,
)
from geocraft.core.errors import EmptyCandidatePoolError, NoActiveSessionError
from geocraft.core.models import (
    ChoiceOutcome,
    Country,
    GameMode,
    GameType,
    RoundView,
    SessionPhase,
    SessionState,
    SessionSummary,
)
from geocraft.core.services.account_store import PlayerAccount
from geocraft.core.services.country_catalog import CountryCatalog
from geocraft.core.session_codec import decode_session, encode_session

logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], None]], None]


def run_immediately(_delay_ms: int, callback: Callable[[], None]) -> None:
    callback()


class QuizSessionEngine:
    """Owns one play-through: candidate pool, round selection, scoring and saves."""

    def __init__(
        self,
        catalog: CountryCatalog,
        player: PlayerAccount,
        *,
        rng: random.Random | None = None,
        scheduler: Scheduler | None = None,
        on_state_change: Callable[[], None] | None = None,
    ) -> None:
        self._catalog = catalog
        self._player = player
        self._rng = rng or random.Random()
        self._scheduler = scheduler or run_immediately
        self._on_state_change = on_state_change

        self._state: SessionState | None = None
        self._candidates: list[Country] = []
        self._phase = SessionPhase.AWAITING_ROUND
        self._choices: list[str] = []
        self._disabled_choices: set[str] = set()
        self._summary: SessionSummary | None = None
        # Bumped whenever a round starts or the session ends so that a
        # pending post-answer advance can tell it has been superseded.
        self._round_token: int = 0

    # --- Lifecycle ---

    def begin_session(
        self,
        game_mode: GameMode,
        game_type: GameType,
        continent: str | None = None,
    ) -> None:
        if game_mode is not GameMode.CONTINENTAL:
            continent = None
        self._candidates = self._load_candidates(game_mode, continent)
        self._state = SessionState(game_type=game_type, game_mode=game_mode, continent=continent)
        self._reset_round()
        logger.info(
            "Started %s session in %s (%s) with %d candidates",
            game_type.value,
            game_mode.value,
            continent or "all continents",
            len(self._candidates),
        )

    def resume_session(self, saved_text: str) -> None:
        """Restore a saved session and re-present its interrupted round."""
        saved = decode_session(saved_text)
        candidates = self._load_candidates(saved.game_mode, saved.continent)
        in_range = [index for index in saved.visited_indices if 0 <= index < len(candidates)]
        if len(in_range) != len(saved.visited_indices):
            logger.warning(
                "Dropped %d visited indices outside the current catalog",
                len(saved.visited_indices) - len(in_range),
            )
        saved.visited_indices = in_range
        self._candidates = candidates
        self._state = saved
        self._reset_round()
        logger.info("Resuming %s session for %s", saved.game_type.value, self._player.username)
        self.advance_round(resume=True)

    def advance_round(self, resume: bool = False) -> None:
        state = self._require_state()
        if self._phase is SessionPhase.SESSION_ENDED:
            return
        if len(state.visited_indices) >= len(self._candidates):
            self.end_session()
            return

        index = self._draw_index(set(state.visited_indices))
        state.visited_indices.append(index)

        if not resume or state.correct_country is None:
            first = self._draw_index({index})
            second = self._draw_index({index, first})
            state.correct_country = self._candidates[index].name
            state.incorrect_country_1 = self._candidates[first].name
            state.incorrect_country_2 = self._candidates[second].name
            state.show_flag = False
            state.show_hint = False

        self._choices = [
            state.correct_country,
            state.incorrect_country_1 or "",
            state.incorrect_country_2 or "",
        ]
        self._rng.shuffle(self._choices)
        self._disabled_choices = set()
        self._round_token += 1
        self._phase = SessionPhase.ROUND_ACTIVE
        self._persist()

    def end_session(self) -> SessionSummary:
        """Fold the session into the account's running accuracy and clear the save."""
        if self._summary is not None:
            return self._summary
        state = self._require_state()

        previous_games = self._player.games_played
        previous_accuracy = self._player.accuracy
        session_percentage = 0.0
        if state.num_guesses:
            session_percentage = 100.0 * state.correct_guesses / state.num_guesses
        accuracy = (session_percentage + previous_games * previous_accuracy) / (previous_games + 1)

        self._player.accuracy = accuracy
        self._player.games_played = previous_games + 1
        self._player.saved_session = NO_SAVED_SESSION

        self._phase = SessionPhase.SESSION_ENDED
        self._round_token += 1
        self._summary = SessionSummary(
            game_type=state.game_type,
            correct_guesses=state.correct_guesses,
            num_guesses=state.num_guesses,
            session_percentage=session_percentage,
            accuracy=accuracy,
            games_played=previous_games + 1,
            high_score=self._player.high_score,
        )
        logger.info(
            "Session ended for %s: %d/%d correct, accuracy now %.2f",
            self._player.username,
            state.correct_guesses,
            state.num_guesses,
            accuracy,
        )
        self._notify()
        return self._summary

    # --- Player actions ---

    def submit_choice(self, choice_text: str) -> ChoiceOutcome:
        state = self._require_state()
        if (
            self._phase is not SessionPhase.ROUND_ACTIVE
            or choice_text not in self._choices
            or choice_text in self._disabled_choices
        ):
            return ChoiceOutcome.IGNORED

        state.num_guesses += 1
        if choice_text == state.correct_country:
            state.correct_guesses += 1
            self._adjust_score(CORRECT_ANSWER_POINTS)
            self._disabled_choices.update(self._choices)
            self._phase = SessionPhase.ROUND_RESOLVED
            self._persist()
            token = self._round_token
            self._scheduler(ADVANCE_DELAY_MS, lambda: self._advance_if_current(token))
            return ChoiceOutcome.CORRECT

        self._adjust_score(-WRONG_ANSWER_PENALTY)
        self._disabled_choices.add(choice_text)
        if state.game_type is GameType.MARATHON:
            state.lives = max(0, state.lives - 1)
        self._persist()
        if state.game_type is GameType.MARATHON and state.lives == 0:
            self.end_session()
        return ChoiceOutcome.INCORRECT

    def reveal_hint(self) -> bool:
        return self._reveal("show_hint")

    def reveal_flag(self) -> bool:
        return self._reveal("show_flag")

    def tick(self) -> None:
        """Advance the Timed countdown by one second."""
        state = self._state
        if (
            state is None
            or state.game_type is not GameType.TIMED
            or self._phase is SessionPhase.SESSION_ENDED
        ):
            return
        state.time_left = max(0, state.time_left - 1)
        self._persist()
        if state.time_left == 0:
            self.end_session()

    # --- Read access ---

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def is_ended(self) -> bool:
        return self._phase is SessionPhase.SESSION_ENDED

    @property
    def state(self) -> SessionState:
        return self._require_state()

    @property
    def summary(self) -> SessionSummary | None:
        return self._summary

    @property
    def candidates(self) -> list[Country]:
        return list(self._candidates)

    @property
    def choices(self) -> list[str]:
        return list(self._choices)

    def view(self) -> RoundView:
        state = self._require_state()
        hint_text = ""
        if state.correct_country:
            hint_text = self._catalog.hints_for(state.correct_country) or ""
        return RoundView(
            phase=self._phase,
            game_type=state.game_type,
            game_mode=state.game_mode,
            continent=state.continent,
            choices=list(self._choices),
            disabled_choices=[choice for choice in self._choices if choice in self._disabled_choices],
            correct_country=state.correct_country,
            lives=state.lives,
            time_left=state.time_left,
            num_guesses=state.num_guesses,
            correct_guesses=state.correct_guesses,
            show_flag=state.show_flag,
            show_hint=state.show_hint,
            hint_text=hint_text,
            high_score=self._player.high_score,
            rounds_played=len(state.visited_indices),
            candidate_count=len(self._candidates),
        )

    # --- Internals ---

    def _load_candidates(self, game_mode: GameMode, continent: str | None) -> list[Country]:
        candidates = self._catalog.candidates_for(game_mode, continent)
        if len(candidates) < CHOICES_PER_ROUND:
            raise EmptyCandidatePoolError(
                f"{game_mode.value} ({continent or 'all continents'}) has "
                f"{len(candidates)} countries; at least {CHOICES_PER_ROUND} are needed."
            )
        return candidates

    def _reset_round(self) -> None:
        self._phase = SessionPhase.AWAITING_ROUND
        self._choices = []
        self._disabled_choices = set()
        self._summary = None
        self._round_token += 1

    def _draw_index(self, excluded: Collection[int]) -> int:
        # Rejection sampling; callers guarantee at least one index is free.
        index = self._rng.randrange(len(self._candidates))
        while index in excluded:
            index = self._rng.randrange(len(self._candidates))
        return index

    def _advance_if_current(self, token: int) -> None:
        if token != self._round_token or self._phase is not SessionPhase.ROUND_RESOLVED:
            return
        self.advance_round(resume=False)

    def _reveal(self, attribute: str) -> bool:
        state = self._require_state()
        if self._phase is not SessionPhase.ROUND_ACTIVE or getattr(state, attribute):
            return False
        setattr(state, attribute, True)
        self._adjust_score(-REVEAL_PENALTY)
        self._persist()
        return True

    def _adjust_score(self, delta: int) -> None:
        # Exploration is unscored.
        if self._require_state().game_type is GameType.EXPLORATION:
            return
        self._player.adjust_high_score(delta)

    def _persist(self) -> None:
        self._player.saved_session = encode_session(self._require_state())
        self._notify()

    def _notify(self) -> None:
        if self._on_state_change is not None:
            self._on_state_change()

    def _require_state(self) -> SessionState:
        if self._state is None:
            raise NoActiveSessionError("No session has been started.")
        return self._state
