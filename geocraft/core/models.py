"""Domain models for the Geocraft quiz."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from geocraft.constants.data_constants import NO_SAVED_SESSION
from geocraft.constants.game_constants import STARTING_LIVES, TIMED_MODE_SECONDS


class GameType(str, Enum):
    """How a session is played."""

    MARATHON = "Marathon"
    TIMED = "Timed"
    EXPLORATION = "Exploration"


class GameMode(str, Enum):
    """Which countries are eligible for a session. Values are the save-string encoding."""

    GLOBAL = "Global Mode"
    CONTINENTAL = "Continental Mode"
    MICRO_NATION = "Micro Nation Mode"


class SessionPhase(Enum):
    """Lifecycle of a quiz session."""

    AWAITING_ROUND = auto()
    ROUND_ACTIVE = auto()
    ROUND_RESOLVED = auto()
    SESSION_ENDED = auto()


class RegistrationStatus(Enum):
    APPROVED = auto()
    USER_EXISTS = auto()
    INVALID_CREDENTIALS_FORMAT = auto()


class ChoiceOutcome(Enum):
    CORRECT = auto()
    INCORRECT = auto()
    IGNORED = auto()


@dataclass(frozen=True, slots=True)
class Country:
    """Read-only catalog entry."""

    name: str
    country_id: str = ""
    continent: str = ""
    continental: bool = False
    global_mode: bool = False
    micro_nation: bool = False
    hints: str = ""


@dataclass(slots=True)
class RegistrationResult:
    status: RegistrationStatus
    message: str

    @property
    def approved(self) -> bool:
        return self.status is RegistrationStatus.APPROVED


@dataclass(slots=True)
class AccountRecord:
    """One row of the account table, with typed fields."""

    username: str
    password: str
    games_played: int = 0
    saved_game: bool = False
    accuracy: float = 100.0
    saved_session: str = NO_SAVED_SESSION
    high_score: int = 0


@dataclass(slots=True)
class SessionState:
    """Mutable state of one play-through, everything the save string carries."""

    game_type: GameType
    game_mode: GameMode
    continent: str | None = None
    visited_indices: list[int] = field(default_factory=list)
    time_left: int = TIMED_MODE_SECONDS
    lives: int = STARTING_LIVES
    num_guesses: int = 0
    correct_guesses: int = 0
    correct_country: str | None = None
    incorrect_country_1: str | None = None
    incorrect_country_2: str | None = None
    show_flag: bool = False
    show_hint: bool = False


@dataclass(slots=True)
class SessionSummary:
    """Aggregate figures folded into the account when a session ends."""

    game_type: GameType
    correct_guesses: int
    num_guesses: int
    session_percentage: float
    accuracy: float
    games_played: int
    high_score: int


@dataclass(slots=True)
class RoundView:
    """Immutable snapshot of the current round handed to the UI and API."""

    phase: SessionPhase
    game_type: GameType
    game_mode: GameMode
    continent: str | None
    choices: list[str]
    disabled_choices: list[str]
    correct_country: str | None
    lives: int
    time_left: int
    num_guesses: int
    correct_guesses: int
    show_flag: bool
    show_hint: bool
    hint_text: str
    high_score: int
    rounds_played: int
    candidate_count: int
