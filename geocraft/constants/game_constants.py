"""Gameplay rules shared by the session engine, the facade and the UI."""

STARTING_LIVES: int = 3
TIMED_MODE_SECONDS: int = 60
COUNTDOWN_INTERVAL_MS: int = 1000
ADVANCE_DELAY_MS: int = 1000

CORRECT_ANSWER_POINTS: int = 5
WRONG_ANSWER_PENALTY: int = 5
REVEAL_PENALTY: int = 2

CHOICES_PER_ROUND: int = 3

CONTINENTAL_UNLOCK_SCORE: int = 25
MICRO_NATION_UNLOCK_SCORE: int = 100

CONTINENTS: tuple[str, ...] = ("Americas", "Asia", "Europe")

HINT_LINE_LIMIT: int = 3
LEADERBOARD_PAGE_SIZE: int = 7

CREDENTIAL_MIN_LENGTH: int = 4
CREDENTIAL_MAX_LENGTH: int = 16
DEFAULT_ACCURACY: float = 100.0
