"""Flat CSV table holding player accounts and their progress.

Every read parses the whole file and every write rewrites it. There is no
index and no locking: two writers racing on the same file end with the last
write winning. The game runs as a single-user desktop process, so this is
acceptable, but the store must not be shared between processes.
"""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path

from geocraft.constants.data_constants import (
    ACCOUNT_COLUMNS,
    ACCOUNT_DB_PATH,
    NO_SAVED_SESSION,
)
from geocraft.constants.game_constants import (
    CREDENTIAL_MAX_LENGTH,
    CREDENTIAL_MIN_LENGTH,
    DEFAULT_ACCURACY,
)
from geocraft.core.models import AccountRecord, RegistrationResult, RegistrationStatus

logger = logging.getLogger(__name__)

USERNAME_FIELD = "user_name"
PASSWORD_FIELD = "password"
GAMES_PLAYED_FIELD = "num_games_played"
SAVED_GAME_FIELD = "saved_game?"
ACCURACY_FIELD = "accuracy_rate"
SAVED_SESSION_FIELD = "listOfCountry"
HIGH_SCORE_FIELD = "highScore"

_EDITABLE_FIELDS = frozenset(ACCOUNT_COLUMNS) - {USERNAME_FIELD}
_USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9]+")

USER_EXISTS_MESSAGE = "User already exists."
CREDENTIAL_LENGTH_MESSAGE = "password and username must be between 4-16 characters"
CREDENTIAL_CHARSET_MESSAGE = "password and username must only contain alphanumeric characters"
APPROVED_MESSAGE = "APPROVED"


def check_credentials(username: str, password: str) -> RegistrationResult | None:
    """Validate length and charset; return a failure result or None when valid."""
    if not (
        CREDENTIAL_MIN_LENGTH <= len(username) <= CREDENTIAL_MAX_LENGTH
        and CREDENTIAL_MIN_LENGTH <= len(password) <= CREDENTIAL_MAX_LENGTH
    ):
        return RegistrationResult(
            RegistrationStatus.INVALID_CREDENTIALS_FORMAT, CREDENTIAL_LENGTH_MESSAGE
        )
    if not _USERNAME_PATTERN.fullmatch(username):
        return RegistrationResult(
            RegistrationStatus.INVALID_CREDENTIALS_FORMAT, CREDENTIAL_CHARSET_MESSAGE
        )
    return None


class AccountStore:
    """Keyed record store over ``database.csv``."""

    def __init__(self, path: Path = ACCOUNT_DB_PATH) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # --- Queries ---

    def exists(self, username: str) -> bool:
        return any(row[USERNAME_FIELD] == username for row in self._read_rows())

    def all_usernames(self) -> list[str]:
        return [row[USERNAME_FIELD] for row in self._read_rows()]

    def get_field(self, username: str, field_name: str) -> str | None:
        row = self._find_row(username)
        if row is None:
            return None
        return row.get(field_name)

    def get_record(self, username: str) -> AccountRecord | None:
        row = self._find_row(username)
        if row is None:
            return None
        saved_session = row.get(SAVED_SESSION_FIELD) or NO_SAVED_SESSION
        return AccountRecord(
            username=username,
            password=row.get(PASSWORD_FIELD) or "",
            games_played=_to_int(row.get(GAMES_PLAYED_FIELD)),
            saved_game=(row.get(SAVED_GAME_FIELD) or "").upper() == "Y",
            accuracy=_to_float(row.get(ACCURACY_FIELD), DEFAULT_ACCURACY),
            saved_session=saved_session,
            high_score=_to_int(row.get(HIGH_SCORE_FIELD)),
        )

    def get_password(self, username: str) -> str | None:
        return self.get_field(username, PASSWORD_FIELD)

    def get_games_played(self, username: str) -> int | None:
        value = self.get_field(username, GAMES_PLAYED_FIELD)
        return None if value is None else _to_int(value)

    def get_accuracy(self, username: str) -> float | None:
        value = self.get_field(username, ACCURACY_FIELD)
        return None if value is None else _to_float(value, DEFAULT_ACCURACY)

    def get_high_score(self, username: str) -> int | None:
        value = self.get_field(username, HIGH_SCORE_FIELD)
        return None if value is None else _to_int(value)

    def get_saved_session(self, username: str) -> str | None:
        return self.get_field(username, SAVED_SESSION_FIELD)

    def authenticate(self, username: str, password: str) -> bool:
        stored = self.get_password(username)
        return stored is not None and stored == password

    def ranked_by_high_score(self) -> list[str]:
        """Usernames by descending high score.

        ``sorted`` is stable, so equal scores keep their table order. That
        order is an artefact of the file, not something callers should rely on.
        """
        return [username for username, _ in self.ranked_high_scores()]

    def ranked_high_scores(self) -> list[tuple[str, int]]:
        """(username, high score) pairs in ranking order, taken from one read."""
        scores = [
            (row[USERNAME_FIELD], _to_int(row.get(HIGH_SCORE_FIELD))) for row in self._read_rows()
        ]
        return sorted(scores, key=lambda entry: entry[1], reverse=True)

    # --- Mutations ---

    def register(self, username: str, password: str) -> RegistrationResult:
        if self.exists(username):
            return RegistrationResult(RegistrationStatus.USER_EXISTS, USER_EXISTS_MESSAGE)
        failure = check_credentials(username, password)
        if failure is not None:
            return failure

        rows = self._read_rows()
        rows.append(
            {
                USERNAME_FIELD: username,
                PASSWORD_FIELD: password,
                GAMES_PLAYED_FIELD: "0",
                SAVED_GAME_FIELD: "N",
                ACCURACY_FIELD: _format_float(DEFAULT_ACCURACY),
                SAVED_SESSION_FIELD: NO_SAVED_SESSION,
                HIGH_SCORE_FIELD: "0",
            }
        )
        self._write_rows(rows)
        logger.info("Registered player %s", username)
        return RegistrationResult(RegistrationStatus.APPROVED, APPROVED_MESSAGE)

    def set_field(self, username: str, field_name: str, value: str) -> None:
        """Rewrite the table with one cell replaced; unknown users are ignored."""
        if field_name not in _EDITABLE_FIELDS:
            raise ValueError(f"Unknown account field '{field_name}'.")
        rows = self._read_rows()
        matched = False
        for row in rows:
            if row[USERNAME_FIELD] == username:
                row[field_name] = value
                matched = True
        if not matched:
            logger.debug("Ignoring update of %s for unknown user %s", field_name, username)
            return
        self._write_rows(rows)

    def set_password(self, username: str, password: str) -> None:
        self.set_field(username, PASSWORD_FIELD, password)

    def set_games_played(self, username: str, games_played: int) -> None:
        self.set_field(username, GAMES_PLAYED_FIELD, str(games_played))

    def set_accuracy(self, username: str, accuracy: float) -> None:
        self.set_field(username, ACCURACY_FIELD, _format_float(accuracy))

    def set_high_score(self, username: str, high_score: int) -> None:
        self.set_field(username, HIGH_SCORE_FIELD, str(high_score))

    def set_saved_session(self, username: str, saved_session: str) -> None:
        rows = self._read_rows()
        matched = False
        for row in rows:
            if row[USERNAME_FIELD] == username:
                row[SAVED_SESSION_FIELD] = saved_session
                row[SAVED_GAME_FIELD] = "N" if saved_session == NO_SAVED_SESSION else "Y"
                matched = True
        if not matched:
            logger.debug("Ignoring saved session for unknown user %s", username)
            return
        self._write_rows(rows)

    def delete_user(self, username: str) -> None:
        rows = self._read_rows()
        remaining = [row for row in rows if row[USERNAME_FIELD] != username]
        if len(remaining) != len(rows):
            logger.info("Deleted player %s", username)
        self._write_rows(remaining)

    # --- File access ---

    def _find_row(self, username: str) -> dict[str, str] | None:
        return next((row for row in self._read_rows() if row[USERNAME_FIELD] == username), None)

    def _ensure_file(self) -> None:
        if self._path.exists():
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._write_rows([])
        logger.info("Created account table at %s", self._path)

    def _read_rows(self) -> list[dict[str, str]]:
        self._ensure_file()
        with self._path.open(newline="", encoding="utf-8") as handle:
            reader = csv.DictReader(handle)
            rows: list[dict[str, str]] = []
            for row in reader:
                if not row.get(USERNAME_FIELD):
                    continue
                rows.append({column: row.get(column) or "" for column in ACCOUNT_COLUMNS})
            return rows

    def _write_rows(self, rows: list[dict[str, str]]) -> None:
        with self._path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=list(ACCOUNT_COLUMNS))
            writer.writeheader()
            writer.writerows(rows)


class PlayerAccount:
    """Typed view of one player's row, bound to a store."""

    def __init__(self, store: AccountStore, username: str) -> None:
        self._store = store
        self.username = username

    @property
    def high_score(self) -> int:
        return self._store.get_high_score(self.username) or 0

    @high_score.setter
    def high_score(self, value: int) -> None:
        self._store.set_high_score(self.username, value)

    @property
    def accuracy(self) -> float:
        value = self._store.get_accuracy(self.username)
        return DEFAULT_ACCURACY if value is None else value

    @accuracy.setter
    def accuracy(self, value: float) -> None:
        self._store.set_accuracy(self.username, value)

    @property
    def games_played(self) -> int:
        return self._store.get_games_played(self.username) or 0

    @games_played.setter
    def games_played(self, value: int) -> None:
        self._store.set_games_played(self.username, value)

    @property
    def saved_session(self) -> str:
        return self._store.get_saved_session(self.username) or NO_SAVED_SESSION

    @saved_session.setter
    def saved_session(self, value: str) -> None:
        self._store.set_saved_session(self.username, value)

    def adjust_high_score(self, delta: int) -> int:
        """Add ``delta`` to the stored score; the result may be negative."""
        score = self.high_score + delta
        self.high_score = score
        return score


def _to_int(value: str | None, default: int = 0) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        try:
            return int(float(value))
        except ValueError:
            logger.warning("Non-numeric value %r in account table", value)
            return default


def _to_float(value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Non-numeric value %r in account table", value)
        return default


def _format_float(value: float) -> str:
    return repr(float(value))
