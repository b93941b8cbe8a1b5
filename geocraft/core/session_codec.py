"""Encode and decode the save string stored in the account table.

Format: semicolon-separated ``key:value`` pairs, for example::

    visitedIndices:2-5;type:Marathon;mode:Global Mode;continent:None;
    timeLeft:60;lives:2;numGuesses:3;correctGuesses:1;correctCountry:France;
    incorrectCountry1:Peru;incorrectCountry2:Japan;showFlag:false;showHint:false

(written on one line). Keys are emitted in this order but the decoder does
not depend on it. Unknown keys are skipped and missing keys keep their
defaults, so older and newer saves load in either direction. Only ``type``
and ``mode`` are required, since without them the candidate pool cannot be
rebuilt.
"""

from __future__ import annotations

from geocraft.constants.data_constants import NO_SAVED_SESSION
from geocraft.core.errors import SessionDecodeError
from geocraft.core.models import GameMode, GameType, SessionState

_PAIR_SEPARATOR = ";"
_KEY_SEPARATOR = ":"
_INDEX_SEPARATOR = "-"
_NULL_TOKENS = frozenset({"", "none", "null"})


def has_saved_session(text: str | None) -> bool:
    return bool(text) and text.strip() != NO_SAVED_SESSION


def encode_session(state: SessionState) -> str:
    pairs = [
        ("visitedIndices", _INDEX_SEPARATOR.join(str(index) for index in state.visited_indices)),
        ("type", state.game_type.value),
        ("mode", state.game_mode.value),
        ("continent", _encode_optional(state.continent)),
        ("timeLeft", str(state.time_left)),
        ("lives", str(state.lives)),
        ("numGuesses", str(state.num_guesses)),
        ("correctGuesses", str(state.correct_guesses)),
        ("correctCountry", _encode_optional(state.correct_country)),
        ("incorrectCountry1", _encode_optional(state.incorrect_country_1)),
        ("incorrectCountry2", _encode_optional(state.incorrect_country_2)),
        ("showFlag", _encode_bool(state.show_flag)),
        ("showHint", _encode_bool(state.show_hint)),
    ]
    return _PAIR_SEPARATOR.join(f"{key}{_KEY_SEPARATOR}{value}" for key, value in pairs)


def decode_session(text: str) -> SessionState:
    if not has_saved_session(text):
        raise SessionDecodeError("There is no saved session to load.")

    values: dict[str, str] = {}
    for pair in text.strip().split(_PAIR_SEPARATOR):
        if not pair:
            continue
        key, _, value = pair.partition(_KEY_SEPARATOR)
        values[key.strip()] = value.strip()

    game_type = _decode_enum(GameType, values.get("type"), "type")
    game_mode = _decode_enum(GameMode, values.get("mode"), "mode")
    state = SessionState(game_type=game_type, game_mode=game_mode)

    if "visitedIndices" in values:
        state.visited_indices = _decode_indices(values["visitedIndices"])
    if "continent" in values:
        state.continent = _decode_optional(values["continent"])
    if "timeLeft" in values:
        state.time_left = _decode_int(values["timeLeft"], "timeLeft")
    if "lives" in values:
        state.lives = _decode_int(values["lives"], "lives")
    if "numGuesses" in values:
        state.num_guesses = _decode_int(values["numGuesses"], "numGuesses")
    if "correctGuesses" in values:
        state.correct_guesses = _decode_int(values["correctGuesses"], "correctGuesses")
    if "correctCountry" in values:
        state.correct_country = _decode_optional(values["correctCountry"])
    if "incorrectCountry1" in values:
        state.incorrect_country_1 = _decode_optional(values["incorrectCountry1"])
    if "incorrectCountry2" in values:
        state.incorrect_country_2 = _decode_optional(values["incorrectCountry2"])
    if "showFlag" in values:
        state.show_flag = _decode_bool(values["showFlag"])
    if "showHint" in values:
        state.show_hint = _decode_bool(values["showHint"])
    return state


def _encode_optional(value: str | None) -> str:
    return NO_SAVED_SESSION if value is None else value


def _encode_bool(value: bool) -> str:
    return "true" if value else "false"


def _decode_optional(raw: str) -> str | None:
    return None if raw.casefold() in _NULL_TOKENS else raw


def _decode_bool(raw: str) -> bool:
    return raw.casefold() == "true"


def _decode_int(raw: str, key: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise SessionDecodeError(f"Saved value for '{key}' is not an integer: {raw!r}") from exc


def _decode_indices(raw: str) -> list[int]:
    indices: list[int] = []
    for token in raw.split(_INDEX_SEPARATOR):
        if not token:
            continue
        index = _decode_int(token, "visitedIndices")
        if index not in indices:
            indices.append(index)
    return indices


def _decode_enum(enum_type, raw: str | None, key: str):
    if raw is None or not raw:
        raise SessionDecodeError(f"Saved session is missing '{key}'.")
    try:
        return enum_type(raw)
    except ValueError as exc:
        raise SessionDecodeError(f"Saved session has an unknown {key}: {raw!r}") from exc
