from __future__ import annotations

from collections import Counter
import random

import pytest

from geocraft.constants.data_constants import NO_SAVED_SESSION
from geocraft.core.errors import EmptyCandidatePoolError, NoActiveSessionError
from geocraft.core.models import ChoiceOutcome, GameMode, GameType, SessionPhase
from geocraft.core.services.session_engine import QuizSessionEngine
from geocraft.core.session_codec import decode_session

from conftest import GLOBAL_NAMES, MemoryPlayer


def _engine(catalog, player, scheduler=None, seed=7):
    return QuizSessionEngine(catalog, player, rng=random.Random(seed), scheduler=scheduler)


def _wrong_choice(engine):
    return next(
        choice
        for choice in engine.view().choices
        if choice != engine.state.correct_country and choice not in engine.view().disabled_choices
    )


def test_round_offers_permutation_of_the_drawn_trio(catalog, player):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.GLOBAL, GameType.MARATHON)
    assert engine.phase is SessionPhase.AWAITING_ROUND
    engine.advance_round()

    state = engine.state
    trio = [state.correct_country, state.incorrect_country_1, state.incorrect_country_2]
    assert len(set(trio)) == 3
    assert set(trio) <= GLOBAL_NAMES
    assert sorted(engine.choices) == sorted(trio)
    assert engine.phase is SessionPhase.ROUND_ACTIVE
    assert engine.candidates[state.visited_indices[-1]].name == state.correct_country


def test_every_candidate_is_asked_exactly_once(catalog, player):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.GLOBAL, GameType.EXPLORATION)
    engine.advance_round()

    asked = []
    while not engine.is_ended:
        asked.append(engine.state.correct_country)
        assert engine.submit_choice(engine.state.correct_country) is ChoiceOutcome.CORRECT

    assert sorted(asked) == sorted(GLOBAL_NAMES)
    assert len(set(engine.state.visited_indices)) == len(engine.state.visited_indices) == 6
    assert engine.summary.correct_guesses == 6


def test_correct_answer_position_is_unbiased(catalog):
    engine = QuizSessionEngine(catalog, MemoryPlayer(), rng=random.Random(1234))
    positions = Counter()
    rounds = 1500
    for _ in range(rounds):
        engine.begin_session(GameMode.GLOBAL, GameType.MARATHON)
        engine.advance_round()
        positions[engine.choices.index(engine.state.correct_country)] += 1

    for position in range(3):
        assert abs(positions[position] - rounds / 3) < 80


def test_end_session_folds_accuracy_into_running_average(catalog, player):
    player.games_played = 2
    player.accuracy = 60.0
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.GLOBAL, GameType.MARATHON)
    engine.advance_round()
    engine.state.num_guesses = 4
    engine.state.correct_guesses = 3

    summary = engine.end_session()

    assert summary.session_percentage == pytest.approx(75.0)
    assert summary.accuracy == pytest.approx(65.0)
    assert player.accuracy == pytest.approx(65.0)
    assert player.games_played == 3
    assert player.saved_session == NO_SAVED_SESSION
    assert engine.end_session() is summary
    assert player.games_played == 3


def test_session_without_guesses_counts_as_zero_percent(catalog, player):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.GLOBAL, GameType.TIMED)
    engine.advance_round()
    summary = engine.end_session()
    assert summary.session_percentage == 0.0
    assert player.accuracy == pytest.approx(0.0)


def test_marathon_ends_after_third_wrong_answer(catalog, player):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.GLOBAL, GameType.MARATHON)
    engine.advance_round()

    assert engine.submit_choice(_wrong_choice(engine)) is ChoiceOutcome.INCORRECT
    assert engine.submit_choice(_wrong_choice(engine)) is ChoiceOutcome.INCORRECT
    assert engine.state.lives == 1
    assert engine.submit_choice(engine.state.correct_country) is ChoiceOutcome.CORRECT
    assert not engine.is_ended
    assert engine.submit_choice(_wrong_choice(engine)) is ChoiceOutcome.INCORRECT

    assert engine.is_ended
    assert engine.state.lives == 0
    assert engine.summary.num_guesses == 4
    assert engine.summary.correct_guesses == 1
    assert player.high_score == -10
    assert player.games_played == 1


def test_wrong_choice_is_disabled_and_cannot_be_resubmitted(catalog, player):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.GLOBAL, GameType.TIMED)
    engine.advance_round()
    wrong = _wrong_choice(engine)

    engine.submit_choice(wrong)
    assert engine.submit_choice(wrong) is ChoiceOutcome.IGNORED
    assert engine.submit_choice("Atlantis") is ChoiceOutcome.IGNORED
    assert engine.state.num_guesses == 1
    assert engine.view().disabled_choices == [wrong]
    assert engine.state.lives == 3


def test_timed_session_ends_when_countdown_reaches_zero(catalog, player):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.GLOBAL, GameType.TIMED)
    engine.advance_round()

    for _ in range(59):
        engine.tick()
    assert engine.state.time_left == 1
    assert not engine.is_ended
    assert decode_session(player.saved_session).time_left == 1

    engine.tick()
    assert engine.is_ended
    assert engine.state.time_left == 0
    engine.tick()
    assert engine.state.time_left == 0


def test_tick_is_ignored_outside_timed_sessions(catalog, player):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.GLOBAL, GameType.MARATHON)
    engine.advance_round()
    engine.tick()
    assert engine.state.time_left == 60


def test_reveals_charge_once_per_round(catalog, player):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.GLOBAL, GameType.MARATHON)
    engine.advance_round()

    assert engine.reveal_hint()
    assert not engine.reveal_hint()
    assert engine.reveal_flag()
    assert not engine.reveal_flag()
    assert player.high_score == -4

    view = engine.view()
    assert view.show_hint and view.show_flag


def test_reveal_flags_reset_on_next_round(catalog, player, fake_scheduler):
    engine = _engine(catalog, player, scheduler=fake_scheduler)
    engine.begin_session(GameMode.GLOBAL, GameType.MARATHON)
    engine.advance_round()
    engine.reveal_hint()
    engine.submit_choice(engine.state.correct_country)
    fake_scheduler.run_pending()

    assert engine.phase is SessionPhase.ROUND_ACTIVE
    assert not engine.state.show_hint


def test_exploration_is_unscored(catalog, player):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.GLOBAL, GameType.EXPLORATION)
    engine.advance_round()

    engine.reveal_flag()
    engine.reveal_hint()
    engine.submit_choice(_wrong_choice(engine))
    engine.submit_choice(engine.state.correct_country)

    assert player.high_score == 0
    assert engine.state.num_guesses == 2
    assert engine.state.lives == 3


def test_correct_answer_advances_after_delay(catalog, player, fake_scheduler):
    engine = _engine(catalog, player, scheduler=fake_scheduler)
    engine.begin_session(GameMode.GLOBAL, GameType.MARATHON)
    engine.advance_round()
    first = engine.state.correct_country

    assert engine.submit_choice(first) is ChoiceOutcome.CORRECT
    assert engine.phase is SessionPhase.ROUND_RESOLVED
    assert sorted(engine.view().disabled_choices) == sorted(engine.choices)
    assert engine.submit_choice(engine.choices[0]) is ChoiceOutcome.IGNORED
    assert [delay for delay, _ in fake_scheduler.pending] == [1000]
    assert player.high_score == 5

    fake_scheduler.run_pending()
    assert engine.phase is SessionPhase.ROUND_ACTIVE
    assert len(engine.state.visited_indices) == 2
    assert engine.state.correct_country != first


def test_stale_advance_after_session_end_is_dropped(catalog, player, fake_scheduler):
    engine = _engine(catalog, player, scheduler=fake_scheduler)
    engine.begin_session(GameMode.GLOBAL, GameType.EXPLORATION)
    engine.advance_round()
    engine.submit_choice(engine.state.correct_country)
    engine.end_session()

    fake_scheduler.run_pending()
    assert engine.is_ended
    assert len(engine.state.visited_indices) == 1


def test_every_change_is_saved(catalog, player, store):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.GLOBAL, GameType.MARATHON)
    engine.advance_round()
    engine.submit_choice(_wrong_choice(engine))

    saved = decode_session(store.get_saved_session("alice"))
    assert saved == engine.state
    assert store.get_record("alice").saved_game is True


def test_resume_restores_the_interrupted_round(catalog, player):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.CONTINENTAL, GameType.MARATHON, "Americas")
    engine.advance_round()
    engine.reveal_flag()
    engine.submit_choice(_wrong_choice(engine))
    before = decode_session(player.saved_session)

    resumed = _engine(catalog, player, seed=99)
    resumed.resume_session(player.saved_session)

    state = resumed.state
    assert resumed.phase is SessionPhase.ROUND_ACTIVE
    assert state.continent == "Americas"
    assert state.correct_country == before.correct_country
    assert {state.incorrect_country_1, state.incorrect_country_2} == {
        before.incorrect_country_1,
        before.incorrect_country_2,
    }
    assert state.show_flag is True
    assert state.lives == 2
    assert state.num_guesses == 1
    # Resuming records one more visited index, as a fresh round would.
    assert state.visited_indices[:-1] == before.visited_indices
    assert len(set(state.visited_indices)) == len(state.visited_indices)


def test_resume_drops_indices_outside_the_catalog(catalog, player):
    engine = _engine(catalog, player)
    engine.resume_session("visitedIndices:0-42;type:Timed;mode:Micro Nation Mode;timeLeft:30")
    assert 42 not in engine.state.visited_indices
    assert engine.state.visited_indices[0] == 0
    assert engine.state.time_left == 30


def test_resume_with_every_candidate_visited_ends_session(catalog, player):
    engine = _engine(catalog, player)
    engine.resume_session("visitedIndices:0-1-2;type:Marathon;mode:Micro Nation Mode")
    assert engine.is_ended
    assert player.games_played == 1


def test_continental_without_continent_raises(catalog, player):
    engine = _engine(catalog, player)
    with pytest.raises(EmptyCandidatePoolError):
        engine.begin_session(GameMode.CONTINENTAL, GameType.MARATHON)


def test_pool_smaller_than_three_raises(catalog, player):
    engine = _engine(catalog, player)
    with pytest.raises(EmptyCandidatePoolError):
        engine.begin_session(GameMode.CONTINENTAL, GameType.MARATHON, "Europe")


def test_non_continental_mode_discards_continent(catalog, player):
    engine = _engine(catalog, player)
    engine.begin_session(GameMode.MICRO_NATION, GameType.TIMED, "Asia")
    assert engine.state.continent is None
    assert {country.name for country in engine.candidates} == {"Monaco", "Malta", "Nauru"}


def test_operations_before_begin_raise(catalog, player):
    engine = _engine(catalog, player)
    with pytest.raises(NoActiveSessionError):
        engine.advance_round()
    with pytest.raises(NoActiveSessionError):
        engine.submit_choice("France")
