from __future__ import annotations

import random

import pytest

from geocraft.constants.data_constants import NO_SAVED_SESSION
from geocraft.core.errors import (
    ModeLockedError,
    NoActiveSessionError,
    NotLoggedInError,
    SessionDecodeError,
)
from geocraft.core.game_manager import GameManager
from geocraft.core.models import ChoiceOutcome, GameMode, GameType, SessionPhase


@pytest.fixture
def manager(store, catalog, fake_scheduler):
    store.register("alice", "secret1")
    return GameManager(store, catalog, scheduler=fake_scheduler, rng=random.Random(3))


@pytest.fixture
def logged_in(manager):
    assert manager.login("alice", "secret1")
    return manager


def test_login_and_logout(manager):
    assert not manager.login("alice", "nope")
    assert not manager.is_logged_in()
    assert manager.login("alice", "secret1")
    assert manager.get_current_username() == "alice"
    manager.logout()
    assert manager.get_current_username() is None


def test_account_operations_require_login(manager):
    with pytest.raises(NotLoggedInError):
        manager.start_session(GameMode.GLOBAL, GameType.MARATHON)
    with pytest.raises(NotLoggedInError):
        manager.has_saved_session()


def test_register_through_manager(manager):
    assert manager.register("bobby", "secret2").approved
    assert not manager.register("bobby", "secret2").approved
    assert manager.login("bobby", "secret2")


def test_change_password(logged_in, store):
    assert not logged_in.change_password("wrong1", "newpass", "newpass")
    assert not logged_in.change_password("secret1", "newpass", "newpas")
    assert not logged_in.change_password("secret1", "abc", "abc")
    assert store.authenticate("alice", "secret1")

    assert logged_in.change_password("secret1", "newpass", "newpass")
    assert store.authenticate("alice", "newpass")


def test_modes_unlock_with_high_score(logged_in, store):
    assert logged_in.is_mode_unlocked(GameMode.GLOBAL)
    assert not logged_in.is_mode_unlocked(GameMode.CONTINENTAL)
    with pytest.raises(ModeLockedError):
        logged_in.start_session(GameMode.CONTINENTAL, GameType.MARATHON, "Asia")

    store.set_high_score("alice", 25)
    assert logged_in.is_mode_unlocked(GameMode.CONTINENTAL)
    assert not logged_in.is_mode_unlocked(GameMode.MICRO_NATION)

    store.set_high_score("alice", 100)
    assert logged_in.is_mode_unlocked(GameMode.MICRO_NATION)


def test_global_stays_unlocked_with_negative_score(logged_in, store):
    store.set_high_score("alice", -20)
    assert logged_in.is_mode_unlocked(GameMode.GLOBAL)
    view = logged_in.start_session(GameMode.GLOBAL, GameType.TIMED)
    assert view.phase is SessionPhase.ROUND_ACTIVE


def test_session_flow_through_manager(logged_in, fake_scheduler):
    changes = []
    logged_in.add_state_listener(lambda: changes.append(1))

    view = logged_in.start_session(GameMode.GLOBAL, GameType.MARATHON)
    assert len(view.choices) == 3
    assert logged_in.has_active_session()
    assert changes

    assert logged_in.submit_choice(view.correct_country) is ChoiceOutcome.CORRECT
    assert logged_in.get_round_view().phase is SessionPhase.ROUND_RESOLVED
    fake_scheduler.run_pending()
    assert logged_in.get_round_view().phase is SessionPhase.ROUND_ACTIVE
    assert logged_in.get_round_view().high_score == 5

    summary = logged_in.end_session()
    assert summary.correct_guesses == 1
    assert logged_in.get_session_summary() is summary
    assert not logged_in.has_active_session()
    assert not logged_in.has_saved_session()


def test_leave_and_resume(logged_in):
    view = logged_in.start_session(GameMode.GLOBAL, GameType.TIMED)
    logged_in.tick()
    logged_in.reveal_hint()
    logged_in.leave_session()

    assert not logged_in.has_active_session()
    with pytest.raises(NoActiveSessionError):
        logged_in.submit_choice(view.choices[0])
    assert logged_in.has_saved_session()

    resumed = logged_in.resume_saved_session()
    assert resumed.correct_country == view.correct_country
    assert resumed.time_left == 59
    assert resumed.show_hint
    assert sorted(resumed.choices) == sorted(view.choices)


def test_resume_without_save_raises(logged_in):
    with pytest.raises(SessionDecodeError):
        logged_in.resume_saved_session()


def test_corrupt_save_is_discarded(logged_in, store):
    store.set_saved_session("alice", "type:Sprint;mode:Global Mode")
    with pytest.raises(SessionDecodeError):
        logged_in.resume_saved_session()
    assert store.get_saved_session("alice") == NO_SAVED_SESSION
    assert not logged_in.has_saved_session()


def test_login_drops_previous_session(logged_in):
    logged_in.start_session(GameMode.GLOBAL, GameType.MARATHON)
    assert logged_in.login("alice", "secret1")
    assert logged_in.get_round_view() is None


def test_leaderboard_delegation(logged_in, store):
    store.register("bobby", "secret2")
    store.set_high_score("bobby", 12)
    assert [row.username for row in logged_in.get_top_players(2)] == ["bobby", "alice"]
    assert logged_in.get_leaderboard_page(0).total_players == 2
