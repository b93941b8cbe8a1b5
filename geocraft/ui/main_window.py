"""Qt main window switching between the login, menu and game screens."""

from __future__ import annotations

from enum import Enum, auto
import logging

from PySide6.QtWidgets import QMainWindow, QStackedWidget, QVBoxLayout, QWidget

from geocraft.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    TUTORIAL_TEXT,
)
from geocraft.constants.ui_constants import (
    EMPTY_POOL_MESSAGE,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
    NO_SAVED_GAME_MESSAGE,
    PASSWORD_CHANGE_FAILED_MESSAGE,
    PASSWORD_CHANGED_MESSAGE,
    SAVED_GAME_CORRUPT_MESSAGE,
    WINDOW_TITLE,
)
from geocraft.core.errors import EmptyCandidatePoolError, ModeLockedError, SessionDecodeError
from geocraft.core.game_manager import GameManager
from geocraft.core.models import GameMode, GameType, RoundView
from geocraft.styling.styles import Styles
from geocraft.ui.change_password_dialog import ChangePasswordDialog
from geocraft.ui.components.gameplay_panel import GameplayPanel
from geocraft.ui.components.leaderboard_panel import LeaderboardPanel
from geocraft.ui.components.login_panel import LoginPanel
from geocraft.ui.components.menu_panel import MenuPanel
from geocraft.ui.components.setup_panel import SetupPanel
from geocraft.ui.components.stats_panel import StatsPanel
from geocraft.ui.dialog_helpers import confirm_log_out, show_info, show_warning

logger = logging.getLogger(__name__)


class Screen(Enum):
    """Top-level screens of the game window."""

    LOGIN = auto()
    MENU = auto()
    SETUP = auto()
    GAMEPLAY = auto()
    STATS = auto()
    LEADERBOARD = auto()


class GeocraftMainWindow(QMainWindow):
    """Main Qt window; each screen is one page of a stacked widget."""

    def __init__(self, game_manager: GameManager) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.setMinimumSize(MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)

        self.game_manager = game_manager
        self._screen = Screen.LOGIN

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self.game_manager.add_state_listener(self._handle_state_change)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self.screen_stack = QStackedWidget(self)

        self.login_panel = LoginPanel(self.game_manager, on_logged_in=self._handle_logged_in, parent=self)
        self.menu_panel = MenuPanel(
            self.game_manager,
            on_new_game=self._handle_new_game,
            on_continue=self._handle_continue,
            on_tutorial=self._handle_tutorial,
            on_high_scores=self._handle_high_scores,
            on_stats=self._handle_stats,
            on_change_password=self._handle_change_password,
            on_log_out=self._handle_log_out,
            parent=self,
        )
        self.setup_panel = SetupPanel(
            self.game_manager,
            on_start=self._handle_start_session,
            on_back=self._show_menu,
            parent=self,
        )
        self.gameplay_panel = GameplayPanel(
            self.game_manager,
            on_session_ended=self._handle_session_ended,
            on_quit=self._show_menu,
            parent=self,
        )
        self.stats_panel = StatsPanel(self.game_manager, on_back=self._show_menu, parent=self)
        self.leaderboard_panel = LeaderboardPanel(self.game_manager, on_back=self._show_menu, parent=self)

        self._panels = {
            Screen.LOGIN: self.login_panel,
            Screen.MENU: self.menu_panel,
            Screen.SETUP: self.setup_panel,
            Screen.GAMEPLAY: self.gameplay_panel,
            Screen.STATS: self.stats_panel,
            Screen.LEADERBOARD: self.leaderboard_panel,
        }
        for panel in self._panels.values():
            self.screen_stack.addWidget(panel)

        root_layout.addWidget(self.screen_stack)
        self._set_screen(Screen.LOGIN)

    def _set_screen(self, screen: Screen) -> None:
        if self._screen is Screen.GAMEPLAY and screen is not Screen.GAMEPLAY:
            self.gameplay_panel.stop()
        self._screen = screen
        self.screen_stack.setCurrentWidget(self._panels[screen])

    def _handle_state_change(self) -> None:
        if self._screen is Screen.GAMEPLAY:
            self.gameplay_panel.refresh()

    # --- Menu actions ---

    def _handle_logged_in(self) -> None:
        self._show_menu()

    def _show_menu(self) -> None:
        self.menu_panel.refresh()
        self._set_screen(Screen.MENU)

    def _handle_new_game(self) -> None:
        self.setup_panel.reset_state()
        self._set_screen(Screen.SETUP)

    def _handle_continue(self) -> None:
        if not self.game_manager.has_saved_session():
            show_info(self, "Continue", NO_SAVED_GAME_MESSAGE)
            return
        try:
            view = self.game_manager.resume_saved_session()
        except SessionDecodeError:
            show_warning(self, "Continue", SAVED_GAME_CORRUPT_MESSAGE)
            self.menu_panel.refresh()
            return
        except EmptyCandidatePoolError:
            show_warning(self, "Continue", EMPTY_POOL_MESSAGE)
            return
        self._enter_gameplay(view)

    def _handle_tutorial(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION} ({APP_LICENSE})\n"
            f"{APP_ABOUT_TEXT}\n\n"
            f"{TUTORIAL_TEXT}"
        )
        show_info(self, "Tutorial", details)

    def _handle_high_scores(self) -> None:
        self.leaderboard_panel.show_page(0)
        self._set_screen(Screen.LEADERBOARD)

    def _handle_stats(self) -> None:
        self.stats_panel.show_account()
        self._set_screen(Screen.STATS)

    def _handle_change_password(self) -> None:
        dialog = ChangePasswordDialog(self, self.game_manager.get_current_username() or "")
        if not dialog.exec():
            return
        changed = self.game_manager.change_password(
            dialog.get_old_password(),
            dialog.get_new_password(),
            dialog.get_confirm_password(),
        )
        if changed:
            show_info(self, "Change Password", PASSWORD_CHANGED_MESSAGE)
        else:
            show_warning(self, "Change Password", PASSWORD_CHANGE_FAILED_MESSAGE)

    def _handle_log_out(self) -> None:
        if not confirm_log_out(self):
            return
        self.game_manager.logout()
        self.login_panel.reset_state()
        self._set_screen(Screen.LOGIN)

    # --- Sessions ---

    def _handle_start_session(self, mode: GameMode, game_type: GameType, continent: str | None) -> None:
        try:
            view = self.game_manager.start_session(mode, game_type, continent)
        except ModeLockedError as exc:
            show_warning(self, "Mode locked", str(exc))
            return
        except EmptyCandidatePoolError:
            logger.warning("Not enough countries for %s / %s", mode.value, continent)
            show_warning(self, "New Game", EMPTY_POOL_MESSAGE)
            return
        self._enter_gameplay(view)

    def _enter_gameplay(self, view: RoundView) -> None:
        self._set_screen(Screen.GAMEPLAY)
        self.gameplay_panel.start(view)

    def _handle_session_ended(self) -> None:
        self.stats_panel.show_account(self.game_manager.get_session_summary())
        self._set_screen(Screen.STATS)
