"""Component for playing a round: map, flag, hints and three choices."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from geocraft.constants.data_constants import FLAGS_DIR, MAPS_DIR
from geocraft.constants.game_constants import (
    CORRECT_ANSWER_POINTS,
    COUNTDOWN_INTERVAL_MS,
    STARTING_LIVES,
    WRONG_ANSWER_PENALTY,
)
from geocraft.constants.ui_constants import (
    EMPTY_HEART,
    EXIT_EXPLORATION_BUTTON,
    FULL_HEART,
    HIGH_SCORE_TEMPLATE,
    LIVES_TEMPLATE,
    QUIT_GAME_BUTTON,
    SCORE_FLASH_MS,
    SHOW_FLAG_BUTTON,
    SHOW_HINT_BUTTON,
    TIME_LEFT_TEMPLATE,
)
from geocraft.core.game_manager import GameManager
from geocraft.core.hint_renderer import renderer
from geocraft.core.models import ChoiceOutcome, GameType, RoundView, SessionPhase
from geocraft.styling.styles import Styles
from geocraft.ui.dialog_helpers import confirm_quit_session

logger = logging.getLogger(__name__)

_MAP_SIZE = (560, 360)
_FLAG_SIZE = (180, 120)


class GameplayPanel(QWidget):
    """Renders the current RoundView and forwards player actions to the manager."""

    def __init__(
        self,
        game_manager: GameManager,
        on_session_ended: callable,
        on_quit: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.game_manager = game_manager
        self.on_session_ended = on_session_ended
        self.on_quit = on_quit

        self._displayed_country: str | None = None
        self._flag_loaded_for: str | None = None
        self._end_reported = False

        self._build_ui()
        self._configure_countdown_timer()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Status row: session title, lives or time, high score
        status_row = QHBoxLayout()
        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        status_row.addWidget(self.title_label)
        status_row.addStretch()

        self.lives_label = QLabel("", self)
        self.lives_label.setStyleSheet(Styles.get_hearts_style())
        status_row.addWidget(self.lives_label)

        self.time_label = QLabel("", self)
        self.time_label.setStyleSheet(Styles.get_large_label_style())
        status_row.addWidget(self.time_label)

        self.score_label = QLabel("", self)
        status_row.addWidget(self.score_label)
        layout.addLayout(status_row)

        # Map with flag and hint box beside it
        board_row = QHBoxLayout()
        self.map_label = QLabel(self)
        self.map_label.setAlignment(Qt.AlignCenter)
        self.map_label.setMinimumSize(*_MAP_SIZE)
        board_row.addWidget(self.map_label, stretch=3)

        side_column = QVBoxLayout()
        self.flag_label = QLabel(self)
        self.flag_label.setAlignment(Qt.AlignCenter)
        self.flag_label.setMinimumSize(*_FLAG_SIZE)
        side_column.addWidget(self.flag_label)

        self.hint_label = QLabel(self)
        self.hint_label.setTextFormat(Qt.RichText)
        self.hint_label.setWordWrap(True)
        self.hint_label.setStyleSheet(Styles.get_hint_box_style())
        self.hint_label.setVisible(False)
        side_column.addWidget(self.hint_label)
        side_column.addStretch()
        board_row.addLayout(side_column, stretch=1)
        layout.addLayout(board_row, stretch=1)

        self.feedback_label = QLabel("", self)
        self.feedback_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.feedback_label)

        choice_row = QHBoxLayout()
        self.choice_buttons: list[QPushButton] = []
        for position in range(3):
            button = QPushButton("", self)
            button.clicked.connect(lambda _=False, p=position: self._handle_choice(p))
            choice_row.addWidget(button)
            self.choice_buttons.append(button)
        layout.addLayout(choice_row)

        action_row = QHBoxLayout()
        self.show_flag_button = QPushButton(SHOW_FLAG_BUTTON, self)
        self.show_flag_button.clicked.connect(self._handle_show_flag)
        action_row.addWidget(self.show_flag_button)

        self.show_hint_button = QPushButton(SHOW_HINT_BUTTON, self)
        self.show_hint_button.clicked.connect(self._handle_show_hint)
        action_row.addWidget(self.show_hint_button)

        action_row.addStretch()

        self.exit_exploration_button = QPushButton(EXIT_EXPLORATION_BUTTON, self)
        self.exit_exploration_button.clicked.connect(self._handle_exit_exploration)
        action_row.addWidget(self.exit_exploration_button)

        self.quit_button = QPushButton(QUIT_GAME_BUTTON, self)
        self.quit_button.clicked.connect(self._handle_quit)
        action_row.addWidget(self.quit_button)
        layout.addLayout(action_row)

    def _configure_countdown_timer(self) -> None:
        self.countdown_timer = QTimer(self)
        self.countdown_timer.setInterval(COUNTDOWN_INTERVAL_MS)
        self.countdown_timer.timeout.connect(self.game_manager.tick)

    # --- Session lifecycle ---

    def start(self, view: RoundView) -> None:
        """Show a freshly started or resumed session."""
        self._displayed_country = None
        self._flag_loaded_for = None
        self._end_reported = False
        self.feedback_label.clear()
        self.title_label.setText(_session_title(view))

        timed = view.game_type is GameType.TIMED
        self.time_label.setVisible(timed)
        self.lives_label.setVisible(view.game_type is GameType.MARATHON)
        self.exit_exploration_button.setVisible(view.game_type is GameType.EXPLORATION)
        self.quit_button.setVisible(view.game_type is not GameType.EXPLORATION)
        if timed:
            self.countdown_timer.start()
        self.refresh()

    def stop(self) -> None:
        self.countdown_timer.stop()

    def refresh(self) -> None:
        view = self.game_manager.get_round_view()
        if view is None:
            return
        if view.phase is SessionPhase.SESSION_ENDED:
            self._report_end()
            return
        self._render(view)

    # --- Rendering ---

    def _render(self, view: RoundView) -> None:
        self.score_label.setText(HIGH_SCORE_TEMPLATE.format(score=view.high_score))
        self.time_label.setText(TIME_LEFT_TEMPLATE.format(seconds=view.time_left))
        self.lives_label.setText(
            LIVES_TEMPLATE.format(
                hearts=FULL_HEART * view.lives + EMPTY_HEART * (STARTING_LIVES - view.lives)
            )
        )

        if view.correct_country != self._displayed_country:
            self._displayed_country = view.correct_country
            self._flag_loaded_for = None
            _set_image(self.map_label, MAPS_DIR, view.correct_country, _MAP_SIZE)
            self.flag_label.clear()

        active = view.phase is SessionPhase.ROUND_ACTIVE
        for button, choice in zip(self.choice_buttons, view.choices):
            button.setText(choice)
            button.setEnabled(active and choice not in view.disabled_choices)

        if view.show_flag and self._flag_loaded_for != view.correct_country:
            self._flag_loaded_for = view.correct_country
            _set_image(self.flag_label, FLAGS_DIR, view.correct_country, _FLAG_SIZE)
        self.show_flag_button.setEnabled(active and not view.show_flag)

        self.hint_label.setVisible(view.show_hint)
        if view.show_hint:
            self.hint_label.setText(renderer.render_fragment(view.hint_text))
        self.show_hint_button.setEnabled(active and not view.show_hint)

    def _flash_feedback(self, text: str, correct: bool) -> None:
        self.feedback_label.setText(text)
        self.feedback_label.setStyleSheet(Styles.get_feedback_style(correct))
        QTimer.singleShot(SCORE_FLASH_MS, self.feedback_label.clear)

    def _report_end(self) -> None:
        self.countdown_timer.stop()
        if self._end_reported:
            return
        self._end_reported = True
        self.on_session_ended()

    # --- Player actions ---

    def _handle_choice(self, position: int) -> None:
        if position >= len(self.choice_buttons):
            return
        view = self.game_manager.get_round_view()
        unscored = view is not None and view.game_type is GameType.EXPLORATION
        outcome = self.game_manager.submit_choice(self.choice_buttons[position].text())
        if outcome is ChoiceOutcome.CORRECT:
            self._flash_feedback("Correct!" if unscored else f"Correct! +{CORRECT_ANSWER_POINTS}", True)
        elif outcome is ChoiceOutcome.INCORRECT:
            self._flash_feedback("Wrong!" if unscored else f"Wrong! -{WRONG_ANSWER_PENALTY}", False)

    def _handle_show_flag(self) -> None:
        self.game_manager.reveal_flag()

    def _handle_show_hint(self) -> None:
        self.game_manager.reveal_hint()

    def _handle_exit_exploration(self) -> None:
        self.game_manager.end_session()

    def _handle_quit(self) -> None:
        if not confirm_quit_session(self):
            return
        self.countdown_timer.stop()
        self.game_manager.leave_session()
        self.on_quit()


def _session_title(view: RoundView) -> str:
    title = f"{view.game_type.value} - {view.game_mode.value}"
    if view.continent:
        title += f" ({view.continent})"
    return title


def _set_image(label: QLabel, directory: Path, country: str | None, size: tuple[int, int]) -> None:
    label.clear()
    if not country:
        return
    image_path = directory / f"{country}.png"
    if not image_path.exists():
        logger.warning("Image not found: %s", image_path)
        return
    pixmap = QPixmap(str(image_path))
    if pixmap.isNull():
        logger.warning("Could not load image %s", image_path)
        return
    label.setPixmap(pixmap.scaled(*size, Qt.KeepAspectRatio, Qt.SmoothTransformation))
