"""Main menu shown after login."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from geocraft.constants.ui_constants import (
    HIGH_SCORE_TEMPLATE,
    MENU_CHANGE_PASSWORD,
    MENU_CONTINUE,
    MENU_HIGH_SCORES,
    MENU_LOG_OUT,
    MENU_NEW_GAME,
    MENU_STATS,
    MENU_TUTORIAL,
)
from geocraft.core.game_manager import GameManager
from geocraft.styling.styles import Styles


class MenuPanel(QWidget):
    """One button per menu entry; the window supplies the handlers."""

    def __init__(
        self,
        game_manager: GameManager,
        on_new_game: callable,
        on_continue: callable,
        on_tutorial: callable,
        on_high_scores: callable,
        on_stats: callable,
        on_change_password: callable,
        on_log_out: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.game_manager = game_manager
        self._actions = (
            (MENU_NEW_GAME, on_new_game),
            (MENU_CONTINUE, on_continue),
            (MENU_TUTORIAL, on_tutorial),
            (MENU_HIGH_SCORES, on_high_scores),
            (MENU_STATS, on_stats),
            (MENU_CHANGE_PASSWORD, on_change_password),
            (MENU_LOG_OUT, on_log_out),
        )

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch()

        self.welcome_label = QLabel("", self)
        self.welcome_label.setAlignment(Qt.AlignCenter)
        self.welcome_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.welcome_label)

        self.high_score_label = QLabel("", self)
        self.high_score_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.high_score_label)

        self.buttons: dict[str, QPushButton] = {}
        for text, handler in self._actions:
            button = QPushButton(text, self)
            button.clicked.connect(handler)
            layout.addWidget(button)
            self.buttons[text] = button

        layout.addStretch()

    def refresh(self) -> None:
        record = self.game_manager.get_player_record()
        if record is None:
            return
        self.welcome_label.setText(f"Welcome, {record.username}!")
        self.high_score_label.setText(HIGH_SCORE_TEMPLATE.format(score=record.high_score))
