"""Account statistics, optionally headed by the summary of the last session."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QGroupBox, QLabel, QPushButton, QVBoxLayout, QWidget

from geocraft.core.game_manager import GameManager
from geocraft.core.models import GameType, SessionSummary
from geocraft.styling.styles import Styles


class StatsPanel(QWidget):
    """Shows games played, running accuracy and high score."""

    def __init__(
        self,
        game_manager: GameManager,
        on_back: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.game_manager = game_manager
        self.on_back = on_back

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.summary_group = QGroupBox("Last Game", self)
        summary_layout = QVBoxLayout()
        self.summary_group.setLayout(summary_layout)
        self.summary_label = QLabel("", self.summary_group)
        self.summary_label.setAlignment(Qt.AlignCenter)
        self.summary_label.setStyleSheet(Styles.get_large_label_style())
        summary_layout.addWidget(self.summary_label)
        layout.addWidget(self.summary_group)

        stats_group = QGroupBox("Your Stats", self)
        stats_layout = QVBoxLayout()
        stats_group.setLayout(stats_layout)
        self.games_label = QLabel("", stats_group)
        self.accuracy_label = QLabel("", stats_group)
        self.high_score_label = QLabel("", stats_group)
        for label in (self.games_label, self.accuracy_label, self.high_score_label):
            stats_layout.addWidget(label)
        layout.addWidget(stats_group)

        layout.addStretch()

        self.back_button = QPushButton("Main Menu", self)
        self.back_button.clicked.connect(self.on_back)
        layout.addWidget(self.back_button)

    def show_account(self, summary: SessionSummary | None = None) -> None:
        self.summary_group.setVisible(summary is not None)
        if summary is not None:
            self.summary_label.setText(_summary_text(summary))

        record = self.game_manager.get_player_record()
        if record is None:
            return
        self.games_label.setText(f"Games played: {record.games_played}")
        self.accuracy_label.setText(f"Accuracy: {record.accuracy:.2f}%")
        self.high_score_label.setText(f"High score: {record.high_score}")


def _summary_text(summary: SessionSummary) -> str:
    if summary.game_type is GameType.TIMED:
        opening = "Time's up!"
    elif summary.game_type is GameType.EXPLORATION:
        opening = "Exploration finished."
    else:
        opening = "Game over!"
    return (
        f"{opening}\nYou got {summary.correct_guesses} out of {summary.num_guesses} "
        f"({summary.session_percentage:.0f}%)."
    )
