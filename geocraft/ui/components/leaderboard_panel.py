"""High score table with previous/next paging."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from geocraft.core.game_manager import GameManager
from geocraft.styling.styles import Styles


class LeaderboardPanel(QWidget):
    """Lists players ranked by high score, one page at a time."""

    def __init__(
        self,
        game_manager: GameManager,
        on_back: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.game_manager = game_manager
        self.on_back = on_back
        self._page = 0

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        title = QLabel("High Scores", self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(Styles.get_title_label_style())
        layout.addWidget(title)

        self.score_list = QListWidget(self)
        self.score_list.setAlternatingRowColors(True)
        layout.addWidget(self.score_list, stretch=1)

        self.empty_label = QLabel("No players yet.", self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

        paging_row = QHBoxLayout()
        self.previous_button = QPushButton("Previous", self)
        self.previous_button.clicked.connect(self._handle_previous)
        paging_row.addWidget(self.previous_button)

        self.page_label = QLabel("", self)
        self.page_label.setAlignment(Qt.AlignCenter)
        paging_row.addWidget(self.page_label, stretch=1)

        self.next_button = QPushButton("Next", self)
        self.next_button.clicked.connect(self._handle_next)
        paging_row.addWidget(self.next_button)
        layout.addLayout(paging_row)

        self.back_button = QPushButton("Main Menu", self)
        self.back_button.clicked.connect(self.on_back)
        layout.addWidget(self.back_button)

    def show_page(self, page: int = 0) -> None:
        leaderboard_page = self.game_manager.get_leaderboard_page(page)
        self._page = leaderboard_page.page
        self.score_list.clear()
        current = self.game_manager.get_current_username()
        for row in leaderboard_page.rows:
            marker = "  (you)" if row.username == current else ""
            QListWidgetItem(f"{row.rank}. {row.username} - {row.high_score}{marker}", self.score_list)
        self.empty_label.setVisible(leaderboard_page.total_players == 0)
        self.page_label.setText(f"Page {self._page + 1}")
        self.previous_button.setEnabled(leaderboard_page.has_previous)
        self.next_button.setEnabled(leaderboard_page.has_next)

    def _handle_previous(self) -> None:
        if self._page > 0:
            self.show_page(self._page - 1)

    def _handle_next(self) -> None:
        self.show_page(self._page + 1)
