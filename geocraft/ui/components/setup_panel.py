"""Game setup: mode, then continent (continental only), then game type."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QLabel,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from geocraft.constants.ui_constants import (
    CONTINENTAL_LOCKED_MESSAGE,
    SETUP_CONTINENT_PROMPT,
    SETUP_MODE_PROMPT,
    SETUP_TYPE_PROMPT,
)
from geocraft.core.game_manager import GameManager
from geocraft.core.models import GameMode, GameType
from geocraft.styling.styles import Styles
from geocraft.ui.dialog_helpers import show_warning

_MODE_LABELS = {
    GameMode.GLOBAL: "Global",
    GameMode.CONTINENTAL: "Continental",
    GameMode.MICRO_NATION: "Micro Nations",
}


class SetupPanel(QWidget):
    """Walks the player through the choices needed to start a session."""

    def __init__(
        self,
        game_manager: GameManager,
        on_start: callable,
        on_back: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.game_manager = game_manager
        self.on_start = on_start
        self.on_back = on_back

        self._mode: GameMode | None = None
        self._continent: str | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.step_stack = QStackedWidget(self)
        self.mode_page = self._build_page(
            SETUP_MODE_PROMPT,
            [(_MODE_LABELS[mode], lambda _=False, m=mode: self._handle_mode(m)) for mode in GameMode],
        )
        self.continent_page = self._build_page(
            SETUP_CONTINENT_PROMPT,
            [
                (continent, lambda _=False, c=continent: self._handle_continent(c))
                for continent in self.game_manager.get_continents()
            ],
        )
        self.type_page = self._build_page(
            SETUP_TYPE_PROMPT,
            [(game_type.value, lambda _=False, t=game_type: self._handle_type(t)) for game_type in GameType],
        )
        self.step_stack.addWidget(self.mode_page)
        self.step_stack.addWidget(self.continent_page)
        self.step_stack.addWidget(self.type_page)
        layout.addWidget(self.step_stack)

        self.back_button = QPushButton("Back", self)
        self.back_button.clicked.connect(self._handle_back)
        layout.addWidget(self.back_button)

    def _build_page(self, prompt: str, buttons: list[tuple[str, callable]]) -> QWidget:
        page = QWidget(self)
        page_layout = QVBoxLayout()
        page.setLayout(page_layout)
        page_layout.addStretch()

        prompt_label = QLabel(prompt, page)
        prompt_label.setAlignment(Qt.AlignCenter)
        prompt_label.setStyleSheet(Styles.get_large_label_style())
        page_layout.addWidget(prompt_label)

        for text, handler in buttons:
            button = QPushButton(text, page)
            button.clicked.connect(handler)
            page_layout.addWidget(button)

        page_layout.addStretch()
        return page

    def reset_state(self) -> None:
        self._mode = None
        self._continent = None
        self.step_stack.setCurrentWidget(self.mode_page)

    def _handle_mode(self, mode: GameMode) -> None:
        if not self.game_manager.is_mode_unlocked(mode):
            score = self.game_manager.get_unlock_score(mode)
            show_warning(self, "Mode locked", CONTINENTAL_LOCKED_MESSAGE.format(score=score))
            return
        self._mode = mode
        if mode is GameMode.CONTINENTAL:
            self.step_stack.setCurrentWidget(self.continent_page)
        else:
            self._continent = None
            self.step_stack.setCurrentWidget(self.type_page)

    def _handle_continent(self, continent: str) -> None:
        self._continent = continent
        self.step_stack.setCurrentWidget(self.type_page)

    def _handle_type(self, game_type: GameType) -> None:
        if self._mode is None:
            self.reset_state()
            return
        self.on_start(self._mode, game_type, self._continent)

    def _handle_back(self) -> None:
        current = self.step_stack.currentWidget()
        if current is self.mode_page:
            self.on_back()
        elif current is self.type_page and self._mode is GameMode.CONTINENTAL:
            self.step_stack.setCurrentWidget(self.continent_page)
        else:
            self.reset_state()
