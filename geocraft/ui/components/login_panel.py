"""Component for logging in and registering accounts."""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from geocraft.constants.about import APP_NAME
from geocraft.constants.ui_constants import (
    ACCOUNT_CREATED_MESSAGE,
    LOGIN_FAILED_MESSAGE,
    PASSWORD_PLACEHOLDER,
    USERNAME_PLACEHOLDER,
)
from geocraft.core.game_manager import GameManager
from geocraft.styling.styles import Styles
from geocraft.ui.dialog_helpers import show_info, show_warning

logger = logging.getLogger(__name__)


class LoginPanel(QWidget):
    """Username/password entry with Login and Register actions."""

    def __init__(
        self,
        game_manager: GameManager,
        on_logged_in: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.game_manager = game_manager
        self.on_logged_in = on_logged_in

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch()

        title = QLabel(APP_NAME, self)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(Styles.get_title_label_style())
        layout.addWidget(title)

        self.username_input = QLineEdit(self)
        self.username_input.setPlaceholderText(USERNAME_PLACEHOLDER)
        layout.addWidget(self.username_input)

        self.password_input = QLineEdit(self)
        self.password_input.setPlaceholderText(PASSWORD_PLACEHOLDER)
        self.password_input.setEchoMode(QLineEdit.Password)
        self.password_input.returnPressed.connect(self._handle_login)
        layout.addWidget(self.password_input)

        button_row = QHBoxLayout()
        self.login_button = QPushButton("Login", self)
        self.login_button.clicked.connect(self._handle_login)
        button_row.addWidget(self.login_button)

        self.register_button = QPushButton("Register", self)
        self.register_button.clicked.connect(self._handle_register)
        button_row.addWidget(self.register_button)
        layout.addLayout(button_row)

        layout.addStretch()

    def _handle_login(self) -> None:
        username = self.username_input.text()
        if not self.game_manager.login(username, self.password_input.text()):
            show_warning(self, "Login failed", LOGIN_FAILED_MESSAGE)
            return
        self.reset_state()
        self.on_logged_in()

    def _handle_register(self) -> None:
        result = self.game_manager.register(
            self.username_input.text(), self.password_input.text()
        )
        if not result.approved:
            show_warning(self, "Registration failed", result.message)
            return
        logger.info("Registered account %s", self.username_input.text())
        self.password_input.clear()
        show_info(self, "Registered", ACCOUNT_CREATED_MESSAGE)

    def reset_state(self) -> None:
        self.username_input.clear()
        self.password_input.clear()
