"""Dialog for changing the logged-in player's password."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from geocraft.constants.ui_constants import PASSWORD_FORMAT_MESSAGE


class ChangePasswordDialog(QDialog):
    """Collects the old password and the new one twice."""

    def __init__(self, parent=None, username: str = "") -> None:
        super().__init__(parent)
        self.setWindowTitle("Change Password")
        self.setModal(True)
        self.setMinimumWidth(360)
        self._username = username

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        layout.addWidget(QLabel(f"Changing password for {self._username}", self))

        form = QFormLayout()
        self.old_password_input = self._password_field()
        self.new_password_input = self._password_field()
        self.confirm_password_input = self._password_field()
        form.addRow("Old password:", self.old_password_input)
        form.addRow("New password:", self.new_password_input)
        form.addRow("Confirm new password:", self.confirm_password_input)
        layout.addLayout(form)

        format_label = QLabel(PASSWORD_FORMAT_MESSAGE, self)
        format_label.setWordWrap(True)
        layout.addWidget(format_label)

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Change")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def _password_field(self) -> QLineEdit:
        field = QLineEdit(self)
        field.setEchoMode(QLineEdit.Password)
        return field

    def get_old_password(self) -> str:
        return self.old_password_input.text()

    def get_new_password(self) -> str:
        return self.new_password_input.text()

    def get_confirm_password(self) -> str:
        return self.confirm_password_input.text()
