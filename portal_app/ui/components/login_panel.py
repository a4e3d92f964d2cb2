"""Component for the administrator login form."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFormLayout,
    QGroupBox,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from portal_app.constants.ui_constants import LOGIN_BUTTON, LOGIN_TITLE
from portal_app.core.errors import PortalApiError
from portal_app.core.portal_manager import PortalManager
from portal_app.ui.dialog_helpers import show_error, show_warning


class LoginPanel(QWidget):
    """Username/password form; stores the admin token on success."""

    def __init__(
        self,
        portal_manager: PortalManager,
        on_login: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.portal_manager = portal_manager
        self.on_login = on_login
        self._build_ui()

    def _build_ui(self) -> None:
        outer = QVBoxLayout()
        outer.addStretch()
        self.setLayout(outer)

        group = QGroupBox(LOGIN_TITLE, self)
        group.setMaximumWidth(420)
        form = QFormLayout()
        group.setLayout(form)

        self.username_input = QLineEdit(self)
        form.addRow("Username", self.username_input)

        self.password_input = QLineEdit(self)
        self.password_input.setEchoMode(QLineEdit.Password)
        self.password_input.returnPressed.connect(self._handle_login)
        form.addRow("Password", self.password_input)

        self.login_button = QPushButton(LOGIN_BUTTON, self)
        self.login_button.clicked.connect(self._handle_login)
        form.addRow(self.login_button)

        outer.addWidget(group, alignment=Qt.AlignHCenter)
        outer.addStretch()

    def _handle_login(self) -> None:
        username = self.username_input.text()
        password = self.password_input.text()
        self.login_button.setEnabled(False)
        self.login_button.setText("Logging in...")
        try:
            self.portal_manager.admin_login(username, password)
        except ValueError as exc:
            show_warning(self, "Login", str(exc))
            return
        except PortalApiError as exc:
            show_error(self, "Login failed", str(exc))
            return
        finally:
            self.login_button.setEnabled(True)
            self.login_button.setText(LOGIN_BUTTON)
        self.password_input.clear()
        self.on_login()

    def reset_state(self) -> None:
        self.password_input.clear()
