"""Component for starting, stopping and sizing the candidate test."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QWidget,
)

from portal_app.constants.session_constants import (
    DEFAULT_QUESTION_LIMIT,
    DEFAULT_TIME_LIMIT_MINUTES,
)
from portal_app.constants.ui_constants import (
    CONTROL_GROUP_TITLE,
    CONTROL_START_BUTTON,
    CONTROL_STATUS_TEMPLATE,
    CONTROL_STOP_BUTTON,
)
from portal_app.core.errors import PortalApiError
from portal_app.core.models import TestConfiguration
from portal_app.core.portal_manager import PortalManager
from portal_app.styling.styles import Styles
from portal_app.ui.dialog_helpers import confirm_stop_test, show_error, show_info


class ControlPanel(QGroupBox):
    """Test control: question count, time limit, active status."""

    def __init__(self, portal_manager: PortalManager, parent: QWidget | None = None) -> None:
        super().__init__(CONTROL_GROUP_TITLE, parent)
        self.portal_manager = portal_manager
        self._build_ui()

    def _build_ui(self) -> None:
        form = QFormLayout()
        self.setLayout(form)

        self.question_limit_spinbox = QSpinBox(self)
        self.question_limit_spinbox.setRange(1, 500)
        self.question_limit_spinbox.setValue(DEFAULT_QUESTION_LIMIT)
        form.addRow("Number of Questions", self.question_limit_spinbox)

        self.time_limit_spinbox = QSpinBox(self)
        self.time_limit_spinbox.setRange(1, 600)
        self.time_limit_spinbox.setSuffix(" min")
        self.time_limit_spinbox.setValue(DEFAULT_TIME_LIMIT_MINUTES)
        form.addRow("Time Limit", self.time_limit_spinbox)

        self.status_label = QLabel(self)
        form.addRow(self.status_label)

        button_row = QHBoxLayout()
        self.start_button = QPushButton(CONTROL_START_BUTTON, self)
        self.start_button.clicked.connect(self._handle_start)
        button_row.addWidget(self.start_button)
        self.stop_button = QPushButton(CONTROL_STOP_BUTTON, self)
        self.stop_button.clicked.connect(self._handle_stop)
        button_row.addWidget(self.stop_button)
        form.addRow(button_row)

        self._show_configuration(TestConfiguration())

    def refresh(self) -> None:
        try:
            config = self.portal_manager.refresh_test_control()
        except PortalApiError as exc:
            show_error(self, "Test control", f"Could not load test control: {exc}")
            return
        self._show_configuration(config)

    def _handle_start(self) -> None:
        try:
            config = self.portal_manager.start_test(
                self.question_limit_spinbox.value(),
                self.time_limit_spinbox.value(),
            )
        except (ValueError, PortalApiError) as exc:
            show_error(self, "Test control", f"Failed to update test control: {exc}")
            return
        self._show_configuration(config)
        show_info(self, "Test control", "Test control updated successfully!")

    def _handle_stop(self) -> None:
        if not confirm_stop_test(self):
            return
        try:
            config = self.portal_manager.stop_test()
        except PortalApiError as exc:
            show_error(self, "Test control", f"Failed to update test control: {exc}")
            return
        self._show_configuration(config)

    def _show_configuration(self, config: TestConfiguration) -> None:
        if config.question_limit > 0:
            self.question_limit_spinbox.setValue(config.question_limit)
        self.time_limit_spinbox.setValue(config.time_limit_minutes)
        status = "Active" if config.active else "Inactive"
        self.status_label.setText(CONTROL_STATUS_TEMPLATE.format(status=status))
        self.status_label.setStyleSheet(Styles.get_status_style(config.active))
        self.start_button.setChecked(config.active)
