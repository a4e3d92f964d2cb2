"""Settings dialog for console display preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)


class SettingsDialog(QDialog):
    """Dialog for configuring console preferences."""

    def __init__(
        self,
        parent=None,
        ui_font_size: int = 10,
        auto_refresh_results: bool = True,
        api_base_url: str = "",
        dark_theme: bool = False,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(420)

        self._ui_font_size = ui_font_size
        self._auto_refresh_results = auto_refresh_results
        self._api_base_url = api_base_url
        self._dark_theme = dark_theme

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        display_group = QGroupBox("Display")
        display_layout = QVBoxLayout()
        display_group.setLayout(display_layout)

        font_row = QHBoxLayout()
        font_label = QLabel("UI Font Size:")
        self.ui_font_spinbox = QSpinBox()
        self.ui_font_spinbox.setRange(8, 24)
        self.ui_font_spinbox.setValue(self._ui_font_size)
        self.ui_font_spinbox.setSuffix(" pt")
        font_row.addWidget(font_label)
        font_row.addStretch()
        font_row.addWidget(self.ui_font_spinbox)
        display_layout.addLayout(font_row)

        self.auto_refresh_checkbox = QCheckBox("Refresh the results list automatically")
        self.auto_refresh_checkbox.setChecked(self._auto_refresh_results)
        display_layout.addWidget(self.auto_refresh_checkbox)

        self.dark_theme_checkbox = QCheckBox("Dark theme")
        self.dark_theme_checkbox.setChecked(self._dark_theme)
        display_layout.addWidget(self.dark_theme_checkbox)
        layout.addWidget(display_group)

        server_group = QGroupBox("Server")
        server_layout = QVBoxLayout()
        server_group.setLayout(server_layout)
        api_label = QLabel(f"API: {self._api_base_url or '(not configured)'}")
        api_label.setToolTip("Set PORTAL_API_BASE_URL before launching to change the API address.")
        api_label.setWordWrap(True)
        server_layout.addWidget(api_label)
        layout.addWidget(server_group)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)
        button_row.addWidget(self.cancel_button)
        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)
        layout.addLayout(button_row)

    def get_ui_font_size(self) -> int:
        return self.ui_font_spinbox.value()

    def get_auto_refresh_results(self) -> bool:
        return self.auto_refresh_checkbox.isChecked()

    def get_dark_theme(self) -> bool:
        return self.dark_theme_checkbox.isChecked()
