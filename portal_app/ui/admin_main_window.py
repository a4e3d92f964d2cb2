"""Qt main window switching between login, questions, results and review modes."""

from __future__ import annotations

from enum import Enum, auto

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from portal_app.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HELP_TEXT,
)
from portal_app.constants.ui_constants import (
    CANDIDATE_URL_PLACEHOLDER,
    MODE_BUTTON_LOGOUT,
    MODE_BUTTON_QUESTIONS,
    MODE_BUTTON_RESULTS,
    RESULTS_REFRESH_INTERVAL_MS,
    WINDOW_TITLE,
)
from portal_app.core.portal_manager import PortalManager
from portal_app.styling.color_palette import Theme
from portal_app.styling.styles import Styles
from portal_app.ui.components.login_panel import LoginPanel
from portal_app.ui.components.question_panel import QuestionPanel
from portal_app.ui.components.results_panel import ResultsPanel
from portal_app.ui.components.review_panel import ReviewPanel
from portal_app.ui.dialog_helpers import show_info
from portal_app.ui.settings_dialog import SettingsDialog


class AdminMode(Enum):
    """High-level UI mode for the admin console."""

    LOGIN = auto()
    QUESTIONS = auto()
    RESULTS = auto()
    REVIEW = auto()


class AdminMainWindow(QMainWindow):
    """Main Qt window orchestrating the admin console modes."""

    def __init__(
        self,
        portal_manager: PortalManager,
        candidate_url: str | None = None,
        api_base_url: str = "",
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.portal_manager = portal_manager
        self.candidate_url = candidate_url or CANDIDATE_URL_PLACEHOLDER
        self.api_base_url = api_base_url

        self._mode = AdminMode.LOGIN
        self._ui_font_size: int = 10
        self._auto_refresh_results: bool = True
        self._theme = Theme.LIGHT

        self._build_ui()
        self._configure_refresh_timer()
        self._apply_styles()

        if self.portal_manager.is_admin_logged_in():
            self._handle_logged_in()
        else:
            self._set_mode(AdminMode.LOGIN)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_mode_buttons(root_layout)

        self.url_label = QLabel(f"Candidate page: {self.candidate_url}", self)
        self.url_label.setStyleSheet(Styles.get_muted_label_style())
        root_layout.addWidget(self.url_label)

        self.mode_stack = QStackedWidget(self)

        self.login_panel = LoginPanel(self.portal_manager, on_login=self._handle_logged_in, parent=self)
        self.question_panel = QuestionPanel(self.portal_manager, self)
        self.results_panel = ResultsPanel(self.portal_manager, on_review=self._open_review, parent=self)
        self.review_panel = ReviewPanel(self.portal_manager, on_back=self._handle_results_mode, parent=self)

        self.mode_stack.addWidget(self.login_panel)
        self.mode_stack.addWidget(self.question_panel)
        self.mode_stack.addWidget(self.results_panel)
        self.mode_stack.addWidget(self.review_panel)

        root_layout.addWidget(self.mode_stack)

    def _build_mode_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.questions_mode_button = QPushButton(MODE_BUTTON_QUESTIONS, self)
        self.questions_mode_button.setCheckable(True)
        self.questions_mode_button.clicked.connect(self._handle_questions_mode)
        button_row.addWidget(self.questions_mode_button)

        self.results_mode_button = QPushButton(MODE_BUTTON_RESULTS, self)
        self.results_mode_button.setCheckable(True)
        self.results_mode_button.clicked.connect(self._handle_results_mode)
        button_row.addWidget(self.results_mode_button)

        button_row.addStretch()

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.settings_button = QPushButton("Settings", self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        self.logout_button = QPushButton(MODE_BUTTON_LOGOUT, self)
        self.logout_button.clicked.connect(self._handle_logout)
        button_row.addWidget(self.logout_button)

        layout.addLayout(button_row)

    def _configure_refresh_timer(self) -> None:
        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(RESULTS_REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self._refresh_state)
        self.refresh_timer.start()

    def _refresh_state(self) -> None:
        if self._mode == AdminMode.RESULTS and self._auto_refresh_results:
            self.results_panel.refresh(quiet=True)

    def _set_mode(self, mode: AdminMode) -> None:
        self._mode = mode
        logged_in = mode != AdminMode.LOGIN
        self.questions_mode_button.setEnabled(logged_in)
        self.results_mode_button.setEnabled(logged_in)
        self.logout_button.setEnabled(logged_in)
        self.questions_mode_button.setChecked(mode == AdminMode.QUESTIONS)
        self.results_mode_button.setChecked(mode in (AdminMode.RESULTS, AdminMode.REVIEW))

        index_map = {
            AdminMode.LOGIN: 0,
            AdminMode.QUESTIONS: 1,
            AdminMode.RESULTS: 2,
            AdminMode.REVIEW: 3,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    def _handle_logged_in(self) -> None:
        self._handle_questions_mode()

    def _handle_questions_mode(self) -> None:
        self._set_mode(AdminMode.QUESTIONS)
        self.question_panel.refresh()

    def _handle_results_mode(self) -> None:
        self._set_mode(AdminMode.RESULTS)
        self.results_panel.refresh()

    def _open_review(self, result_id: str) -> None:
        if self.review_panel.load_result(result_id):
            self._set_mode(AdminMode.REVIEW)

    def _handle_logout(self) -> None:
        self.portal_manager.admin_logout()
        self.login_panel.reset_state()
        self.question_panel.clear_fields()
        self._set_mode(AdminMode.LOGIN)

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(
            self,
            self._ui_font_size,
            self._auto_refresh_results,
            self.api_base_url,
            self._theme == Theme.DARK,
        )
        if dialog.exec():
            self._ui_font_size = dialog.get_ui_font_size()
            self._auto_refresh_results = dialog.get_auto_refresh_results()
            self._theme = Theme.DARK if dialog.get_dark_theme() else Theme.LIGHT
            self._apply_styles()

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style(self._theme))
        self.url_label.setStyleSheet(Styles.get_muted_label_style(self._theme))

        ui_style = f"font-size: {self._ui_font_size}pt;"
        buttons = [
            self.questions_mode_button,
            self.results_mode_button,
            self.about_button,
            self.help_button,
            self.settings_button,
            self.logout_button,
        ]
        for button in buttons:
            button.setStyleSheet(ui_style)

        self.question_panel.apply_font_size(self._ui_font_size)
        self.results_panel.apply_font_size(self._ui_font_size)
        self.review_panel.apply_font_size(self._ui_font_size)
