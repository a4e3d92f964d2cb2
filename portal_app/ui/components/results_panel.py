"""Component listing submitted test results."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from portal_app.constants.session_constants import RESULT_STATUS_VALIDATED
from portal_app.constants.ui_constants import (
    RESULTS_EMPTY_STATE,
    RESULTS_REFRESH_BUTTON,
    RESULTS_REVIEW_BUTTON,
)
from portal_app.core.errors import PortalApiError
from portal_app.core.models import TestResultSummary
from portal_app.core.portal_manager import PortalManager
from portal_app.styling.styles import Styles
from portal_app.ui.dialog_helpers import show_error, show_info

_COLUMNS = ("Name", "Email", "Score", "Status")


class ResultsPanel(QWidget):
    """Table of candidate results with a shortcut into the review screen."""

    def __init__(
        self,
        portal_manager: PortalManager,
        on_review: Callable[[str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.portal_manager = portal_manager
        self.on_review = on_review
        self._results: list[TestResultSummary] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.table = QTableWidget(0, len(_COLUMNS), self)
        self.table.setHorizontalHeaderLabels(list(_COLUMNS))
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        self.table.cellDoubleClicked.connect(lambda row, _col: self._review_row(row))
        layout.addWidget(self.table, stretch=1)

        self.empty_label = QLabel(RESULTS_EMPTY_STATE, self)
        self.empty_label.setStyleSheet(Styles.get_muted_label_style())
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.refresh_button = QPushButton(RESULTS_REFRESH_BUTTON, self)
        self.refresh_button.clicked.connect(self.refresh)
        button_row.addWidget(self.refresh_button)
        self.review_button = QPushButton(RESULTS_REVIEW_BUTTON, self)
        self.review_button.clicked.connect(self._handle_review_selected)
        button_row.addWidget(self.review_button)
        layout.addLayout(button_row)

        self._populate([])

    def refresh(self, quiet: bool = False) -> None:
        try:
            results = self.portal_manager.list_results()
        except PortalApiError as exc:
            if not quiet:
                show_error(self, "Results", f"Failed to load results: {exc}")
            return
        self._populate(results)

    def _populate(self, results: list[TestResultSummary]) -> None:
        selected_id = self._selected_result_id()
        self._results = list(results)
        self.table.setRowCount(len(self._results))
        for row, result in enumerate(self._results):
            score = f"{result.correct_answers}/{result.total_questions} ({result.score_percent}%)"
            validated = result.status == RESULT_STATUS_VALIDATED
            cells = (result.name, result.email, score, result.status)
            for column, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setData(Qt.UserRole, result.id)
                self.table.setItem(row, column, item)
            status_item = self.table.item(row, 3)
            status_item.setForeground(Qt.darkGreen if validated else Qt.darkYellow)
            if result.id == selected_id:
                self.table.selectRow(row)
        self.empty_label.setVisible(not self._results)

    def _selected_result_id(self) -> str | None:
        row = self.table.currentRow()
        if row < 0 or row >= len(self._results):
            return None
        return self._results[row].id

    def _handle_review_selected(self) -> None:
        row = self.table.currentRow()
        if row < 0:
            show_info(self, "No selection", "Select a result to review.")
            return
        self._review_row(row)

    def _review_row(self, row: int) -> None:
        if 0 <= row < len(self._results):
            self.on_review(self._results[row].id)

    def apply_font_size(self, font_size: int) -> None:
        style = f"font-size: {font_size}pt;"
        for widget in (self.table, self.refresh_button, self.review_button):
            widget.setStyleSheet(style)
