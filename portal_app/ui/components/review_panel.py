"""Component for grading the answers of one submitted test."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import (
    QDoubleSpinBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from portal_app.constants.session_constants import (
    MARK_STEP,
    MAX_MARK_PER_ANSWER,
    NOT_ANSWERED,
    RESULT_STATUS_VALIDATED,
)
from portal_app.constants.ui_constants import (
    REVIEW_BACK_BUTTON,
    REVIEW_EMPTY_STATE,
    REVIEW_SAVE_BUTTON,
)
from portal_app.core.errors import PortalApiError
from portal_app.core.portal_manager import PortalManager
from portal_app.core.services.result_review import ReviewItem
from portal_app.styling.styles import Styles
from portal_app.ui.dialog_helpers import confirm_save_validation, show_error, show_info


class ReviewPanel(QWidget):
    """Shows each submitted answer next to the model answer with a mark input."""

    def __init__(
        self,
        portal_manager: PortalManager,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.portal_manager = portal_manager
        self.on_back = on_back
        self._mark_inputs: dict[str, QDoubleSpinBox] = {}
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header = QHBoxLayout()
        self.candidate_label = QLabel("", self)
        self.candidate_label.setStyleSheet(Styles.get_large_label_style())
        header.addWidget(self.candidate_label)
        header.addStretch()
        self.status_label = QLabel("", self)
        header.addWidget(self.status_label)
        layout.addLayout(header)

        self.email_label = QLabel("", self)
        self.email_label.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(self.email_label)

        self.scroll_area = QScrollArea(self)
        self.scroll_area.setWidgetResizable(True)
        self.answers_container = QWidget(self.scroll_area)
        self.answers_layout = QVBoxLayout()
        self.answers_container.setLayout(self.answers_layout)
        self.scroll_area.setWidget(self.answers_container)
        layout.addWidget(self.scroll_area, stretch=1)

        footer = QHBoxLayout()
        self.total_label = QLabel("", self)
        footer.addWidget(self.total_label)
        footer.addStretch()
        self.back_button = QPushButton(REVIEW_BACK_BUTTON, self)
        self.back_button.clicked.connect(self.on_back)
        footer.addWidget(self.back_button)
        self.save_button = QPushButton(REVIEW_SAVE_BUTTON, self)
        self.save_button.clicked.connect(self._handle_save)
        footer.addWidget(self.save_button)
        layout.addLayout(footer)

    def load_result(self, result_id: str) -> bool:
        try:
            items = self.portal_manager.load_review(result_id)
        except PortalApiError as exc:
            show_error(self, "Review", f"Failed to load result: {exc}")
            return False
        result = self.portal_manager.get_review().get_result()
        if result is not None:
            self.candidate_label.setText(result.name)
            self.email_label.setText(result.email)
            validated = result.status == RESULT_STATUS_VALIDATED
            self.status_label.setText(result.status)
            self.status_label.setStyleSheet(Styles.get_validation_style(validated))
        self._populate_items(items)
        return True

    def _clear_items(self) -> None:
        self._mark_inputs.clear()
        while self.answers_layout.count():
            child = self.answers_layout.takeAt(0)
            widget = child.widget()
            if widget is not None:
                widget.deleteLater()

    def _populate_items(self, items: list[ReviewItem]) -> None:
        self._clear_items()
        if not items:
            empty = QLabel(REVIEW_EMPTY_STATE, self.answers_container)
            empty.setStyleSheet(Styles.get_muted_label_style())
            self.answers_layout.addWidget(empty)
        for index, item in enumerate(items, start=1):
            self.answers_layout.addWidget(self._build_item_box(index, item))
        self.answers_layout.addStretch()
        self.save_button.setEnabled(bool(items))
        self._update_total()

    def _build_item_box(self, index: int, item: ReviewItem) -> QGroupBox:
        box = QGroupBox(f"Question {index}", self.answers_container)
        form = QFormLayout()
        box.setLayout(form)

        question_label = QLabel(item.answer.question, box)
        question_label.setWordWrap(True)
        form.addRow("Question:", question_label)

        answer_label = QLabel(item.answer.user_answer or NOT_ANSWERED, box)
        answer_label.setWordWrap(True)
        form.addRow("Candidate answer:", answer_label)

        model_label = QLabel(item.model_answer, box)
        model_label.setWordWrap(True)
        model_label.setStyleSheet(Styles.get_muted_label_style())
        form.addRow("Model answer:", model_label)

        mark_input = QDoubleSpinBox(box)
        mark_input.setRange(0.0, MAX_MARK_PER_ANSWER)
        mark_input.setSingleStep(MARK_STEP)
        mark_input.setDecimals(1)
        mark_input.valueChanged.connect(
            lambda value, key=item.mark_key: self._handle_mark_changed(key, value)
        )
        form.addRow("Mark:", mark_input)
        self._mark_inputs[item.mark_key] = mark_input
        return box

    def _handle_mark_changed(self, mark_key: str, value: float) -> None:
        self.portal_manager.set_review_mark(mark_key, value)
        self._update_total()

    def _update_total(self) -> None:
        record = self.portal_manager.get_review().build_record()
        self.total_label.setText(f"Total: {record.total_marks:g} ({record.score_percent}%)")

    def _handle_save(self) -> None:
        if not confirm_save_validation(self):
            return
        try:
            record = self.portal_manager.save_review()
        except (PortalApiError, RuntimeError) as exc:
            show_error(self, "Review", f"Failed to save validation: {exc}")
            return
        self.status_label.setText(RESULT_STATUS_VALIDATED)
        self.status_label.setStyleSheet(Styles.get_validation_style(True))
        show_info(
            self,
            "Review",
            f"Validation saved. Total marks: {record.total_marks:g} ({record.score_percent}%).",
        )

    def apply_font_size(self, font_size: int) -> None:
        style = f"font-size: {font_size}pt;"
        for widget in (self.back_button, self.save_button, self.total_label):
            widget.setStyleSheet(style)
