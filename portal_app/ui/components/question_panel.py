"""Component for managing the question bank and the test control."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from portal_app.constants.ui_constants import (
    PLACEHOLDER_ANSWER,
    PLACEHOLDER_OPTIONS,
    PLACEHOLDER_QUESTION,
    QUESTION_CLEAR_BUTTON,
    QUESTION_DELETE_BUTTON,
    QUESTION_EDIT_BUTTON,
    QUESTION_FORM_TITLE_EDIT,
    QUESTION_FORM_TITLE_NEW,
    QUESTION_SAVE_BUTTON,
    QUESTION_UPLOAD_BUTTON,
    UPLOAD_DIALOG_TITLE,
    UPLOAD_FILE_FILTER,
)
from portal_app.core.errors import PortalApiError
from portal_app.core.models import (
    FreeTextQuestion,
    MultipleChoiceQuestion,
    Question,
    QuestionKind,
)
from portal_app.core.portal_manager import PortalManager
from portal_app.ui.components.control_panel import ControlPanel
from portal_app.ui.dialog_helpers import (
    confirm_delete_question,
    show_error,
    show_info,
    show_warning,
)

_KIND_LABELS = {
    QuestionKind.FREE_TEXT: "Theory",
    QuestionKind.MULTIPLE_CHOICE: "Multiple Choice",
}


class QuestionPanel(QWidget):
    """UI component for creating, editing, deleting and uploading questions."""

    def __init__(self, portal_manager: PortalManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.portal_manager = portal_manager
        self._editing_id: str | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QHBoxLayout()
        self.setLayout(layout)

        left_column = QVBoxLayout()
        self.control_panel = ControlPanel(self.portal_manager, self)
        left_column.addWidget(self.control_panel)

        self.form_group = QGroupBox(QUESTION_FORM_TITLE_NEW, self)
        form_layout = QVBoxLayout()
        self.form_group.setLayout(form_layout)

        self.kind_combo = QComboBox(self)
        for kind, label in _KIND_LABELS.items():
            self.kind_combo.addItem(label, userData=kind.value)
        self.kind_combo.currentIndexChanged.connect(self._handle_kind_changed)
        form_layout.addWidget(self.kind_combo)

        self.question_input = QPlainTextEdit(self)
        self.question_input.setPlaceholderText(PLACEHOLDER_QUESTION)
        form_layout.addWidget(self.question_input)

        self.options_input = QPlainTextEdit(self)
        self.options_input.setPlaceholderText(PLACEHOLDER_OPTIONS)
        self.options_input.setMaximumHeight(110)
        form_layout.addWidget(self.options_input)

        self.answer_input = QPlainTextEdit(self)
        self.answer_input.setPlaceholderText(PLACEHOLDER_ANSWER)
        form_layout.addWidget(self.answer_input)

        form_buttons = QHBoxLayout()
        self.save_button = QPushButton(QUESTION_SAVE_BUTTON, self)
        self.save_button.clicked.connect(self._handle_save)
        form_buttons.addWidget(self.save_button)
        self.clear_button = QPushButton(QUESTION_CLEAR_BUTTON, self)
        self.clear_button.clicked.connect(self.clear_fields)
        form_buttons.addWidget(self.clear_button)
        self.upload_button = QPushButton(QUESTION_UPLOAD_BUTTON, self)
        self.upload_button.clicked.connect(self._handle_upload)
        form_buttons.addWidget(self.upload_button)
        form_layout.addLayout(form_buttons)

        left_column.addWidget(self.form_group, stretch=1)
        layout.addLayout(left_column, stretch=1)

        right_column = QVBoxLayout()
        self.count_label = QLabel("Questions: 0", self)
        right_column.addWidget(self.count_label)

        self.question_list = QListWidget(self)
        self.question_list.setAlternatingRowColors(True)
        self.question_list.setWordWrap(True)
        self.question_list.itemDoubleClicked.connect(lambda _: self._handle_edit_selected())
        right_column.addWidget(self.question_list, stretch=1)

        list_buttons = QHBoxLayout()
        self.edit_button = QPushButton(QUESTION_EDIT_BUTTON, self)
        self.edit_button.clicked.connect(self._handle_edit_selected)
        list_buttons.addWidget(self.edit_button)
        self.delete_button = QPushButton(QUESTION_DELETE_BUTTON, self)
        self.delete_button.clicked.connect(self._handle_delete_selected)
        list_buttons.addWidget(self.delete_button)
        right_column.addLayout(list_buttons)

        self.status_label = QLabel("", self)
        right_column.addWidget(self.status_label)
        layout.addLayout(right_column, stretch=1)

        self._handle_kind_changed()

    def refresh(self) -> None:
        self.control_panel.refresh()
        try:
            questions = self.portal_manager.refresh_questions()
        except PortalApiError as exc:
            show_error(self, "Questions", f"Failed to load questions: {exc}")
            return
        self._populate_list(questions)

    def _populate_list(self, questions: list[Question]) -> None:
        self.question_list.clear()
        for index, question in enumerate(questions, start=1):
            label = f"{index}. [{_KIND_LABELS[question.kind]}] {question.text}"
            item = QListWidgetItem(label, self.question_list)
            item.setData(Qt.UserRole, question.id)
        self.count_label.setText(f"Questions: {len(questions)}")

    def _selected_question(self) -> Question | None:
        item = self.question_list.currentItem()
        if item is None:
            return None
        question_id = item.data(Qt.UserRole)
        return next((q for q in self.portal_manager.get_questions() if q.id == question_id), None)

    def _handle_kind_changed(self) -> None:
        is_mcq = self.kind_combo.currentData() == QuestionKind.MULTIPLE_CHOICE.value
        self.options_input.setVisible(is_mcq)

    def _handle_save(self) -> None:
        try:
            draft = self._build_draft_from_inputs()
            if self._editing_id:
                questions = self.portal_manager.update_question(self._editing_id, draft)
                message = "Question updated successfully!"
            else:
                questions = self.portal_manager.add_question(draft)
                message = "Question added successfully!"
        except ValueError as exc:
            show_warning(self, "Invalid question", str(exc))
            return
        except PortalApiError as exc:
            show_error(self, "Save failed", f"Operation failed: {exc}")
            return
        self._populate_list(questions)
        self.clear_fields()
        self.status_label.setText(message)

    def _handle_edit_selected(self) -> None:
        question = self._selected_question()
        if question is None:
            show_info(self, "No selection", "Select a question to edit.")
            return
        self.populate_fields(question)

    def _handle_delete_selected(self) -> None:
        question = self._selected_question()
        if question is None:
            show_info(self, "No selection", "Select a question before deleting.")
            return
        if not confirm_delete_question(self, question.text):
            return
        try:
            questions = self.portal_manager.delete_question(question.id)
        except PortalApiError as exc:
            show_error(self, "Delete failed", f"Failed to delete question: {exc}")
            return
        if self._editing_id == question.id:
            self.clear_fields()
        self._populate_list(questions)
        self.status_label.setText("Question deleted successfully!")

    def _handle_upload(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            UPLOAD_DIALOG_TITLE,
            str(Path.home()),
            UPLOAD_FILE_FILTER,
        )
        if not file_path:
            return
        try:
            message = self.portal_manager.upload_questions(Path(file_path))
        except ValueError as exc:
            show_warning(self, "Upload", str(exc))
            return
        except PortalApiError as exc:
            show_error(self, "Upload failed", f"File upload failed: {exc}")
            return
        self._populate_list(self.portal_manager.get_questions())
        show_info(self, "Upload", message)

    def _build_draft_from_inputs(self) -> Question:
        text = self.question_input.toPlainText()
        answer = self.answer_input.toPlainText()
        question_id = self._editing_id or ""
        if self.kind_combo.currentData() == QuestionKind.MULTIPLE_CHOICE.value:
            options = tuple(line for line in self.options_input.toPlainText().splitlines())
            return MultipleChoiceQuestion(
                id=question_id, text=text, options=options, reference_answer=answer
            )
        return FreeTextQuestion(id=question_id, text=text, reference_answer=answer)

    def populate_fields(self, question: Question) -> None:
        self._editing_id = question.id
        self.form_group.setTitle(QUESTION_FORM_TITLE_EDIT)
        self.kind_combo.setCurrentIndex(self.kind_combo.findData(question.kind.value))
        self.question_input.setPlainText(question.text)
        self.options_input.setPlainText("\n".join(question.options))
        self.answer_input.setPlainText(question.reference_answer)

    def clear_fields(self) -> None:
        self._editing_id = None
        self.form_group.setTitle(QUESTION_FORM_TITLE_NEW)
        self.question_input.clear()
        self.options_input.clear()
        self.answer_input.clear()

    def apply_font_size(self, font_size: int) -> None:
        style = f"font-size: {font_size}pt;"
        for widget in (
            self.save_button,
            self.clear_button,
            self.upload_button,
            self.edit_button,
            self.delete_button,
            self.question_list,
        ):
            widget.setStyleSheet(style)
