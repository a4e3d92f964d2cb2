"""Helper functions for common dialog patterns in the admin console."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget


def _ask(parent: QWidget, title: str, message: str) -> bool:
    reply = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def confirm_delete_question(parent: QWidget, question_text: str) -> bool:
    """Ask before deleting a question from the bank.

    Args:
        parent: Parent widget for the dialog
        question_text: Text of the question, shortened for display

    Returns:
        True if user confirmed, False otherwise
    """
    preview = question_text if len(question_text) <= 80 else question_text[:77] + "..."
    return _ask(parent, "Confirm Delete", f"Are you sure you want to delete this question?\n\n{preview}")


def confirm_save_validation(parent: QWidget) -> bool:
    return _ask(parent, "Confirm Validation", "Are you sure you want to submit the validation?")


def confirm_stop_test(parent: QWidget) -> bool:
    return _ask(
        parent,
        "Stop Test",
        "Stopping the test prevents new candidates from starting. Continue?",
    )


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
