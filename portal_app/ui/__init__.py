"""Qt UI components for the admin console."""

from .admin_main_window import AdminMainWindow, AdminMode
from .dialog_helpers import (
    confirm_delete_question,
    confirm_save_validation,
    confirm_stop_test,
    show_error,
    show_info,
    show_warning,
)

__all__ = [
    "AdminMainWindow",
    "AdminMode",
    "confirm_delete_question",
    "confirm_save_validation",
    "confirm_stop_test",
    "show_error",
    "show_info",
    "show_warning",
]
