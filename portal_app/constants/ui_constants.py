"""Qt UI constants used across the admin console widgets."""

WINDOW_TITLE: str = "PortalQt Admin Console"
CANDIDATE_URL_PLACEHOLDER: str = "http://<host-ip>:8000/"
RESULTS_REFRESH_INTERVAL_MS: int = 15000

MODE_BUTTON_QUESTIONS: str = "Questions"
MODE_BUTTON_RESULTS: str = "Test Results"
MODE_BUTTON_LOGOUT: str = "Logout"

LOGIN_TITLE: str = "Admin Login"
LOGIN_BUTTON: str = "Login"

CONTROL_GROUP_TITLE: str = "Test Control Panel"
CONTROL_START_BUTTON: str = "Start Test"
CONTROL_STOP_BUTTON: str = "Stop Test"
CONTROL_STATUS_TEMPLATE: str = "Status: {status}"

QUESTION_FORM_TITLE_NEW: str = "Add Question"
QUESTION_FORM_TITLE_EDIT: str = "Edit Question"
QUESTION_SAVE_BUTTON: str = "Save Question"
QUESTION_CLEAR_BUTTON: str = "New Question"
QUESTION_EDIT_BUTTON: str = "Edit Selected"
QUESTION_DELETE_BUTTON: str = "Delete Selected"
QUESTION_UPLOAD_BUTTON: str = "Upload Questions File"
PLACEHOLDER_QUESTION: str = "Enter the question text."
PLACEHOLDER_OPTIONS: str = "One option per line (multiple choice only)."
PLACEHOLDER_ANSWER: str = "Model answer (must match an option for multiple choice)."

UPLOAD_DIALOG_TITLE: str = "Select questions file"
UPLOAD_FILE_FILTER: str = "Question files (*.txt *.docx);;All files (*.*)"

RESULTS_EMPTY_STATE: str = "No test results yet."
RESULTS_REVIEW_BUTTON: str = "Review Selected"
RESULTS_REFRESH_BUTTON: str = "Refresh"

REVIEW_SAVE_BUTTON: str = "Save Validation"
REVIEW_BACK_BUTTON: str = "Back"
REVIEW_EMPTY_STATE: str = "No answers found."
