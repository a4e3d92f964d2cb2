"""Test-session constants shared across core, server and UI layers."""

NOT_ANSWERED: str = "Not answered"
DEFAULT_QUESTION_LIMIT: int = 10
DEFAULT_TIME_LIMIT_MINUTES: int = 30
MCQ_KIND: str = "MCQ"
FREE_TEXT_KIND: str = "Theory"

ADMIN_TOKEN_KEY: str = "adminToken"
USER_TOKEN_KEY: str = "userToken"

UPLOAD_EXTENSIONS: tuple[str, ...] = (".txt", ".docx")
MARK_STEP: float = 0.5
MAX_MARK_PER_ANSWER: float = 1.0

RESULT_STATUS_PENDING: str = "Validation Pending"
RESULT_STATUS_VALIDATED: str = "Validated"

MISSING_IDENTITY_MESSAGE: str = "Please enter your full name and email."
TEST_NOT_STARTED_MESSAGE: str = "Test not started by administrator."
NO_QUESTIONS_MESSAGE: str = "No questions available right now."
LOAD_FAILED_MESSAGE: str = "Could not load test. Check your backend connection."
ABANDONED_MESSAGE: str = "You switched tabs or reloaded. The test has ended."
COMPLETED_MESSAGE: str = "Your responses have been recorded successfully."
SUBMIT_FAILED_MESSAGE: str = "Failed to save result to server."

FINISHED_SESSION_RETENTION_SECONDS: float = 300.0
IDLE_SESSION_TIMEOUT_SECONDS: float = 4 * 60 * 60
