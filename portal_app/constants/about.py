"""Static metadata describing PortalQt."""

APP_NAME = "PortalQt"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "PortalQt is an assessment portal client built with Qt and FastAPI. "
    "Candidates take timed tests from the browser while administrators manage "
    "questions, open or close the test and grade theory answers from the console."
)

HELP_TEXT = (
    "Log in with your administrator account, then use the Test Control panel to set the "
    "number of questions and the time limit before pressing Start Test.\n\n"
    "Candidates open the candidate page in a browser, enter their name and email and "
    "answer the questions. Leaving the browser tab ends their test.\n\n"
    "Submitted tests appear under Test Results. Open one to mark theory answers "
    "(0, 0.5 or 1 per answer) and save the validation."
)
