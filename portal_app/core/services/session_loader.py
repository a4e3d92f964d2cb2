"""Service deciding whether a candidate session may start and with what questions."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Protocol

from portal_app.constants.session_constants import (
    NO_QUESTIONS_MESSAGE,
    TEST_NOT_STARTED_MESSAGE,
)
from portal_app.core.errors import ApiBusinessError, ApiResponseError, ApiTransportError
from portal_app.core.models import Candidate, Question, TestConfiguration

logger = logging.getLogger(__name__)


class TestControlSource(Protocol):
    def get_test_control(self) -> TestConfiguration | None: ...


class QuestionSource(Protocol):
    def list_questions(self) -> list[Question]: ...


@dataclass(frozen=True, slots=True)
class SessionReady:
    questions: tuple[Question, ...]
    deadline_seconds: int


@dataclass(frozen=True, slots=True)
class SessionUnavailable:
    reason: str


@dataclass(frozen=True, slots=True)
class LoadError:
    reason: str


LoadResult = SessionReady | SessionUnavailable | LoadError


class SessionConfigLoader:
    """Fetches test control, then the question bank, and sizes the session."""

    def __init__(self, test_control: TestControlSource, questions: QuestionSource) -> None:
        self._test_control = test_control
        self._questions = questions

    def load(self, candidate: Candidate) -> LoadResult:
        logger.info("Loading test session for %s", candidate.email)
        try:
            config = self._test_control.get_test_control()
        except ApiTransportError as exc:
            return LoadError(reason=str(exc))
        except ApiBusinessError as exc:
            return SessionUnavailable(reason=exc.message)
        except ApiResponseError as exc:
            logger.warning("Test control request failed: %s", exc.message)
            return LoadError(reason=exc.message)

        if config is None or not config.active:
            logger.info("Test is not active; question bank not requested")
            return SessionUnavailable(reason=TEST_NOT_STARTED_MESSAGE)

        try:
            bank = self._questions.list_questions()
        except ApiTransportError as exc:
            return LoadError(reason=str(exc))
        except ApiBusinessError as exc:
            logger.info("Question bank refused: %s", exc.message)
            return SessionUnavailable(reason=exc.message)
        except ApiResponseError as exc:
            logger.warning("Question bank request failed: %s", exc.message)
            return LoadError(reason=exc.message)

        if not bank:
            return SessionUnavailable(reason=NO_QUESTIONS_MESSAGE)

        limit = config.question_limit if config.question_limit > 0 else len(bank)
        questions = tuple(bank[:limit])
        logger.info(
            "Session ready: %d of %d questions, %d minute(s)",
            len(questions),
            len(bank),
            config.time_limit_minutes,
        )
        return SessionReady(questions=questions, deadline_seconds=config.time_limit_minutes * 60)
