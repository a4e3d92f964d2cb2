"""Domain models for the assessment portal."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from portal_app.constants.session_constants import (
    DEFAULT_QUESTION_LIMIT,
    DEFAULT_TIME_LIMIT_MINUTES,
    RESULT_STATUS_PENDING,
)


class QuestionKind(Enum):
    """Closed set of question kinds understood by the portal."""

    MULTIPLE_CHOICE = "multiple_choice"
    FREE_TEXT = "free_text"


@dataclass(frozen=True, slots=True)
class MultipleChoiceQuestion:
    """Question answered by picking one of the listed options."""

    id: str
    text: str
    options: tuple[str, ...]
    reference_answer: str = ""

    @property
    def kind(self) -> QuestionKind:
        return QuestionKind.MULTIPLE_CHOICE


@dataclass(frozen=True, slots=True)
class FreeTextQuestion:
    """Theory question answered in free text and graded by an administrator."""

    id: str
    text: str
    reference_answer: str = ""

    @property
    def kind(self) -> QuestionKind:
        return QuestionKind.FREE_TEXT

    @property
    def options(self) -> tuple[str, ...]:
        return ()


Question = MultipleChoiceQuestion | FreeTextQuestion


@dataclass(slots=True)
class TestConfiguration:
    """Admin-controlled parameters gating a candidate session."""

    __test__ = False  # keep pytest from collecting this as a test class

    active: bool = False
    question_limit: int = DEFAULT_QUESTION_LIMIT
    time_limit_minutes: int = DEFAULT_TIME_LIMIT_MINUTES


@dataclass(frozen=True, slots=True)
class Candidate:
    """Identity supplied by the candidate on the entry form."""

    full_name: str
    email: str
    user_id: str | None = None


@dataclass(slots=True)
class AnswerRecord:
    """A candidate's response to one question, held for the session's duration."""

    question_id: str
    question_text: str
    response: str
    kind: QuestionKind


@dataclass(frozen=True, slots=True)
class SubmissionEntry:
    """Per-question line of a finalized submission."""

    question_id: str
    question: str
    user_answer: str
    correct_answer: str
    is_correct: bool | None
    kind: QuestionKind


@dataclass(frozen=True, slots=True)
class SubmissionPayload:
    """Finalized result of a session, handed once to the results endpoint."""

    name: str
    email: str
    answers: tuple[SubmissionEntry, ...]
    total_questions: int
    correct_answers: int
    score_percent: str


@dataclass(frozen=True, slots=True)
class ValidationRecord:
    """Administrator marks for a submitted test and the derived totals.

    ``marks`` is a read-only copy of the mapping passed in.
    """

    marks: Mapping[str, float]
    total_marks: float
    score_percent: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "marks", MappingProxyType(dict(self.marks)))


@dataclass(slots=True)
class SubmittedAnswer:
    """One answer line of a stored test result, as returned by the server."""

    question: str
    user_answer: str
    correct_answer: str = ""
    is_correct: bool | None = None
    question_id: str | None = None
    kind: str | None = None


@dataclass(slots=True)
class TestResultSummary:
    """Row of the administrator's results list."""

    __test__ = False

    id: str
    name: str
    email: str
    total_questions: int = 0
    correct_answers: int = 0
    score_percent: str = "0.00"
    status: str = RESULT_STATUS_PENDING


@dataclass(slots=True)
class TestResultDetail:
    """Full stored result including the submitted answers."""

    __test__ = False

    id: str
    name: str
    email: str
    status: str = RESULT_STATUS_PENDING
    answers: list[SubmittedAnswer] = field(default_factory=list)
