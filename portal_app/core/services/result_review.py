"""Service for manually grading a submitted test."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from portal_app.core.api_client import PortalApiClient
from portal_app.core.models import Question, SubmittedAnswer, TestResultDetail, ValidationRecord
from portal_app.core.services.test_session import format_percent

logger = logging.getLogger(__name__)

_MISSING_MODEL_ANSWER = "—"


@dataclass(slots=True)
class ReviewItem:
    """A submitted answer paired with its question bank entry."""

    mark_key: str
    answer: SubmittedAnswer
    question: Question | None

    @property
    def model_answer(self) -> str:
        if self.question is not None and self.question.reference_answer:
            return self.question.reference_answer
        return self.answer.correct_answer or _MISSING_MODEL_ANSWER


def _normalize_text(text: str) -> str:
    return text.strip().lower()


def match_question(answer: SubmittedAnswer, questions: list[Question]) -> Question | None:
    """Find the bank entry for an answer: by id first, then by question text."""
    if answer.question_id:
        by_id = next((q for q in questions if q.id == answer.question_id), None)
        if by_id is not None:
            return by_id
    wanted = _normalize_text(answer.question)
    return next((q for q in questions if _normalize_text(q.text) == wanted), None)


def parse_mark(value: object) -> float:
    """Read a mark the way the review form does: anything unparsable is zero."""
    try:
        mark = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if mark != mark or mark < 0:  # NaN or negative
        return 0.0
    return mark


def build_validation(marks: dict[str, float], answer_count: int) -> ValidationRecord:
    total = sum(marks.values())
    return ValidationRecord(
        marks=marks,
        total_marks=total,
        score_percent=format_percent(total, answer_count),
    )


class ResultReview:
    """Holds one result under review, the reconciled items and the marks entered so far."""

    def __init__(self, client: PortalApiClient) -> None:
        self._client = client
        self._result: TestResultDetail | None = None
        self._items: list[ReviewItem] = []
        self._marks: dict[str, float] = {}

    def load(self, result_id: str) -> list[ReviewItem]:
        result = self._client.get_result(result_id)
        questions = self._client.list_questions()
        self.reconcile(result, questions)
        return self.get_items()

    def reconcile(self, result: TestResultDetail, questions: list[Question]) -> None:
        self._result = result
        self._marks = {}
        self._items = [
            ReviewItem(
                mark_key=answer.question_id or answer.question,
                answer=answer,
                question=match_question(answer, questions),
            )
            for answer in result.answers
        ]
        unmatched = sum(1 for item in self._items if item.question is None)
        if unmatched:
            logger.info("%d answer(s) of result %s have no matching question", unmatched, result.id)

    def get_result(self) -> TestResultDetail | None:
        return self._result

    def get_items(self) -> list[ReviewItem]:
        return list(self._items)

    def set_mark(self, mark_key: str, value: object) -> float:
        if not any(item.mark_key == mark_key for item in self._items):
            raise KeyError(f"No answer under review for '{mark_key}'.")
        mark = parse_mark(value)
        self._marks[mark_key] = mark
        return mark

    def get_marks(self) -> dict[str, float]:
        return dict(self._marks)

    def build_record(self) -> ValidationRecord:
        return build_validation(self._marks, len(self._items))

    def save(self) -> ValidationRecord:
        if self._result is None:
            raise RuntimeError("No result loaded for review.")
        record = self.build_record()
        self._client.save_validation(self._result.id, record)
        logger.info(
            "Validation saved for %s: %s marks, %s%%",
            self._result.id,
            record.total_marks,
            record.score_percent,
        )
        return record
