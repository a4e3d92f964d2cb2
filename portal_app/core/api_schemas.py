"""Pydantic schemas describing the external portal API's JSON bodies.

The server speaks camelCase and Mongo-style ``_id`` keys; these schemas accept
those names (plus the snake_case spelling) and convert to the dataclasses in
``portal_app.core.models``.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from portal_app.constants.session_constants import (
    DEFAULT_TIME_LIMIT_MINUTES,
    FREE_TEXT_KIND,
    MCQ_KIND,
    RESULT_STATUS_PENDING,
)
from portal_app.core.models import (
    FreeTextQuestion,
    MultipleChoiceQuestion,
    Question,
    QuestionKind,
    SubmissionPayload,
    SubmittedAnswer,
    TestConfiguration,
    TestResultDetail,
    TestResultSummary,
    ValidationRecord,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _blank_to_empty(value: Any) -> Any:
    return "" if value is None else value


class TestControlSchema(_WireModel):
    """Body of ``GET /testcontrol``."""

    __test__ = False

    active: bool = Field(default=False, validation_alias=AliasChoices("isActive", "active"))
    question_limit: int | None = Field(
        default=None, validation_alias=AliasChoices("questionLimit", "question_limit")
    )
    time_limit: int | None = Field(
        default=None, validation_alias=AliasChoices("timeLimit", "time_limit")
    )

    @field_validator("question_limit", "time_limit", mode="before")
    @classmethod
    def _empty_limit(cls, value: Any) -> Any:
        return None if value in ("", None) else value

    def to_configuration(self) -> TestConfiguration:
        # Zero or missing limits fall back: all questions, default minutes.
        question_limit = self.question_limit if self.question_limit and self.question_limit > 0 else 0
        time_limit = self.time_limit if self.time_limit and self.time_limit > 0 else DEFAULT_TIME_LIMIT_MINUTES
        return TestConfiguration(
            active=self.active,
            question_limit=question_limit,
            time_limit_minutes=time_limit,
        )


class QuestionSchema(_WireModel):
    """One entry of the question bank."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    question_type: str = Field(
        default=FREE_TEXT_KIND, validation_alias=AliasChoices("questionType", "question_type")
    )
    question_text: str = Field(validation_alias=AliasChoices("questionText", "question_text"))
    options: list[str] = Field(default_factory=list)
    correct_answer: str = Field(
        default="", validation_alias=AliasChoices("correctAnswer", "correct_answer")
    )

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_validator("correct_answer", "question_type", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return _blank_to_empty(value)

    @field_validator("options", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_question(self) -> Question:
        if self.question_type.strip().upper() == MCQ_KIND:
            return MultipleChoiceQuestion(
                id=self.id,
                text=self.question_text,
                options=tuple(self.options),
                reference_answer=self.correct_answer,
            )
        return FreeTextQuestion(
            id=self.id,
            text=self.question_text,
            reference_answer=self.correct_answer,
        )


class SubmittedAnswerSchema(_WireModel):
    """Answer line stored with a test result."""

    question: str = ""
    user_answer: str = Field(default="", validation_alias=AliasChoices("userAnswer", "user_answer"))
    correct_answer: str = Field(
        default="", validation_alias=AliasChoices("correctAnswer", "correct_answer")
    )
    is_correct: bool | None = Field(
        default=None, validation_alias=AliasChoices("isCorrect", "is_correct")
    )
    question_id: str | None = Field(
        default=None, validation_alias=AliasChoices("questionId", "question_id")
    )
    type: str | None = None

    @field_validator("question", "user_answer", "correct_answer", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return _blank_to_empty(value)

    def to_answer(self) -> SubmittedAnswer:
        return SubmittedAnswer(
            question=self.question,
            user_answer=self.user_answer,
            correct_answer=self.correct_answer,
            is_correct=self.is_correct,
            question_id=self.question_id or None,
            kind=self.type,
        )


class TestResultSummarySchema(_WireModel):
    """Row returned by ``GET /tests``."""

    __test__ = False

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    name: str = ""
    email: str = ""
    total_questions: int = Field(
        default=0, validation_alias=AliasChoices("totalQuestions", "total_questions")
    )
    correct_answers: int = Field(
        default=0, validation_alias=AliasChoices("correctAnswers", "correct_answers")
    )
    score_percent: str = Field(
        default="0.00", validation_alias=AliasChoices("scorePercent", "score_percent")
    )
    status: str = RESULT_STATUS_PENDING

    @field_validator("id", "score_percent", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return value or RESULT_STATUS_PENDING

    def to_summary(self) -> TestResultSummary:
        return TestResultSummary(
            id=self.id,
            name=self.name,
            email=self.email,
            total_questions=self.total_questions,
            correct_answers=self.correct_answers,
            score_percent=self.score_percent,
            status=self.status,
        )


class TestResultDetailSchema(TestResultSummarySchema):
    """Body of ``GET /tests/:id``."""

    answers: list[SubmittedAnswerSchema] = Field(
        default_factory=list, validation_alias=AliasChoices("submittedAnswers", "answers")
    )

    def to_detail(self) -> TestResultDetail:
        return TestResultDetail(
            id=self.id,
            name=self.name,
            email=self.email,
            status=self.status,
            answers=[answer.to_answer() for answer in self.answers],
        )


def question_to_wire(question: Question) -> dict[str, object]:
    """Serialize a question for ``POST``/``PUT /questions``."""
    body: dict[str, object] = {
        "questionText": question.text,
        "correctAnswer": question.reference_answer,
    }
    if isinstance(question, MultipleChoiceQuestion):
        body["questionType"] = MCQ_KIND
        body["options"] = list(question.options)
    else:
        body["questionType"] = FREE_TEXT_KIND
    return body


def submission_to_wire(payload: SubmissionPayload) -> dict[str, object]:
    """Serialize a finalized submission for ``POST /tests``."""
    return {
        "name": payload.name,
        "email": payload.email,
        "answers": [
            {
                "questionId": entry.question_id,
                "question": entry.question,
                "userAnswer": entry.user_answer,
                "correctAnswer": entry.correct_answer,
                "isCorrect": entry.is_correct,
                "type": MCQ_KIND if entry.kind is QuestionKind.MULTIPLE_CHOICE else FREE_TEXT_KIND,
            }
            for entry in payload.answers
        ],
        "totalQuestions": payload.total_questions,
        "correctAnswers": payload.correct_answers,
        "scorePercent": payload.score_percent,
    }


def validation_to_wire(record: ValidationRecord) -> dict[str, object]:
    """Serialize administrator marks for ``PUT /tests/:id/validate``."""
    return {
        "marks": dict(record.marks),
        "totalMarks": record.total_marks,
        "scorePercent": record.score_percent,
    }
