"""Service for managing the remote question bank from the admin console."""

from __future__ import annotations

import logging
from pathlib import Path

from portal_app.constants.session_constants import UPLOAD_EXTENSIONS
from portal_app.core.api_client import PortalApiClient
from portal_app.core.models import FreeTextQuestion, MultipleChoiceQuestion, Question

logger = logging.getLogger(__name__)


class QuestionBank:
    """Validates question drafts locally and keeps a cached copy of the bank."""

    def __init__(self, client: PortalApiClient) -> None:
        self._client = client
        self._questions: list[Question] = []

    def refresh(self) -> list[Question]:
        self._questions = self._client.list_questions()
        return self.get_questions()

    def get_questions(self) -> list[Question]:
        """Return a copy of the last fetched questions."""
        return list(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def find_question(self, question_id: str) -> Question | None:
        return next((q for q in self._questions if q.id == question_id), None)

    def add_question(self, draft: Question) -> list[Question]:
        prepared = self._prepare_question(draft)
        self._client.create_question(prepared)
        logger.info("Question added")
        return self.refresh()

    def update_question(self, question_id: str, draft: Question) -> list[Question]:
        if not question_id:
            raise ValueError("Cannot update a question without an id.")
        prepared = self._prepare_question(draft)
        self._client.update_question(question_id, prepared)
        logger.info("Question %s updated", question_id)
        return self.refresh()

    def delete_question(self, question_id: str) -> list[Question]:
        if not question_id:
            raise ValueError("Cannot delete a question without an id.")
        self._client.delete_question(question_id)
        logger.info("Question %s deleted", question_id)
        return self.refresh()

    def upload_file(self, file_path: Path) -> str:
        if file_path.suffix.lower() not in UPLOAD_EXTENSIONS:
            allowed = ", ".join(UPLOAD_EXTENSIONS)
            raise ValueError(f"Unsupported file type '{file_path.suffix}'. Use {allowed}.")
        if not file_path.is_file():
            raise ValueError(f"File not found: {file_path}")
        message = self._client.upload_questions(file_path)
        logger.info("Uploaded %s: %s", file_path.name, message)
        self.refresh()
        return message

    def _prepare_question(self, question: Question) -> Question:
        """Validate and normalize a question before it is sent."""
        cleaned_text = question.text.strip()
        if not cleaned_text:
            raise ValueError("Question text must not be empty.")
        reference = question.reference_answer.strip()

        if isinstance(question, MultipleChoiceQuestion):
            options = self._validate_options(question.options)
            if reference and reference not in options:
                raise ValueError("The correct answer must match one of the options.")
            return MultipleChoiceQuestion(
                id=question.id,
                text=cleaned_text,
                options=options,
                reference_answer=reference,
            )
        return FreeTextQuestion(id=question.id, text=cleaned_text, reference_answer=reference)

    @staticmethod
    def _validate_options(options: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(option.strip() for option in options if option.strip())
        if not cleaned:
            raise ValueError("Multiple-choice questions need at least one option.")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("Options must be distinct.")
        return cleaned
