"""Tests for the admin question bank service."""

from __future__ import annotations

import json

import pytest

from portal_app.core.models import FreeTextQuestion, MultipleChoiceQuestion
from portal_app.core.services.question_bank import QuestionBank


@pytest.fixture
def bank(api_client) -> QuestionBank:
    return QuestionBank(api_client)


def test_refresh_caches_questions(bank, fake_api):
    questions = bank.refresh()

    assert len(questions) == 4
    assert bank.get_question_count() == 4
    assert bank.find_question("q2").text == "Capital of France?"
    assert fake_api.calls_to("GET", "/questions") == 1


def test_add_multiple_choice_question_is_normalized(bank, fake_api):
    draft = MultipleChoiceQuestion(id="", text="  Pick one ", options=(" A ", "", "B"), reference_answer=" B ")

    questions = bank.add_question(draft)

    sent = json.loads(fake_api.requests[0].content)
    assert sent == {"questionText": "Pick one", "correctAnswer": "B", "questionType": "MCQ", "options": ["A", "B"]}
    assert len(questions) == 5


@pytest.mark.parametrize(
    "draft",
    [
        FreeTextQuestion(id="", text="   "),
        MultipleChoiceQuestion(id="", text="Q", options=()),
        MultipleChoiceQuestion(id="", text="Q", options=("A", "A")),
        MultipleChoiceQuestion(id="", text="Q", options=("A", "B"), reference_answer="C"),
    ],
)
def test_invalid_drafts_are_rejected_before_sending(bank, fake_api, draft):
    with pytest.raises(ValueError):
        bank.add_question(draft)

    assert fake_api.requests == []


def test_update_and_delete_refresh_the_cache(bank, fake_api):
    bank.update_question("q3", FreeTextQuestion(id="q3", text="Define recursion.", reference_answer="Self reference."))
    assert bank.find_question("q3").text == "Define recursion."

    questions = bank.delete_question("q1")

    assert [q.id for q in questions] == ["q2", "q3", "q4"]


def test_update_without_id_is_rejected(bank):
    with pytest.raises(ValueError):
        bank.update_question("", FreeTextQuestion(id="", text="Q"))


def test_upload_rejects_unsupported_extension(bank, tmp_path, fake_api):
    path = tmp_path / "questions.pdf"
    path.write_bytes(b"%PDF")

    with pytest.raises(ValueError, match="Unsupported file type"):
        bank.upload_file(path)
    assert fake_api.requests == []


def test_upload_rejects_missing_file(bank, tmp_path):
    with pytest.raises(ValueError, match="File not found"):
        bank.upload_file(tmp_path / "missing.txt")


def test_upload_returns_server_message(bank, tmp_path, fake_api):
    path = tmp_path / "Questions.DOCX"
    path.write_bytes(b"PK")

    assert bank.upload_file(path) == "2 questions imported."
    assert fake_api.calls_to("GET", "/questions") == 1
