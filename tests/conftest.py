"""Shared fakes for the portal tests."""

from __future__ import annotations

import json
from itertools import count

import httpx
import pytest

from portal_app.core.api_client import PortalApiClient
from portal_app.core.credentials import StaticCredentials, StoredCredentials, TokenStore
from portal_app.core.models import (
    Candidate,
    FreeTextQuestion,
    MultipleChoiceQuestion,
)
from portal_app.core.portal_manager import PortalManager
from portal_app.core.services.session_loader import SessionReady

BASE_URL = "http://portal.test/api"


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLoader:
    """Session loader returning a canned result and counting calls."""

    def __init__(self, result) -> None:
        self.result = result
        self.calls = 0

    def load(self, candidate: Candidate):
        self.calls += 1
        return self.result


class FakeResults:
    """Results sink recording every payload it receives."""

    def __init__(self, error: Exception | None = None) -> None:
        self.payloads = []
        self.error = error

    def submit_result(self, payload):
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return {"_id": "r1"}


class FakePortalApi:
    """In-memory stand-in for the portal REST API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.test_control = {"isActive": True, "questionLimit": 3, "timeLimit": 1}
        self.questions: list[dict] = [
            {"_id": "q1", "questionType": "MCQ", "questionText": "2 + 2?", "options": ["3", "4"], "correctAnswer": "4"},
            {"_id": "q2", "questionType": "MCQ", "questionText": "Capital of France?", "options": ["Paris", "Rome"], "correctAnswer": "Paris"},
            {"_id": "q3", "questionType": "Theory", "questionText": "Explain recursion.", "correctAnswer": "A function calling itself."},
            {"_id": "q4", "questionType": "MCQ", "questionText": "Largest planet?", "options": ["Mars", "Jupiter"], "correctAnswer": "Jupiter"},
        ]
        self.results: dict[str, dict] = {}
        self.validations: dict[str, dict] = {}
        self.uploads: list[str] = []
        self.requests: list[httpx.Request] = []
        self.offline_paths: set[str] = set()
        self.error_paths: dict[str, int] = {}
        self._ids = count(100)

    def calls_to(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == "/api" + path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        if path in self.offline_paths:
            raise httpx.ConnectError("connection refused", request=request)
        if path in self.error_paths:
            return httpx.Response(self.error_paths[path], json={"error": "Server error"})

        method = request.method
        parts = [p for p in path.split("/") if p]
        if path == "/testcontrol":
            if method == "PUT":
                self.test_control.update(json.loads(request.content))
            return httpx.Response(200, json=self.test_control)
        if path == "/questions/upload":
            self.uploads.append(request.headers.get("content-type", ""))
            return httpx.Response(200, json={"message": "2 questions imported."})
        if parts[:1] == ["questions"]:
            return self._questions(method, parts, request)
        if path == "/user/register":
            body = json.loads(request.content)
            return httpx.Response(201, json={"userId": f"user-{body['email']}"})
        if path == "/admin/login":
            body = json.loads(request.content)
            if body.get("password") != "secret":
                return httpx.Response(401, json={"error": "Invalid credentials"})
            return httpx.Response(200, json={"token": "admin-token"})
        if parts[:1] == ["tests"]:
            return self._tests(method, parts, request)
        return httpx.Response(404, json={"error": "Not found"})

    def _questions(self, method: str, parts: list[str], request: httpx.Request) -> httpx.Response:
        if len(parts) == 1 and method == "GET":
            return httpx.Response(200, json=self.questions)
        if len(parts) == 1 and method == "POST":
            body = json.loads(request.content)
            body["_id"] = f"q{next(self._ids)}"
            self.questions.append(body)
            return httpx.Response(201, json={"question": body})
        question_id = parts[1]
        index = next((i for i, q in enumerate(self.questions) if q["_id"] == question_id), None)
        if index is None:
            return httpx.Response(404, json={"error": "Question not found"})
        if method == "PUT":
            body = json.loads(request.content)
            body["_id"] = question_id
            self.questions[index] = body
            return httpx.Response(200, json=body)
        if method == "DELETE":
            del self.questions[index]
            return httpx.Response(200, json={"message": "Deleted"})
        return httpx.Response(405, json={"error": "Method not allowed"})

    def _tests(self, method: str, parts: list[str], request: httpx.Request) -> httpx.Response:
        if len(parts) == 1 and method == "POST":
            body = json.loads(request.content)
            result_id = f"r{next(self._ids)}"
            self.results[result_id] = {"_id": result_id, "status": "Validation Pending", **body}
            return httpx.Response(201, json={"_id": result_id})
        if len(parts) == 1 and method == "GET":
            return httpx.Response(200, json=list(self.results.values()))
        result = self.results.get(parts[1])
        if result is None:
            return httpx.Response(404, json={"error": "Result not found"})
        if len(parts) == 3 and parts[2] == "validate" and method == "PUT":
            self.validations[parts[1]] = json.loads(request.content)
            result["status"] = "Validated"
            return httpx.Response(200, json=result)
        return httpx.Response(200, json={**result, "submittedAnswers": result.get("answers", [])})


@pytest.fixture
def fake_api() -> FakePortalApi:
    return FakePortalApi()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def api_client(fake_api: FakePortalApi):
    client = PortalApiClient(BASE_URL, StaticCredentials("tok-123"), transport=httpx.MockTransport(fake_api.handler))
    yield client
    client.close()


@pytest.fixture
def token_store() -> TokenStore:
    return TokenStore()


@pytest.fixture
def portal_manager(fake_api: FakePortalApi, token_store: TokenStore, clock: FakeClock):
    transport = httpx.MockTransport(fake_api.handler)
    admin_client = PortalApiClient(BASE_URL, StoredCredentials(token_store), transport=transport)
    candidate_client = PortalApiClient(BASE_URL, StoredCredentials(TokenStore()), transport=transport)
    manager = PortalManager(admin_client, candidate_client, token_store, clock=clock)
    yield manager
    manager.close()


@pytest.fixture
def candidate() -> Candidate:
    return Candidate(full_name="Ada Lovelace", email="ada@example.com", user_id="u1")


@pytest.fixture
def sample_questions() -> tuple:
    return (
        MultipleChoiceQuestion(id="q1", text="2 + 2?", options=("3", "4"), reference_answer="4"),
        MultipleChoiceQuestion(id="q2", text="Capital of France?", options=("Paris", "Rome"), reference_answer="Paris"),
        FreeTextQuestion(id="q3", text="Explain recursion.", reference_answer="A function calling itself."),
    )


@pytest.fixture
def ready_loader(sample_questions) -> FakeLoader:
    return FakeLoader(SessionReady(questions=sample_questions, deadline_seconds=60))

