"""Tests for the candidate-facing FastAPI application."""

from __future__ import annotations

from fastapi.testclient import TestClient
import pytest

from portal_app.constants.network_constants import SESSION_COOKIE_NAME
from portal_app.server.candidate_server import create_candidate_app


@pytest.fixture
def client(portal_manager) -> TestClient:
    return TestClient(create_candidate_app(portal_manager))


def _start(client: TestClient) -> dict:
    response = client.post("/session", json={"full_name": "Ada Lovelace", "email": "ada@example.com"})
    assert response.status_code == 201
    return response.json()


def test_root_serves_candidate_page(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "visibilitychange" in response.text


def test_start_sets_cookie_and_returns_first_question(client):
    state = _start(client)

    assert client.cookies.get(SESSION_COOKIE_NAME)
    assert state["phase"] == "active"
    assert state["question"]["kind"] == "multiple_choice"
    assert state["question"]["options"] == ["3", "4"]
    assert "reference_answer" not in state["question"]


def test_start_without_identity_is_422(client):
    response = client.post("/session", json={"full_name": "", "email": ""})

    assert response.status_code == 422
    assert response.json()["detail"] == "Please enter your full name and email."


def test_registration_outage_is_502(client, fake_api):
    fake_api.offline_paths.add("/user/register")

    response = client.post("/session", json={"full_name": "Ada", "email": "ada@example.com"})

    assert response.status_code == 502


def test_session_routes_need_a_cookie(client):
    assert client.get("/session").status_code == 404


def test_answer_navigate_and_submit(client, fake_api):
    _start(client)

    state = client.post("/session/answer", json={"response": "4"}).json()
    assert state["current_response"] == "4"

    state = client.post("/session/navigate", json={"direction": "next"}).json()
    assert state["current_index"] == 1
    assert state["current_response"] is None

    response = client.post("/session/submit", json={"confirmed": False})
    assert response.status_code == 409
    assert response.json()["detail"]["unanswered"] == 2

    state = client.post("/session/submit", json={"confirmed": True}).json()
    assert state["phase"] == "completed"
    assert state["correct_answers"] == 1
    assert state["score_percent"] == "33.33"
    assert len(fake_api.results) == 1


def test_invalid_option_is_422(client):
    _start(client)

    response = client.post("/session/answer", json={"response": "5"})

    assert response.status_code == 422


def test_invalid_direction_is_rejected(client):
    _start(client)

    assert client.post("/session/navigate", json={"direction": "sideways"}).status_code == 422


def test_hidden_page_abandons_and_blocks_answers(client, fake_api):
    _start(client)

    state = client.post("/session/visibility", json={"hidden": True}).json()
    assert state["phase"] == "abandoned"

    response = client.post("/session/answer", json={"response": "4"})
    assert response.status_code == 409
    assert fake_api.results == {}


def test_countdown_expiry_is_seen_on_next_poll(client, clock, fake_api):
    _start(client)

    clock.advance(30)
    assert client.get("/session").json()["remaining_seconds"] == 30

    clock.advance(30)
    state = client.get("/session").json()
    assert state["phase"] == "completed"
    assert len(fake_api.results) == 1


def test_inactive_test_reports_message(client, fake_api):
    fake_api.test_control = {"isActive": False}

    state = _start(client)

    assert state["phase"] == "unavailable"
    assert state["message"] == "Test not started by administrator."


def test_restart_replaces_previous_session(client, portal_manager):
    _start(client)
    _start(client)

    assert portal_manager.get_candidate_session_count() == 1
