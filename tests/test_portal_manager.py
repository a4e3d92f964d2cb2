"""Tests for the PortalManager facade."""

from __future__ import annotations

import threading

import httpx
import pytest

from portal_app.constants.session_constants import (
    FINISHED_SESSION_RETENTION_SECONDS,
    IDLE_SESSION_TIMEOUT_SECONDS,
    LOAD_FAILED_MESSAGE,
    MISSING_IDENTITY_MESSAGE,
    TEST_NOT_STARTED_MESSAGE,
)
from portal_app.core.api_client import PortalApiClient
from portal_app.core.credentials import StoredCredentials, TokenStore
from portal_app.core.errors import ApiResponseError, SessionClosedError
from portal_app.core.portal_manager import PortalManager, UnknownSessionError
from portal_app.core.services.test_session import SessionPhase


def test_start_session_registers_and_loads(portal_manager, fake_api):
    session_id, snapshot = portal_manager.start_candidate_session(" Ada ", "ada@example.com")

    assert snapshot.phase is SessionPhase.ACTIVE
    assert snapshot.candidate_name == "Ada"
    assert snapshot.total_questions == 3
    assert snapshot.remaining_seconds == 60
    assert portal_manager.has_candidate_session(session_id)
    assert fake_api.calls_to("POST", "/user/register") == 1


@pytest.mark.parametrize(("name", "email"), [("", "a@b.c"), ("Ada", "  ")])
def test_missing_identity_is_rejected_without_registering(portal_manager, fake_api, name, email):
    with pytest.raises(ValueError, match=MISSING_IDENTITY_MESSAGE):
        portal_manager.start_candidate_session(name, email)
    assert fake_api.requests == []


def test_inactive_test_skips_question_bank(portal_manager, fake_api):
    fake_api.test_control = {"isActive": False}

    _, snapshot = portal_manager.start_candidate_session("Ada", "ada@example.com")

    assert snapshot.phase is SessionPhase.UNAVAILABLE
    assert snapshot.message == TEST_NOT_STARTED_MESSAGE
    assert fake_api.calls_to("GET", "/questions") == 0


def test_clock_drives_auto_submission(portal_manager, fake_api, clock):
    session_id, _ = portal_manager.start_candidate_session("Ada", "ada@example.com")
    portal_manager.record_candidate_answer(session_id, "4")

    clock.advance(61)
    snapshot = portal_manager.get_candidate_snapshot(session_id)

    assert snapshot.phase is SessionPhase.COMPLETED
    assert snapshot.correct_answers == 1
    assert len(fake_api.results) == 1


def test_hidden_page_beats_expired_clock(portal_manager, fake_api, clock):
    session_id, _ = portal_manager.start_candidate_session("Ada", "ada@example.com")

    clock.advance(120)
    snapshot = portal_manager.report_candidate_visibility(session_id, hidden=True)

    assert snapshot.phase is SessionPhase.ABANDONED
    assert fake_api.results == {}


def test_submit_reports_pending_confirmation(portal_manager, fake_api):
    session_id, _ = portal_manager.start_candidate_session("Ada", "ada@example.com")

    snapshot, unanswered = portal_manager.submit_candidate(session_id, confirmed=False)
    assert snapshot.phase is SessionPhase.ACTIVE
    assert unanswered == 3

    snapshot, unanswered = portal_manager.submit_candidate(session_id, confirmed=True)
    assert snapshot.phase is SessionPhase.COMPLETED
    assert unanswered == 0
    assert len(fake_api.results) == 1


def test_navigation_direction_is_validated(portal_manager):
    session_id, _ = portal_manager.start_candidate_session("Ada", "ada@example.com")

    assert portal_manager.navigate_candidate(session_id, "next").current_index == 1
    with pytest.raises(ValueError):
        portal_manager.navigate_candidate(session_id, "sideways")


def test_unknown_session_raises(portal_manager):
    with pytest.raises(UnknownSessionError):
        portal_manager.get_candidate_snapshot("missing")


def test_answering_after_abandonment_raises(portal_manager):
    session_id, _ = portal_manager.start_candidate_session("Ada", "ada@example.com")
    portal_manager.report_candidate_visibility(session_id, hidden=True)

    with pytest.raises(SessionClosedError):
        portal_manager.record_candidate_answer(session_id, "4")


def test_end_session_forgets_it(portal_manager):
    session_id, _ = portal_manager.start_candidate_session("Ada", "ada@example.com")

    portal_manager.end_candidate_session(session_id)

    assert portal_manager.get_candidate_session_count() == 0


def test_admin_login_stores_token_for_admin_calls_only(portal_manager, fake_api, token_store):
    portal_manager.admin_login("admin", "secret")
    assert portal_manager.is_admin_logged_in()

    portal_manager.refresh_questions()
    portal_manager.start_candidate_session("Ada", "ada@example.com")

    admin_request = next(r for r in fake_api.requests if r.url.path == "/api/questions")
    register_request = next(r for r in fake_api.requests if r.url.path == "/api/user/register")
    assert admin_request.headers["Authorization"] == "admin-token"
    assert "Authorization" not in register_request.headers

    portal_manager.admin_logout()
    assert token_store.get("adminToken") is None


def test_admin_login_requires_both_fields(portal_manager, fake_api):
    with pytest.raises(ValueError):
        portal_manager.admin_login("admin", "")
    assert fake_api.requests == []


def test_admin_login_failure_propagates(portal_manager):
    with pytest.raises(ApiResponseError):
        portal_manager.admin_login("admin", "wrong")
    assert not portal_manager.is_admin_logged_in()


def test_review_flow_through_manager(portal_manager, fake_api):
    session_id, _ = portal_manager.start_candidate_session("Ada", "ada@example.com")
    portal_manager.navigate_candidate(session_id, "next")
    portal_manager.navigate_candidate(session_id, "next")
    portal_manager.record_candidate_answer(session_id, "It calls itself.")
    portal_manager.submit_candidate(session_id, confirmed=True)

    [summary] = portal_manager.list_results()
    items = portal_manager.load_review(summary.id)
    theory = next(item for item in items if item.answer.kind == "Theory")
    portal_manager.set_review_mark(theory.mark_key, 1)
    record = portal_manager.save_review()

    assert summary.status == "Validation Pending"
    assert summary.score_percent == "0.00"
    assert record.total_marks == 1.0
    assert record.score_percent == "33.33"
    assert fake_api.validations[summary.id]["marks"] == {"q3": 1.0}


@pytest.mark.parametrize("status", [401, 500])
def test_http_error_from_question_bank_is_a_load_failure(portal_manager, fake_api, status):
    fake_api.error_paths["/questions"] = status

    _, snapshot = portal_manager.start_candidate_session("Ada", "ada@example.com")

    assert snapshot.phase is SessionPhase.ERROR
    assert snapshot.message == LOAD_FAILED_MESSAGE


def test_error_body_from_question_bank_is_shown_to_candidate(portal_manager, fake_api):
    fake_api.questions = {"error": "Question bank is locked"}

    _, snapshot = portal_manager.start_candidate_session("Ada", "ada@example.com")

    assert snapshot.phase is SessionPhase.UNAVAILABLE
    assert snapshot.message == "Question bank is locked"


def test_abandoned_sessions_are_dropped_after_retention(portal_manager, clock):
    abandoned = []
    for index in range(5):
        session_id, _ = portal_manager.start_candidate_session("Ada", f"ada{index}@example.com")
        portal_manager.report_candidate_visibility(session_id, hidden=True)
        abandoned.append(session_id)

    assert portal_manager.get_candidate_session_count() == 5
    assert portal_manager.get_candidate_snapshot(abandoned[0]).phase is SessionPhase.ABANDONED

    clock.advance(FINISHED_SESSION_RETENTION_SECONDS)
    live_id, _ = portal_manager.start_candidate_session("Grace", "grace@example.com")

    assert portal_manager.get_candidate_session_count() == 1
    assert portal_manager.has_candidate_session(live_id)
    with pytest.raises(UnknownSessionError):
        portal_manager.get_candidate_snapshot(abandoned[0])


def test_completed_session_stays_readable_until_retention_ends(portal_manager, clock):
    session_id, _ = portal_manager.start_candidate_session("Ada", "ada@example.com")
    portal_manager.submit_candidate(session_id, confirmed=True)

    clock.advance(FINISHED_SESSION_RETENTION_SECONDS - 1)
    assert portal_manager.sweep_candidate_sessions() == 0
    assert portal_manager.get_candidate_snapshot(session_id).phase is SessionPhase.COMPLETED

    clock.advance(1)
    assert portal_manager.sweep_candidate_sessions() == 1
    assert not portal_manager.has_candidate_session(session_id)


def test_sweep_keeps_unfinished_session_until_idle_timeout(portal_manager, fake_api, clock):
    session_id, _ = portal_manager.start_candidate_session("Ada", "ada@example.com")

    clock.advance(FINISHED_SESSION_RETENTION_SECONDS)
    assert portal_manager.sweep_candidate_sessions() == 0
    assert portal_manager.has_candidate_session(session_id)

    clock.advance(IDLE_SESSION_TIMEOUT_SECONDS)
    assert portal_manager.sweep_candidate_sessions() == 1
    assert fake_api.results == {}


def test_slow_admin_request_does_not_stall_candidates(fake_api, token_store, clock):
    entered = threading.Event()
    release = threading.Event()

    def slow_admin_handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET" and request.url.path == "/api/questions":
            entered.set()
            release.wait(5)
        return fake_api.handler(request)

    base_url = "http://portal.test/api"
    admin_client = PortalApiClient(
        base_url, StoredCredentials(token_store), transport=httpx.MockTransport(slow_admin_handler)
    )
    candidate_client = PortalApiClient(
        base_url, StoredCredentials(TokenStore()), transport=httpx.MockTransport(fake_api.handler)
    )
    manager = PortalManager(admin_client, candidate_client, token_store, clock=clock)
    session_id, _ = manager.start_candidate_session("Ada", "ada@example.com")

    admin_thread = threading.Thread(target=manager.refresh_questions)
    admin_thread.start()
    try:
        assert entered.wait(5)
        visible = manager.report_candidate_visibility(session_id, hidden=False)
        answered = manager.record_candidate_answer(session_id, "4")
        count = manager.get_candidate_session_count()
        admin_still_waiting = admin_thread.is_alive()
    finally:
        release.set()
        admin_thread.join(5)
        manager.close()

    assert admin_still_waiting
    assert visible.phase is SessionPhase.ACTIVE
    assert answered.answered_count == 1
    assert count == 1
    assert len(manager.get_questions()) == 4
