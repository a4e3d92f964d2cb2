"""FastAPI server that exposes the candidate test page and its session endpoints."""

from __future__ import annotations

import logging
from threading import Thread
from typing import Literal

from fastapi import Cookie, Depends, FastAPI, HTTPException, Response
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
import uvicorn

from portal_app.constants.about import APP_NAME, APP_VERSION
from portal_app.constants.network_constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    SESSION_COOKIE_MAX_AGE,
    SESSION_COOKIE_NAME,
)
from portal_app.core.errors import ApiResponseError, ApiTransportError, SessionClosedError
from portal_app.core.portal_manager import PortalManager, UnknownSessionError
from portal_app.core.services.test_session import SessionSnapshot
from portal_app.server.candidate_page import CANDIDATE_PAGE_HTML

logger = logging.getLogger(__name__)


class StartPayload(BaseModel):
    """Payload schema for the entry form."""

    full_name: str = ""
    email: str = ""


class AnswerPayload(BaseModel):
    """Payload schema for a selected option or typed answer."""

    response: str


class NavigatePayload(BaseModel):
    direction: Literal["next", "previous"]


class SubmitPayload(BaseModel):
    confirmed: bool = False


class VisibilityPayload(BaseModel):
    hidden: bool = True


def snapshot_to_dict(snapshot: SessionSnapshot) -> dict[str, object]:
    question = None
    if snapshot.question is not None:
        question = {
            "id": snapshot.question.id,
            "text": snapshot.question.text,
            "kind": snapshot.question.kind.value,
            "options": list(snapshot.question.options),
        }
    return {
        "phase": snapshot.phase.value,
        "message": snapshot.message,
        "candidate_name": snapshot.candidate_name,
        "candidate_email": snapshot.candidate_email,
        "current_index": snapshot.current_index,
        "total_questions": snapshot.total_questions,
        "answered_count": snapshot.answered_count,
        "remaining_seconds": snapshot.remaining_seconds,
        "question": question,
        "current_response": snapshot.current_response,
        "correct_answers": snapshot.correct_answers,
        "score_percent": snapshot.score_percent,
    }


def _get_manager_dependency(manager: PortalManager):
    def dependency() -> PortalManager:
        return manager

    return dependency


def _require_session_id(session_id: str | None) -> str:
    if not session_id:
        raise HTTPException(status_code=404, detail="No active test session.")
    return session_id


def create_candidate_app(manager: PortalManager) -> FastAPI:
    """Create a FastAPI application wired to the provided portal manager."""
    app = FastAPI(title=f"{APP_NAME} Candidate API", version=APP_VERSION)
    manager_dep = _get_manager_dependency(manager)

    @app.get("/", response_class=HTMLResponse)
    def serve_candidate_page() -> str:
        return CANDIDATE_PAGE_HTML

    @app.post("/session", status_code=201)
    def start_session(
        payload: StartPayload,
        response: Response,
        portal: PortalManager = Depends(manager_dep),
        session_id: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    ) -> dict[str, object]:
        if session_id:
            portal.end_candidate_session(session_id)
        try:
            new_id, snapshot = portal.start_candidate_session(payload.full_name, payload.email)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except ApiTransportError as exc:
            logger.error("Candidate registration unreachable: %s", exc)
            raise HTTPException(
                status_code=502, detail="Registration failed. Please try again later."
            ) from exc
        except ApiResponseError as exc:
            raise HTTPException(status_code=400, detail=exc.message) from exc
        response.set_cookie(
            key=SESSION_COOKIE_NAME,
            value=new_id,
            max_age=SESSION_COOKIE_MAX_AGE,
            samesite="lax",
            httponly=True,
        )
        return snapshot_to_dict(snapshot)

    @app.get("/session")
    def get_session(
        portal: PortalManager = Depends(manager_dep),
        session_id: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    ) -> dict[str, object]:
        snapshot = _call(portal.get_candidate_snapshot, _require_session_id(session_id))
        return snapshot_to_dict(snapshot)

    @app.post("/session/answer")
    def record_answer(
        payload: AnswerPayload,
        portal: PortalManager = Depends(manager_dep),
        session_id: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    ) -> dict[str, object]:
        snapshot = _call(portal.record_candidate_answer, _require_session_id(session_id), payload.response)
        return snapshot_to_dict(snapshot)

    @app.post("/session/navigate")
    def navigate(
        payload: NavigatePayload,
        portal: PortalManager = Depends(manager_dep),
        session_id: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    ) -> dict[str, object]:
        snapshot = _call(portal.navigate_candidate, _require_session_id(session_id), payload.direction)
        return snapshot_to_dict(snapshot)

    @app.post("/session/submit")
    def submit(
        payload: SubmitPayload,
        portal: PortalManager = Depends(manager_dep),
        session_id: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    ) -> dict[str, object]:
        snapshot, unanswered = _call(portal.submit_candidate, _require_session_id(session_id), payload.confirmed)
        if unanswered:
            raise HTTPException(
                status_code=409,
                detail={"message": "Some questions are unanswered.", "unanswered": unanswered},
            )
        return snapshot_to_dict(snapshot)

    @app.post("/session/visibility")
    def report_visibility(
        payload: VisibilityPayload,
        portal: PortalManager = Depends(manager_dep),
        session_id: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    ) -> dict[str, object]:
        snapshot = _call(portal.report_candidate_visibility, _require_session_id(session_id), payload.hidden)
        return snapshot_to_dict(snapshot)

    return app


def _call(operation, *args):
    """Run a manager operation, translating session errors into HTTP errors."""
    try:
        return operation(*args)
    except UnknownSessionError as exc:
        raise HTTPException(status_code=404, detail="No active test session.") from exc
    except SessionClosedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def start_candidate_server(
    manager: PortalManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_candidate_app(manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="CandidateServer", daemon=True)
    thread.start()
    return thread
