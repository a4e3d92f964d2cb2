"""Facade shared by the candidate web server and the admin console."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from threading import Lock
import time
from typing import Callable
from uuid import uuid4

from portal_app.constants.session_constants import (
    ADMIN_TOKEN_KEY,
    FINISHED_SESSION_RETENTION_SECONDS,
    IDLE_SESSION_TIMEOUT_SECONDS,
    MISSING_IDENTITY_MESSAGE,
)
from portal_app.core.api_client import PortalApiClient
from portal_app.core.credentials import FileTokenStore, StoredCredentials, TokenStore
from portal_app.core.models import (
    Candidate,
    Question,
    TestConfiguration,
    TestResultSummary,
    ValidationRecord,
)
from portal_app.core.services.question_bank import QuestionBank
from portal_app.core.services.result_review import ResultReview, ReviewItem
from portal_app.core.services.session_loader import SessionConfigLoader
from portal_app.core.services.test_control import TestControlService
from portal_app.core.services.test_session import SessionSnapshot, TestSessionController
from portal_app.core.settings import PortalSettings

logger = logging.getLogger(__name__)


class UnknownSessionError(KeyError):
    """Raised when a browser presents a session id the server does not know."""


@dataclass(slots=True)
class CandidateSession:
    """A candidate's controller plus the lock serializing requests against it.

    Times are readings of the manager clock.
    """

    session_id: str
    controller: TestSessionController
    started_at: float
    last_seen_at: float
    finished_at: float | None = None
    lock: Lock = field(default_factory=Lock)


class PortalManager:
    """Facade for the portal services: candidate sessions, question bank, test control, review."""

    def __init__(
        self,
        admin_client: PortalApiClient,
        candidate_client: PortalApiClient,
        token_store: TokenStore,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._sessions_lock = Lock()
        self._admin_lock = Lock()
        self._token_store = token_store
        self._admin_client = admin_client
        self._candidate_client = candidate_client
        self._clock = clock or time.monotonic

        # Services
        self._loader = SessionConfigLoader(candidate_client, candidate_client)
        self._question_bank = QuestionBank(admin_client)
        self._test_control = TestControlService(admin_client)
        self._review = ResultReview(admin_client)

        self._sessions: dict[str, CandidateSession] = {}

    @classmethod
    def from_settings(cls, settings: PortalSettings) -> PortalManager:
        token_store = FileTokenStore(Path(settings.storage_path))
        admin_client = PortalApiClient(
            settings.api_base_url,
            StoredCredentials(token_store),
            timeout=settings.api_timeout_seconds,
        )
        # Candidates are anonymous; their client gets an empty store of its own.
        candidate_client = PortalApiClient(
            settings.api_base_url,
            StoredCredentials(TokenStore()),
            timeout=settings.api_timeout_seconds,
        )
        return cls(admin_client, candidate_client, token_store)

    def close(self) -> None:
        self._admin_client.close()
        self._candidate_client.close()

    # --- Candidate sessions ---

    def start_candidate_session(self, full_name: str, email: str) -> tuple[str, SessionSnapshot]:
        full_name = (full_name or "").strip()
        email = (email or "").strip()
        if not full_name or not email:
            raise ValueError(MISSING_IDENTITY_MESSAGE)

        self.sweep_candidate_sessions()
        user_id = self._candidate_client.register_candidate(full_name, email)
        candidate = Candidate(full_name=full_name, email=email, user_id=user_id)
        controller = TestSessionController(candidate, self._loader, self._candidate_client, clock=self._clock)
        now = self._clock()
        session = CandidateSession(
            session_id=uuid4().hex, controller=controller, started_at=now, last_seen_at=now
        )
        with session.lock:
            with self._sessions_lock:
                self._sessions[session.session_id] = session
            controller.start()
            self._touch(session)
            snapshot = controller.snapshot()
        logger.info("Candidate %s registered; session %s is %s", email, session.session_id, snapshot.phase.value)
        return session.session_id, snapshot

    def end_candidate_session(self, session_id: str) -> None:
        with self._sessions_lock:
            self._sessions.pop(session_id, None)

    def has_candidate_session(self, session_id: str | None) -> bool:
        with self._sessions_lock:
            return session_id is not None and session_id in self._sessions

    def sweep_candidate_sessions(self) -> int:
        """Forget sessions that finished a while ago or whose browser went quiet.

        A finished session stays readable for FINISHED_SESSION_RETENTION_SECONDS so the
        page can still show its final state. Returns the number of sessions removed.
        """
        now = self._clock()
        removed: list[CandidateSession] = []
        with self._sessions_lock:
            for session_id, session in list(self._sessions.items()):
                if session.lock.locked():
                    continue
                if session.finished_at is not None:
                    expired = now - session.finished_at >= FINISHED_SESSION_RETENTION_SECONDS
                else:
                    expired = now - session.last_seen_at >= IDLE_SESSION_TIMEOUT_SECONDS
                if expired:
                    removed.append(self._sessions.pop(session_id))
        for session in removed:
            logger.info(
                "Dropped session %s (%s) after %.0f s",
                session.session_id,
                session.controller.phase.value,
                now - session.started_at,
            )
        return len(removed)

    def _touch(self, session: CandidateSession) -> None:
        now = self._clock()
        session.last_seen_at = now
        if session.finished_at is None and session.controller.is_terminal():
            session.finished_at = now

    def get_candidate_snapshot(self, session_id: str) -> SessionSnapshot:
        return self._with_session(session_id, lambda c: c.sync_clock())

    def record_candidate_answer(self, session_id: str, response: str) -> SessionSnapshot:
        def action(controller: TestSessionController) -> None:
            controller.sync_clock()
            controller.record_answer(response)

        return self._with_session(session_id, action)

    def navigate_candidate(self, session_id: str, direction: str) -> SessionSnapshot:
        if direction not in ("next", "previous"):
            raise ValueError("Direction must be 'next' or 'previous'.")

        def action(controller: TestSessionController) -> None:
            controller.sync_clock()
            if direction == "next":
                controller.next_question()
            else:
                controller.previous_question()

        return self._with_session(session_id, action)

    def submit_candidate(self, session_id: str, confirmed: bool) -> tuple[SessionSnapshot, int]:
        """Submit for the candidate; returns the snapshot and the unanswered count that
        still needs confirmation (zero when the submission went ahead)."""
        pending: list[int] = []

        def confirm(unanswered: int) -> bool:
            if not confirmed:
                pending.append(unanswered)
            return confirmed

        def action(controller: TestSessionController) -> None:
            controller.sync_clock()
            controller.submit(confirm=confirm)

        snapshot = self._with_session(session_id, action)
        return snapshot, (pending[0] if pending else 0)

    def report_candidate_visibility(self, session_id: str, hidden: bool) -> SessionSnapshot:
        # Visibility is applied before the clock so a simultaneous expiry cannot submit.
        def action(controller: TestSessionController) -> None:
            if hidden:
                controller.page_hidden()
            else:
                controller.sync_clock()

        return self._with_session(session_id, action)

    def get_candidate_session_count(self) -> int:
        with self._sessions_lock:
            return len(self._sessions)

    def _with_session(self, session_id: str, action: Callable[[TestSessionController], object]) -> SessionSnapshot:
        with self._sessions_lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise UnknownSessionError(session_id)
        with session.lock:
            try:
                action(session.controller)
            finally:
                self._touch(session)
            return session.controller.snapshot()

    # --- Admin authentication ---

    def admin_login(self, username: str, password: str) -> None:
        if not username.strip() or not password:
            raise ValueError("Enter both username and password.")
        token = self._admin_client.admin_login(username.strip(), password)
        self._token_store.set(ADMIN_TOKEN_KEY, token)
        logger.info("Administrator %s logged in", username.strip())

    def admin_logout(self) -> None:
        self._token_store.remove(ADMIN_TOKEN_KEY)

    def is_admin_logged_in(self) -> bool:
        return self._token_store.get(ADMIN_TOKEN_KEY) is not None

    # --- Question bank delegation ---

    def refresh_questions(self) -> list[Question]:
        with self._admin_lock:
            return self._question_bank.refresh()

    def get_questions(self) -> list[Question]:
        with self._admin_lock:
            return self._question_bank.get_questions()

    def add_question(self, draft: Question) -> list[Question]:
        with self._admin_lock:
            return self._question_bank.add_question(draft)

    def update_question(self, question_id: str, draft: Question) -> list[Question]:
        with self._admin_lock:
            return self._question_bank.update_question(question_id, draft)

    def delete_question(self, question_id: str) -> list[Question]:
        with self._admin_lock:
            return self._question_bank.delete_question(question_id)

    def upload_questions(self, file_path: Path) -> str:
        with self._admin_lock:
            return self._question_bank.upload_file(file_path)

    # --- Test control delegation ---

    def refresh_test_control(self) -> TestConfiguration:
        with self._admin_lock:
            return self._test_control.refresh()

    def get_test_control(self) -> TestConfiguration:
        with self._admin_lock:
            return self._test_control.get_configuration()

    def start_test(self, question_limit: int, time_limit_minutes: int) -> TestConfiguration:
        with self._admin_lock:
            return self._test_control.start_test(question_limit, time_limit_minutes)

    def stop_test(self) -> TestConfiguration:
        with self._admin_lock:
            return self._test_control.stop_test()

    # --- Results and review delegation ---

    def list_results(self) -> list[TestResultSummary]:
        return self._admin_client.list_results()

    def load_review(self, result_id: str) -> list[ReviewItem]:
        with self._admin_lock:
            return self._review.load(result_id)

    def get_review(self) -> ResultReview:
        return self._review

    def set_review_mark(self, mark_key: str, value: object) -> float:
        with self._admin_lock:
            return self._review.set_mark(mark_key, value)

    def save_review(self) -> ValidationRecord:
        with self._admin_lock:
            return self._review.save()
