"""HTTP client for the external portal API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from portal_app.constants.network_constants import REQUEST_TIMEOUT_SECONDS
from portal_app.core.api_schemas import (
    QuestionSchema,
    TestControlSchema,
    TestResultDetailSchema,
    TestResultSummarySchema,
    question_to_wire,
    submission_to_wire,
    validation_to_wire,
)
from portal_app.core.credentials import CredentialProvider
from portal_app.core.errors import ApiBusinessError, ApiResponseError, ApiTransportError
from portal_app.core.models import (
    Question,
    SubmissionPayload,
    TestConfiguration,
    TestResultDetail,
    TestResultSummary,
    ValidationRecord,
)

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            if body.get(key):
                return str(body[key])
    return f"Server responded with status {response.status_code}."


class PortalApiClient:
    """One method per remote operation; every request carries the provider's token."""

    def __init__(
        self,
        base_url: str,
        credentials: CredentialProvider,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            event_hooks={"request": [self._attach_token]},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> PortalApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _attach_token(self, request: httpx.Request) -> None:
        token = self._credentials.get_token()
        if token:
            request.headers["Authorization"] = token

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiTransportError(str(exc) or exc.__class__.__name__) from exc
        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, message)
            raise ApiResponseError(message, status_code=response.status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiResponseError(
                "Server returned a response that is not JSON.", status_code=response.status_code
            ) from exc

    @staticmethod
    def _invalid(exc: ValidationError) -> ApiResponseError:
        return ApiResponseError(f"Unexpected response from server: {exc.error_count()} invalid field(s).")

    # --- Test control ---

    def get_test_control(self) -> TestConfiguration | None:
        data = self._request("GET", "/testcontrol")
        if not data or not isinstance(data, dict):
            return None
        try:
            return TestControlSchema.model_validate(data).to_configuration()
        except ValidationError as exc:
            raise self._invalid(exc) from exc

    def update_test_control(
        self,
        *,
        active: bool | None = None,
        question_limit: int | None = None,
        time_limit_minutes: int | None = None,
    ) -> TestConfiguration | None:
        body: dict[str, object] = {}
        if active is not None:
            body["isActive"] = active
        if question_limit is not None:
            body["questionLimit"] = question_limit
        if time_limit_minutes is not None:
            body["timeLimit"] = time_limit_minutes
        data = self._request("PUT", "/testcontrol", json=body)
        if not data or not isinstance(data, dict):
            return None
        try:
            return TestControlSchema.model_validate(data).to_configuration()
        except ValidationError as exc:
            raise self._invalid(exc) from exc

    # --- Question bank ---

    def list_questions(self) -> list[Question]:
        data = self._request("GET", "/questions")
        if isinstance(data, dict):
            if data.get("error"):
                raise ApiBusinessError(str(data["error"]))
            data = data.get("questions")
        if not isinstance(data, list):
            return []
        try:
            return [QuestionSchema.model_validate(item).to_question() for item in data]
        except ValidationError as exc:
            raise self._invalid(exc) from exc

    def create_question(self, question: Question) -> Question | None:
        data = self._request("POST", "/questions", json=question_to_wire(question))
        return self._parse_question(data)

    def update_question(self, question_id: str, question: Question) -> Question | None:
        data = self._request("PUT", f"/questions/{question_id}", json=question_to_wire(question))
        return self._parse_question(data)

    def delete_question(self, question_id: str) -> None:
        self._request("DELETE", f"/questions/{question_id}")

    def upload_questions(self, file_path: Path) -> str:
        with file_path.open("rb") as handle:
            data = self._request("POST", "/questions/upload", files={"file": (file_path.name, handle)})
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return "File uploaded successfully."

    def _parse_question(self, data: Any) -> Question | None:
        if isinstance(data, dict) and isinstance(data.get("question"), dict):
            data = data["question"]
        if not isinstance(data, dict):
            return None
        try:
            return QuestionSchema.model_validate(data).to_question()
        except ValidationError:
            # Some server versions answer with an acknowledgement only.
            logger.debug("Question response without a question body: %r", data)
            return None

    # --- Candidates and results ---

    def register_candidate(self, full_name: str, email: str) -> str | None:
        data = self._request("POST", "/user/register", json={"fullName": full_name, "email": email})
        if isinstance(data, dict) and data.get("userId") is not None:
            return str(data["userId"])
        return None

    def submit_result(self, payload: SubmissionPayload) -> Any:
        return self._request("POST", "/tests", json=submission_to_wire(payload))

    def list_results(self) -> list[TestResultSummary]:
        data = self._request("GET", "/tests")
        if not isinstance(data, list):
            return []
        try:
            return [TestResultSummarySchema.model_validate(item).to_summary() for item in data]
        except ValidationError as exc:
            raise self._invalid(exc) from exc

    def get_result(self, result_id: str) -> TestResultDetail:
        data = self._request("GET", f"/tests/{result_id}")
        if not isinstance(data, dict):
            raise ApiResponseError(f"Result {result_id} not found.", status_code=404)
        try:
            return TestResultDetailSchema.model_validate(data).to_detail()
        except ValidationError as exc:
            raise self._invalid(exc) from exc

    def save_validation(self, result_id: str, record: ValidationRecord) -> Any:
        return self._request("PUT", f"/tests/{result_id}/validate", json=validation_to_wire(record))

    # --- Admin auth ---

    def admin_login(self, username: str, password: str) -> str:
        data = self._request("POST", "/admin/login", json={"username": username, "password": password})
        if not isinstance(data, dict) or not data.get("token"):
            raise ApiResponseError("Login failed: no token returned.")
        return str(data["token"])
