"""Service for reading and changing the admin-controlled test configuration."""

from __future__ import annotations

import logging

from portal_app.core.api_client import PortalApiClient
from portal_app.core.models import TestConfiguration

logger = logging.getLogger(__name__)


class TestControlService:
    """Start, stop and size the test candidates are allowed to take."""

    __test__ = False

    def __init__(self, client: PortalApiClient) -> None:
        self._client = client
        self._config = TestConfiguration()

    def refresh(self) -> TestConfiguration:
        config = self._client.get_test_control()
        if config is not None:
            self._config = config
        return self.get_configuration()

    def get_configuration(self) -> TestConfiguration:
        return TestConfiguration(
            active=self._config.active,
            question_limit=self._config.question_limit,
            time_limit_minutes=self._config.time_limit_minutes,
        )

    def start_test(self, question_limit: int, time_limit_minutes: int) -> TestConfiguration:
        self._validate_limit("Question limit", question_limit)
        self._validate_limit("Time limit", time_limit_minutes)
        updated = self._client.update_test_control(
            active=True,
            question_limit=question_limit,
            time_limit_minutes=time_limit_minutes,
        )
        self._apply(updated, active=True, question_limit=question_limit, time_limit_minutes=time_limit_minutes)
        logger.info("Test started: %d question(s), %d minute(s)", question_limit, time_limit_minutes)
        return self.get_configuration()

    def stop_test(self) -> TestConfiguration:
        updated = self._client.update_test_control(active=False)
        self._apply(updated, active=False)
        logger.info("Test stopped")
        return self.get_configuration()

    def _apply(self, updated: TestConfiguration | None, **fallback: object) -> None:
        if updated is not None:
            self._config = updated
            return
        for name, value in fallback.items():
            setattr(self._config, name, value)

    @staticmethod
    def _validate_limit(label: str, value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"{label} must be an integer.")
        if value <= 0:
            raise ValueError(f"{label} must be a positive integer.")
