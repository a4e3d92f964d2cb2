"""Tests for the admin test-control service."""

from __future__ import annotations

import json

import httpx
import pytest

from conftest import BASE_URL
from portal_app.core.api_client import PortalApiClient
from portal_app.core.credentials import StaticCredentials
from portal_app.core.services.test_control import TestControlService


@pytest.fixture
def service(api_client) -> TestControlService:
    return TestControlService(api_client)


def test_refresh_reads_server_configuration(service):
    config = service.refresh()

    assert (config.active, config.question_limit, config.time_limit_minutes) == (True, 3, 1)


def test_start_sends_limits_and_activates(service, fake_api):
    fake_api.test_control = {"isActive": False}

    config = service.start_test(5, 20)

    assert json.loads(fake_api.requests[-1].content) == {"isActive": True, "questionLimit": 5, "timeLimit": 20}
    assert (config.active, config.question_limit, config.time_limit_minutes) == (True, 5, 20)


def test_stop_only_clears_active(service, fake_api):
    service.refresh()

    config = service.stop_test()

    assert json.loads(fake_api.requests[-1].content) == {"isActive": False}
    assert config.active is False
    assert config.question_limit == 3


@pytest.mark.parametrize(("limit", "minutes"), [(0, 10), (5, 0), (-1, 10), (True, 10)])
def test_start_rejects_non_positive_limits(service, fake_api, limit, minutes):
    with pytest.raises(ValueError):
        service.start_test(limit, minutes)
    assert fake_api.requests == []


def test_acknowledgement_without_body_keeps_requested_values():
    client = PortalApiClient(
        BASE_URL, StaticCredentials("t"), transport=httpx.MockTransport(lambda request: httpx.Response(204))
    )
    service = TestControlService(client)

    config = service.start_test(4, 15)

    assert (config.active, config.question_limit, config.time_limit_minutes) == (True, 4, 15)


def test_configuration_is_returned_as_copy(service):
    config = service.refresh()
    config.active = False

    assert service.get_configuration().active is True
