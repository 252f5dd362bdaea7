"""Shared test fixtures for the FieldRoutes webhook adapter."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from fieldroutes_webhook.audit.logger import AuditLogger
from fieldroutes_webhook.config import Settings
from fieldroutes_webhook.fieldroutes.client import FieldRoutesClient
from fieldroutes_webhook.models import AuditEvent, AuditEventType, RiskLevel, WebhookRequest

VAPI_SECRET = "test-vapi-secret"
API_KEY = "test-fieldroutes-key"
BASE_URL = "http://fieldroutes.test"


class FakeFieldRoutes:
    """Records outbound calls and answers them with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: Any = {"id": 1}
        self.raw_body: bytes | None = None
        self.error: Exception | None = None

    def respond(self, status_code: int = 200, json_body: Any = None) -> None:
        self.status_code = status_code
        self.json_body = json_body

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def body(self, index: int = 0) -> dict[str, Any]:
        return json.loads(self.requests[index].content)


@pytest.fixture
def fieldroutes() -> FakeFieldRoutes:
    return FakeFieldRoutes()


@pytest.fixture
def fieldroutes_client(fieldroutes: FakeFieldRoutes) -> FieldRoutesClient:
    return FieldRoutesClient(
        base_url=BASE_URL, api_key=API_KEY, transport=fieldroutes.transport,
    )


@pytest.fixture
def mock_audit_logger() -> MagicMock:
    return MagicMock(spec=AuditLogger)


# --- Factory functions for test data ---


def make_settings(**kwargs: Any) -> Settings:
    """Factory for Settings with test credentials."""
    defaults: dict[str, Any] = {
        "vapi_secret": VAPI_SECRET,
        "fieldroutes_api_key": API_KEY,
        "fieldroutes_base_url": BASE_URL,
    }
    defaults.update(kwargs)
    return Settings(**defaults)


def make_webhook_request(**kwargs: Any) -> WebhookRequest:
    """Factory for WebhookRequest; unspecified fields stay unset."""
    return WebhookRequest(**kwargs)


def make_audit_event(**kwargs: Any) -> AuditEvent:
    """Factory for AuditEvent with sensible defaults."""
    defaults: dict[str, Any] = {
        "event_type": AuditEventType.AUTH_FAILURE,
        "action": "authenticate",
        "result": "failure",
        "risk_level": RiskLevel.HIGH,
    }
    defaults.update(kwargs)
    return AuditEvent(**defaults)


def body_reader(payload: Any) -> Callable[[], Any]:
    """Async body reader as the handler expects from Starlette."""
    raw = payload if isinstance(payload, bytes) else json.dumps(payload).encode()

    async def _read() -> bytes:
        return raw

    return _read
