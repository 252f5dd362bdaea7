"""Shared Pydantic data models for the FieldRoutes webhook adapter."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---


class Operation(str, Enum):
    CREATE_CUSTOMER = "create_customer"
    SEARCH_CUSTOMER = "search_customer"
    BOOK_SERVICE = "book_service"


class AuditEventType(str, Enum):
    AUTH_SUCCESS = "auth_success"
    AUTH_FAILURE = "auth_failure"
    OPERATION_SUCCESS = "operation_success"
    OPERATION_FAILURE = "operation_failure"
    CONFIG_ERROR = "config_error"


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    INFO = "info"


# --- Webhook Models ---


class WebhookRequest(BaseModel):
    """Call summary fields sent by the Vapi assistant.

    Vapi attaches its own call metadata to tool payloads, so unknown keys
    are ignored rather than rejected.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    operation: str | None = None
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    service_type: str | None = None
    agent_name: str | None = None
    agent_phone: str | None = None
    agent_email: str | None = None


# --- Audit Models ---


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class AuditEvent(BaseModel):
    timestamp: str = Field(default_factory=_now_iso)
    event_type: AuditEventType
    source_ip: str | None = None
    action: str
    result: str  # "success" | "failure"
    risk_level: RiskLevel
    details: dict[str, object] | None = None
