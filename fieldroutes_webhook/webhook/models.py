"""Result values passed between the gateway, operations and handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    REJECTED = "rejected"  # non-2xx or unparseable body
    UNAVAILABLE = "unavailable"  # connect error or timeout


@dataclass
class OperationResult:
    """Successful outcome: a caller-facing message plus downstream data."""

    message: str
    data: Any = None


@dataclass
class OperationFailure:
    """Failed outcome, carried up to the handler instead of raised."""

    message: str
    kind: FailureKind
    status_code: int | None = None

    def wrap(self, prefix: str) -> OperationFailure:
        """Return a copy whose message is prefixed with operation context."""
        return OperationFailure(
            message=f"{prefix}: {self.message}",
            kind=self.kind,
            status_code=self.status_code,
        )


OperationOutcome = OperationResult | OperationFailure


@dataclass
class WebhookResponse:
    """Pipeline response to return to the Vapi platform."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)
