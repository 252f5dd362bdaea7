"""Webhook handler pipeline.

Stages, each of which can end the request:
1. Method check (POST only)
2. Shared-secret authentication
3. FieldRoutes API key present
4. Body parse and validation
5. Operation dispatch
6. Response envelope and audit log
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from fieldroutes_webhook.models import (
    AuditEvent,
    AuditEventType,
    Operation,
    RiskLevel,
    WebhookRequest,
)
from fieldroutes_webhook.webhook import operations
from fieldroutes_webhook.webhook.auth import RequestAuthenticator
from fieldroutes_webhook.webhook.models import (
    OperationFailure,
    OperationOutcome,
    WebhookResponse,
)

if TYPE_CHECKING:
    from fieldroutes_webhook.audit.logger import AuditLogger
    from fieldroutes_webhook.fieldroutes.client import FieldRoutesClient

logger = logging.getLogger(__name__)

OperationFunc = Callable[
    ["FieldRoutesClient", WebhookRequest],
    Awaitable[OperationOutcome],
]

OPERATIONS: dict[Operation, OperationFunc] = {
    Operation.CREATE_CUSTOMER: operations.create_customer,
    Operation.SEARCH_CUSTOMER: operations.search_customer,
    Operation.BOOK_SERVICE: operations.book_service,
}


def _error(status_code: int, message: str, **extra: Any) -> WebhookResponse:
    return WebhookResponse(status_code=status_code, body={"error": message, **extra})


def _internal_error(message: str) -> WebhookResponse:
    return WebhookResponse(
        status_code=500,
        body={"success": False, "error": "Internal server error", "message": message},
    )


class WebhookHandler:
    """Runs one Vapi webhook request through the pipeline."""

    def __init__(
        self,
        authenticator: RequestAuthenticator,
        client: FieldRoutesClient | None,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self._auth = authenticator
        self._client = client
        self._audit = audit_logger

    async def handle(
        self,
        method: str,
        headers: Mapping[str, str],
        read_body: Callable[[], Awaitable[bytes]],
        source_ip: str | None = None,
    ) -> WebhookResponse:
        """Run the pipeline. ``read_body`` is only awaited once auth passes."""

        # Stage 1: Method check
        if not self._auth.method_allowed(method):
            return _error(405, "Method not allowed")

        try:
            return await self._process(headers, read_body, source_ip)
        except Exception as exc:
            logger.exception("Webhook error")
            return _internal_error(str(exc))

    async def _process(
        self,
        headers: Mapping[str, str],
        read_body: Callable[[], Awaitable[bytes]],
        source_ip: str | None,
    ) -> WebhookResponse:
        # Stage 2: Shared secret
        if not self._auth.verify(headers):
            self._log(AuditEventType.AUTH_FAILURE, "authenticate", "failure",
                      RiskLevel.HIGH, source_ip)
            return _error(401, "Unauthorized")
        self._log(AuditEventType.AUTH_SUCCESS, "authenticate", "success",
                  RiskLevel.INFO, source_ip)

        # Stage 3: Downstream configuration
        if self._client is None:
            logger.error("FIELDROUTES_API_KEY is not set")
            self._log(AuditEventType.CONFIG_ERROR, "configure", "failure",
                      RiskLevel.HIGH, source_ip)
            return _error(500, "FieldRoutes API key not configured")

        # Stage 4: Parse and validate
        try:
            payload = json.loads(await read_body())
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _error(400, "Invalid JSON")
        if not isinstance(payload, dict):
            return _error(400, "Invalid JSON")

        try:
            request = WebhookRequest.model_validate(payload)
        except ValidationError as exc:
            details = [
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in exc.errors()
            ]
            return _error(400, "Invalid request body", details=details)

        # Stage 5: Dispatch
        try:
            operation = Operation(request.operation)
        except ValueError:
            logger.info("Rejected unknown operation %r", request.operation)
            return _error(400, "Invalid operation")

        logger.info("Vapi request: operation=%s", operation.value)
        outcome = await OPERATIONS[operation](self._client, request)

        # Stage 6: Envelope
        if isinstance(outcome, OperationFailure):
            logger.error("Webhook %s failed: %s", operation.value, outcome.message)
            self._log(
                AuditEventType.OPERATION_FAILURE, operation.value, "failure",
                RiskLevel.MEDIUM, source_ip,
                {"kind": outcome.kind.value, "upstream_status": outcome.status_code},
            )
            return _internal_error(outcome.message)

        self._log(AuditEventType.OPERATION_SUCCESS, operation.value, "success",
                  RiskLevel.INFO, source_ip)
        return WebhookResponse(
            status_code=200,
            body={"success": True, "message": outcome.message, "data": outcome.data},
        )

    def _log(
        self,
        event_type: AuditEventType,
        action: str,
        result: str,
        risk_level: RiskLevel,
        source_ip: str | None,
        details: dict[str, object] | None = None,
    ) -> None:
        if self._audit:
            self._audit.log(AuditEvent(
                event_type=event_type,
                source_ip=source_ip,
                action=action,
                result=result,
                risk_level=risk_level,
                details=details,
            ))
