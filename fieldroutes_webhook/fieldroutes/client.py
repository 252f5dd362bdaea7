"""FieldRoutes API gateway.

Every call is a ``POST {base_url}/{module}/{action}`` with a JSON body and a
Bearer token. Outcomes come back as values: the parsed JSON on success, an
``OperationFailure`` otherwise.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from fieldroutes_webhook.config import Settings
from fieldroutes_webhook.webhook.models import (
    FailureKind,
    OperationFailure,
    OperationOutcome,
    OperationResult,
)

logger = logging.getLogger(__name__)


class FieldRoutesClient:
    """Thin async client for the FieldRoutes module/action REST convention."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> FieldRoutesClient:
        if not settings.fieldroutes_api_key:
            raise ValueError("FieldRoutes API key not configured")
        return cls(
            base_url=settings.fieldroutes_base_url,
            api_key=settings.fieldroutes_api_key,
            timeout=settings.fieldroutes_timeout,
            transport=transport,
        )

    def url_for(self, module: str, action: str) -> str:
        return f"{self._base_url}/{module}/{action}"

    async def call(
        self, module: str, action: str, data: dict[str, Any],
    ) -> OperationOutcome:
        """POST ``data`` to ``module/action`` and return the decoded response."""
        url = self.url_for(module, action)
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(
                    url, json=data, headers=headers, timeout=self._timeout,
                )
        except httpx.HTTPError as exc:
            logger.warning("FieldRoutes %s/%s unreachable: %s", module, action, exc)
            return OperationFailure(
                message=f"FieldRoutes API unreachable: {exc}",
                kind=FailureKind.UNAVAILABLE,
            )

        if not resp.is_success:
            logger.warning(
                "FieldRoutes %s/%s returned %d", module, action, resp.status_code,
            )
            return OperationFailure(
                message=f"FieldRoutes API error: {resp.status_code} {resp.reason_phrase}",
                kind=FailureKind.REJECTED,
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return OperationFailure(
                message="FieldRoutes API returned invalid JSON",
                kind=FailureKind.REJECTED,
                status_code=resp.status_code,
            )

        return OperationResult(message=f"{module}/{action} ok", data=payload)
