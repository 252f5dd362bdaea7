"""FastAPI application exposing the Vapi -> FieldRoutes webhook."""

from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from fieldroutes_webhook.audit.logger import AuditLogger
from fieldroutes_webhook.config import Settings
from fieldroutes_webhook.fieldroutes.client import FieldRoutesClient
from fieldroutes_webhook.webhook.auth import RequestAuthenticator
from fieldroutes_webhook.webhook.handler import WebhookHandler

# Non-POST verbs are routed too so the handler can answer 405 itself.
WEBHOOK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    audit_logger = (
        AuditLogger.from_env(settings.audit_log_path)
        if settings.audit_log_path else None
    )
    return create_app(settings, audit_logger=audit_logger)


def create_app(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
    audit_logger: AuditLogger | None = None,
) -> FastAPI:
    """Create the webhook app. ``transport`` replaces the outbound HTTP layer."""
    app = FastAPI(docs_url=None, redoc_url=None)

    client = (
        FieldRoutesClient.from_settings(settings, transport=transport)
        if settings.fieldroutes_api_key else None
    )
    handler = WebhookHandler(
        authenticator=RequestAuthenticator(settings.vapi_secret),
        client=client,
        audit_logger=audit_logger,
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.api_route(settings.webhook_path, methods=WEBHOOK_METHODS)
    async def fieldroutes_webhook(request: Request) -> Response:
        result = await handler.handle(
            method=request.method,
            headers=request.headers,
            read_body=request.body,
            source_ip=request.client.host if request.client else None,
        )
        return JSONResponse(result.body, status_code=result.status_code)

    return app
