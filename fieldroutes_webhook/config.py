"""Process configuration, read from the environment once at startup."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://api.fieldroutes.com"
DEFAULT_WEBHOOK_PATH = "/api/fieldroutes"


class Settings(BaseModel):
    """Immutable settings handed to the app, handler and FieldRoutes client."""

    model_config = ConfigDict(frozen=True)

    vapi_secret: str | None = None
    fieldroutes_api_key: str | None = None
    fieldroutes_base_url: str = DEFAULT_BASE_URL
    fieldroutes_timeout: float = Field(default=30.0, gt=0)
    webhook_path: str = DEFAULT_WEBHOOK_PATH
    audit_log_path: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Empty values count as unset, so ``FIELDROUTES_BASE_URL=`` still
        falls back to the public API host.
        """
        env = os.environ if environ is None else environ

        def _get(key: str) -> str | None:
            value = env.get(key, "").strip()
            return value or None

        values: dict[str, object] = {
            "vapi_secret": _get("VAPI_SECRET"),
            "fieldroutes_api_key": _get("FIELDROUTES_API_KEY"),
            "audit_log_path": _get("AUDIT_LOG_PATH"),
        }
        optional = {
            "fieldroutes_base_url": _get("FIELDROUTES_BASE_URL"),
            "fieldroutes_timeout": _get("FIELDROUTES_TIMEOUT_SECONDS"),
            "webhook_path": _get("WEBHOOK_PATH"),
            "log_level": _get("LOG_LEVEL"),
        }
        values.update({k: v for k, v in optional.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]
