"""Inbound request checks: HTTP method and Vapi shared secret."""

from __future__ import annotations

import hmac
import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)

ALLOWED_METHOD = "POST"


class RequestAuthenticator:
    """Validates the Vapi shared secret using constant-time comparison.

    The credential is the ``authorization`` header when it is non-empty,
    otherwise ``x-vapi-secret``. A wrong ``authorization`` value is not
    rescued by a correct ``x-vapi-secret``.
    """

    def __init__(self, secret: str | None) -> None:
        self._secret = secret.encode() if secret else None
        if self._secret is None:
            logger.warning("VAPI_SECRET is not set; all webhook requests will be rejected")

    @staticmethod
    def method_allowed(method: str) -> bool:
        return method.upper() == ALLOWED_METHOD

    @staticmethod
    def credential(headers: Mapping[str, str]) -> str:
        return headers.get("authorization") or headers.get("x-vapi-secret") or ""

    def verify(self, headers: Mapping[str, str]) -> bool:
        if self._secret is None:
            return False
        provided = self.credential(headers)
        if not provided:
            return False
        return hmac.compare_digest(provided.encode(), self._secret)
