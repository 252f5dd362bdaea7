"""Translate Vapi call-summary fields into FieldRoutes request bodies."""

from __future__ import annotations

from typing import Any

from fieldroutes_webhook.models import WebhookRequest


def split_name(name: str | None) -> tuple[str, str]:
    """Split a full name into (first, rest) on whitespace.

    ``"Mary Ann Smith"`` -> ``("Mary", "Ann Smith")``; an empty name gives
    two empty strings.
    """
    parts = (name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def build_notes(request: WebhookRequest) -> str | None:
    """Free-text notes describing the referring agent and requested service."""
    fragments: list[str] = []

    if request.agent_name:
        agent = f"Real Estate Agent: {request.agent_name}"
        if request.agent_phone:
            agent += f" Phone: {request.agent_phone}"
        if request.agent_email:
            agent += f" Email: {request.agent_email}"
        fragments.append(agent)

    if request.service_type:
        fragments.append(f"Requested Service: {request.service_type}")

    return ". ".join(fragments) if fragments else None


def customer_payload(request: WebhookRequest) -> dict[str, Any]:
    """Body for ``customer/create``. Absent contact fields are left out."""
    fname, lname = split_name(request.name)
    payload: dict[str, Any] = {"fname": fname, "lname": lname}

    for key in ("phone", "email", "address"):
        value = getattr(request, key)
        if value is not None:
            payload[key] = value

    notes = build_notes(request)
    if notes is not None:
        payload["notes"] = notes
    return payload


def search_params(request: WebhookRequest) -> dict[str, Any]:
    """Body for ``customer/search``: phone wins over name; may be empty."""
    if request.phone:
        return {"phone": request.phone}

    params: dict[str, Any] = {}
    if request.name:
        fname, lname = split_name(request.name)
        params["fname"] = fname
        if lname:
            params["lname"] = lname
    return params
