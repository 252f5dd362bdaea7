"""The three webhook operations: create, search and book."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fieldroutes_webhook.models import WebhookRequest
from fieldroutes_webhook.webhook.mapping import customer_payload, search_params, split_name
from fieldroutes_webhook.webhook.models import OperationFailure, OperationOutcome, OperationResult

if TYPE_CHECKING:
    from fieldroutes_webhook.fieldroutes.client import FieldRoutesClient

logger = logging.getLogger(__name__)


async def create_customer(
    client: FieldRoutesClient, request: WebhookRequest,
) -> OperationOutcome:
    fname, lname = split_name(request.name)
    result = await client.call("customer", "create", customer_payload(request))
    if isinstance(result, OperationFailure):
        return result.wrap("Failed to create customer")

    return OperationResult(
        message=f"Customer {fname} {lname} created successfully in FieldRoutes",
        data=result.data,
    )


async def search_customer(
    client: FieldRoutesClient, request: WebhookRequest,
) -> OperationOutcome:
    """Look up customers by phone, falling back to name.

    With neither field set the search is sent with an empty filter and the
    FieldRoutes API decides what that matches.
    """
    params = search_params(request)
    if not params:
        logger.info("customer search sent without phone or name filter")

    result = await client.call("customer", "search", params)
    if isinstance(result, OperationFailure):
        return result.wrap("Failed to search customers")

    customers = result.data
    if isinstance(customers, list) and customers:
        return OperationResult(
            message=f"Found {len(customers)} customer(s)",
            data=customers,
        )
    return OperationResult(message="No customers found", data=[])


async def book_service(
    client: FieldRoutesClient, request: WebhookRequest,
) -> OperationOutcome:
    """Create the customer, then report the booking as initiated.

    FieldRoutes appointment creation is not wired up yet, so no appointment
    record exists after this call. Agent details are not carried over.
    """
    customer_request = WebhookRequest(
        operation=request.operation,
        name=request.name,
        phone=request.phone,
        email=request.email,
        address=request.address,
        service_type=request.service_type,
    )
    customer = await create_customer(client, customer_request)
    if isinstance(customer, OperationFailure):
        return customer.wrap("Failed to book service")

    return OperationResult(
        message=f"Service booking initiated for {request.name or ''}".rstrip(),
        data=customer.data,
    )
