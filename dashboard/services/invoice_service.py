"""
Invoice persistence service.

CRITICAL RULES:
1. Every write is exactly ONE statement against the `invoices` table
2. Amounts are ALWAYS stored in minor units (cents), on create and on update
3. `id` and `date` are never written by update
4. Create, update and delete all report through InvoiceFormState; validation
   and storage failures are returned, never raised
5. The listing path is revalidated only after a write succeeded
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, cast

import httpx
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import Client

from dashboard.config import settings
from dashboard.schemas.invoices import FIELD_MESSAGES, FORM_FIELDS, InvoiceForm, InvoiceFormState

logger = logging.getLogger(__name__)

INVOICES_TABLE = "invoices"

# Failures of a single PostgREST statement: rejected by the database, or never
# delivered.
STORAGE_ERRORS = (APIError, httpx.HTTPError)

RevalidatePath = Callable[[str], None]

FieldErrors = Dict[str, List[str]]


def _today_iso() -> str:
    """Current calendar day in UTC, e.g. '2024-03-09'."""
    return datetime.now(timezone.utc).date().isoformat()


def validate_invoice_form(
    form_data: Mapping[str, Any],
) -> Tuple[Optional[InvoiceForm], Optional[FieldErrors]]:
    """
    Validate and coerce a submitted invoice form.

    Only the editable keys (customerId, amount, status) are read; anything
    else in the submission is ignored. Missing keys are treated as null.

    Args:
        form_data: Mapping of form keys to submitted values

    Returns:
        (form, None) on success, or (None, errors) where errors maps each
        failing form key to its user-facing messages.
    """
    payload = {key: form_data.get(key) for key in FORM_FIELDS}

    try:
        return InvoiceForm.model_validate(payload), None
    except ValidationError as e:
        errors: FieldErrors = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else ""
            message = FIELD_MESSAGES.get(field)
            if message is None:
                # Model-level errors are not tied to one input
                continue
            messages = errors.setdefault(field, [])
            if message not in messages:
                messages.append(message)

        logger.info(f"Invoice form rejected: fields={sorted(errors)}")
        return None, errors


async def create_invoice(
    supabase_client: Client,
    form_data: Mapping[str, Any],
    revalidate_path: RevalidatePath,
) -> InvoiceFormState:
    """
    Validate a new-invoice form and insert it.

    This function:
    1. Validates the form; on failure returns field errors without touching the DB
    2. Inserts (customer_id, amount in cents, status, today's date)
    3. Revalidates the invoice listing and asks the caller to redirect to it

    Args:
        supabase_client: Shared Supabase data client
        form_data: Submitted form (customerId, amount, status)
        revalidate_path: Evicts the cached rendering of a path

    Returns:
        InvoiceFormState with status success, validation_error or storage_error
    """
    form, errors = validate_invoice_form(form_data)
    if form is None:
        return InvoiceFormState(
            status="validation_error",
            errors=errors,
            message="Missing Fields. Failed to Create Invoice.",
        )

    invoice_data = {
        "customer_id": form.customer_id,
        "amount": form.amount_in_cents,
        "status": form.status,
        "date": _today_iso(),
    }

    logger.info(
        f"Creating invoice: customer_id={form.customer_id}, status={form.status}"
    )

    try:
        supabase_client.table(INVOICES_TABLE).insert(invoice_data).execute()
    except STORAGE_ERRORS as e:
        logger.error(f"Failed to create invoice: {e}", exc_info=True)
        return InvoiceFormState(
            status="storage_error",
            message="Database Error. Failed to Create Invoice.",
        )

    revalidate_path(settings.INVOICES_PATH)

    return InvoiceFormState(
        status="success",
        message="Created Invoice.",
        redirect_to=settings.INVOICES_PATH,
    )


async def update_invoice(
    supabase_client: Client,
    invoice_id: str,
    form_data: Mapping[str, Any],
    revalidate_path: RevalidatePath,
) -> InvoiceFormState:
    """
    Validate an edit form and update the matching invoice.

    Only customer_id, amount (in cents) and status are written. An id that
    matches no row is reported as not_found and nothing is revalidated.

    Args:
        supabase_client: Shared Supabase data client
        invoice_id: UUID of the invoice to update
        form_data: Submitted form (customerId, amount, status)
        revalidate_path: Evicts the cached rendering of a path

    Returns:
        InvoiceFormState with status success, validation_error, not_found
        or storage_error
    """
    form, errors = validate_invoice_form(form_data)
    if form is None:
        return InvoiceFormState(
            status="validation_error",
            errors=errors,
            message="Missing Fields. Failed to Update Invoice.",
        )

    update_data = {
        "customer_id": form.customer_id,
        "amount": form.amount_in_cents,
        "status": form.status,
    }

    logger.info(f"Updating invoice {invoice_id}: status={form.status}")

    try:
        result = (
            supabase_client.table(INVOICES_TABLE)
            .update(update_data)
            .eq("id", invoice_id)
            .execute()
        )
    except STORAGE_ERRORS as e:
        logger.error(f"Failed to update invoice {invoice_id}: {e}", exc_info=True)
        return InvoiceFormState(
            status="storage_error",
            message="Database Error. Failed to Update Invoice.",
        )

    if not result.data:
        logger.warning(f"Invoice {invoice_id} not found, nothing updated")
        return InvoiceFormState(
            status="not_found",
            message="Invoice not found. Failed to Update Invoice.",
        )

    revalidate_path(settings.INVOICES_PATH)

    return InvoiceFormState(
        status="success",
        message="Updated Invoice.",
        redirect_to=settings.INVOICES_PATH,
    )


async def delete_invoice(
    supabase_client: Client,
    invoice_id: str,
    revalidate_path: RevalidatePath,
) -> InvoiceFormState:
    """
    Delete an invoice by id.

    The id is used as-is. Deleting an id that matches no row is not an error.
    Unlike create and update, a successful delete does not navigate.
    """
    logger.info(f"Deleting invoice {invoice_id}")

    try:
        result = (
            supabase_client.table(INVOICES_TABLE)
            .delete()
            .eq("id", invoice_id)
            .execute()
        )
    except STORAGE_ERRORS as e:
        logger.error(f"Failed to delete invoice {invoice_id}: {e}", exc_info=True)
        return InvoiceFormState(
            status="storage_error",
            message="Database Error. Failed to Delete Invoice.",
        )

    if not result.data:
        logger.info(f"Invoice {invoice_id} did not exist, 0 rows deleted")

    revalidate_path(settings.INVOICES_PATH)

    return InvoiceFormState(status="success", message="Deleted Invoice.")


async def get_invoices(
    supabase_client: Client,
    limit: int = 50,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    """
    Fetch a page of invoices, newest first.

    Args:
        supabase_client: Shared Supabase data client
        limit: Maximum number of invoices to return
        offset: Number of invoices to skip (for pagination)

    Returns:
        List of invoice records
    """
    logger.debug(f"Fetching invoices (limit={limit}, offset={offset})")

    result = (
        supabase_client.table(INVOICES_TABLE)
        .select("id, customer_id, amount, status, date")
        .order("date", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )

    invoices = cast(List[Dict[str, Any]], result.data)

    logger.info(f"Fetched {len(invoices)} invoices")

    return invoices


async def get_invoice_by_id(
    supabase_client: Client,
    invoice_id: str,
) -> Optional[Dict[str, Any]]:
    """Fetch a single invoice, or None if no row has that id."""
    logger.debug(f"Fetching invoice {invoice_id}")

    result = (
        supabase_client.table(INVOICES_TABLE)
        .select("id, customer_id, amount, status, date")
        .eq("id", invoice_id)
        .execute()
    )

    if not result.data:
        logger.warning(f"Invoice {invoice_id} not found")
        return None

    return cast(Dict[str, Any], result.data[0])
