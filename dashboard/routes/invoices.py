"""
Invoice dashboard endpoints.

Flow:
1. GET  /dashboard/invoices             - Cached listing (evicted by every write)
2. GET  /dashboard/invoices/{id}        - Single invoice for the edit form
3. POST /dashboard/invoices/create      - Create form submission
4. POST /dashboard/invoices/{id}/edit   - Edit form submission
5. POST /dashboard/invoices/{id}/delete - Delete button submission

Form submissions that succeed answer with 303 See Other to the listing (except
delete, which re-renders in place). Failed submissions answer with the
InvoiceFormState body so the form can show field errors and the message.
"""

import logging
from typing import Annotated, Any, Mapping

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response
from supabase import Client

from dashboard.auth.dependencies import AuthenticatedUser, get_authenticated_user
from dashboard.config import settings
from dashboard.db.client import get_supabase_client
from dashboard.schemas.invoices import (
    InvoiceFormState,
    InvoiceListResponse,
    InvoiceRecord,
)
from dashboard.services import (
    create_invoice,
    delete_invoice,
    get_invoice_by_id,
    get_invoices,
    update_invoice,
)
from dashboard.services.page_cache import PageCache, page_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.INVOICES_PATH, tags=["invoices"])

_FAILURE_STATUS_CODES = {
    "validation_error": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "not_found": status.HTTP_404_NOT_FOUND,
    "storage_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_page_cache() -> PageCache:
    """Dependency returning the process-wide page cache."""
    return page_cache


def _state_response(state: InvoiceFormState) -> Response:
    """Turn a handler result into a redirect or a JSON form state."""
    if state.redirect_to:
        return RedirectResponse(url=state.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

    status_code = _FAILURE_STATUS_CODES.get(state.status, status.HTTP_200_OK)
    return JSONResponse(
        status_code=status_code,
        content=state.model_dump(exclude_none=True),
    )


async def _read_form(request: Request) -> Mapping[str, Any]:
    form = await request.form()
    return {key: form.get(key) for key in form.keys()}


@router.get(
    "",
    response_model=InvoiceListResponse,
    status_code=status.HTTP_200_OK,
    summary="List invoices",
    description="""
    Retrieve a page of invoices, newest first.

    The rendered page is cached per (limit, offset) until the next successful
    create, update or delete revalidates the listing path.
    """
)
async def list_invoices(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
    cache: Annotated[PageCache, Depends(get_page_cache)],
    limit: int = 50,
    offset: int = 0
) -> InvoiceListResponse:
    variant = f"limit={limit}&offset={offset}"

    cached = cache.get(settings.INVOICES_PATH, variant)
    if cached is not None:
        logger.debug(f"Serving cached invoice listing ({variant})")
        return cached

    logger.info(f"Listing invoices for user {auth_user.user_id} ({variant})")

    try:
        invoices = await get_invoices(
            supabase_client=supabase_client,
            limit=limit,
            offset=offset
        )
    except Exception as e:
        logger.error(f"Failed to fetch invoices: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve invoices from database"
            }
        )

    response = InvoiceListResponse(
        invoices=[InvoiceRecord(**inv) for inv in invoices],
        count=len(invoices),
        limit=limit,
        offset=offset
    )
    cache.set(settings.INVOICES_PATH, response, variant)

    return response


@router.post(
    "/create",
    summary="Create an invoice from the new-invoice form",
    responses={
        303: {"description": "Created; redirect to the listing"},
        422: {"model": InvoiceFormState, "description": "Field validation failed"},
        500: {"model": InvoiceFormState, "description": "Database error"},
    }
)
async def submit_create_invoice(
    request: Request,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
    cache: Annotated[PageCache, Depends(get_page_cache)],
) -> Response:
    form_data = await _read_form(request)

    logger.info(f"Create invoice submitted by user {auth_user.user_id}")

    state = await create_invoice(
        supabase_client=supabase_client,
        form_data=form_data,
        revalidate_path=cache.revalidate_path,
    )
    return _state_response(state)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceRecord,
    status_code=status.HTTP_200_OK,
    summary="Get invoice details",
)
async def get_invoice(
    invoice_id: str,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> InvoiceRecord:
    """Fetch one invoice to pre-fill the edit form."""
    try:
        invoice = await get_invoice_by_id(
            supabase_client=supabase_client,
            invoice_id=invoice_id
        )
    except Exception as e:
        logger.error(f"Failed to fetch invoice {invoice_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": "Failed to retrieve invoice from database"
            }
        )

    if not invoice:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "not_found",
                "details": f"Invoice {invoice_id} not found"
            }
        )

    return InvoiceRecord(**invoice)


@router.post(
    "/{invoice_id}/edit",
    summary="Update an invoice from the edit form",
    responses={
        303: {"description": "Updated; redirect to the listing"},
        404: {"model": InvoiceFormState, "description": "No invoice with that id"},
        422: {"model": InvoiceFormState, "description": "Field validation failed"},
        500: {"model": InvoiceFormState, "description": "Database error"},
    }
)
async def submit_update_invoice(
    invoice_id: str,
    request: Request,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
    cache: Annotated[PageCache, Depends(get_page_cache)],
) -> Response:
    form_data = await _read_form(request)

    logger.info(f"Update of invoice {invoice_id} submitted by user {auth_user.user_id}")

    state = await update_invoice(
        supabase_client=supabase_client,
        invoice_id=invoice_id,
        form_data=form_data,
        revalidate_path=cache.revalidate_path,
    )
    return _state_response(state)


@router.post(
    "/{invoice_id}/delete",
    response_model=InvoiceFormState,
    summary="Delete an invoice",
    responses={
        500: {"model": InvoiceFormState, "description": "Database error"},
    }
)
async def submit_delete_invoice(
    invoice_id: str,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
    cache: Annotated[PageCache, Depends(get_page_cache)],
) -> Response:
    logger.info(f"Delete of invoice {invoice_id} submitted by user {auth_user.user_id}")

    state = await delete_invoice(
        supabase_client=supabase_client,
        invoice_id=invoice_id,
        revalidate_path=cache.revalidate_path,
    )
    return _state_response(state)
