"""
Service layer for the invoicing dashboard.

Services sit between routes (HTTP layer) and the database:
- Validate and coerce submitted forms
- Issue one statement per write against the invoices table
- Report every outcome through InvoiceFormState
"""

from .invoice_service import (
    create_invoice,
    delete_invoice,
    get_invoice_by_id,
    get_invoices,
    update_invoice,
    validate_invoice_form,
)
from .page_cache import PageCache, page_cache

__all__ = [
    "create_invoice",
    "update_invoice",
    "delete_invoice",
    "get_invoices",
    "get_invoice_by_id",
    "validate_invoice_form",
    "PageCache",
    "page_cache",
]
