"""
Pydantic schemas for invoice form handling.

These models define the form contract (what the dashboard submits), the
result contract every mutating handler returns, and the read models served
by the listing endpoints.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

InvoiceStatus = Literal["pending", "paid"]

# Form keys as submitted by the dashboard, mapped to the one message shown
# for any problem with that field.
FIELD_MESSAGES: Dict[str, str] = {
    "customerId": "Please select a customer.",
    "amount": "Please enter an amount greater than 0$.",
    "status": "Please select an invoice status.",
}

FORM_FIELDS = tuple(FIELD_MESSAGES)

_CENT = Decimal("1")

# `amount` is a Postgres integer column of cents
MAX_AMOUNT = Decimal("21474836.47")


def to_minor_units(amount: Decimal) -> int:
    """Convert a decimal amount to integer minor units (cents), rounding half-up."""
    return int((amount * 100).quantize(_CENT, rounding=ROUND_HALF_UP))


# --- Form models ---

class InvoiceForm(BaseModel):
    """
    Editable invoice fields submitted by the create and edit forms.

    `id` and `date` are deliberately absent: the database assigns the id and
    the create handler assigns the date.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    customer_id: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] = Field(
        ...,
        alias="customerId",
        description="UUID of the customer the invoice belongs to"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        description="Invoice amount in major currency units (e.g. dollars)",
        examples=["50", "129.99"]
    )
    status: InvoiceStatus = Field(..., description="Invoice status")

    @field_validator("amount")
    @classmethod
    def amount_has_minor_units(cls, value: Decimal) -> Decimal:
        """Reject positive amounts that round to zero cents."""
        if to_minor_units(value) < 1:
            raise ValueError("amount must be at least one minor unit")
        return value

    @property
    def amount_in_cents(self) -> int:
        return to_minor_units(self.amount)


# --- Result contract ---

class InvoiceFormState(BaseModel):
    """
    Outcome of a create, update or delete submission.

    `errors` is keyed by form field (customerId, amount, status) and only
    contains the fields that failed. `redirect_to` is set only when the
    caller should navigate away from the form.
    """
    status: Literal["success", "validation_error", "storage_error", "not_found"] = Field(
        ...,
        description="Outcome discriminator"
    )
    errors: Optional[Dict[str, List[str]]] = Field(
        None,
        description="Field-level validation messages"
    )
    message: Optional[str] = Field(None, description="User-facing summary message")
    redirect_to: Optional[str] = Field(None, description="Path to navigate to after success")

    @property
    def ok(self) -> bool:
        return self.status == "success"


# --- Read models ---

class InvoiceRecord(BaseModel):
    """A persisted invoice row. `amount` is in minor units."""
    id: str = Field(..., description="Invoice UUID")
    customer_id: str = Field(..., description="Customer UUID")
    amount: int = Field(..., description="Amount in cents")
    status: InvoiceStatus
    date: str = Field(..., description="ISO-8601 calendar date the invoice was created")


class InvoiceListResponse(BaseModel):
    """Response for GET /dashboard/invoices."""
    invoices: List[InvoiceRecord] = Field(..., description="Invoices, newest first")
    count: int = Field(..., description="Number of invoices returned")
    limit: int = Field(..., description="Maximum number of invoices requested")
    offset: int = Field(..., description="Number of invoices skipped")
