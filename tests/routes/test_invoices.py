"""
Tests for the invoice dashboard endpoints.

Tests cover:
- Happy path: create/edit redirect to the listing with 303
- Failure paths: field errors (422), missing invoice (404), database error (500)
- Listing cache: served from cache, evicted by a successful write
- Missing session → 401
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, Mock
from postgrest.exceptions import APIError

from dashboard.auth.dependencies import AuthenticatedUser, get_authenticated_user
from dashboard.db.client import get_supabase_client
from dashboard.main import app
from dashboard.routes.invoices import get_page_cache
from dashboard.services.page_cache import PageCache

INVOICE_ROW = {
    "id": "3958dc9e-712f-4377-85e9-fec4b6a6442a",
    "customer_id": "c1",
    "amount": 5000,
    "status": "pending",
    "date": "2024-03-09",
}


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


async def mock_get_authenticated_user_dependency():
    """Mock dependency that returns test AuthenticatedUser."""
    return AuthenticatedUser(
        user_id="test-user-id",
        access_token="test-access-token"
    )


@pytest.fixture
def mock_supabase_client():
    return MagicMock()


@pytest.fixture
def page_cache():
    return PageCache()


@pytest.fixture
def overrides(mock_supabase_client, page_cache):
    """Override auth, database and cache dependencies."""
    app.dependency_overrides[get_authenticated_user] = mock_get_authenticated_user_dependency
    app.dependency_overrides[get_supabase_client] = lambda: mock_supabase_client
    app.dependency_overrides[get_page_cache] = lambda: page_cache
    yield
    app.dependency_overrides.clear()


class TestCreateInvoiceEndpoint:
    """Tests for POST /dashboard/invoices/create."""

    def test_create_redirects_to_listing(self, client, overrides, mock_supabase_client, page_cache):
        table = mock_supabase_client.table.return_value
        table.insert.return_value.execute.return_value = Mock(data=[INVOICE_ROW])
        page_cache.set("/dashboard/invoices", "stale", variant="limit=50&offset=0")

        response = client.post(
            "/dashboard/invoices/create",
            data={"customerId": "c1", "amount": "50", "status": "pending"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard/invoices"
        table.insert.assert_called_once()
        assert table.insert.call_args[0][0]["amount"] == 5000
        assert page_cache.get("/dashboard/invoices", "limit=50&offset=0") is None

    def test_create_with_field_errors_returns_state(self, client, overrides, mock_supabase_client):
        response = client.post(
            "/dashboard/invoices/create",
            data={"customerId": "c1", "amount": "0"},
            follow_redirects=False,
        )

        assert response.status_code == 422
        assert response.json() == {
            "status": "validation_error",
            "errors": {
                "amount": ["Please enter an amount greater than 0$."],
                "status": ["Please select an invoice status."],
            },
            "message": "Missing Fields. Failed to Create Invoice.",
        }
        mock_supabase_client.table.assert_not_called()

    def test_create_with_huge_amount_returns_field_error(self, client, overrides, mock_supabase_client):
        response = client.post(
            "/dashboard/invoices/create",
            data={"customerId": "c1", "amount": "1e26", "status": "paid"},
            follow_redirects=False,
        )

        assert response.status_code == 422
        assert response.json()["errors"] == {"amount": ["Please enter an amount greater than 0$."]}
        mock_supabase_client.table.assert_not_called()

    def test_create_database_error_returns_500_state(self, client, overrides, mock_supabase_client):
        table = mock_supabase_client.table.return_value
        table.insert.return_value.execute.side_effect = APIError(
            {"message": "connection lost", "code": "08006", "hint": None, "details": None}
        )

        response = client.post(
            "/dashboard/invoices/create",
            data={"customerId": "c1", "amount": "50", "status": "pending"},
            follow_redirects=False,
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Database Error. Failed to Create Invoice."

    def test_create_requires_session(self, client):
        response = client.post(
            "/dashboard/invoices/create",
            data={"customerId": "c1", "amount": "50", "status": "pending"},
            follow_redirects=False,
        )

        assert response.status_code == 401


class TestEditInvoiceEndpoint:
    """Tests for POST /dashboard/invoices/{id}/edit."""

    def test_edit_redirects_to_listing(self, client, overrides, mock_supabase_client):
        chain = mock_supabase_client.table.return_value.update.return_value.eq.return_value
        chain.execute.return_value = Mock(data=[INVOICE_ROW])

        response = client.post(
            f"/dashboard/invoices/{INVOICE_ROW['id']}/edit",
            data={"customerId": "c1", "amount": "75.5", "status": "paid"},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard/invoices"
        mock_supabase_client.table.return_value.update.assert_called_once_with(
            {"customer_id": "c1", "amount": 7550, "status": "paid"}
        )

    def test_edit_unknown_invoice_returns_404(self, client, overrides, mock_supabase_client, page_cache):
        chain = mock_supabase_client.table.return_value.update.return_value.eq.return_value
        chain.execute.return_value = Mock(data=[])
        page_cache.set("/dashboard/invoices", "cached", variant="limit=50&offset=0")

        response = client.post(
            "/dashboard/invoices/missing-id/edit",
            data={"customerId": "c1", "amount": "10", "status": "paid"},
            follow_redirects=False,
        )

        assert response.status_code == 404
        assert response.json()["status"] == "not_found"
        assert page_cache.get("/dashboard/invoices", "limit=50&offset=0") == "cached"


class TestDeleteInvoiceEndpoint:
    """Tests for POST /dashboard/invoices/{id}/delete."""

    def test_delete_unknown_invoice_succeeds(self, client, overrides, mock_supabase_client):
        chain = mock_supabase_client.table.return_value.delete.return_value.eq.return_value
        chain.execute.return_value = Mock(data=[])

        response = client.post("/dashboard/invoices/missing-id/delete")

        assert response.status_code == 200
        assert response.json() == {"status": "success", "message": "Deleted Invoice."}


class TestInvoiceReadEndpoints:
    """Tests for the listing and detail endpoints."""

    def test_listing_is_cached_until_revalidated(self, client, overrides, mock_supabase_client):
        select = mock_supabase_client.table.return_value.select
        select.return_value.order.return_value.range.return_value.execute.return_value = Mock(
            data=[INVOICE_ROW]
        )

        first = client.get("/dashboard/invoices")
        second = client.get("/dashboard/invoices")

        assert first.status_code == 200
        assert first.json()["count"] == 1
        assert first.json()["invoices"][0]["amount"] == 5000
        assert second.json() == first.json()
        select.return_value.order.return_value.range.return_value.execute.assert_called_once()

        mock_supabase_client.table.return_value.delete.return_value.eq.return_value.execute.return_value = Mock(
            data=[INVOICE_ROW]
        )
        client.post(f"/dashboard/invoices/{INVOICE_ROW['id']}/delete")
        client.get("/dashboard/invoices")

        assert select.return_value.order.return_value.range.return_value.execute.call_count == 2

    def test_get_invoice_returns_404_when_missing(self, client, overrides, mock_supabase_client):
        chain = mock_supabase_client.table.return_value.select.return_value.eq.return_value
        chain.execute.return_value = Mock(data=[])

        response = client.get("/dashboard/invoices/missing-id")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "not_found"

    def test_get_invoice_returns_record(self, client, overrides, mock_supabase_client):
        chain = mock_supabase_client.table.return_value.select.return_value.eq.return_value
        chain.execute.return_value = Mock(data=[INVOICE_ROW])

        response = client.get(f"/dashboard/invoices/{INVOICE_ROW['id']}")

        assert response.status_code == 200
        assert response.json() == INVOICE_ROW


def test_health_is_public(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
