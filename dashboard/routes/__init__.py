"""
FastAPI routers for all API endpoints.

Each module defines a router for one area: auth (login), invoices
(dashboard forms and listing) and health.
"""
