"""
Database access layer for the invoicing dashboard.

All database operations MUST:
- Go through the shared client returned by get_supabase_client()
- Touch only the `invoices` table, one statement per operation
- Pass every value as a bound parameter (query builder), never as SQL text

DO NOT define table schemas or migrations here.
"""

from .client import get_auth_client, get_supabase_client

__all__ = ["get_auth_client", "get_supabase_client"]
