"""
Supabase client factories.

Two kinds of client are handed out:

1. The shared data client, created once per process and reused by every
   request. It talks to the `invoices` table through PostgREST; all values
   are sent as request parameters, never concatenated into SQL.
2. A short-lived auth client, created per sign-in attempt. GoTrue stores the
   signed-in session on the client it was called on, so sign-in must never
   run against the shared data client.
"""

import logging
from functools import lru_cache

from dashboard.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Return the process-wide Supabase data client.

    The client is created lazily on first use and cached for the lifetime of
    the process. Its underlying httpx session is safe to share across
    concurrent requests.

    Returns:
        A Supabase client authenticated with SUPABASE_SECRET_KEY.
    """
    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_SECRET_KEY
    )

    logger.info("Created shared Supabase data client")

    return client


def get_auth_client() -> Client:
    """
    Create a fresh Supabase client for a single sign-in attempt.

    Uses the publishable key; the returned client should be discarded once the
    session has been handed to the caller.
    """
    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )

    logger.debug("Created Supabase auth client for sign-in")

    return client
