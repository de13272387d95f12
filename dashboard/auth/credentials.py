"""
Credential sign-in against Supabase Auth.

authenticate() is the only entry point. It returns None when the user signed
in (the caller then navigates to the dashboard) or a short message to show
on the login form. Errors that are not Supabase Auth errors are re-raised.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from supabase import AuthApiError, AuthError, AuthInvalidCredentialsError

from dashboard.db.client import get_auth_client

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_AUTH_MESSAGE = "Something went wrong."

# GoTrue error code for a wrong email/password pair
INVALID_CREDENTIALS_CODE = "invalid_credentials"


def _is_bad_credentials(error: AuthError) -> bool:
    if isinstance(error, AuthInvalidCredentialsError):
        return True
    return isinstance(error, AuthApiError) and getattr(error, "code", None) == INVALID_CREDENTIALS_CODE


def authenticate(
    form_data: Mapping[str, Any],
    establish_session: Callable[[Any], None],
) -> Optional[str]:
    """
    Sign a user in with the submitted email and password.

    Args:
        form_data: Raw login form (email, password)
        establish_session: Receives the Supabase session on success

    Returns:
        None on success, otherwise a user-facing error message.

    Raises:
        Any exception that is not a Supabase AuthError.
    """
    credentials = {
        "email": form_data.get("email") or "",
        "password": form_data.get("password") or "",
    }

    client = get_auth_client()

    try:
        response = client.auth.sign_in_with_password(credentials)
    except AuthError as e:
        if _is_bad_credentials(e):
            logger.info("Sign-in rejected: invalid credentials")
            return INVALID_CREDENTIALS_MESSAGE
        logger.warning(f"Sign-in failed: {type(e).__name__}")
        return GENERIC_AUTH_MESSAGE

    establish_session(response.session)
    logger.info(f"Sign-in succeeded for user_id={response.user.id if response.user else None}")
    return None
