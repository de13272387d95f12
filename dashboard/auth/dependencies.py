"""
FastAPI dependency functions for session verification.

The access token issued at sign-in is read from the Authorization header
("Bearer <token>") or, for browser form posts, from the session cookie.
It is verified with Supabase's JWT Signing Keys (ES256 public keys via JWKS).
"""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Header, HTTPException, Request, status
from jwt import PyJWKClient, decode
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError, PyJWKClientError

from dashboard.config import settings

logger = logging.getLogger(__name__)

# Initialize JWKS client lazily; it caches keys and handles rotation
_jwks_client: PyJWKClient | None = None


@dataclass
class AuthenticatedUser:
    """
    Represents an authenticated dashboard user.

    Attributes:
        user_id: The user's UUID from the JWT token's 'sub' claim
        access_token: The verified JWT access token
    """
    user_id: str
    access_token: str


def get_jwks_client() -> PyJWKClient:
    """
    Get or create the JWKS client instance.

    Raises:
        ValueError: If SUPABASE_URL is not configured
    """
    global _jwks_client

    if _jwks_client is None:
        jwks_url = settings.SUPABASE_JWKS_URL
        if not jwks_url:
            raise ValueError(
                "SUPABASE_URL is not configured. "
                "Cannot construct JWKS URL for JWT verification."
            )

        logger.info(f"Initializing JWKS client with URL: {jwks_url}")
        _jwks_client = PyJWKClient(
            jwks_url,
            cache_keys=True,
            max_cached_keys=16,
        )

    return _jwks_client


def _unauthorized(error: str, details: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "details": details}
    )


def _extract_token(request: Request, authorization: str | None) -> str:
    """Pull the raw token from the Authorization header or the session cookie."""
    if authorization:
        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            logger.warning("Invalid Authorization header format")
            raise _unauthorized("unauthorized", "Invalid Authorization header format")
        return parts[1]

    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        logger.warning("Missing Authorization header and session cookie")
        raise _unauthorized("unauthorized", "Not signed in")
    return token


async def get_authenticated_user(
    request: Request,
    authorization: Annotated[str | None, Header()] = None
) -> AuthenticatedUser:
    """
    Verify the session token and return the authenticated user.

    Raises:
        HTTPException: 401 if the token is missing, invalid, or expired

    Usage:
        @router.get("/dashboard/invoices")
        async def list_invoices(
            auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
        ):
            pass
    """
    token = _extract_token(request, authorization)

    try:
        jwks_client = get_jwks_client()
        signing_key = jwks_client.get_signing_key_from_jwt(token)

        # Supabase tokens use an issuer that includes the /auth/v1 path
        issuer = f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1"

        payload = decode(
            token,
            signing_key.key,
            algorithms=["ES256"],
            audience="authenticated",
            issuer=issuer,
            options={
                "verify_signature": True,
                "verify_exp": True,
                "verify_aud": True,
                "verify_iss": True,
            }
        )
    except ExpiredSignatureError:
        logger.warning("Token has expired")
        raise _unauthorized("token_expired", "Authentication token has expired")

    except PyJWKClientError as e:
        logger.error(f"JWKS client error: {str(e)}")
        raise _unauthorized("jwks_error", "Unable to verify token signature")

    except InvalidTokenError as e:
        logger.warning(f"Invalid token: {str(e)}")
        raise _unauthorized("invalid_token", "Invalid authentication token")

    user_id = payload.get("sub")

    if not user_id:
        logger.error("Token payload missing 'sub' claim")
        raise _unauthorized("unauthorized", "Invalid token: missing user ID")

    logger.debug(f"Token verified for user_id={user_id}")

    return AuthenticatedUser(user_id=str(user_id), access_token=token)
