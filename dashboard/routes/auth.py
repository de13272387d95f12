"""
Auth API endpoints.

- POST /login - Email/password sign-in from the login form

On success the access token is stored in an HTTP-only session cookie and the
browser is sent to the dashboard. On a recognized auth failure the form gets
a short message back.
"""

import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from dashboard.auth.credentials import authenticate
from dashboard.config import settings
from dashboard.schemas.auth import LoginErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post(
    "/login",
    summary="Sign in with email and password",
    responses={
        303: {"description": "Signed in; redirect to the dashboard"},
        401: {"model": LoginErrorResponse, "description": "Sign-in rejected"},
    }
)
async def login(request: Request) -> Response:
    form = await request.form()
    redirect = RedirectResponse(url=settings.DASHBOARD_PATH, status_code=status.HTTP_303_SEE_OTHER)

    def establish_session(session: Any) -> None:
        redirect.set_cookie(
            key=settings.SESSION_COOKIE_NAME,
            value=session.access_token,
            max_age=session.expires_in,
            httponly=True,
            secure=settings.is_production(),
            samesite="lax",
        )

    message = authenticate(form, establish_session)

    if message is not None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=LoginErrorResponse(message=message).model_dump(),
        )

    return redirect
