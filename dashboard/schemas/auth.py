"""
Pydantic schemas for authentication endpoints.
"""

from pydantic import BaseModel, Field


class LoginErrorResponse(BaseModel):
    """
    Response for a rejected POST /login.

    The message is shown verbatim under the login form.
    """
    message: str = Field(
        ...,
        description="User-facing reason the sign-in failed",
        examples=["Invalid credentials.", "Something went wrong."]
    )
