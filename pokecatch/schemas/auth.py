"""Pydantic schemas for registration and login."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Email/password pair submitted to /register and /login."""

    email: str = Field(
        ...,
        min_length=1,
        max_length=320,
        description="Account email, stored exactly as submitted (case-sensitive).",
    )
    password: str = Field(
        ...,
        min_length=1,
        description="Raw password; at most 72 bytes once UTF-8 encoded.",
    )


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    token: str = Field(..., description="Bearer token for /protected routes.")
