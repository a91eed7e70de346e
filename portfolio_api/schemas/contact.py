"""Pydantic schemas for the contact form proxy."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ContactRequest(BaseModel):
    """Body of ``POST /api/contact``.

    Presence is enforced here; blank values, email shape and truncation are
    handled by ContactService so every rule lives in one place.
    """

    name: str = Field(..., description="Sender's name.")
    email: str = Field(..., description="Sender's email address, used as reply-to.")
    message: str = Field(..., description="Free-text message.")


class ContactSubmission(BaseModel):
    """A validated, trimmed and truncated contact request."""

    name: str
    email: str
    message: str


class ContactResponse(BaseModel):
    success: bool
    message: str
