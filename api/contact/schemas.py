"""
Contact form schemas. Blank required fields fail validation (422) before
anything is written.
"""

from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict, Field

from core.schemas import CamelModel

ContactStatus = Literal["new", "in_progress", "resolved"]


class ContactRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    subject: str | None = Field(default=None, max_length=200)
    message: str = Field(..., min_length=1, max_length=5000)
    category: str = Field(..., min_length=1, max_length=100)


class ContactMessage(CamelModel):
    id: int
    name: str
    email: str
    subject: str = ""
    message: str
    category: str
    status: ContactStatus
    response: str | None = None
    submitted_at: int
    updated_at: int | None = None


class ContactSubmitted(CamelModel):
    id: int


class UpdateContactStatusRequest(CamelModel):
    status: ContactStatus
    response: str | None = Field(default=None, max_length=5000)
