"""Registration and verification schemas."""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from skillmatch.schemas.common import CamelModel, Envelope


class RegisterRequest(CamelModel):
    """Register request schema. Presence of email/password is checked by the handler."""

    email: Optional[EmailStr] = None
    password: Optional[str] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)


class ResendVerificationRequest(CamelModel):
    email: Optional[EmailStr] = None


class UserSummary(CamelModel):
    """Public fields of a user row."""

    id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_verified: bool
    created_at: Optional[datetime] = None


class RegisterResponse(Envelope):
    user: UserSummary
