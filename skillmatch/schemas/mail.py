"""Mail endpoint schemas."""

from typing import Any, Dict, Optional

from pydantic import EmailStr

from skillmatch.schemas.common import CamelModel


class SendMailRequest(CamelModel):
    email: Optional[EmailStr] = None
    subject: Optional[str] = None
    template: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
