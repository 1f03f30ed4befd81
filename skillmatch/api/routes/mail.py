"""Transactional mail endpoint."""

import logging

from fastapi import APIRouter, Depends

from skillmatch.api.deps import failure_boundary
from skillmatch.core.exceptions import ValidationError
from skillmatch.schemas.common import Envelope
from skillmatch.schemas.mail import SendMailRequest
from skillmatch.services.mail_service import MailService, get_mail_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/send-mail", response_model=Envelope)
async def send_mail(request: SendMailRequest, mailer: MailService = Depends(get_mail_service)):
    """Render a template and send it to one address."""
    if not request.email or not request.subject or not request.template:
        raise ValidationError("Email, subject, and template are required fields")

    with failure_boundary("Failed to send email"):
        await mailer.send_mail(
            email=request.email,
            subject=request.subject,
            template=request.template,
            data=request.data or {},
        )

    return Envelope(message="Email sent successfully")
