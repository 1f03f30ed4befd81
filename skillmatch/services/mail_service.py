"""Transactional email: Jinja2 templates delivered over SMTP."""

import smtplib
from email.message import EmailMessage
from typing import Any, Dict, Optional

import structlog
from fastapi import Request
from fastapi.concurrency import run_in_threadpool
from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from skillmatch.config import Settings
from skillmatch.core.exceptions import DeliveryError

logger = structlog.get_logger(__name__)

TEMPLATE_SUFFIX = ".html"


class MailService:
    """Render a named template and send it to a single recipient."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.env = Environment(
            loader=FileSystemLoader(settings.MAIL_TEMPLATE_DIR),
            autoescape=select_autoescape(["html", "xml"]),
        )

    @staticmethod
    def template_filename(template: str) -> str:
        """``verify-account`` and ``verify-account.html`` name the same file."""
        return template if template.endswith(TEMPLATE_SUFFIX) else f"{template}{TEMPLATE_SUFFIX}"

    def render(self, template: str, data: Optional[Dict[str, Any]] = None) -> str:
        name = self.template_filename(template)
        try:
            return self.env.get_template(name).render(**(data or {}))
        except TemplateError as e:
            logger.error("mail_template_render_failed", template=name, error=str(e))
            raise DeliveryError("Failed to render email template", error=str(e)) from e

    def build_message(self, email: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.settings.mail_sender
        message["To"] = email
        message["Subject"] = subject
        message.set_content("This message requires an HTML capable mail client.")
        message.add_alternative(html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.settings.SMTP_HOST,
            self.settings.SMTP_PORT,
            timeout=self.settings.SMTP_TIMEOUT,
        ) as smtp:
            if self.settings.SMTP_USE_TLS:
                smtp.starttls()
            if self.settings.SMTP_USER:
                smtp.login(self.settings.SMTP_USER, self.settings.SMTP_PASSWORD)
            smtp.send_message(message)

    async def send_mail(
        self,
        email: str,
        subject: str,
        template: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Render ``template`` with ``data`` and send it.

        Raises:
            DeliveryError: If rendering or the SMTP exchange fails.
        """
        html = self.render(template, data)
        message = self.build_message(email, subject, html)
        try:
            # smtplib blocks; keep it off the event loop
            await run_in_threadpool(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("mail_delivery_failed", email=email, subject=subject, error=str(e))
            raise DeliveryError(error=str(e)) from e

        logger.info("mail_sent", email=email, subject=subject, template=template)


def get_mail_service(request: Request) -> MailService:
    """Dependency to get the process-wide MailService."""
    return request.app.state.mailer
