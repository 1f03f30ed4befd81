import smtplib

import pytest

from skillmatch.core.exceptions import DeliveryError
from skillmatch.services import mail_service
from skillmatch.services.mail_service import MailService


class RecordingSMTP:
    """Stand-in for smtplib.SMTP that keeps what it was asked to do."""

    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls = []
        self.messages = []
        RecordingSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user))

    def send_message(self, message):
        self.messages.append(message)


class RefusingSMTP(RecordingSMTP):
    def __init__(self, host, port, timeout=None):
        raise ConnectionRefusedError("connection refused")


class RejectingSMTP(RecordingSMTP):
    def send_message(self, message):
        raise smtplib.SMTPRecipientsRefused({message["To"]: (550, b"no such user")})


@pytest.fixture
def service(settings):
    settings.SMTP_USER = "mailer@skillmatch.dev"
    settings.SMTP_PASSWORD = "app-password"
    return MailService(settings)


def test_template_filename():
    assert MailService.template_filename("verify-account") == "verify-account.html"
    assert MailService.template_filename("verify-account.html") == "verify-account.html"


def test_render_verification_template(service):
    html = service.render(
        "verify-account",
        {
            "name": "Ada",
            "email": "ada@skillmatch.dev",
            "verificationUrl": "http://frontend.skillmatch.dev/verify-email?token=abc",
            "websiteUrl": "http://frontend.skillmatch.dev",
        },
    )
    assert "Welcome to SkillMatch, Ada!" in html
    assert "verify-email?token=abc" in html


def test_render_escapes_html(service):
    html = service.render("verify-account", {"name": "<script>x</script>"})
    assert "<script>x</script>" not in html


def test_unknown_template_is_delivery_error(service):
    with pytest.raises(DeliveryError):
        service.render("no-such-template")


async def test_send_mail_over_smtp(service, monkeypatch):
    RecordingSMTP.instances.clear()
    monkeypatch.setattr(mail_service.smtplib, "SMTP", RecordingSMTP)

    await service.send_mail("ada@skillmatch.dev", "Hello", "verify-account", {"name": "Ada"})

    smtp = RecordingSMTP.instances[0]
    assert smtp.calls == ["starttls", ("login", "mailer@skillmatch.dev")]
    message = smtp.messages[0]
    assert message["To"] == "ada@skillmatch.dev"
    assert message["From"] == "mailer@skillmatch.dev"
    assert message["Subject"] == "Hello"


@pytest.mark.parametrize("smtp_class", [RefusingSMTP, RejectingSMTP])
async def test_transport_failures_raise_delivery_error(service, monkeypatch, smtp_class):
    monkeypatch.setattr(mail_service.smtplib, "SMTP", smtp_class)

    with pytest.raises(DeliveryError) as exc_info:
        await service.send_mail("ada@skillmatch.dev", "Hello", "verify-account", {})

    assert exc_info.value.status_code == 500
    assert exc_info.value.error
