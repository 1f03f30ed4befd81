import bcrypt
import pytest

from skillmatch.core.exceptions import ConflictError, DeliveryError, NotFoundError, ValidationError
from skillmatch.queries import users as user_queries
from skillmatch.services.registration_service import RegistrationService


@pytest.fixture
def service(database, mailer, settings):
    return RegistrationService(database, mailer, settings)


def _token_from(mail):
    return mail["data"]["verificationUrl"].split("token=", 1)[1]


async def test_register_stores_hash_and_mails_token(service, database, mailer):
    user = await service.register("ada@skillmatch.dev", "secret123", "Ada", "Lovelace")

    assert user.is_verified is False
    assert len(mailer.sent) == 1
    mail = mailer.sent[0]
    assert mail["template"] == "verify-account"
    assert mail["data"]["name"] == "Ada"
    assert mail["data"]["verificationUrl"].startswith("http://frontend.skillmatch.dev/verify-email?token=")

    async with database.transaction() as session:
        stored = await user_queries.find_by_email(session, "ada@skillmatch.dev")
    assert stored.password_hash != "secret123"
    assert bcrypt.checkpw(b"secret123", stored.password_hash.encode())
    assert stored.verification_token == _token_from(mail)
    assert len(stored.verification_token) == 64


async def test_register_duplicate_email(service):
    await service.register("dup@skillmatch.dev", "secret123")

    with pytest.raises(ConflictError, match="already exists"):
        await service.register("dup@skillmatch.dev", "other-pass")


async def test_mail_failure_removes_user(service, database, mailer):
    mailer.fail = True

    with pytest.raises(DeliveryError):
        await service.register("nomail@skillmatch.dev", "secret123")

    async with database.transaction() as session:
        assert await user_queries.find_by_email(session, "nomail@skillmatch.dev") is None


async def test_mail_failure_keeps_user_when_rollback_disabled(service, database, mailer, settings):
    settings.ROLLBACK_USER_ON_MAIL_FAILURE = False
    mailer.fail = True

    with pytest.raises(DeliveryError):
        await service.register("kept@skillmatch.dev", "secret123")

    async with database.transaction() as session:
        assert await user_queries.find_by_email(session, "kept@skillmatch.dev") is not None


async def test_verify_email_consumes_token(service, mailer):
    await service.register("verify@skillmatch.dev", "secret123")
    token = _token_from(mailer.sent[0])

    user = await service.verify_email(token)

    assert user.is_verified is True
    assert user.verification_token is None
    with pytest.raises(ValidationError, match="Invalid or expired verification token"):
        await service.verify_email(token)


async def test_resend_verification_rotates_token(service, mailer):
    await service.register("resend@skillmatch.dev", "secret123")
    first_token = _token_from(mailer.sent[0])

    await service.resend_verification("resend@skillmatch.dev")

    second_token = _token_from(mailer.sent[1])
    assert second_token != first_token
    with pytest.raises(ValidationError):
        await service.verify_email(first_token)
    await service.verify_email(second_token)


async def test_resend_verification_errors(service, mailer):
    with pytest.raises(NotFoundError):
        await service.resend_verification("unknown@skillmatch.dev")

    await service.register("done@skillmatch.dev", "secret123")
    await service.verify_email(_token_from(mailer.sent[0]))
    with pytest.raises(ValidationError, match="already verified"):
        await service.resend_verification("done@skillmatch.dev")
