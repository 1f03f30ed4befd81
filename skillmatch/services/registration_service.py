"""
Registration and email verification workflow.

The user row and its verification token commit together, then the
verification mail is sent. A delivery failure is always reported to the
caller; with ``ROLLBACK_USER_ON_MAIL_FAILURE`` enabled a compensating
transaction first deletes the user so the address can register again.
"""

from typing import Optional

import structlog
from sqlalchemy.exc import IntegrityError

from skillmatch.config import Settings
from skillmatch.core.exceptions import ConflictError, DeliveryError, NotFoundError, ValidationError
from skillmatch.core.security import generate_verification_token, get_password_hash
from skillmatch.db.session import Database
from skillmatch.models.user import User
from skillmatch.queries import users as user_queries
from skillmatch.services.mail_service import MailService

logger = structlog.get_logger(__name__)

VERIFY_TEMPLATE = "verify-account"
VERIFY_SUBJECT = "Verify Your SkillMatch Account"


class RegistrationService:
    def __init__(self, database: Database, mailer: MailService, settings: Settings):
        self.database = database
        self.mailer = mailer
        self.settings = settings

    def verification_url(self, token: str) -> str:
        return f"{self.settings.FRONTEND_URL.rstrip('/')}/verify-email?token={token}"

    async def send_verification_email(self, user: User, token: str) -> None:
        await self.mailer.send_mail(
            email=user.email,
            subject=VERIFY_SUBJECT,
            template=VERIFY_TEMPLATE,
            data={
                "name": user.first_name or user.email.split("@")[0],
                "verificationUrl": self.verification_url(token),
                "websiteUrl": self.settings.FRONTEND_URL,
                "email": user.email,
                "expiresInHours": self.settings.VERIFICATION_TOKEN_TTL_HOURS,
            },
        )

    async def register(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> User:
        """
        Create an unverified user and mail them a verification link.

        Raises:
            ConflictError: The email is already registered.
            DeliveryError: The verification mail could not be sent.
        """
        async with self.database.transaction() as session:
            if await user_queries.find_by_email(session, email):
                raise ConflictError("User with this email already exists")

        password_hash = get_password_hash(password)
        token, expires_at = generate_verification_token(self.settings.VERIFICATION_TOKEN_TTL_HOURS)

        try:
            async with self.database.transaction() as session:
                user = await user_queries.create_user(
                    session, email, password_hash, first_name, last_name
                )
                await user_queries.set_verification_token(session, email, token, expires_at)
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same address
            raise ConflictError("User with this email already exists") from e

        logger.info("user_registered", user_id=user.id, email=email)

        try:
            await self.send_verification_email(user, token)
        except DeliveryError:
            if self.settings.ROLLBACK_USER_ON_MAIL_FAILURE:
                async with self.database.transaction() as session:
                    await user_queries.delete_user(session, user.id)
                logger.warning("registration_rolled_back_after_mail_failure", user_id=user.id)
            raise

        return user

    async def verify_email(self, token: str) -> User:
        """
        Consume a verification token.

        Raises:
            ValidationError: The token is unknown or expired.
        """
        async with self.database.transaction() as session:
            user = await user_queries.find_by_verification_token(session, token)
            if user is None:
                raise ValidationError("Invalid or expired verification token")
            verified = await user_queries.update_verification(session, user.id, True, None)

        logger.info("email_verified", user_id=verified.id)
        return verified

    async def resend_verification(self, email: str) -> User:
        """
        Issue a fresh token for an unverified user and mail it.

        Raises:
            NotFoundError: No user has this email.
            ValidationError: The user is already verified.
        """
        token, expires_at = generate_verification_token(self.settings.VERIFICATION_TOKEN_TTL_HOURS)
        async with self.database.transaction() as session:
            user = await user_queries.find_by_email(session, email)
            if user is None:
                raise NotFoundError("User not found")
            if user.is_verified:
                raise ValidationError("Email is already verified")
            user = await user_queries.set_verification_token(session, email, token, expires_at)

        await self.send_verification_email(user, token)
        return user
