"""
API Dependencies
Common dependencies and helpers for route handlers.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Depends, Request

from skillmatch.config import Settings
from skillmatch.core.exceptions import SkillMatchError, ValidationError, translate_failure
from skillmatch.db.session import Database, get_database
from skillmatch.services.mail_service import MailService, get_mail_service
from skillmatch.services.registration_service import RegistrationService

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registration_service(
    request: Request,
    database: Database = Depends(get_database),
    mailer: MailService = Depends(get_mail_service),
) -> RegistrationService:
    return RegistrationService(database, mailer, get_settings(request))


def parse_id(raw: str, label: str = "user ID") -> int:
    """Path ids arrive as strings; only positive ASCII decimal integers are accepted."""
    if not (raw.isascii() and raw.isdigit()) or int(raw) == 0:
        raise ValidationError(f"Invalid {label}")
    return int(raw)


@contextmanager
def failure_boundary(message: str) -> Iterator[None]:
    """
    Let taxonomy errors through unchanged and translate everything else,
    attaching the underlying error text for diagnostics.
    """
    try:
        yield
    except SkillMatchError:
        raise
    except Exception as e:
        logger.error(f"{message}: {type(e).__name__}: {e}", exc_info=True)
        raise translate_failure(e, message) from e
