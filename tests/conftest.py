"""Shared fixtures: a throwaway SQLite database, a fake mailer and an HTTP client."""

from typing import Any, Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from skillmatch.config import Settings
from skillmatch.core.exceptions import DeliveryError
from skillmatch.core.security import get_password_hash
from skillmatch.db.migrations import ensure_schema
from skillmatch.db.session import Database
from skillmatch.main import create_app
from skillmatch.queries import users as user_queries


class FakeMailService:
    """Records outgoing mail instead of talking to SMTP."""

    def __init__(self):
        self.sent: List[Dict[str, Any]] = []
        self.fail = False

    async def send_mail(
        self,
        email: str,
        subject: str,
        template: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        if self.fail:
            raise DeliveryError(error="SMTP connection refused")
        self.sent.append({"email": email, "subject": subject, "template": template, "data": data or {}})


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'skillmatch.db'}",
        AUTO_MIGRATE=False,
        FRONTEND_URL="http://frontend.skillmatch.dev",
        SENTRY_DSN="",
    )


@pytest.fixture
async def database(settings):
    db = Database.from_settings(settings)
    await ensure_schema(db)
    yield db
    await db.dispose()


@pytest.fixture
def mailer():
    return FakeMailService()


@pytest.fixture
async def client(settings, database, mailer):
    app = create_app(settings=settings, database=database, mailer=mailer)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(database):
    """Insert a user directly through the query layer."""

    async def _make_user(email: str, first_name: str = "Ada", last_name: str = "Lovelace"):
        async with database.transaction() as session:
            return await user_queries.create_user(
                session, email, get_password_hash("secret123"), first_name, last_name
            )

    return _make_user
