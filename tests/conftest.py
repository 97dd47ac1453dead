# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para Agency Hub.

- PYTHON_ENV=test ANTES de importar la app (settings de pruebas, SQLite)
- Motor ASYNC: sqlite+aiosqlite en memoria con StaticPool (todas las
  sesiones del test comparten la misma base)
- FakeEmailSender: registra cada envío y puede simular fallos
- Cliente httpx (ASGITransport + asgi-lifespan) con dependencias de DB,
  correo y OrdersSettings sobreescritas
"""

import os

os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("EMAIL_MODE", "console")

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Optional

import pytest
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.shared.database.base import Base
from app.shared.config.settings_orders import OrdersSettings
from app.shared.integrations.email_sender import EmailSendResult

# Registra todos los modelos en Base.metadata
import app.modules.orders.models  # noqa: F401

TEST_WEBHOOK_SECRET = "whsec_test_agency_hub"


@pytest.fixture(scope="session")
def anyio_backend():
    """Permite a pytest-anyio usar asyncio en el scope de sesión."""
    return "asyncio"


# -----------------------------------------------------------------------------
# Base de datos
# -----------------------------------------------------------------------------
@pytest.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


# -----------------------------------------------------------------------------
# Correo y configuración
# -----------------------------------------------------------------------------
@dataclass
class SentEmail:
    to: str
    subject: str
    html: str
    text: Optional[str]


class FakeEmailSender:
    """
    IEmailSender en memoria.

    mode:
        "ok"    → EmailSendResult exitoso
        "fail"  → EmailSendResult fallido (proveedor rechaza)
        "raise" → excepción de transporte
    """

    def __init__(self, mode: str = "ok"):
        self.mode = mode
        self.sent: list[SentEmail] = []

    async def send_email(self, to, subject, html, text=None):
        self.sent.append(SentEmail(to=to, subject=subject, html=html, text=text))
        if self.mode == "raise":
            raise RuntimeError("mail transport down")
        if self.mode == "fail":
            return EmailSendResult.failed("provider rejected message")
        return EmailSendResult.ok(id=f"msg-{len(self.sent)}")

    def subjects(self) -> list[str]:
        return [m.subject for m in self.sent]

    def to(self, recipient: str) -> list[SentEmail]:
        return [m for m in self.sent if m.to == recipient]


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def email_sender_factory():
    """Factory para senders con otro modo (fail|raise)."""
    return FakeEmailSender


@pytest.fixture
def orders_settings() -> OrdersSettings:
    return OrdersSettings(
        stripe_secret_key="sk_test_agency_hub",
        stripe_webhook_secret=TEST_WEBHOOK_SECRET,
        admin_notification_email="admin@agencyhub.test",
        dashboard_base_url="https://dash.agencyhub.test/",
        invoice_prefix="INV",
        orders_send_emails=True,
        allow_insecure_webhooks=False,
    )


# -----------------------------------------------------------------------------
# App FastAPI y cliente httpx (con ciclo de vida)
# -----------------------------------------------------------------------------
@pytest.fixture(scope="session")
def app():
    """Carga la app **después** de fijar PYTHON_ENV=test."""
    from app.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
async def async_client(app, session_factory, email_sender, orders_settings) -> AsyncIterator[AsyncClient]:
    from app.shared.database import get_async_session
    from app.modules.orders.dependencies import get_email_sender, get_orders_config

    async def _override_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = _override_session
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    app.dependency_overrides[get_orders_config] = lambda: orders_settings
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://testserver") as client:
                yield client
    finally:
        app.dependency_overrides.clear()


# -----------------------------------------------------------------------------
# Auth
# -----------------------------------------------------------------------------
def bearer(user_id: str, role: str = "CLIENT") -> dict[str, str]:
    from app.modules.auth import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user_id, role=role)}"}


@pytest.fixture
def auth_headers():
    """Factory: auth_headers(user_id, role="CLIENT") → header Authorization."""
    return bearer


@pytest.fixture
def client_headers() -> dict[str, str]:
    return bearer("user-1")


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return bearer("admin-1", role="ADMIN")
