# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

Motor y sesiones SQLAlchemy async de Agency Hub.

- PostgreSQL vía asyncpg con NullPool: el pooling lo hace PgBouncer, por
  eso se desactiva el cache de prepared statements.
- sqlite+aiosqlite cuando DB_URL lo indica (entorno de test).

Los servicios de órdenes controlan sus propios commits; la dependencia
FastAPI solo garantiza que ninguna transacción quede abierta al cerrar
la sesión.

Autor: Agency Hub
Fecha: 2026-09-02
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncGenerator, Any
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from app.shared.config import settings
from app.shared.database.base import Base

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict[str, Any]:
    if url.startswith("sqlite"):
        # Una sola conexión compartida: ":memory:" vive lo que vive el engine
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}

    return {
        "poolclass": NullPool,
        "connect_args": {
            "statement_cache_size": 0,
            "prepared_statement_cache_size": 0,
            "prepared_statement_name_func": lambda: f"__asyncpg_{uuid4().hex[:8]}__",
            "command_timeout": float(settings.db_command_timeout_s),
        },
    }


def build_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    logger.info("[DB] engine → %s (echo=%s)", url.rsplit("@", 1)[-1], echo)
    return create_async_engine(url, echo=echo, **_engine_options(url))


engine = build_engine(settings.database_url, echo=bool(settings.db_echo_sql))

SessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependencia FastAPI: una sesión por request."""
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


async def check_database_health(timeout_s: float = 3.0) -> bool:
    """True si un SELECT 1 responde dentro de `timeout_s`."""
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning("[DB] health check failed: %s", e)
        return False
    return True


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "build_engine",
    "get_async_session",
    "check_database_health",
]
