# -*- coding: utf-8 -*-
"""
backend/app/core/db.py

Fachada para la capa de acceso a datos basada en SQLAlchemy async.
Envuelve `app.shared.database.database`:

- engine
- SessionLocal
- Base
- get_async_session
- check_database_health()

Autor: Agency Hub
Fecha: 2026-09-08
"""

from app.shared.database.database import (
    engine,
    SessionLocal,
    Base,
    get_async_session,
    check_database_health,
)


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "check_database_health",
]

# Fin del archivo backend/app/core/db.py
