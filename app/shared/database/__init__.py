# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Motor, sesiones, Base declarativa y helpers de persistencia.

Autor: Agency Hub
Fecha: 2026-09-02
"""

from .base import Base, JSONType, NAMING_CONVENTION, as_str_enum
from .database import SessionLocal, check_database_health, engine, get_async_session
from .repository import BaseRepository
from .upsert import upsert_increment

__all__ = [
    "Base",
    "JSONType",
    "NAMING_CONVENTION",
    "as_str_enum",
    "engine",
    "SessionLocal",
    "get_async_session",
    "check_database_health",
    "BaseRepository",
    "upsert_increment",
]
