# -*- coding: utf-8 -*-
"""
backend/app/core/__init__.py

Fachada unificada para componentes centrales del backend Agency Hub:
- Configuración (settings)
- Logging
- Motor de base de datos y sesiones

Envuelve la implementación en `app.shared.*` para ofrecer puntos de
entrada estables hacia el resto de los módulos.

Autor: Agency Hub
Fecha: 2026-09-08
"""

from .settings import get_settings
from .logging import setup_logging
from .db import (
    engine,
    SessionLocal,
    Base,
    get_async_session,
    check_database_health,
)

__all__ = [
    "get_settings",
    "setup_logging",
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "check_database_health",
]

# Fin del archivo backend/app/core/__init__.py
