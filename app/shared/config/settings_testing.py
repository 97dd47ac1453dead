# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Busca ser determinista y seguro: logging moderado, base de datos SQLite
en memoria y emails en modo console.

Autor: Agency Hub
Fecha: 2026-09-02
"""

from typing import Optional

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    # --- Identidad de entorno ---
    python_env: str = "test"

    # --- Logging en test: menos ruido ---
    log_level: str = "WARNING"
    log_format: str = "pretty"

    # --- Base de datos: SQLite en memoria (los tests crean su propio engine) ---
    db_url: Optional[str] = "sqlite+aiosqlite:///:memory:"

    # --- Auth: secreto determinista para firmar tokens de prueba ---
    jwt_secret_key: SecretStr = SecretStr("test-secret-for-agency-hub-suite-0123456789")

    email_mode: str = "console"

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo backend/app/shared/config/settings_testing.py
