# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_prod.py

Settings de producción. Sin archivo .env: todo llega por variables de
entorno del despliegue. `_security_checks` exige JWT_SECRET_KEY fuerte
y DB_SSLMODE=require.

Autor: Agency Hub
Fecha: 2026-09-02
"""

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings, EnvName, LogFormat, LogLevel


class ProdSettings(BaseAppSettings):
    python_env: EnvName = "production"

    log_level: LogLevel = "INFO"
    log_format: LogFormat = "json"  # agregadores de logs

    db_sslmode: str = "require"

    model_config = SettingsConfigDict(env_file=None, extra="ignore")


__all__ = ["ProdSettings"]
