# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_dev.py

Settings de desarrollo local: PostgreSQL sin SSL, logs legibles y
correos que solo se escriben en el log.

Autor: Agency Hub
Fecha: 2026-09-02
"""

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings, EnvName, LogFormat, LogLevel


class DevSettings(BaseAppSettings):
    python_env: EnvName = "development"

    log_level: LogLevel = "DEBUG"
    log_format: LogFormat = "plain"

    db_sslmode: str = "disable"

    email_mode: str = "console"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["DevSettings"]
