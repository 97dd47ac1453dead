# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_base.py

Configuración base (Pydantic v2) compartida por los entornos de Agency Hub.

Cubre el servidor HTTP, la conexión a PostgreSQL, JWT, correo y
observabilidad. Lo específico del ciclo de órdenes (Stripe, facturas,
dashboard) vive en settings_orders.OrdersSettings.

No instancia nada por sí misma: config_loader elige la subclase según
PYTHON_ENV y la cachea.

Autor: Agency Hub
Fecha: 2026-09-02
"""

import logging
from typing import Literal, Optional

from pydantic import Field, SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

logger = logging.getLogger(__name__)

EnvName = Literal["development", "test", "production"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "pretty", "plain"]

_DEFAULT_JWT_SECRET = "please-change-me"


class BaseAppSettings(BaseSettings):
    # --- Servidor ---
    python_env: EnvName = Field(default="development", validation_alias="PYTHON_ENV")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    app_host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    allowed_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

    # --- PostgreSQL (DB_URL tiene prioridad sobre los componentes) ---
    db_url: Optional[str] = Field(default=None, validation_alias="DB_URL")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="agency_hub", validation_alias="DB_NAME")
    db_user: str = Field(default="postgres", validation_alias="DB_USER")
    db_password: SecretStr = Field(default=SecretStr("postgres"), validation_alias="DB_PASSWORD")
    db_sslmode: str = Field(default="prefer", validation_alias="DB_SSLMODE")
    db_echo_sql: bool = Field(default=False, validation_alias="DB_ECHO_SQL")
    db_command_timeout_s: float = Field(default=5.0, validation_alias="DB_COMMAND_TIMEOUT_S")

    # --- JWT (emitido por el servicio de identidad; aquí solo se valida) ---
    jwt_secret_key: SecretStr = Field(default=SecretStr(_DEFAULT_JWT_SECRET), validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: Literal["HS256", "RS256"] = Field(default="HS256", validation_alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # --- Correo: console (solo log) o api (MailerSend) ---
    email_mode: Literal["console", "api"] = Field(default="console", validation_alias="EMAIL_MODE")
    email_provider: Literal["mailersend", ""] = Field(default="", validation_alias="EMAIL_PROVIDER")
    email_from: str = Field(default="notifications@agencyhub.com", validation_alias="EMAIL_FROM")
    email_timeout_sec: int = Field(default=30, validation_alias="EMAIL_TIMEOUT_SEC")
    mailersend_api_key: Optional[SecretStr] = Field(default=None, validation_alias="MAILERSEND_API_KEY")
    mailersend_from_email: Optional[str] = Field(default=None, validation_alias="MAILERSEND_FROM_EMAIL")
    mailersend_from_name: Optional[str] = Field(default="Agency Hub", validation_alias="MAILERSEND_FROM_NAME")

    # --- Logging / métricas ---
    log_level: LogLevel = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: LogFormat = Field(default="pretty", validation_alias="LOG_FORMAT")
    http_metrics_enabled: bool = Field(default=True, validation_alias="HTTP_METRICS_ENABLED")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        """URL async para SQLAlchemy (asyncpg, o sqlite+aiosqlite si DB_URL lo indica)."""
        if self.db_url:
            if self.db_url.startswith("sqlite"):
                return self.db_url
            scheme, sep, rest = self.db_url.partition("://")
            if scheme in ("postgres", "postgresql"):
                return f"postgresql+asyncpg{sep}{rest}"
            return self.db_url

        url = URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password.get_secret_value(),
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)

    @property
    def is_dev(self) -> bool:
        return self.python_env == "development"

    @property
    def is_prod(self) -> bool:
        return self.python_env == "production"

    def get_cors_origins(self) -> list[str]:
        """CORS_ORIGINS separado por comas; vacío o "*" → ["*"]."""
        raw = (self.allowed_origins or "").strip()
        if raw in ("", "*"):
            return ["*"]
        return [origin.strip().strip("\"'") for origin in raw.split(",") if origin.strip()]

    def _security_checks(self) -> None:
        """
        Validaciones de arranque (las invoca config_loader).

        Raises:
            ValueError: configuración insegura en producción o correo api
                sin credenciales
        """
        secret = self.jwt_secret_key.get_secret_value()
        weak_secret = len(secret) < 32 or secret == _DEFAULT_JWT_SECRET

        if self.is_prod:
            if weak_secret:
                raise ValueError("JWT_SECRET_KEY debe tener al menos 32 caracteres en producción")
            if self.db_sslmode != "require" and not (self.db_url or "").startswith("sqlite"):
                raise ValueError("DB_SSLMODE debe ser 'require' en producción")
        elif weak_secret:
            logger.info("JWT_SECRET_KEY uses a weak or default value (python_env=%s)", self.python_env)

        if self.email_mode == "api" and not (self.mailersend_api_key and self.mailersend_from_email):
            raise ValueError("EMAIL_MODE=api requiere MAILERSEND_API_KEY y MAILERSEND_FROM_EMAIL")


__all__ = ["BaseAppSettings", "EnvName", "LogLevel", "LogFormat"]
