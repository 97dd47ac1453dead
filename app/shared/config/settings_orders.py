# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_orders.py

Configuración del ciclo de vida de órdenes para Agency Hub.

Descripción:
    Centraliza la configuración que consume el motor de órdenes:
    Stripe (webhooks y reembolsos), numeración de facturas, correo de
    administración y URL pública del dashboard. Todos los valores
    tienen un default fijo si la variable de entorno no existe.

Autor: Agency Hub
Fecha: 2026-09-02
"""

from __future__ import annotations

import os
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OrdersSettings(BaseSettings):
    """Configuración del motor de órdenes."""

    # =========================================================================
    # STRIPE
    # =========================================================================

    stripe_secret_key: Optional[str] = Field(
        default=None,
        description="Stripe secret key (sk_live_... o sk_test_...)"
    )

    stripe_webhook_secret: Optional[str] = Field(
        default=None,
        validate_default=True,
        description="Stripe webhook signing secret (whsec_...)"
    )

    stripe_webhook_tolerance_seconds: int = Field(
        default=300,
        description="Tolerancia para validación de timestamp de webhooks Stripe (5 minutos)"
    )

    allow_insecure_webhooks: bool = Field(
        default=False,
        description="Permite webhooks sin validación de firma (SOLO DESARROLLO)"
    )

    # =========================================================================
    # FACTURACIÓN
    # =========================================================================

    invoice_prefix: str = Field(
        default="INV",
        description="Prefijo de número de factura: {prefix}-{year}-{suffix}"
    )

    # =========================================================================
    # NOTIFICACIONES
    # =========================================================================

    admin_notification_email: str = Field(
        default="admin@agencyhub.com",
        validation_alias="ADMIN_NOTIFY_EMAIL",
        description="Destinatario de avisos de nuevas órdenes"
    )

    dashboard_base_url: str = Field(
        default="http://localhost:3000",
        validate_default=True,
        description="URL pública del dashboard para links en emails"
    )

    orders_send_emails: bool = Field(
        default=True,
        description="Switch maestro de notificaciones del ciclo de órdenes"
    )

    @field_validator('stripe_webhook_secret', mode='before')
    @classmethod
    def _load_webhook_secret(cls, v: Optional[str]) -> Optional[str]:
        """Fallback a STRIPE_WEBHOOK_SECRET env var si no está en settings."""
        if v:
            return v
        return os.getenv("STRIPE_WEBHOOK_SECRET")

    @field_validator('dashboard_base_url', mode='before')
    @classmethod
    def _load_dashboard_url(cls, v: Optional[str]) -> str:
        """Fallback a FRONTEND_URL; normaliza el slash final."""
        url = v or os.getenv("FRONTEND_URL") or "http://localhost:3000"
        return url.strip().rstrip("/")

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def _security_checks(self, is_prod: bool) -> None:
        """En producción exige firma de webhooks."""
        if not is_prod:
            return
        if self.allow_insecure_webhooks:
            raise ValueError("ALLOW_INSECURE_WEBHOOKS no puede estar activo en producción.")
        if not self.stripe_webhook_secret:
            raise ValueError("STRIPE_WEBHOOK_SECRET es requerido en producción.")


# Singleton global
_orders_settings: Optional[OrdersSettings] = None


def get_orders_settings() -> OrdersSettings:
    """
    Obtiene la instancia global de configuración de órdenes.

    Returns:
        OrdersSettings: Configuración del ciclo de órdenes
    """
    global _orders_settings
    if _orders_settings is None:
        _orders_settings = OrdersSettings()
        _orders_settings._security_checks(
            os.getenv("PYTHON_ENV", "development").lower() == "production"
        )
    return _orders_settings


__all__ = [
    "OrdersSettings",
    "get_orders_settings",
]
# Fin del archivo backend/app/shared/config/settings_orders.py
