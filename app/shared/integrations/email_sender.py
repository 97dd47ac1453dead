# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/email_sender.py

Contrato de envío de correo y factory unificado.

Modos:
- console: stub que solo loguea (desarrollo/tests)
- api: envío via API (MailerSend)

El contrato `send_email` devuelve un EmailSendResult en lugar de lanzar:
los fallos de proveedor se reportan como `success=False`. Los llamadores
igual deben envolver la llamada, porque el transporte subyacente puede
lanzar de forma inesperada.

Autor: Agency Hub
Actualizado: 2026-09-04
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailSendResult:
    """Resultado de un envío: `data` trae el id del proveedor si hubo éxito."""

    success: bool
    data: Optional[dict[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, **data: Any) -> "EmailSendResult":
        return cls(success=True, data=data or None)

    @classmethod
    def failed(cls, error: str) -> "EmailSendResult":
        return cls(success=False, error=error)


class IEmailSender(Protocol):
    """Protocolo para implementaciones de email sender."""

    async def send_email(
        self,
        to: str,
        subject: str,
        html: str,
        text: Optional[str] = None,
    ) -> EmailSendResult: ...


class StubEmailSender:
    """Implementación que no envía correos; solo hace logging (modo console)."""

    async def send_email(
        self,
        to: str,
        subject: str,
        html: str,
        text: Optional[str] = None,
    ) -> EmailSendResult:
        logger.info("[CONSOLE EMAIL] to=%s subject=%r html_len=%d", to, subject, len(html or ""))
        return EmailSendResult.ok(id="console")


class EmailSender:
    """
    Factory unificado para selección de email sender.

    Variables de entorno (via settings):
    - email_mode: console | api
    - email_provider: mailersend (usado cuando email_mode=api)
    """

    @staticmethod
    def from_settings(settings: BaseAppSettings) -> IEmailSender:
        """
        Crea el email sender apropiado según settings.

        Raises:
            ValueError: si email_mode=api con un proveedor no soportado,
                o un modo no reconocido en producción
        """
        mode = (settings.email_mode or "console").strip().lower()
        provider = (settings.email_provider or "").strip().lower()

        logger.info("[EmailSender] mode=%r provider=%r", mode, provider)

        if mode in ("console", "stub", "local", ""):
            return StubEmailSender()

        if mode == "api":
            if provider in ("mailersend", ""):
                from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender
                return MailerSendEmailSender.from_settings(settings)
            raise ValueError(
                f"EMAIL_PROVIDER '{provider}' no soportado. "
                f"Configure EMAIL_PROVIDER=mailersend o cambie EMAIL_MODE."
            )

        if settings.is_prod:
            raise ValueError(f"EMAIL_MODE '{mode}' no reconocido. Configure EMAIL_MODE=console|api")

        logger.warning("[EmailSender] EMAIL_MODE=%r no reconocido, usando console (solo dev)", mode)
        return StubEmailSender()

    @staticmethod
    def from_env() -> IEmailSender:
        """Carga settings y delega a from_settings()."""
        from app.shared.config import get_settings
        return EmailSender.from_settings(get_settings())


__all__ = ["IEmailSender", "EmailSendResult", "StubEmailSender", "EmailSender"]
# Fin del archivo backend/app/shared/integrations/email_sender.py
