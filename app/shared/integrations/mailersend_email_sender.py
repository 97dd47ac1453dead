# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/mailersend_email_sender.py

Implementación de envío de correos usando MailerSend API.

Autor: Agency Hub
Creado: 2026-09-04

Notas:
- MailerSend responde 202 Accepted en éxito, con el id en X-Message-Id.
- Errores HTTP y de transporte se devuelven como EmailSendResult fallido.
"""

from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

import httpx

from app.shared.integrations.email_sender import EmailSendResult

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)

MAILERSEND_API_URL = "https://api.mailersend.com/v1/email"


def _mask_email(email: str) -> str:
    return email[:3] + "***" if email else "unknown"


class MailerSendEmailSender:
    """Envío de correos usando MailerSend API."""

    def __init__(
        self,
        api_key: str,
        from_email: str,
        from_name: str = "Agency Hub",
        timeout: int = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("MAILERSEND_API_KEY es requerido")
        if not from_email:
            raise ValueError("MAILERSEND_FROM_EMAIL es requerido")

        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout
        # Inyectable para tests (httpx.MockTransport)
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: BaseAppSettings) -> "MailerSendEmailSender":
        """
        Raises:
            ValueError: si faltan credenciales requeridas
        """
        api_key = ""
        if settings.mailersend_api_key:
            api_key = settings.mailersend_api_key.get_secret_value().strip()

        from_email = (settings.mailersend_from_email or settings.email_from or "").strip()
        from_name = (settings.mailersend_from_name or "Agency Hub").strip()
        timeout = settings.email_timeout_sec or 30

        if not api_key:
            raise ValueError("[MailerSend] MAILERSEND_API_KEY es requerido.")

        logger.info("[MailerSend] config: from=%s (%s) timeout=%ss", from_email, from_name, timeout)
        return cls(api_key=api_key, from_email=from_email, from_name=from_name, timeout=timeout)

    async def send_email(
        self,
        to: str,
        subject: str,
        html: str,
        text: Optional[str] = None,
    ) -> EmailSendResult:
        payload = {
            "from": {"email": self.from_email, "name": self.from_name},
            "to": [{"email": to}],
            "subject": subject,
            "html": html,
        }
        if text:
            payload["text"] = text

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.info("[MailerSend] sending: to=%s subject=%r", _mask_email(to), subject)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(MAILERSEND_API_URL, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error("[MailerSend] timeout: to=%s error=%s", _mask_email(to), e)
            return EmailSendResult.failed(f"MailerSend timeout: {e}")
        except httpx.RequestError as e:
            logger.error("[MailerSend] request error: to=%s error=%s", _mask_email(to), e)
            return EmailSendResult.failed(f"MailerSend request error: {e}")

        if response.status_code == 202:
            message_id = response.headers.get("X-Message-Id", "accepted")
            logger.info("[MailerSend] sent ok: to=%s message_id=%s", _mask_email(to), message_id)
            return EmailSendResult.ok(id=message_id)

        body = response.text[:500]
        logger.error(
            "[MailerSend] send failed: to=%s status=%d body=%s",
            _mask_email(to),
            response.status_code,
            body,
        )
        return EmailSendResult.failed(f"MailerSend API error: {response.status_code} - {body[:200]}")


# Fin del archivo backend/app/shared/integrations/mailersend_email_sender.py
