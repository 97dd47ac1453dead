# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/webhooks/stripe_handler.py

Verificación y despacho de webhooks Stripe hacia el motor de órdenes.

- verify_stripe_event(): valida la firma (Stripe-Signature) contra el
  secret configurado con la tolerancia de timestamp y devuelve el evento
  como dict plano.
- handle_verified_event(): delega en OrderLifecycleEngine y registra
  métricas de resultado y latencia.

Autor: Agency Hub
Fecha: 2026-09-07
"""

from __future__ import annotations

import json
import logging
from time import perf_counter
from typing import Any, Optional

import stripe
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_orders import OrdersSettings
from app.modules.orders.metrics import record_webhook_event, webhook_event_latency_seconds
from app.modules.orders.services import LifecycleResult, OrderLifecycleEngine

logger = logging.getLogger(__name__)


class WebhookSignatureError(Exception):
    """Firma ausente o inválida, o payload ilegible (HTTP 400)."""


class WebhookConfigurationError(Exception):
    """No hay secret de webhook configurado (HTTP 500)."""


def _parse_payload(payload: bytes) -> dict[str, Any]:
    try:
        event = json.loads(payload)
    except (ValueError, UnicodeDecodeError) as exc:
        raise WebhookSignatureError("Invalid payload") from exc
    if not isinstance(event, dict):
        raise WebhookSignatureError("Invalid payload")
    return event


def verify_stripe_event(
    payload: bytes,
    sig_header: Optional[str],
    settings: OrdersSettings,
) -> dict[str, Any]:
    """
    Verifica la firma de un webhook de Stripe.

    Args:
        payload: Body raw del request
        sig_header: Header Stripe-Signature
        settings: Configuración de órdenes (secret, tolerancia)

    Returns:
        Evento verificado como dict (id, type, data.object)

    Raises:
        WebhookSignatureError: header ausente, firma inválida o payload ilegible
        WebhookConfigurationError: STRIPE_WEBHOOK_SECRET no configurado
    """
    if settings.allow_insecure_webhooks:
        logger.warning("Insecure webhook mode: signature verification skipped")
        return _parse_payload(payload)

    if not sig_header:
        raise WebhookSignatureError("Missing Stripe-Signature header")

    secret = settings.stripe_webhook_secret
    if not secret:
        raise WebhookConfigurationError("STRIPE_WEBHOOK_SECRET not configured")

    try:
        stripe.Webhook.construct_event(
            payload,
            sig_header,
            secret,
            tolerance=settings.stripe_webhook_tolerance_seconds,
        )
    except stripe.SignatureVerificationError as exc:
        raise WebhookSignatureError("Invalid signature") from exc
    except ValueError as exc:
        raise WebhookSignatureError("Invalid payload") from exc

    return _parse_payload(payload)


async def handle_verified_event(
    session: AsyncSession,
    engine: OrderLifecycleEngine,
    event: dict[str, Any],
) -> LifecycleResult:
    """Procesa un evento verificado; las excepciones se propagan al router."""
    event_type = str(event.get("type") or "")
    start = perf_counter()
    try:
        result = await engine.handle_event(session, event)
    except Exception:
        record_webhook_event(event_type, "error")
        raise
    finally:
        webhook_event_latency_seconds.labels(event_type or "unknown").observe(perf_counter() - start)

    record_webhook_event(event_type, result.status)
    return result


__all__ = [
    "WebhookSignatureError",
    "WebhookConfigurationError",
    "verify_stripe_event",
    "handle_verified_event",
]
