# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/webhook_routes.py

Webhook de Stripe para el ciclo de vida de órdenes.

Endpoint:
- POST /api/webhooks/stripe

Respuestas:
- 400: Stripe-Signature ausente, firma inválida o payload ilegible
- 200 "OK": evento procesado, duplicado o de tipo no soportado
- 500: error inesperado del handler (Stripe reintenta la entrega)

Autor: Agency Hub
Fecha: 2026-09-07
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_orders import OrdersSettings
from app.shared.database import get_async_session
from app.modules.orders.dependencies import get_lifecycle_engine, get_orders_config
from app.modules.orders.metrics import record_webhook_event
from app.modules.orders.services import OrderLifecycleEngine
from app.modules.orders.webhooks import (
    WebhookConfigurationError,
    WebhookSignatureError,
    handle_verified_event,
    verify_stripe_event,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["orders:webhooks"])


@router.post("/stripe", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
async def stripe_orders_webhook(
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    engine: OrderLifecycleEngine = Depends(get_lifecycle_engine),
    settings: OrdersSettings = Depends(get_orders_config),
) -> PlainTextResponse:
    raw_body = await request.body()
    sig_header = request.headers.get("Stripe-Signature")

    try:
        event = verify_stripe_event(raw_body, sig_header, settings)
    except WebhookSignatureError as e:
        logger.warning("Rejected Stripe webhook: %s", e)
        record_webhook_event("", "rejected")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except WebhookConfigurationError as e:
        logger.error("Webhook configuration error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook not configured",
        ) from e

    logger.info("Stripe webhook received: type=%s id=%s", event.get("type"), event.get("id"))

    try:
        await handle_verified_event(session, engine, event)
    except Exception as e:
        logger.exception("Error processing Stripe webhook: id=%s", event.get("id"))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook handler failed",
        ) from e

    return PlainTextResponse("OK")


__all__ = ["router"]
