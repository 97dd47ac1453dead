# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/webhook_event_models.py

Ledger de idempotencia para eventos del gateway de pagos.

Cada entrega reclama el `event_id` antes de actuar (INSERT con UNIQUE);
solo la entrega que gana el claim aplica efectos.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, as_str_enum
from app.modules.orders.enums import WebhookEventStatus
from app.modules.orders.utils import utcnow


class ProcessedWebhookEvent(Base):
    __tablename__ = "processed_webhook_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    event_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        doc="ID del evento en el proveedor (event.id).",
    )
    event_type: Mapped[str] = mapped_column(String(128), nullable=False)
    provider: Mapped[str] = mapped_column(String(32), nullable=False, default="stripe")

    status: Mapped[WebhookEventStatus] = mapped_column(
        as_str_enum(WebhookEventStatus, name="webhook_event_status"),
        nullable=False,
        default=WebhookEventStatus.PROCESSING,
    )
    attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    last_error: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    claimed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    processed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


__all__ = ["ProcessedWebhookEvent"]
