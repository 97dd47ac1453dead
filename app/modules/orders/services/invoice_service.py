# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/invoice_service.py

Generación de facturas para órdenes completadas.

- Una factura por orden (UNIQUE order_id); get-or-create idempotente.
- status PAID, subtotal = total, tax = 0.
- invoice_number = {prefix}-{año}-{últimos 6 dígitos de epoch millis}.
  No garantiza unicidad global: dos facturas en el mismo milisegundo
  (o con el mismo sufijo módulo 10^6) comparten número.

Autor: Agency Hub
Fecha: 2026-09-05
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.orders.enums import InvoiceStatus
from app.modules.orders.models import Invoice, Order
from app.modules.orders.repositories import InvoiceRepository
from app.modules.orders.utils import utcnow

logger = logging.getLogger(__name__)


def generate_invoice_number(prefix: str = "INV", now: Optional[datetime] = None) -> str:
    """
    Examples:
        >>> from datetime import datetime, timezone
        >>> generate_invoice_number("INV", datetime(2026, 3, 1, tzinfo=timezone.utc))
        'INV-2026-200000'
    """
    now = now or utcnow()
    millis = int(now.timestamp() * 1000)
    suffix = str(millis)[-6:]
    return f"{prefix}-{now.year}-{suffix}"


class InvoiceService:
    def __init__(self, prefix: str = "INV", invoice_repo: Optional[InvoiceRepository] = None):
        self.prefix = prefix
        self.invoice_repo = invoice_repo or InvoiceRepository()

    async def get_or_create_for_order(self, session: AsyncSession, order: Order) -> tuple[Invoice, bool]:
        """
        Obtiene o crea la factura de la orden. No hace commit.

        Returns:
            (invoice, created)
        """
        existing = await self.invoice_repo.get_by_order_id(session, order.id)
        if existing is not None:
            logger.debug("Invoice already exists: order=%s invoice=%s", order.id, existing.invoice_number)
            return existing, False

        now = utcnow()
        try:
            invoice = await self.invoice_repo.create(
                session,
                order_id=order.id,
                invoice_number=generate_invoice_number(self.prefix, now),
                subtotal=order.total,
                tax=0,
                total=order.total,
                status=InvoiceStatus.PAID,
                issued_at=now,
            )
        except IntegrityError:
            # Otra entrega creó la factura primero
            await session.rollback()
            existing = await self.invoice_repo.get_by_order_id(session, order.id)
            if existing is None:
                raise
            logger.debug("Invoice created by concurrent request: order=%s", order.id)
            return existing, False

        logger.info("Created invoice: number=%s order=%s total=%s", invoice.invoice_number, order.id, invoice.total)
        return invoice, True


__all__ = ["generate_invoice_number", "InvoiceService"]
