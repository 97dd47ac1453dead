# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/admin_service.py

Operaciones administrativas sobre órdenes:
- iniciar reembolsos en Stripe (el webhook charge.refunded aplica el
  cambio de estado, métricas y correo)
- reenviar el correo de factura
- analytics de ventas por día

Autor: Agency Hub
Fecha: 2026-09-06
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import stripe
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_orders import OrdersSettings
from app.shared.integrations.email_sender import IEmailSender
from app.modules.orders.enums import PaymentStatus
from app.modules.orders.errors import (
    InvoiceNotFoundError,
    OrderNotFoundError,
    PaymentGatewayError,
    RefundError,
)
from app.modules.orders.repositories import InvoiceRepository, OrderRepository
from app.modules.orders.schemas import RefundRequest
from app.modules.orders.utils import utcnow
from .metrics_service import MetricsService
from .notification_service import OrderNotifier
from .side_effects import NotificationOutcome

logger = logging.getLogger(__name__)


class OrderAdminService:
    def __init__(
        self,
        email_sender: IEmailSender,
        settings: OrdersSettings,
        *,
        order_repo: Optional[OrderRepository] = None,
    ):
        self.settings = settings
        self.order_repo = order_repo or OrderRepository()
        self.invoice_repo = InvoiceRepository()
        self.notifier = OrderNotifier(email_sender, settings)
        self.metrics = MetricsService(order_repo=self.order_repo)

    # ------------------------------------------------------------------
    # Reembolsos
    # ------------------------------------------------------------------
    async def request_refund(
        self,
        session: AsyncSession,
        *,
        order_id: str,
        request: RefundRequest,
        admin_id: str,
    ) -> dict[str, Any]:
        """
        Emite el reembolso en Stripe y guarda la solicitud en refund_metadata.

        Raises:
            OrderNotFoundError, RefundError, PaymentGatewayError
        """
        order = await self.order_repo.get_by_id(session, order_id, refresh=True)
        if order is None:
            raise OrderNotFoundError()
        if not order.stripe_payment_intent_id:
            raise RefundError("No payment found for this order")
        if order.payment_status == PaymentStatus.REFUNDED:
            raise RefundError("Order already refunded")

        refundable = order.total - (order.amount_refunded or 0)
        amount = refundable if request.type == "full" else int(request.amount or 0)
        if amount > refundable:
            raise RefundError("Refund amount exceeds order total")
        if amount <= 0:
            raise RefundError("Nothing left to refund")

        if not self.settings.stripe_secret_key:
            raise PaymentGatewayError("Stripe is not configured")

        try:
            refund = stripe.Refund.create(
                payment_intent=order.stripe_payment_intent_id,
                amount=amount,
                reason="requested_by_customer",
                metadata={"orderId": order.id, "adminId": admin_id, "refundReason": request.reason},
                api_key=self.settings.stripe_secret_key,
            )
        except stripe.StripeError as exc:
            logger.error("Stripe refund failed: order_id=%s error=%s", order_id, exc)
            raise PaymentGatewayError(f"Stripe refund failed: {exc.user_message or exc}") from exc

        refund_id = refund.id
        refund_status = getattr(refund, "status", None)
        order.refund_metadata = {
            "id": refund_id,
            "amount": amount,
            "reason": request.reason,
            "type": request.type,
            "status": refund_status,
            "processedAt": utcnow().isoformat(),
            "processedBy": admin_id,
        }
        await session.commit()

        logger.info(
            "Refund requested: order_id=%s refund_id=%s amount=%s type=%s admin=%s",
            order_id,
            refund_id,
            amount,
            request.type,
            admin_id,
        )
        return {"refund_id": refund_id, "amount": amount, "status": refund_status, "type": request.type}

    # ------------------------------------------------------------------
    # Factura
    # ------------------------------------------------------------------
    async def send_invoice(self, session: AsyncSession, *, order_id: str) -> tuple[str, NotificationOutcome]:
        """
        Raises:
            InvoiceNotFoundError
        """
        invoice = await self.invoice_repo.get_by_order_id(session, order_id)
        if invoice is None:
            raise InvoiceNotFoundError()
        order = await self.order_repo.get_by_id(session, order_id)

        outcome = await self.notifier.invoice_generated(invoice, order.client)
        if outcome.success and not outcome.skipped:
            await self.invoice_repo.mark_sent(session, invoice.id, utcnow())
            await session.commit()
        return invoice.invoice_number, outcome

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------
    async def sales_analytics(self, session: AsyncSession, *, days: int) -> dict[str, Any]:
        return await self.metrics.sales_summary(session, days)


__all__ = ["OrderAdminService"]
