# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/lifecycle_engine.py

Motor del ciclo de vida de órdenes: consume eventos verificados del gateway
de pagos y avanza Order.status.

Eventos soportados:
- checkout.session.completed      → pago recibido; contrato o aprovisionamiento
- payment_intent.succeeded        → solo log
- payment_intent.payment_failed   → payment_status FAILED
- charge.refunded                 → reembolso total o parcial
Cualquier otro tipo se loguea y se ignora.

Idempotencia (claim-then-act): antes de actuar se reclama el event.id en
processed_webhook_events. Un evento ya `processed` o en `processing` es
duplicado; uno `failed` se vuelve a reclamar. Si el handler lanza, el claim
queda `failed` y la excepción se propaga (el gateway reintenta).

Commits del checkout, en orden:
1. Efecto 1 (PROCESSING/SUCCEEDED + "Payment received")
2. rama contrato o aprovisionamiento
3. agregados de cliente (best-effort)
4. SalesMetrics del día (best-effort)
Los correos salen después de persistir.

Autor: Agency Hub
Fecha: 2026-09-05
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_orders import OrdersSettings
from app.shared.integrations.email_sender import IEmailSender
from app.modules.orders.enums import OrderStatus, PaymentStatus, TimelineStatus
from app.modules.orders.models import ServiceContract
from app.modules.orders.repositories import OrderRepository, WebhookEventRepository
from app.modules.orders.utils import format_money, utc_day, utcnow
from .invoice_service import InvoiceService
from .metrics_service import MetricsService
from .notification_service import OrderNotifier
from .provisioning_service import ProvisioningService
from .side_effects import LifecycleResult, SideEffectReport

logger = logging.getLogger(__name__)

EVENT_CHECKOUT_COMPLETED = "checkout.session.completed"
EVENT_PAYMENT_SUCCEEDED = "payment_intent.succeeded"
EVENT_PAYMENT_FAILED = "payment_intent.payment_failed"
EVENT_CHARGE_REFUNDED = "charge.refunded"

# Estados posteriores a PROCESSING: un checkout repetido no debe tocarlos
_POST_PROCESSING = frozenset(
    {
        OrderStatus.AWAITING_CONTRACT,
        OrderStatus.COMPLETED,
        OrderStatus.CANCELLED,
        OrderStatus.REFUNDED,
    }
)

Handler = Callable[[AsyncSession, Mapping[str, Any]], Awaitable[LifecycleResult]]


class OrderLifecycleEngine:
    """Orquesta los handlers del ciclo de vida con dependencias inyectadas."""

    def __init__(
        self,
        email_sender: IEmailSender,
        settings: OrdersSettings,
        *,
        order_repo: Optional[OrderRepository] = None,
        webhook_event_repo: Optional[WebhookEventRepository] = None,
    ):
        self.settings = settings
        self.order_repo = order_repo or OrderRepository()
        self.webhook_events = webhook_event_repo or WebhookEventRepository()
        self.notifier = OrderNotifier(email_sender, settings)
        self.invoice_service = InvoiceService(settings.invoice_prefix)
        self.metrics = MetricsService(order_repo=self.order_repo)
        self.provisioning = ProvisioningService(self.notifier, self.invoice_service, self.order_repo)

        self._handlers: dict[str, Handler] = {
            EVENT_CHECKOUT_COMPLETED: self.handle_checkout_completed,
            EVENT_PAYMENT_SUCCEEDED: self.handle_payment_succeeded,
            EVENT_PAYMENT_FAILED: self.handle_payment_failed,
            EVENT_CHARGE_REFUNDED: self.handle_charge_refunded,
        }

    @property
    def supported_events(self) -> list[str]:
        return list(self._handlers)

    # ------------------------------------------------------------------
    # Dispatch + ledger
    # ------------------------------------------------------------------
    async def handle_event(self, session: AsyncSession, event: Mapping[str, Any]) -> LifecycleResult:
        """
        Procesa un evento ya verificado del gateway.

        Raises:
            Exception: cualquier error inesperado del handler (tras marcar
                el claim como failed)
        """
        event_type = str(event.get("type") or "")
        event_id = event.get("id")

        handler = self._handlers.get(event_type)
        if handler is None:
            logger.info("Unhandled event type: event_type=%s event_id=%s", event_type, event_id)
            return LifecycleResult.ignored(event_type, "unhandled event type")

        payload = (event.get("data") or {}).get("object") or {}

        if not event_id:
            logger.warning("Event without id, idempotency ledger skipped: event_type=%s", event_type)
            result = await handler(session, payload)
            result.event_type = event_type
            return result

        claimed = await self.webhook_events.claim(session, event_id=event_id, event_type=event_type)
        await session.commit()
        if not claimed:
            return LifecycleResult.duplicate(event_type, "event already claimed")

        try:
            result = await handler(session, payload)
        except Exception as exc:
            logger.exception("Lifecycle handler failed: event_type=%s event_id=%s", event_type, event_id)
            await session.rollback()
            try:
                await self.webhook_events.mark_failed(session, event_id, repr(exc))
                await session.commit()
            except Exception:
                logger.exception("Could not mark webhook event as failed: event_id=%s", event_id)
                await session.rollback()
            raise

        await self.webhook_events.mark_processed(session, event_id)
        await session.commit()

        result.event_type = event_type
        logger.info(
            "Lifecycle event handled: event_type=%s event_id=%s status=%s order_id=%s",
            event_type,
            event_id,
            result.status,
            result.order_id,
        )
        return result

    # ------------------------------------------------------------------
    # checkout.session.completed
    # ------------------------------------------------------------------
    async def handle_checkout_completed(
        self,
        session: AsyncSession,
        checkout: Mapping[str, Any],
    ) -> LifecycleResult:
        order_id = checkout.get("client_reference_id")
        if not order_id:
            logger.error("Checkout session without client_reference_id: session_id=%s", checkout.get("id"))
            return LifecycleResult.ignored(EVENT_CHECKOUT_COMPLETED, "missing client_reference_id")

        order = await self.order_repo.get_by_id(session, order_id, refresh=True)
        if order is None:
            logger.warning("Checkout completed for unknown order: order_id=%s", order_id)
            return LifecycleResult.ignored(EVENT_CHECKOUT_COMPLETED, "order not found", order_id)

        if order.status in _POST_PROCESSING:
            logger.info("Checkout already applied: order_id=%s status=%s", order_id, order.status)
            return LifecycleResult.duplicate(EVENT_CHECKOUT_COMPLETED, "order already past PROCESSING", order_id)

        result = LifecycleResult(status="processed", event_type=EVENT_CHECKOUT_COMPLETED, order_id=order_id)
        client_id = order.client_id
        total = order.total

        # Efecto 1
        if order.status == OrderStatus.PROCESSING:
            logger.info("Resuming checkout for order left in PROCESSING: order_id=%s", order_id)
        else:
            payment_types = checkout.get("payment_method_types") or []
            order.status = OrderStatus.PROCESSING
            order.payment_status = PaymentStatus.SUCCEEDED
            order.stripe_payment_intent_id = checkout.get("payment_intent")
            order.payment_method = payment_types[0] if payment_types else "card"
            order.paid_at = utcnow()
            self.order_repo.add_timeline(
                session,
                order_id,
                TimelineStatus.PROCESSING,
                "Payment received",
                "Payment has been successfully processed",
            )
            await session.commit()
            logger.info("Payment recorded: order_id=%s total=%s", order_id, total)

        # Rama: contrato o aprovisionamiento
        contract_item = next((item for item in order.items if item.requires_contract), None)
        contract_service_name = contract_item.service_name if contract_item is not None else None
        if contract_item is not None:
            order.status = OrderStatus.AWAITING_CONTRACT
            self.order_repo.add_timeline(
                session,
                order_id,
                TimelineStatus.AWAITING_CONTRACT,
                "Awaiting contract signature",
                "Service agreement must be signed before activation",
            )
            session.add(
                ServiceContract(
                    order_id=order_id,
                    template_content=contract_item.contract_template or "",
                )
            )
            await session.commit()
            logger.info("Order awaiting contract: order_id=%s service=%s", order_id, contract_service_name)
        else:
            outcome = await self.provisioning.provision(session, order)
            result.side_effects.extend(outcome.side_effects)

        # Efectos 2 y 3
        await self._best_effort(
            session,
            result.side_effects,
            "client_aggregates",
            lambda: self.metrics.recompute_client_aggregates(session, client_id),
        )
        await self._best_effort(
            session,
            result.side_effects,
            "sales_metrics",
            lambda: self.metrics.record_paid_order(session, client_id=client_id, total=total),
        )

        # Efecto 4
        order = await self.order_repo.get_by_id(session, order_id, refresh=True)
        client = order.client
        await self._notify(result.side_effects, "order_confirmation", self.notifier.order_confirmation(order, client))
        await self._notify(
            result.side_effects,
            "admin_order_notification",
            self.notifier.admin_order_notification(order, client),
        )
        if contract_service_name is not None:
            await self._notify(
                result.side_effects,
                "contract_ready",
                self.notifier.contract_ready(order, client, contract_service_name),
            )

        result.order_status = order.status
        return result

    # ------------------------------------------------------------------
    # payment_intent.succeeded
    # ------------------------------------------------------------------
    async def handle_payment_succeeded(
        self,
        session: AsyncSession,
        payment_intent: Mapping[str, Any],
    ) -> LifecycleResult:
        logger.info("Payment intent succeeded: payment_intent=%s", payment_intent.get("id"))
        return LifecycleResult(status="processed", event_type=EVENT_PAYMENT_SUCCEEDED, detail="logged")

    # ------------------------------------------------------------------
    # payment_intent.payment_failed
    # ------------------------------------------------------------------
    async def handle_payment_failed(
        self,
        session: AsyncSession,
        payment_intent: Mapping[str, Any],
    ) -> LifecycleResult:
        payment_intent_id = payment_intent.get("id")
        order = await self.order_repo.get_by_payment_intent(session, payment_intent_id) if payment_intent_id else None
        if order is None:
            logger.info("Payment failed for unknown payment intent: payment_intent=%s", payment_intent_id)
            return LifecycleResult.ignored(EVENT_PAYMENT_FAILED, "order not found")

        last_error = payment_intent.get("last_payment_error") or {}
        message = last_error.get("message") or "Payment processing failed"

        order.payment_status = PaymentStatus.FAILED
        self.order_repo.add_timeline(session, order.id, TimelineStatus.FAILED, "Payment failed", message)
        await session.commit()

        logger.warning("Payment failed: order_id=%s reason=%s", order.id, message)
        return LifecycleResult(
            status="processed",
            event_type=EVENT_PAYMENT_FAILED,
            order_id=order.id,
            order_status=order.status,
        )

    # ------------------------------------------------------------------
    # charge.refunded
    # ------------------------------------------------------------------
    async def handle_charge_refunded(
        self,
        session: AsyncSession,
        charge: Mapping[str, Any],
    ) -> LifecycleResult:
        payment_intent_id = charge.get("payment_intent")
        order = await self.order_repo.get_by_payment_intent(session, payment_intent_id) if payment_intent_id else None
        if order is None:
            logger.info("Refund for unknown payment intent: payment_intent=%s", payment_intent_id)
            return LifecycleResult.ignored(EVENT_CHARGE_REFUNDED, "order not found")

        order_id = order.id
        amount = int(charge.get("amount") or 0)
        amount_refunded = int(charge.get("amount_refunded") or 0)
        delta = amount_refunded - (order.amount_refunded or 0)

        if delta <= 0:
            logger.info(
                "Refund already recorded: order_id=%s amount_refunded=%s recorded=%s",
                order_id,
                amount_refunded,
                order.amount_refunded,
            )
            return LifecycleResult.duplicate(EVENT_CHARGE_REFUNDED, "refund already recorded", order_id)

        is_full_refund = amount == amount_refunded

        order.amount_refunded = amount_refunded
        if is_full_refund:
            order.status = OrderStatus.REFUNDED
            order.payment_status = PaymentStatus.REFUNDED
        self.order_repo.add_timeline(
            session,
            order_id,
            TimelineStatus.REFUNDED if is_full_refund else TimelineStatus.PARTIAL_REFUND,
            "Order refunded" if is_full_refund else "Partial refund issued",
            f"{format_money(delta)} has been refunded",
        )
        client_id = order.client_id
        order_day = utc_day(order.created_at)
        await session.commit()

        logger.info(
            "Refund recorded: order_id=%s delta=%s full=%s",
            order_id,
            delta,
            is_full_refund,
        )

        result = LifecycleResult(status="processed", event_type=EVENT_CHARGE_REFUNDED, order_id=order_id)
        await self._best_effort(
            session,
            result.side_effects,
            "client_aggregates",
            lambda: self.metrics.recompute_client_aggregates(session, client_id),
        )
        await self._best_effort(
            session,
            result.side_effects,
            "sales_metrics",
            lambda: self.metrics.record_refund(session, amount=delta, day=order_day),
        )

        order = await self.order_repo.get_by_id(session, order_id, refresh=True)
        await self._notify(
            result.side_effects,
            "refund_processed",
            self.notifier.refund_processed(order, order.client, delta),
        )
        result.order_status = order.status
        return result

    # ------------------------------------------------------------------
    # Helpers best-effort
    # ------------------------------------------------------------------
    async def _best_effort(
        self,
        session: AsyncSession,
        report: SideEffectReport,
        name: str,
        step: Callable[[], Awaitable[Any]],
    ) -> None:
        try:
            await step()
            await session.commit()
        except Exception as exc:
            logger.exception("Best-effort step failed: step=%s", name)
            await session.rollback()
            report.record_step(name, False, str(exc))
            return
        report.record_step(name, True)

    async def _notify(self, report: SideEffectReport, kind: str, send: Awaitable[Any]) -> None:
        try:
            report.record_notification(await send)
        except Exception:
            logger.exception("Notification failed: kind=%s", kind)


__all__ = [
    "OrderLifecycleEngine",
    "EVENT_CHECKOUT_COMPLETED",
    "EVENT_PAYMENT_SUCCEEDED",
    "EVENT_PAYMENT_FAILED",
    "EVENT_CHARGE_REFUNDED",
]
