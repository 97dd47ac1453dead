# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/notification_service.py

Notificaciones por correo del ciclo de vida de órdenes.

Cada método renderiza su template de templates/emails/, envía con el
IEmailSender inyectado y devuelve un NotificationOutcome. Ningún método
lanza: excepciones del transporte y resultados fallidos se loguean y se
convierten en un outcome con success=False.

Autor: Agency Hub
Fecha: 2026-09-05
"""

from __future__ import annotations

import html as html_lib
import logging
from typing import Any, Iterable, Optional

from app.shared.config.settings_orders import OrdersSettings
from app.shared.integrations.email_sender import IEmailSender
from app.shared.integrations.email_templates import render_email
from app.modules.orders.metrics import order_emails_total
from app.modules.orders.models import Client, Invoice, Order, OrderItem
from app.modules.orders.utils import format_money
from .side_effects import NotificationOutcome

logger = logging.getLogger(__name__)


def _items_html(items: Iterable[OrderItem]) -> str:
    rows = []
    for item in items:
        rows.append(
            "<tr><td>{name}</td><td align=\"right\">{qty}</td><td align=\"right\">{price}</td></tr>".format(
                name=html_lib.escape(item.service_name),
                qty=item.quantity,
                price=format_money(item.total),
            )
        )
    return "\n".join(rows)


def _items_list_html(items: Iterable[OrderItem]) -> str:
    return "\n".join(
        f"<li>{html_lib.escape(item.service_name)} x{item.quantity}</li>" for item in items
    )


def _items_text(items: Iterable[OrderItem]) -> str:
    return "\n".join(
        f"- {item.service_name} x{item.quantity}: {format_money(item.total)}" for item in items
    )


class OrderNotifier:
    """Envía los correos de órdenes, contratos, facturas y reembolsos."""

    def __init__(self, email_sender: IEmailSender, settings: OrdersSettings):
        self.email_sender = email_sender
        self.settings = settings

    # ------------------------------------------------------------------
    # URLs públicas
    # ------------------------------------------------------------------
    def order_url(self, order_id: str) -> str:
        return f"{self.settings.dashboard_base_url}/store/orders/{order_id}"

    def admin_order_url(self, order_id: str) -> str:
        return f"{self.settings.dashboard_base_url}/admin/orders/{order_id}"

    # ------------------------------------------------------------------
    # Envío con aislamiento de errores
    # ------------------------------------------------------------------
    async def _send(
        self,
        *,
        kind: str,
        to: Optional[str],
        subject: str,
        template: str,
        context: dict[str, Any],
    ) -> NotificationOutcome:
        if not self.settings.orders_send_emails:
            logger.debug("Order emails disabled: kind=%s", kind)
            order_emails_total.labels(kind, "skipped").inc()
            return NotificationOutcome(kind=kind, to=to or "", success=True, skipped=True)

        if not to:
            logger.warning("Skipping %s email: recipient missing", kind)
            order_emails_total.labels(kind, "failed").inc()
            return NotificationOutcome(kind=kind, to="", success=False, error="recipient missing")

        try:
            html, text, _ = render_email(template, context)
            if not html:
                html = f"<pre>{html_lib.escape(text or subject)}</pre>"
            result = await self.email_sender.send_email(to, subject, html, text)
        except Exception as exc:
            logger.warning("Failed to send %s email to %s: %s", kind, to, exc, exc_info=True)
            order_emails_total.labels(kind, "failed").inc()
            return NotificationOutcome(kind=kind, to=to, success=False, error=str(exc))

        if not result.success:
            logger.warning("Email provider rejected %s email to %s: %s", kind, to, result.error)
            order_emails_total.labels(kind, "failed").inc()
            return NotificationOutcome(kind=kind, to=to, success=False, error=str(result.error))

        logger.info("Sent %s email to %s", kind, to)
        order_emails_total.labels(kind, "sent").inc()
        return NotificationOutcome(kind=kind, to=to, success=True)

    # ------------------------------------------------------------------
    # Correos del ciclo de vida
    # ------------------------------------------------------------------
    async def order_confirmation(self, order: Order, client: Client) -> NotificationOutcome:
        return await self._send(
            kind="order_confirmation",
            to=client.email,
            subject=f"Order Confirmation #{order.id}",
            template="order_confirmation_email",
            context={
                "order_id": order.id,
                "client_name": client.name,
                "total": format_money(order.total),
                "items_html": _items_html(order.items),
                "items_text": _items_text(order.items),
                "dashboard_url": self.order_url(order.id),
            },
        )

    async def admin_order_notification(self, order: Order, client: Client) -> NotificationOutcome:
        return await self._send(
            kind="admin_order_notification",
            to=self.settings.admin_notification_email,
            subject=f"New Order #{order.id} - {format_money(order.total)}",
            template="admin_order_notification_email",
            context={
                "order_id": order.id,
                "client_name": client.name,
                "total": format_money(order.total),
                "items_html": _items_list_html(order.items),
                "items_text": _items_text(order.items),
                "admin_url": self.admin_order_url(order.id),
            },
        )

    async def contract_ready(self, order: Order, client: Client, service_name: str) -> NotificationOutcome:
        return await self._send(
            kind="contract_ready",
            to=client.email,
            subject=f"Contract Ready for Signing - {service_name}",
            template="contract_ready_email",
            context={
                "order_id": order.id,
                "client_name": client.name,
                "service_name": service_name,
                "contract_url": self.order_url(order.id),
            },
        )

    async def contract_signed(self, order: Order, client: Client, service_name: str) -> NotificationOutcome:
        return await self._send(
            kind="contract_signed",
            to=client.email,
            subject=f"Contract Signed - {service_name}",
            template="contract_signed_email",
            context={
                "order_id": order.id,
                "client_name": client.name,
                "service_name": service_name,
            },
        )

    async def invoice_generated(self, invoice: Invoice, client: Client) -> NotificationOutcome:
        return await self._send(
            kind="invoice_generated",
            to=client.email,
            subject=f"Invoice {invoice.invoice_number} Available",
            template="invoice_generated_email",
            context={
                "client_name": client.name,
                "invoice_number": invoice.invoice_number,
                "total": format_money(invoice.total),
                "invoice_url": self.order_url(invoice.order_id),
            },
        )

    async def service_provisioned(
        self,
        order: Order,
        client: Client,
        service_names: list[str],
    ) -> NotificationOutcome:
        return await self._send(
            kind="service_provisioned",
            to=client.email,
            subject=f"Service Activated - {', '.join(service_names)}",
            template="service_provisioned_email",
            context={
                "order_id": order.id,
                "client_name": client.name,
                "service_names": ", ".join(service_names),
                "dashboard_url": self.order_url(order.id),
            },
        )

    async def refund_processed(self, order: Order, client: Client, amount: int) -> NotificationOutcome:
        return await self._send(
            kind="refund_processed",
            to=client.email,
            subject=f"Refund Processed - Order #{order.id}",
            template="refund_processed_email",
            context={
                "order_id": order.id,
                "client_name": client.name,
                "amount": format_money(amount),
            },
        )


__all__ = ["OrderNotifier"]
