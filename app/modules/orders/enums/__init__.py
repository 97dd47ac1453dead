# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/__init__.py

Punto único de importación de enums del módulo Orders.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from .order_status_enum import OrderStatus
from .payment_status_enum import PaymentStatus
from .timeline_status_enum import TimelineStatus
from .fulfillment_enums import ServiceStatus, TaskStatus, TaskPriority
from .invoice_status_enum import InvoiceStatus
from .webhook_event_status_enum import WebhookEventStatus

__all__ = [
    "OrderStatus",
    "PaymentStatus",
    "TimelineStatus",
    "ServiceStatus",
    "TaskStatus",
    "TaskPriority",
    "InvoiceStatus",
    "WebhookEventStatus",
]
