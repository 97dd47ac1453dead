# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/metrics/__init__.py

Autor: Agency Hub
Fecha: 2026-09-07
"""

from .collectors import (
    order_emails_total,
    orders_provisioned_total,
    record_webhook_event,
    webhook_event_latency_seconds,
    webhook_events_total,
)

__all__ = [
    "order_emails_total",
    "orders_provisioned_total",
    "record_webhook_event",
    "webhook_event_latency_seconds",
    "webhook_events_total",
]
