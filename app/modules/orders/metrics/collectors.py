# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/metrics/collectors.py

Coleccionistas Prometheus del ciclo de vida de órdenes.

Define:
- eventos de webhook por tipo y resultado (processed|duplicate|ignored|rejected|error)
- latencia de procesamiento de webhooks
- correos enviados por tipo y resultado (sent|failed|skipped)
- órdenes aprovisionadas por origen (checkout|contract)

Autor: Agency Hub
Fecha: 2026-09-07
"""
from app.shared.core.metrics_helpers import get_or_create_counter, get_or_create_histogram

NAMESPACE = "agencyhub"
SUBSYSTEM = "orders"

webhook_events_total = get_or_create_counter(
    f"{NAMESPACE}_{SUBSYSTEM}_webhook_events_total",
    "Payment gateway webhook deliveries by event type and result",
    labelnames=("event_type", "result"),
)

webhook_event_latency_seconds = get_or_create_histogram(
    f"{NAMESPACE}_{SUBSYSTEM}_webhook_event_latency_seconds",
    "Time spent handling a verified webhook event (s)",
    labelnames=("event_type",),
)

order_emails_total = get_or_create_counter(
    f"{NAMESPACE}_{SUBSYSTEM}_emails_total",
    "Order lifecycle emails by kind and outcome",
    labelnames=("kind", "outcome"),  # sent|failed|skipped
)

orders_provisioned_total = get_or_create_counter(
    f"{NAMESPACE}_{SUBSYSTEM}_provisioned_total",
    "Orders moved to COMPLETED by the provisioning routine",
)


def record_webhook_event(event_type: str, result: str) -> None:
    # Tipos ignorados comparten etiqueta para acotar la cardinalidad
    label = "other" if result == "ignored" or not event_type else event_type
    webhook_events_total.labels(label, result).inc()


__all__ = [
    "webhook_events_total",
    "webhook_event_latency_seconds",
    "order_emails_total",
    "orders_provisioned_total",
    "record_webhook_event",
]
