# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/__init__.py

Registra todos los modelos del módulo Orders en Base.metadata.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from .client_models import Client
from .catalog_models import ServiceTemplate
from .order_models import Order, OrderItem, OrderTimeline
from .contract_models import ServiceContract
from .fulfillment_models import Service, Task
from .invoice_models import Invoice
from .sales_metrics_models import SalesMetrics
from .webhook_event_models import ProcessedWebhookEvent

__all__ = [
    "Client",
    "ServiceTemplate",
    "Order",
    "OrderItem",
    "OrderTimeline",
    "ServiceContract",
    "Service",
    "Task",
    "Invoice",
    "SalesMetrics",
    "ProcessedWebhookEvent",
]
