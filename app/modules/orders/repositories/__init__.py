# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/__init__.py

Autor: Agency Hub
Fecha: 2026-09-04
"""

from .order_repository import OrderRepository, ClientOrderAggregate
from .client_repository import ClientRepository
from .template_repository import ServiceTemplateRepository
from .contract_repository import ContractRepository
from .invoice_repository import InvoiceRepository
from .sales_metrics_repository import SalesMetricsRepository
from .webhook_event_repository import WebhookEventRepository

__all__ = [
    "OrderRepository",
    "ClientOrderAggregate",
    "ClientRepository",
    "ServiceTemplateRepository",
    "ContractRepository",
    "InvoiceRepository",
    "SalesMetricsRepository",
    "WebhookEventRepository",
]
