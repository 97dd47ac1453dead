# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/__init__.py

Servicios del ciclo de vida de órdenes.

Autor: Agency Hub
Fecha: 2026-09-06
"""

from .side_effects import LifecycleResult, NotificationOutcome, SideEffectReport, StepOutcome
from .notification_service import OrderNotifier
from .invoice_service import InvoiceService, generate_invoice_number
from .metrics_service import MetricsService
from .provisioning_service import (
    ProvisioningOutcome,
    ProvisioningPlan,
    ProvisioningService,
    plan_provisioning,
)
from .lifecycle_engine import (
    EVENT_CHARGE_REFUNDED,
    EVENT_CHECKOUT_COMPLETED,
    EVENT_PAYMENT_FAILED,
    EVENT_PAYMENT_SUCCEEDED,
    OrderLifecycleEngine,
)
from .contract_service import ContractService, ContractSignResult
from .order_service import OrderService
from .admin_service import OrderAdminService

__all__ = [
    "LifecycleResult",
    "NotificationOutcome",
    "SideEffectReport",
    "StepOutcome",
    "OrderNotifier",
    "InvoiceService",
    "generate_invoice_number",
    "MetricsService",
    "ProvisioningOutcome",
    "ProvisioningPlan",
    "ProvisioningService",
    "plan_provisioning",
    "EVENT_CHARGE_REFUNDED",
    "EVENT_CHECKOUT_COMPLETED",
    "EVENT_PAYMENT_FAILED",
    "EVENT_PAYMENT_SUCCEEDED",
    "OrderLifecycleEngine",
    "ContractService",
    "ContractSignResult",
    "OrderService",
    "OrderAdminService",
]
