# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/dependencies.py

Dependencias FastAPI del módulo Orders.

Los servicios se construyen por request con el IEmailSender compartido y
OrdersSettings; los tests sobreescriben get_email_sender y
get_orders_config vía app.dependency_overrides.

Autor: Agency Hub
Fecha: 2026-09-07
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from app.shared.config import get_settings
from app.shared.config.settings_orders import OrdersSettings, get_orders_settings
from app.shared.integrations.email_sender import EmailSender, IEmailSender
from app.modules.orders.services import (
    ContractService,
    OrderAdminService,
    OrderLifecycleEngine,
    OrderService,
)


@lru_cache(maxsize=1)
def _shared_email_sender() -> IEmailSender:
    return EmailSender.from_settings(get_settings())


def get_email_sender() -> IEmailSender:
    return _shared_email_sender()


def get_orders_config() -> OrdersSettings:
    return get_orders_settings()


def get_lifecycle_engine(
    email_sender: IEmailSender = Depends(get_email_sender),
    settings: OrdersSettings = Depends(get_orders_config),
) -> OrderLifecycleEngine:
    return OrderLifecycleEngine(email_sender, settings)


def get_contract_service(
    email_sender: IEmailSender = Depends(get_email_sender),
    settings: OrdersSettings = Depends(get_orders_config),
) -> ContractService:
    return ContractService(email_sender, settings)


def get_order_service() -> OrderService:
    return OrderService()


def get_admin_service(
    email_sender: IEmailSender = Depends(get_email_sender),
    settings: OrdersSettings = Depends(get_orders_config),
) -> OrderAdminService:
    return OrderAdminService(email_sender, settings)


__all__ = [
    "get_email_sender",
    "get_orders_config",
    "get_lifecycle_engine",
    "get_contract_service",
    "get_order_service",
    "get_admin_service",
]
