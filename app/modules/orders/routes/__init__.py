# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/__init__.py

Routers del módulo Orders; app.main los monta bajo /api.

Autor: Agency Hub
Fecha: 2026-09-07
"""

from fastapi import APIRouter

from .admin_routes import router as admin_router
from .contract_routes import router as contract_router
from .order_routes import router as order_router
from .webhook_routes import router as webhook_router


def get_orders_routers() -> list[APIRouter]:
    return [webhook_router, contract_router, order_router, admin_router]


__all__ = [
    "admin_router",
    "contract_router",
    "order_router",
    "webhook_router",
    "get_orders_routers",
]
