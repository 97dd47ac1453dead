# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores de la API de Agency Hub.

Responsabilidades:
- Incluir el router de health (/health).
- Montar los routers del módulo Orders bajo /api.

Autor: Agency Hub
Fecha: 2026-09-08
"""

from fastapi import APIRouter

from app.modules.orders import get_orders_routers
from .health_routes import router as health_router

router = APIRouter()

# Health check sin prefijo adicional
router.include_router(health_router)

api = APIRouter(prefix="/api")
for orders_router in get_orders_routers():
    api.include_router(orders_router)

router.include_router(api)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
