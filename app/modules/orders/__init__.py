# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/__init__.py

Módulo Orders: ciclo de vida de órdenes pagadas (webhooks del gateway,
firma de contratos, aprovisionamiento, facturas, reembolsos y métricas
de ventas).

Los routers se exponen vía get_orders_routers() para que app.main los
monte bajo /api.
"""

from .routes import get_orders_routers

__all__ = ["get_orders_routers"]
