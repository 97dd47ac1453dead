# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/metrics_service.py

Agregados de cliente y rollup diario de ventas.

- Agregados de cliente: re-agregación completa sobre órdenes SUCCEEDED
  (se auto-corrige en reintentos).
- SalesMetrics: upsert-increment atómico sobre la fila del día; el ticket
  promedio se deriva al leer.

Ninguna función hace commit; el llamador define la frontera.

Autor: Agency Hub
Fecha: 2026-09-05
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.orders.repositories import (
    ClientOrderAggregate,
    ClientRepository,
    OrderRepository,
    SalesMetricsRepository,
)
from app.modules.orders.utils import utc_day

logger = logging.getLogger(__name__)


class MetricsService:
    def __init__(
        self,
        order_repo: Optional[OrderRepository] = None,
        client_repo: Optional[ClientRepository] = None,
        sales_repo: Optional[SalesMetricsRepository] = None,
    ):
        self.order_repo = order_repo or OrderRepository()
        self.client_repo = client_repo or ClientRepository()
        self.sales_repo = sales_repo or SalesMetricsRepository()

    # ------------------------------------------------------------------
    # Cliente
    # ------------------------------------------------------------------
    async def recompute_client_aggregates(self, session: AsyncSession, client_id: str) -> ClientOrderAggregate:
        aggregate = await self.order_repo.aggregate_paid_for_client(session, client_id)
        await self.client_repo.apply_aggregate(session, client_id, aggregate)
        logger.debug(
            "Client aggregates recomputed: client=%s lifetime_value=%s total_orders=%s",
            client_id,
            aggregate.lifetime_value,
            aggregate.total_orders,
        )
        return aggregate

    # ------------------------------------------------------------------
    # Rollup diario
    # ------------------------------------------------------------------
    async def record_paid_order(
        self,
        session: AsyncSession,
        *,
        client_id: str,
        total: int,
        day: Optional[date] = None,
    ) -> None:
        """Suma ingreso y orden al día; cuenta cliente nuevo si es su primera orden pagada."""
        paid = await self.order_repo.aggregate_paid_for_client(session, client_id)
        is_new_customer = paid.total_orders == 1
        await self.sales_repo.increment(
            session,
            day or utc_day(),
            revenue=total,
            order_count=1,
            new_customers=1 if is_new_customer else 0,
        )

    async def record_refund(self, session: AsyncSession, *, amount: int, day: date) -> None:
        await self.sales_repo.increment(session, day, refund_amount=amount)

    async def record_contract_signed(self, session: AsyncSession, day: Optional[date] = None) -> None:
        await self.sales_repo.increment(session, day or utc_day(), contracts_signed=1)

    # ------------------------------------------------------------------
    # Lectura (analytics)
    # ------------------------------------------------------------------
    async def sales_summary(
        self,
        session: AsyncSession,
        days: int,
        today: Optional[date] = None,
    ) -> dict[str, Any]:
        end = today or utc_day()
        start = end - timedelta(days=max(days, 1) - 1)
        rows = await self.sales_repo.list_range(session, start, end)

        daily = [
            {
                "date": row.date.isoformat(),
                "revenue": row.revenue,
                "orderCount": row.order_count,
                "avgOrderValue": row.avg_order_value,
                "newCustomers": row.new_customers,
                "refundAmount": row.refund_amount,
                "contractsSigned": row.contracts_signed,
            }
            for row in rows
        ]

        revenue = sum(r.revenue for r in rows)
        orders = sum(r.order_count for r in rows)
        totals = {
            "revenue": revenue,
            "orderCount": orders,
            "avgOrderValue": revenue // orders if orders else 0,
            "newCustomers": sum(r.new_customers for r in rows),
            "refundAmount": sum(r.refund_amount for r in rows),
            "contractsSigned": sum(r.contracts_signed for r in rows),
            "netRevenue": revenue - sum(r.refund_amount for r in rows),
        }
        return {
            "startDate": start.isoformat(),
            "endDate": end.isoformat(),
            "daily": daily,
            "totals": totals,
        }


__all__ = ["MetricsService"]
