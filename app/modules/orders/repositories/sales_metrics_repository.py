# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/sales_metrics_repository.py

Repositorio del rollup diario sales_metrics.

Todas las escrituras son upsert-increment atómicos sobre la fila del día;
no hay lectura previa.

Autor: Agency Hub
Fecha: 2026-09-04
"""

from datetime import date
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.shared.database.upsert import upsert_increment
from app.modules.orders.models import SalesMetrics


class SalesMetricsRepository(BaseRepository[SalesMetrics]):
    def __init__(self) -> None:
        super().__init__(SalesMetrics)

    async def increment(self, session: AsyncSession, day: date, **deltas: int) -> None:
        """
        Incrementa contadores del día (crea la fila si no existe).

        Example:
            await repo.increment(session, today, revenue=2500, order_count=1)
        """
        if not deltas:
            return
        await upsert_increment(
            session,
            SalesMetrics,
            index_elements=["date"],
            values={"date": day},
            increments=deltas,
        )

    async def get_for_day(self, session: AsyncSession, day: date) -> Optional[SalesMetrics]:
        stmt = (
            select(SalesMetrics)
            .where(SalesMetrics.date == day)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def list_range(self, session: AsyncSession, start: date, end: date) -> Sequence[SalesMetrics]:
        stmt = (
            select(SalesMetrics)
            .where(SalesMetrics.date >= start, SalesMetrics.date <= end)
            .order_by(SalesMetrics.date.asc())
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().all()
