# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/sales_metrics_models.py

Rollup diario de ventas. Una fila por día calendario (UTC).

Los contadores se actualizan con upsert-increment atómico; el ticket
promedio no se almacena, se deriva al leer.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import BigInteger, Date, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base
from app.modules.orders.utils import utcnow


class SalesMetrics(Base):
    __tablename__ = "sales_metrics"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[date] = mapped_column(Date, nullable=False, unique=True)

    revenue: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    order_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    new_customers: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    refund_amount: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    contracts_signed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    @property
    def avg_order_value(self) -> int:
        """revenue / order_count en centavos (0 sin órdenes)."""
        if not self.order_count:
            return 0
        return self.revenue // self.order_count


__all__ = ["SalesMetrics"]
