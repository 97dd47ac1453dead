# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/order_repository.py

Repositorio para orders, order_items y order_timeline.

Responsabilidades:
- Carga del agregado Order (items, timeline, contrato, factura)
- Búsqueda por payment intent del gateway
- Claim atómico de aprovisionamiento (completed_at IS NULL)
- Append de entradas de timeline
- Agregación de órdenes pagadas por cliente

Autor: Agency Hub
Fecha: 2026-09-04
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.orders.enums import OrderStatus, PaymentStatus, TimelineStatus
from app.modules.orders.models import Order, OrderItem, OrderTimeline


@dataclass(frozen=True)
class ClientOrderAggregate:
    lifetime_value: int
    total_orders: int
    first_order_date: Optional[datetime]
    last_order_date: Optional[datetime]


class OrderRepository(BaseRepository[Order]):
    def __init__(self) -> None:
        super().__init__(Order)

    # -----------------------------------------------------------
    # Lecturas del agregado
    # -----------------------------------------------------------
    async def get_by_id(
        self,
        session: AsyncSession,
        order_id: str,
        *,
        refresh: bool = False,
    ) -> Optional[Order]:
        """
        Carga la orden con sus relaciones.

        refresh=True fuerza a sobrescribir el estado en el identity map
        (tras UPDATEs masivos o commits intermedios).
        """
        stmt = select(Order).where(Order.id == order_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_for_client(
        self,
        session: AsyncSession,
        order_id: str,
        client_id: str,
    ) -> Optional[Order]:
        stmt = (
            select(Order)
            .where(Order.id == order_id, Order.client_id == client_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_by_payment_intent(
        self,
        session: AsyncSession,
        payment_intent_id: str,
    ) -> Optional[Order]:
        stmt = (
            select(Order)
            .where(Order.stripe_payment_intent_id == payment_intent_id)
            .order_by(Order.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    # -----------------------------------------------------------
    # Escrituras
    # -----------------------------------------------------------
    def add_timeline(
        self,
        session: AsyncSession,
        order_id: str,
        status: TimelineStatus,
        title: str,
        description: Optional[str] = None,
    ) -> OrderTimeline:
        """Agrega una entrada a la bitácora (se persiste en el próximo flush)."""
        entry = OrderTimeline(
            order_id=order_id,
            status=status,
            title=title,
            description=description,
        )
        session.add(entry)
        return entry

    async def claim_completion(
        self,
        session: AsyncSession,
        order_id: str,
        now: datetime,
    ) -> bool:
        """
        Marca la orden COMPLETED solo si nadie la completó antes y sigue en
        PROCESSING o AWAITING_CONTRACT (nunca desde CANCELLED/REFUNDED).

        Returns:
            True si esta llamada ganó el claim; False si ya estaba completada
            o en un estado terminal.
        """
        stmt = (
            update(Order)
            .where(
                Order.id == order_id,
                Order.completed_at.is_(None),
                Order.status.in_((OrderStatus.PROCESSING, OrderStatus.AWAITING_CONTRACT)),
            )
            .values(status=OrderStatus.COMPLETED, completed_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

    # -----------------------------------------------------------
    # Agregados por cliente
    # -----------------------------------------------------------
    async def aggregate_paid_for_client(
        self,
        session: AsyncSession,
        client_id: str,
    ) -> ClientOrderAggregate:
        stmt = select(
            func.coalesce(func.sum(Order.total), 0),
            func.count(Order.id),
            func.min(Order.created_at),
            func.max(Order.created_at),
        ).where(
            Order.client_id == client_id,
            Order.payment_status == PaymentStatus.SUCCEEDED,
        )
        total, count, first, last = (await session.execute(stmt)).one()
        return ClientOrderAggregate(
            lifetime_value=int(total or 0),
            total_orders=int(count or 0),
            first_order_date=first,
            last_order_date=last,
        )


__all__ = ["OrderRepository", "ClientOrderAggregate"]
