# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/client_repository.py

Autor: Agency Hub
Fecha: 2026-09-04
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.orders.models import Client
from .order_repository import ClientOrderAggregate


class ClientRepository(BaseRepository[Client]):
    def __init__(self) -> None:
        super().__init__(Client)

    async def get_by_user_id(self, session: AsyncSession, user_id: str) -> Optional[Client]:
        result = await session.execute(select(Client).where(Client.user_id == user_id))
        return result.scalars().first()

    async def apply_aggregate(
        self,
        session: AsyncSession,
        client_id: str,
        aggregate: ClientOrderAggregate,
    ) -> None:
        """Sobrescribe los campos derivados con el resultado de la re-agregación."""
        await session.execute(
            update(Client)
            .where(Client.id == client_id)
            .values(
                lifetime_value=aggregate.lifetime_value,
                total_orders=aggregate.total_orders,
                first_order_date=aggregate.first_order_date,
                last_order_date=aggregate.last_order_date,
            )
            .execution_options(synchronize_session=False)
        )
