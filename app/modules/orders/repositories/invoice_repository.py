# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/invoice_repository.py

Autor: Agency Hub
Fecha: 2026-09-04
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.orders.models import Invoice


class InvoiceRepository(BaseRepository[Invoice]):
    def __init__(self) -> None:
        super().__init__(Invoice)

    async def get_by_order_id(self, session: AsyncSession, order_id: str) -> Optional[Invoice]:
        result = await session.execute(select(Invoice).where(Invoice.order_id == order_id))
        return result.scalars().first()

    async def mark_sent(self, session: AsyncSession, invoice_id: str, sent_at: datetime) -> None:
        await session.execute(
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(sent_at=sent_at)
            .execution_options(synchronize_session=False)
        )
