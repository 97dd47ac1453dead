# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/template_repository.py

Lecturas del catálogo de servicios.

Autor: Agency Hub
Fecha: 2026-09-04
"""

from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.orders.models import ServiceTemplate


class ServiceTemplateRepository(BaseRepository[ServiceTemplate]):
    def __init__(self) -> None:
        super().__init__(ServiceTemplate)

    async def get_many(
        self,
        session: AsyncSession,
        template_ids: Iterable[str],
    ) -> dict[str, ServiceTemplate]:
        ids = list(dict.fromkeys(template_ids))
        if not ids:
            return {}
        result = await session.execute(select(ServiceTemplate).where(ServiceTemplate.id.in_(ids)))
        return {t.id: t for t in result.scalars().all()}

    async def list_purchasable(self, session: AsyncSession) -> Sequence[ServiceTemplate]:
        stmt = (
            select(ServiceTemplate)
            .where(ServiceTemplate.is_purchasable.is_(True), ServiceTemplate.price.is_not(None))
            .order_by(ServiceTemplate.name)
        )
        result = await session.execute(stmt)
        return result.scalars().all()
