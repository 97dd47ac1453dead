# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/contract_repository.py

Repositorio de service_contracts.

La firma es un UPDATE condicional (WHERE signed_at IS NULL): dos envíos
concurrentes no pueden firmar ambos.

Autor: Agency Hub
Fecha: 2026-09-04
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.orders.models import ServiceContract


class ContractRepository(BaseRepository[ServiceContract]):
    def __init__(self) -> None:
        super().__init__(ServiceContract)

    async def get_by_order_id(self, session: AsyncSession, order_id: str) -> Optional[ServiceContract]:
        stmt = (
            select(ServiceContract)
            .where(ServiceContract.order_id == order_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def sign_if_unsigned(
        self,
        session: AsyncSession,
        contract_id: str,
        *,
        signed_at: datetime,
        signature_data: dict[str, Any],
        signed_by_name: str,
        signed_by_email: str,
        ip_address: str,
        user_agent: Optional[str],
    ) -> bool:
        """
        Returns:
            True si esta llamada firmó el contrato; False si ya estaba firmado.
        """
        stmt = (
            update(ServiceContract)
            .where(ServiceContract.id == contract_id, ServiceContract.signed_at.is_(None))
            .values(
                signed_at=signed_at,
                signature_data=signature_data,
                signed_by_name=signed_by_name,
                signed_by_email=signed_by_email,
                ip_address=ip_address,
                user_agent=user_agent,
            )
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount == 1
