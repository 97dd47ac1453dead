# -*- coding: utf-8 -*-
"""
backend/app/shared/database/repository.py

Repositorio base de los repositorios de órdenes.

Ningún método hace commit: el servicio que orquesta define la frontera
transaccional.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")  # modelo ORM


class BaseRepository(Generic[T]):
    def __init__(self, model: Type[T]):
        self.model = model

    async def get(self, session: AsyncSession, obj_id: Any) -> Optional[T]:
        return await session.get(self.model, obj_id)

    async def create(self, session: AsyncSession, **values: Any) -> T:
        """INSERT + flush; deja que el IntegrityError suba al llamador."""
        obj = self.model(**values)
        session.add(obj)
        await session.flush()
        return obj
