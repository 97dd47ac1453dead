# -*- coding: utf-8 -*-
"""
backend/app/shared/database/upsert.py

INSERT ... ON CONFLICT DO UPDATE portable entre PostgreSQL y SQLite.

Los contadores agregados (p. ej. métricas diarias) se incrementan con un
único statement atómico en lugar de leer-modificar-escribir.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


def _insert_for(session: AsyncSession):
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert
    if dialect == "sqlite":
        return sqlite_insert
    raise NotImplementedError(f"upsert no soportado para dialecto {dialect!r}")


async def upsert_increment(
    session: AsyncSession,
    model: Any,
    *,
    index_elements: Iterable[str],
    values: Mapping[str, Any],
    increments: Mapping[str, int],
) -> None:
    """
    Inserta una fila o incrementa columnas numéricas si ya existe.

    Args:
        session: Sesión async (no hace commit)
        model: Modelo ORM destino
        index_elements: Columnas del unique constraint en conflicto
        values: Valores de la clave (p. ej. {"date": date(...)})
        increments: {columna: delta}; en INSERT el delta es el valor inicial
    """
    insert = _insert_for(session)
    stmt = insert(model).values(**values, **increments)
    table = model.__table__
    stmt = stmt.on_conflict_do_update(
        index_elements=list(index_elements),
        set_={col: table.c[col] + stmt.excluded[col] for col in increments},
    )
    await session.execute(stmt)


__all__ = ["upsert_increment"]
