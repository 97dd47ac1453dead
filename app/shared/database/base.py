# -*- coding: utf-8 -*-
"""
backend/app/shared/database/base.py

Base declarativa y convención de nombres para modelos ORM.

Este módulo proporciona:
- Base: clase base declarativa de SQLAlchemy
- NAMING_CONVENTION: convención de nombres para constraints
- as_str_enum: helper genérico para mapear enums Python a columnas VARCHAR
  con CHECK (portables entre PostgreSQL y SQLite)

Autor: Agency Hub
Fecha: 2026-09-02
"""

from __future__ import annotations

from enum import Enum
from typing import Type

from sqlalchemy import JSON, Enum as SAEnum, MetaData
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# ===== NAMING CONVENTION =====
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# ===== BASE DECLARATIVA =====
class Base(DeclarativeBase):
    """
    Base declarativa para todos los modelos ORM de Agency Hub.
    Incluye convención de nombres para constraints.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ===== HELPER GENÉRICO PARA ENUMS =====
def as_str_enum(
    enum_cls: Type[Enum],
    name: str | None = None,
    length: int = 32,
) -> SAEnum:
    """
    Devuelve un tipo Enum de SQLAlchemy no nativo basado en un Enum de Python.

    Uso típico:

        class Order(Base):
            status: Mapped[OrderStatus] = mapped_column(
                as_str_enum(OrderStatus, name="order_status"),
                nullable=False,
            )

    - Persiste el `.value` del enum (no el nombre del miembro).
    - native_enum=False: VARCHAR + CHECK, sin CREATE TYPE en PostgreSQL.
    """
    enum_name = name or enum_cls.__name__.lower()

    def _values(_: object) -> list[str]:
        return [e.value for e in enum_cls]  # type: ignore[arg-type]

    return SAEnum(
        enum_cls,
        name=enum_name,
        native_enum=False,
        length=length,
        values_callable=_values,
        validate_strings=True,
    )


# JSONB en PostgreSQL, JSON genérico en SQLite (tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


__all__ = ["Base", "NAMING_CONVENTION", "as_str_enum", "JSONType"]

# Fin del archivo backend/app/shared/database/base.py
