# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/catalog_models.py

Catálogo de servicios (service_templates). Entrada de solo lectura para el
motor de órdenes: nunca se modifica durante el ciclo de vida.

`default_tasks` es una lista JSON de objetos
`{"name": str, "description"?: str, "priority"?: str, "order"?: int}`.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import BigInteger, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, JSONType
from app.modules.orders.utils import utcnow


class ServiceTemplate(Base):
    __tablename__ = "service_templates"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False, default="GENERAL")
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    price: Mapped[Optional[int]] = mapped_column(
        BigInteger,
        nullable=True,
        doc="Precio en centavos; NULL = no vendible en tienda.",
    )
    store_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_purchasable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    requires_contract: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    contract_template: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    default_tasks: Mapped[Optional[list[dict[str, Any]]]] = mapped_column(JSONType, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        return f"<ServiceTemplate id={self.id} name={self.name!r}>"


__all__ = ["ServiceTemplate"]
