# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/client_models.py

Modelo ORM para la tabla clients.

Los agregados (lifetime_value, total_orders, first/last_order_date) son
derivados: se recalculan con una agregación completa sobre orders tras cada
evento de pago o reembolso, nunca se incrementan.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List, Optional
from uuid import uuid4

from sqlalchemy import BigInteger, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base
from app.modules.orders.utils import utcnow

if TYPE_CHECKING:
    from .order_models import Order


class Client(Base):
    """Cliente de la agencia (dueño de órdenes y servicios)."""

    __tablename__ = "clients"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))

    user_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        nullable=True,
        unique=True,
        index=True,
        doc="Identidad de login (claim `sub` del JWT) asociada al cliente.",
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    company: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Agregados derivados (centavos / conteos)
    lifetime_value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    total_orders: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    first_order_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    last_order_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    orders: Mapped[List["Order"]] = relationship(
        "Order",
        back_populates="client",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Client id={self.id} email={self.email}>"


__all__ = ["Client"]
