# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/invoice_models.py

Factura de una orden completada.

- order_id es UNIQUE: a lo sumo una factura por orden.
- invoice_number solo está indexado: el esquema prefijo-año-sufijo de
  timestamp no garantiza unicidad global.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import uuid4

from sqlalchemy import BigInteger, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base, as_str_enum
from app.modules.orders.enums import InvoiceStatus
from app.modules.orders.utils import utcnow

if TYPE_CHECKING:
    from .order_models import Order


class Invoice(Base):
    __tablename__ = "invoices"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))

    order_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    invoice_number: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    subtotal: Mapped[int] = mapped_column(BigInteger, nullable=False)
    tax: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    total: Mapped[int] = mapped_column(BigInteger, nullable=False)

    status: Mapped[InvoiceStatus] = mapped_column(
        as_str_enum(InvoiceStatus, name="invoice_status"),
        nullable=False,
        default=InvoiceStatus.PAID,
    )

    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    sent_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    order: Mapped["Order"] = relationship("Order", back_populates="invoice")


__all__ = ["Invoice"]
