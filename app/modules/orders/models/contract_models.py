# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/contract_models.py

Contrato de servicio: uno por orden que requiere firma.

`signed_at` es el marcador de firma; pasa de NULL a un valor exactamente una
vez (UPDATE condicional WHERE signed_at IS NULL).

Autor: Agency Hub
Fecha: 2026-09-03
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base, JSONType
from app.modules.orders.utils import utcnow

if TYPE_CHECKING:
    from .order_models import Order


class ServiceContract(Base):
    __tablename__ = "service_contracts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))

    order_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    template_content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    signed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    signature_data: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSONType,
        nullable=True,
        doc="{'data': <firma>, 'timestamp': <ISO 8601>}",
    )
    signed_by_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    signed_by_email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    ip_address: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    order: Mapped["Order"] = relationship("Order", back_populates="contract")

    @property
    def is_signed(self) -> bool:
        return self.signed_at is not None


__all__ = ["ServiceContract"]
