# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/order_models.py

Modelos ORM del agregado Order: orders, order_items y order_timeline.

Notas:
- status (cumplimiento) y payment_status (dinero) son ejes independientes.
- OrderItem es un snapshot inmutable del template al momento de la compra
  (nombre, precio y texto de contrato); no sigue ediciones posteriores.
- OrderTimeline es append-only: las entradas nunca se editan ni se borran.
- Relaciones con lazy="selectin" para que el agregado quede cargado en
  contexto async sin lazy-loads implícitos.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, List, Optional
from uuid import uuid4

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base, JSONType, as_str_enum
from app.modules.orders.enums import OrderStatus, PaymentStatus, TimelineStatus
from app.modules.orders.utils import utcnow

if TYPE_CHECKING:
    from .client_models import Client
    from .catalog_models import ServiceTemplate
    from .contract_models import ServiceContract
    from .invoice_models import Invoice


class Order(Base):
    """Una orden = un checkout."""

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))

    client_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status: Mapped[OrderStatus] = mapped_column(
        as_str_enum(OrderStatus, name="order_status"),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True,
    )

    payment_status: Mapped[PaymentStatus] = mapped_column(
        as_str_enum(PaymentStatus, name="order_payment_status"),
        nullable=False,
        default=PaymentStatus.PENDING,
    )

    total: Mapped[int] = mapped_column(BigInteger, nullable=False, doc="Total en centavos.")

    stripe_payment_intent_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Marcador de aprovisionamiento: se asigna una sola vez (claim atómico).",
    )

    amount_refunded: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
        doc="Acumulado reembolsado según el gateway (centavos).",
    )
    refund_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    client: Mapped["Client"] = relationship("Client", back_populates="orders", lazy="selectin")

    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )

    timeline: Mapped[List["OrderTimeline"]] = relationship(
        "OrderTimeline",
        back_populates="order",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="OrderTimeline.id",
    )

    contract: Mapped[Optional["ServiceContract"]] = relationship(
        "ServiceContract",
        back_populates="order",
        lazy="selectin",
        uselist=False,
    )

    invoice: Mapped[Optional["Invoice"]] = relationship(
        "Invoice",
        back_populates="order",
        lazy="selectin",
        uselist=False,
    )

    __table_args__ = (
        Index("ix_orders_stripe_payment_intent_id", "stripe_payment_intent_id"),
        Index("ix_orders_client_id_payment_status", "client_id", "payment_status"),
    )

    def __repr__(self) -> str:
        return f"<Order id={self.id} status={self.status} payment_status={self.payment_status}>"


class OrderItem(Base):
    """Línea de la orden (snapshot del template al comprar)."""

    __tablename__ = "order_items"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))

    order_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_template_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("service_templates.id"),
        nullable=False,
    )
    # Se rellena al aprovisionar
    service_id: Mapped[Optional[str]] = mapped_column(
        String(64),
        ForeignKey("services.id", ondelete="SET NULL"),
        nullable=True,
    )

    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    service_name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    unit_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    total: Mapped[int] = mapped_column(BigInteger, nullable=False)

    requires_contract: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    contract_template: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    order: Mapped["Order"] = relationship("Order", back_populates="items")
    template: Mapped["ServiceTemplate"] = relationship("ServiceTemplate", lazy="selectin")


class OrderTimeline(Base):
    """Entrada de la bitácora de la orden."""

    __tablename__ = "order_timeline"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    order_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[TimelineStatus] = mapped_column(
        as_str_enum(TimelineStatus, name="order_timeline_status"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    order: Mapped["Order"] = relationship("Order", back_populates="timeline")


__all__ = ["Order", "OrderItem", "OrderTimeline"]
