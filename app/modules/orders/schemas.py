# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/schemas.py

Esquemas Pydantic v2 del módulo Orders.

Los cuerpos de request usan camelCase en JSON (alias) y snake_case en
Python; populate_by_name permite construirlos con cualquiera de los dos.

Autor: Agency Hub
Fecha: 2026-09-05
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel

from app.modules.orders.enums import OrderStatus, PaymentStatus, TimelineStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Firma de contrato
# ---------------------------------------------------------------------------
class SignContractRequest(_CamelModel):
    """Body de POST /api/contracts/{order_id}/sign."""

    signature_data: str
    full_name: str = Field(min_length=1)
    email: EmailStr
    user_agent: Optional[str] = None


class SignContractResponse(BaseModel):
    success: bool = True
    message: str = "Contract signed successfully"


# ---------------------------------------------------------------------------
# Creación de órdenes
# ---------------------------------------------------------------------------
class OrderItemRequest(_CamelModel):
    service_template_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class CreateOrderRequest(_CamelModel):
    items: list[OrderItemRequest] = Field(min_length=1)


class CreateOrderResponse(_CamelModel):
    order_id: str


# ---------------------------------------------------------------------------
# Lectura de órdenes
# ---------------------------------------------------------------------------
class OrderItemOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    service_template_id: str
    service_id: Optional[str] = None
    service_name: str
    quantity: int
    unit_price: int
    total: int


class TimelineEntryOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    status: TimelineStatus
    title: str
    description: Optional[str] = None
    created_at: datetime


class ContractOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    template_content: str
    signed_at: Optional[datetime] = None
    signed_by_name: Optional[str] = None


class InvoiceOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    invoice_number: str
    subtotal: int
    tax: int
    total: int
    issued_at: datetime
    sent_at: Optional[datetime] = None


class OrderOut(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    client_id: str
    status: OrderStatus
    payment_status: PaymentStatus
    total: int
    amount_refunded: int = 0
    paid_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    items: list[OrderItemOut] = []
    timeline: list[TimelineEntryOut] = []
    contract: Optional[ContractOut] = None
    invoice: Optional[InvoiceOut] = None


# ---------------------------------------------------------------------------
# Administración
# ---------------------------------------------------------------------------
class RefundRequest(_CamelModel):
    """Monto en centavos; requerido solo para reembolsos parciales."""

    type: Literal["full", "partial"]
    amount: Optional[int] = Field(default=None, gt=0)
    reason: str = Field(min_length=1)

    @model_validator(mode="after")
    def _partial_requires_amount(self) -> "RefundRequest":
        if self.type == "partial" and self.amount is None:
            raise ValueError("amount is required for partial refunds")
        return self


class RefundResponse(_CamelModel):
    success: bool = True
    refund_id: str
    amount: int
    status: Optional[str] = None
    type: Literal["full", "partial"]


class InvoiceSendResponse(_CamelModel):
    success: bool
    invoice_number: str
    error: Optional[str] = None


__all__ = [
    "SignContractRequest",
    "SignContractResponse",
    "OrderItemRequest",
    "CreateOrderRequest",
    "CreateOrderResponse",
    "OrderItemOut",
    "TimelineEntryOut",
    "ContractOut",
    "InvoiceOut",
    "OrderOut",
    "RefundRequest",
    "RefundResponse",
    "InvoiceSendResponse",
]
