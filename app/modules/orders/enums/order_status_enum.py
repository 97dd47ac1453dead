# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/order_status_enum.py

Estados de cumplimiento (fulfillment) de una orden.

PENDING → PROCESSING → {AWAITING_CONTRACT → COMPLETED} | COMPLETED,
con CANCELLED/REFUNDED alcanzables desde cualquier estado posterior a
PROCESSING. Es un eje independiente de PaymentStatus.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from enum import StrEnum


class OrderStatus(StrEnum):
    """Progreso de cumplimiento de la orden."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    AWAITING_CONTRACT = "AWAITING_CONTRACT"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.COMPLETED, OrderStatus.CANCELLED, OrderStatus.REFUNDED)


__all__ = ["OrderStatus"]
