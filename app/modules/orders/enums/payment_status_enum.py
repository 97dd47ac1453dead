# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/payment_status_enum.py

Enum de estados del pago (movimiento de dinero) de una orden.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from enum import StrEnum


class PaymentStatus(StrEnum):
    """Estado del pago en el ciclo de vida con el proveedor."""

    PENDING = "PENDING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


__all__ = ["PaymentStatus"]
