# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/invoice_status_enum.py

Autor: Agency Hub
Fecha: 2026-09-03
"""

from enum import StrEnum


class InvoiceStatus(StrEnum):
    DRAFT = "DRAFT"
    PAID = "PAID"
    VOID = "VOID"


__all__ = ["InvoiceStatus"]
