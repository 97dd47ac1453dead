# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/timeline_status_enum.py

Estados registrados en la bitácora (timeline) de una orden.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from enum import StrEnum


class TimelineStatus(StrEnum):
    ORDER_CREATED = "ORDER_CREATED"
    PROCESSING = "PROCESSING"
    AWAITING_CONTRACT = "AWAITING_CONTRACT"
    CONTRACT_SIGNED = "CONTRACT_SIGNED"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    PARTIAL_REFUND = "PARTIAL_REFUND"


__all__ = ["TimelineStatus"]
