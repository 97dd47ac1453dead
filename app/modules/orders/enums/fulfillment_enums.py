# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/fulfillment_enums.py

Enums de servicios aprovisionados y sus tareas.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from enum import StrEnum


class ServiceStatus(StrEnum):
    TO_DO = "TO_DO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskStatus(StrEnum):
    TO_DO = "TO_DO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @classmethod
    def parse(cls, raw: object) -> "TaskPriority":
        """Normaliza la prioridad declarada en un template (default MEDIUM)."""
        if isinstance(raw, str) and raw.strip().upper() in cls.__members__:
            return cls[raw.strip().upper()]
        return cls.MEDIUM


__all__ = ["ServiceStatus", "TaskStatus", "TaskPriority"]
