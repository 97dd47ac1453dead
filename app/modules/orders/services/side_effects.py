# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/side_effects.py

Resultados tipados del motor de órdenes.

Las notificaciones y los pasos best-effort (agregados de cliente, métricas,
factura) nunca lanzan hacia el llamador: su resultado se registra en un
SideEffectReport que viaja junto al LifecycleResult principal.

Autor: Agency Hub
Fecha: 2026-09-05
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from app.modules.orders.enums import OrderStatus

LifecycleStatus = Literal["processed", "ignored", "duplicate"]


@dataclass(frozen=True)
class NotificationOutcome:
    """Resultado de un envío de correo (uno por intento)."""

    kind: str
    to: str
    success: bool
    error: Optional[str] = None
    skipped: bool = False


@dataclass(frozen=True)
class StepOutcome:
    """Resultado de un paso best-effort que no es una notificación."""

    name: str
    success: bool
    error: Optional[str] = None


@dataclass
class SideEffectReport:
    notifications: list[NotificationOutcome] = field(default_factory=list)
    steps: list[StepOutcome] = field(default_factory=list)

    def record_notification(self, outcome: NotificationOutcome) -> None:
        self.notifications.append(outcome)

    def record_step(self, name: str, success: bool, error: Optional[str] = None) -> None:
        self.steps.append(StepOutcome(name=name, success=success, error=error))

    def extend(self, other: "SideEffectReport") -> None:
        self.notifications.extend(other.notifications)
        self.steps.extend(other.steps)

    @property
    def notification_kinds(self) -> list[str]:
        return [n.kind for n in self.notifications]

    @property
    def failed_notifications(self) -> list[NotificationOutcome]:
        return [n for n in self.notifications if not n.success and not n.skipped]

    @property
    def failed_steps(self) -> list[StepOutcome]:
        return [s for s in self.steps if not s.success]


@dataclass
class LifecycleResult:
    """Resultado principal de un handler del ciclo de vida."""

    status: LifecycleStatus
    event_type: str = ""
    order_id: Optional[str] = None
    order_status: Optional[OrderStatus] = None
    detail: Optional[str] = None
    side_effects: SideEffectReport = field(default_factory=SideEffectReport)

    @classmethod
    def ignored(cls, event_type: str, detail: str, order_id: Optional[str] = None) -> "LifecycleResult":
        return cls(status="ignored", event_type=event_type, order_id=order_id, detail=detail)

    @classmethod
    def duplicate(cls, event_type: str, detail: str, order_id: Optional[str] = None) -> "LifecycleResult":
        return cls(status="duplicate", event_type=event_type, order_id=order_id, detail=detail)


__all__ = [
    "LifecycleStatus",
    "NotificationOutcome",
    "StepOutcome",
    "SideEffectReport",
    "LifecycleResult",
]
