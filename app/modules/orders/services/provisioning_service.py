# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/provisioning_service.py

Rutina de aprovisionamiento compartida por el webhook de checkout (rama
sin contrato) y por la firma de contrato.

1. plan_provisioning(order): función pura sobre el agregado cargado que
   devuelve las escrituras a realizar (un ServicePlan por item, con sus
   TaskPlan en el orden declarado por el template).
2. ProvisioningService.provision(session, order):
   - claim atómico de la orden (completed_at IS NULL → COMPLETED);
     si otro llamador ya la completó, no hace nada;
   - aplica el plan + entrada "Services activated" en un solo commit;
   - factura (best-effort);
   - correo de factura y de servicio activado (best-effort, aislados).

Autor: Agency Hub
Fecha: 2026-09-05
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.orders.metrics import orders_provisioned_total
from app.modules.orders.enums import ServiceStatus, TaskPriority, TaskStatus, TimelineStatus
from app.modules.orders.models import Invoice, Order, Service, Task
from app.modules.orders.repositories import OrderRepository
from app.modules.orders.utils import utcnow
from .invoice_service import InvoiceService
from .notification_service import OrderNotifier
from .side_effects import SideEffectReport

logger = logging.getLogger(__name__)

SERVICES_ACTIVATED_TITLE = "Services activated"
SERVICES_ACTIVATED_DESCRIPTION = "All services have been provisioned and are now active"


# ---------------------------------------------------------------------------
# Plan (puro)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class TaskPlan:
    name: str
    description: Optional[str]
    priority: TaskPriority
    sort_order: int
    status: TaskStatus = TaskStatus.TO_DO


@dataclass(frozen=True)
class ServicePlan:
    order_item_id: str
    template_id: str
    client_id: str
    name: str
    tasks: tuple[TaskPlan, ...] = ()


@dataclass(frozen=True)
class ProvisioningPlan:
    order_id: str
    client_id: str
    services: tuple[ServicePlan, ...] = ()

    @property
    def service_names(self) -> list[str]:
        return [s.name for s in self.services]

    @property
    def task_count(self) -> int:
        return sum(len(s.tasks) for s in self.services)


def _plan_tasks(default_tasks: Any) -> tuple[TaskPlan, ...]:
    if not isinstance(default_tasks, list):
        return ()

    entries = []
    for position, raw in enumerate(default_tasks):
        if not isinstance(raw, dict) or not raw.get("name"):
            continue
        declared = raw.get("order")
        rank = declared if isinstance(declared, int) and not isinstance(declared, bool) else position
        entries.append((rank, position, raw))

    entries.sort(key=lambda e: (e[0], e[1]))
    return tuple(
        TaskPlan(
            name=str(raw["name"]),
            description=raw.get("description"),
            priority=TaskPriority.parse(raw.get("priority")),
            sort_order=index,
        )
        for index, (_, _, raw) in enumerate(entries)
    )


def plan_provisioning(order: Order) -> ProvisioningPlan:
    """Calcula servicios y tareas a crear para la orden (sin I/O)."""
    services = []
    for item in order.items:
        template = item.template
        services.append(
            ServicePlan(
                order_item_id=item.id,
                template_id=item.service_template_id,
                client_id=order.client_id,
                name=item.service_name,
                tasks=_plan_tasks(template.default_tasks if template is not None else None),
            )
        )
    return ProvisioningPlan(order_id=order.id, client_id=order.client_id, services=tuple(services))


# ---------------------------------------------------------------------------
# Ejecución
# ---------------------------------------------------------------------------
@dataclass
class ProvisioningOutcome:
    provisioned: bool
    order: Order
    plan: Optional[ProvisioningPlan] = None
    services: list[Service] = field(default_factory=list)
    invoice: Optional[Invoice] = None
    side_effects: SideEffectReport = field(default_factory=SideEffectReport)


class ProvisioningService:
    def __init__(
        self,
        notifier: OrderNotifier,
        invoice_service: InvoiceService,
        order_repo: Optional[OrderRepository] = None,
    ):
        self.notifier = notifier
        self.invoice_service = invoice_service
        self.order_repo = order_repo or OrderRepository()

    async def provision(self, session: AsyncSession, order: Order) -> ProvisioningOutcome:
        order_id = order.id
        now = utcnow()

        claimed = await self.order_repo.claim_completion(session, order_id, now)
        if not claimed:
            await session.rollback()
            logger.info("Order already provisioned or not completable, skipping: order_id=%s", order_id)
            current = await self.order_repo.get_by_id(session, order_id, refresh=True)
            return ProvisioningOutcome(provisioned=False, order=current or order)

        plan = plan_provisioning(order)
        items_by_id = {item.id: item for item in order.items}

        services = []
        for service_plan in plan.services:
            service = Service(
                order_id=order_id,
                template_id=service_plan.template_id,
                client_id=service_plan.client_id,
                name=service_plan.name,
                status=ServiceStatus.TO_DO,
                tasks=[
                    Task(
                        name=t.name,
                        description=t.description,
                        status=t.status,
                        priority=t.priority,
                        sort_order=t.sort_order,
                    )
                    for t in service_plan.tasks
                ],
            )
            services.append(service)
        session.add_all(services)
        await session.flush()

        for service_plan, service in zip(plan.services, services):
            items_by_id[service_plan.order_item_id].service_id = service.id

        self.order_repo.add_timeline(
            session,
            order_id,
            TimelineStatus.COMPLETED,
            SERVICES_ACTIVATED_TITLE,
            SERVICES_ACTIVATED_DESCRIPTION,
        )
        await session.commit()
        orders_provisioned_total.inc()

        logger.info(
            "Order provisioned: order_id=%s services=%d tasks=%d",
            order_id,
            len(services),
            plan.task_count,
        )

        order = await self.order_repo.get_by_id(session, order_id, refresh=True)
        outcome = ProvisioningOutcome(provisioned=True, order=order, plan=plan, services=services)

        # Factura (best-effort)
        try:
            invoice, _ = await self.invoice_service.get_or_create_for_order(session, order)
            await session.commit()
            outcome.invoice = invoice
            outcome.side_effects.record_step("invoice", True)
        except Exception as exc:
            logger.exception("Invoice generation failed: order_id=%s", order_id)
            await session.rollback()
            outcome.side_effects.record_step("invoice", False, str(exc))
            order = await self.order_repo.get_by_id(session, order_id, refresh=True)
            outcome.order = order

        # Correos (best-effort, independientes)
        client = order.client
        if outcome.invoice is not None:
            try:
                outcome.side_effects.record_notification(
                    await self.notifier.invoice_generated(outcome.invoice, client)
                )
            except Exception:
                logger.exception("Invoice email failed: order_id=%s", order_id)
        try:
            outcome.side_effects.record_notification(
                await self.notifier.service_provisioned(order, client, plan.service_names)
            )
        except Exception:
            logger.exception("Service provisioned email failed: order_id=%s", order_id)

        return outcome


__all__ = [
    "TaskPlan",
    "ServicePlan",
    "ProvisioningPlan",
    "ProvisioningOutcome",
    "plan_provisioning",
    "ProvisioningService",
    "SERVICES_ACTIVATED_TITLE",
]
