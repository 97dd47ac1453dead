# -*- coding: utf-8 -*-
"""
Tests de plan_provisioning (puro) y del claim idempotente de
ProvisioningService.
"""

import pytest

from app.modules.orders.enums import OrderStatus, TaskPriority, TaskStatus
from app.modules.orders.models import Invoice, Order, OrderItem, Service, ServiceTemplate, Task
from app.modules.orders.repositories import OrderRepository
from app.modules.orders.services import ProvisioningService, plan_provisioning
from app.modules.orders.services.invoice_service import InvoiceService
from app.modules.orders.services.notification_service import OrderNotifier


def _order(*templates: ServiceTemplate) -> Order:
    items = [
        OrderItem(
            id=f"item-{i}",
            position=i,
            service_template_id=f"tpl-{i}",
            service_name=t.store_title or t.name,
            quantity=1,
            unit_price=100,
            total=100,
            template=t,
        )
        for i, t in enumerate(templates)
    ]
    return Order(id="order-1", client_id="client-1", total=100 * len(items), items=items)


async def _loaded(session, order: Order) -> Order:
    """Recarga el agregado completo (items + templates), como hace el motor."""
    return await OrderRepository().get_by_id(session, order.id, refresh=True)


def test_plan_orders_tasks_by_declared_order_then_position():
    template = ServiceTemplate(
        name="Website",
        default_tasks=[
            {"name": "Launch", "order": 5},
            {"name": "Design", "order": 1},
            {"name": "Content"},
            {"name": "Kickoff", "order": 0},
        ],
    )

    plan = plan_provisioning(_order(template))

    tasks = plan.services[0].tasks
    # "Content" sin order usa su posición (2)
    assert [t.name for t in tasks] == ["Kickoff", "Design", "Content", "Launch"]
    assert [t.sort_order for t in tasks] == [0, 1, 2, 3]
    assert all(t.status == TaskStatus.TO_DO for t in tasks)


def test_plan_parses_priorities_with_medium_default():
    template = ServiceTemplate(
        name="SEO",
        default_tasks=[
            {"name": "a", "priority": "high"},
            {"name": "b", "priority": "URGENT"},
            {"name": "c", "priority": "whenever"},
            {"name": "d"},
        ],
    )

    tasks = plan_provisioning(_order(template)).services[0].tasks

    assert [t.priority for t in tasks] == [
        TaskPriority.HIGH,
        TaskPriority.URGENT,
        TaskPriority.MEDIUM,
        TaskPriority.MEDIUM,
    ]


def test_plan_skips_malformed_tasks_and_non_list_defaults():
    broken = ServiceTemplate(name="Broken", default_tasks={"name": "not a list"})
    partial = ServiceTemplate(name="Partial", default_tasks=[{"description": "no name"}, "text", {"name": "Ok"}])

    plan = plan_provisioning(_order(broken, partial))

    assert plan.service_names == ["Broken", "Partial"]
    assert plan.services[0].tasks == ()
    assert [t.name for t in plan.services[1].tasks] == ["Ok"]
    assert plan.task_count == 1


def test_plan_uses_item_snapshot_name_and_links_items():
    template = ServiceTemplate(name="Internal name", store_title="Store Title")

    plan = plan_provisioning(_order(template))

    service = plan.services[0]
    assert service.name == "Store Title"
    assert service.order_item_id == "item-0"
    assert service.template_id == "tpl-0"
    assert service.client_id == "client-1"
    assert plan.order_id == "order-1"


@pytest.mark.anyio
async def test_provision_twice_creates_services_once(
    db_session, factory, two_tasks, email_sender, orders_settings, snapshot
):
    client = await factory.client()
    template = await factory.template(default_tasks=two_tasks)
    order = await _loaded(db_session, await factory.order(client, [template], status=OrderStatus.PROCESSING))
    service = ProvisioningService(OrderNotifier(email_sender, orders_settings), InvoiceService("INV"))

    first = await service.provision(db_session, order)
    order_id = order.id
    service_id = first.services[0].id
    second = await service.provision(db_session, first.order)

    assert first.provisioned is True
    assert first.invoice is not None
    assert second.provisioned is False
    assert second.order.status == OrderStatus.COMPLETED
    assert await snapshot.count(Service) == 1
    assert await snapshot.count(Task) == 2
    assert await snapshot.count(Invoice) == 1

    stored = await snapshot.order(order_id)
    assert stored.items[0].service_id == service_id


@pytest.mark.anyio
async def test_invoice_failure_does_not_undo_provisioning(
    db_session, factory, email_sender, orders_settings, snapshot, monkeypatch
):
    client = await factory.client()
    template = await factory.template()
    order = await _loaded(db_session, await factory.order(client, [template], status=OrderStatus.PROCESSING))
    invoices = InvoiceService("INV")

    async def _broken(session, order):
        raise RuntimeError("numbering unavailable")

    monkeypatch.setattr(invoices, "get_or_create_for_order", _broken)
    service = ProvisioningService(OrderNotifier(email_sender, orders_settings), invoices)

    outcome = await service.provision(db_session, order)

    assert outcome.provisioned is True
    assert outcome.invoice is None
    assert [s.name for s in outcome.side_effects.failed_steps] == ["invoice"]
    assert (await snapshot.order(order.id)).status == OrderStatus.COMPLETED
    assert await snapshot.count(Invoice) == 0
    assert email_sender.subjects() == ["Service Activated - SEO Audit"]
