# backend/tests/modules/orders/conftest.py
# -*- coding: utf-8 -*-
"""
Fixtures del módulo Orders.

- OrderFactory: clientes, templates de catálogo y órdenes con items
  snapshot (igual que OrderService.create_order)
- Builders de eventos Stripe (dicts planos, como llegan tras verificar)
- Servicios ya cableados con FakeEmailSender + OrdersSettings de prueba
"""

from typing import Any, Optional

import pytest
from sqlalchemy import func, select

from app.modules.orders.enums import OrderStatus, PaymentStatus, TimelineStatus
from app.modules.orders.models import (
    Client,
    Invoice,
    Order,
    OrderItem,
    OrderTimeline,
    SalesMetrics,
    Service,
    ServiceContract,
    ServiceTemplate,
    Task,
)
from app.modules.orders.repositories import OrderRepository
from app.modules.orders.services import ContractService, OrderAdminService, OrderLifecycleEngine
from app.modules.orders.utils import utc_day

TWO_TASKS = [
    {"name": "Kickoff call", "description": "Meet the client", "priority": "HIGH", "order": 0},
    {"name": "Draft deliverable", "priority": "medium", "order": 1},
]


class OrderFactory:
    def __init__(self, session):
        self.session = session

    async def client(
        self,
        *,
        user_id: Optional[str] = "user-1",
        name: str = "Ada Client",
        email: str = "ada@example.com",
    ) -> Client:
        client = Client(user_id=user_id, name=name, email=email)
        self.session.add(client)
        await self.session.commit()
        return client

    async def template(
        self,
        *,
        name: str = "SEO Audit",
        price: Optional[int] = 250000,
        requires_contract: bool = False,
        contract_template: Optional[str] = None,
        default_tasks: Optional[list[dict[str, Any]]] = None,
        store_title: Optional[str] = None,
        is_purchasable: bool = True,
    ) -> ServiceTemplate:
        template = ServiceTemplate(
            name=name,
            price=price,
            requires_contract=requires_contract,
            contract_template=contract_template,
            default_tasks=default_tasks,
            store_title=store_title,
            is_purchasable=is_purchasable,
        )
        self.session.add(template)
        await self.session.commit()
        return template

    async def order(
        self,
        client: Client,
        templates: list[ServiceTemplate],
        *,
        quantity: int = 1,
        status: OrderStatus = OrderStatus.PENDING,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
        payment_intent: Optional[str] = None,
        order_id: Optional[str] = None,
    ) -> Order:
        items = [
            OrderItem(
                position=position,
                service_template_id=t.id,
                service_name=t.store_title or t.name,
                quantity=quantity,
                unit_price=t.price or 0,
                total=(t.price or 0) * quantity,
                requires_contract=t.requires_contract,
                contract_template=t.contract_template if t.requires_contract else None,
            )
            for position, t in enumerate(templates)
        ]
        kwargs = {"id": order_id} if order_id else {}
        order = Order(
            client_id=client.id,
            status=status,
            payment_status=payment_status,
            total=sum(i.total for i in items),
            stripe_payment_intent_id=payment_intent,
            items=items,
            **kwargs,
        )
        self.session.add(order)
        await self.session.commit()
        return order

    async def paid_contract_order(self, client: Client, template: ServiceTemplate, *, order_id: Optional[str] = None) -> Order:
        """Orden ya pagada esperando firma (estado tras checkout con contrato)."""
        order = await self.order(
            client,
            [template],
            status=OrderStatus.AWAITING_CONTRACT,
            payment_status=PaymentStatus.SUCCEEDED,
            payment_intent="pi_contract",
            order_id=order_id,
        )
        self.session.add(ServiceContract(order_id=order.id, template_content=template.contract_template or ""))
        await self.session.commit()
        return order


@pytest.fixture
def factory(db_session) -> OrderFactory:
    return OrderFactory(db_session)


@pytest.fixture
def two_tasks() -> list[dict[str, Any]]:
    return [dict(task) for task in TWO_TASKS]


# -----------------------------------------------------------------------------
# Eventos Stripe
# -----------------------------------------------------------------------------
def checkout_event(order_id: str, *, event_id: str = "evt_checkout_1", payment_intent: str = "pi_123") -> dict:
    return {
        "id": event_id,
        "type": "checkout.session.completed",
        "data": {
            "object": {
                "id": "cs_test_1",
                "client_reference_id": order_id,
                "payment_intent": payment_intent,
                "payment_method_types": ["card"],
            }
        },
    }


def refund_event(
    payment_intent: str,
    *,
    amount: int,
    amount_refunded: int,
    event_id: str = "evt_refund_1",
) -> dict:
    return {
        "id": event_id,
        "type": "charge.refunded",
        "data": {
            "object": {
                "id": "ch_1",
                "payment_intent": payment_intent,
                "amount": amount,
                "amount_refunded": amount_refunded,
            }
        },
    }


def payment_failed_event(payment_intent: str, *, event_id: str = "evt_failed_1", message: Optional[str] = None) -> dict:
    obj: dict[str, Any] = {"id": payment_intent}
    if message:
        obj["last_payment_error"] = {"message": message}
    return {"id": event_id, "type": "payment_intent.payment_failed", "data": {"object": obj}}


@pytest.fixture
def events():
    class _Events:
        checkout = staticmethod(checkout_event)
        refund = staticmethod(refund_event)
        payment_failed = staticmethod(payment_failed_event)

    return _Events


# -----------------------------------------------------------------------------
# Servicios cableados
# -----------------------------------------------------------------------------
@pytest.fixture
def lifecycle(email_sender, orders_settings) -> OrderLifecycleEngine:
    return OrderLifecycleEngine(email_sender, orders_settings)


@pytest.fixture
def contract_service(email_sender, orders_settings) -> ContractService:
    return ContractService(email_sender, orders_settings)


@pytest.fixture
def admin_service(email_sender, orders_settings) -> OrderAdminService:
    return OrderAdminService(email_sender, orders_settings)


# -----------------------------------------------------------------------------
# Lecturas para aserciones (sesión nueva, sin identity map previo)
# -----------------------------------------------------------------------------
class Snapshot:
    def __init__(self, session_factory):
        self.session_factory = session_factory

    async def order(self, order_id: str) -> Order:
        async with self.session_factory() as session:
            return await OrderRepository().get_by_id(session, order_id)

    async def count(self, model, *where) -> int:
        async with self.session_factory() as session:
            stmt = select(func.count()).select_from(model)
            for clause in where:
                stmt = stmt.where(clause)
            return (await session.execute(stmt)).scalar_one()

    async def services(self, order_id: str) -> list[Service]:
        async with self.session_factory() as session:
            rows = await session.execute(select(Service).where(Service.order_id == order_id))
            return list(rows.scalars().all())

    async def tasks(self, order_id: str) -> list[Task]:
        async with self.session_factory() as session:
            rows = await session.execute(
                select(Task).join(Service).where(Service.order_id == order_id).order_by(Task.sort_order)
            )
            return list(rows.scalars().all())

    async def invoice(self, order_id: str) -> Optional[Invoice]:
        async with self.session_factory() as session:
            rows = await session.execute(select(Invoice).where(Invoice.order_id == order_id))
            return rows.scalars().first()

    async def metrics_today(self) -> Optional[SalesMetrics]:
        return await self.metrics_for(utc_day())

    async def metrics_for(self, day) -> Optional[SalesMetrics]:
        async with self.session_factory() as session:
            rows = await session.execute(select(SalesMetrics).where(SalesMetrics.date == day))
            return rows.scalars().first()

    async def timeline_titles(self, order_id: str) -> list[str]:
        async with self.session_factory() as session:
            rows = await session.execute(
                select(OrderTimeline.title).where(OrderTimeline.order_id == order_id).order_by(OrderTimeline.id)
            )
            return list(rows.scalars().all())

    async def timeline(self, order_id: str, status: TimelineStatus) -> list[OrderTimeline]:
        async with self.session_factory() as session:
            rows = await session.execute(
                select(OrderTimeline)
                .where(OrderTimeline.order_id == order_id, OrderTimeline.status == status)
                .order_by(OrderTimeline.id)
            )
            return list(rows.scalars().all())

    async def client(self, client_id: str) -> Client:
        async with self.session_factory() as session:
            return await session.get(Client, client_id)


@pytest.fixture
def snapshot(session_factory) -> Snapshot:
    return Snapshot(session_factory)
