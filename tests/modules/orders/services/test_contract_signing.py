# -*- coding: utf-8 -*-
"""
Tests de ContractService.sign: flujo feliz, matriz de errores (sin
escrituras), firma única y órdenes fuera de AWAITING_CONTRACT.
"""

import pytest
from sqlalchemy import update

from app.modules.orders.enums import OrderStatus
from app.modules.orders.errors import (
    ClientNotFoundError,
    ContractAlreadySignedError,
    ContractOrderNotFoundError,
    NoContractRequiredError,
    OrderNotAwaitingContractError,
)
from app.modules.orders.models import Order, OrderTimeline, Service
from app.modules.orders.repositories import ContractRepository, OrderRepository
from app.modules.orders.schemas import SignContractRequest
from app.modules.orders.utils import utcnow

pytestmark = pytest.mark.anyio


def _payload(**overrides) -> SignContractRequest:
    data = {
        "signatureData": "data:image/png;base64,AAAA",
        "fullName": "Ada Lovelace",
        "email": "ada@example.com",
        "userAgent": "pytest-agent",
    }
    data.update(overrides)
    return SignContractRequest.model_validate(data)


async def _contract_order(factory, two_tasks):
    client = await factory.client()
    template = await factory.template(
        name="Retainer",
        requires_contract=True,
        contract_template="Terms and conditions",
        default_tasks=two_tasks,
    )
    return await factory.paid_contract_order(client, template)


async def test_sign_records_signature_and_provisions(
    db_session, factory, two_tasks, contract_service, snapshot, email_sender
):
    order = await _contract_order(factory, two_tasks)

    result = await contract_service.sign(
        db_session, user_id="user-1", order_id=order.id, payload=_payload(), ip_address="203.0.113.9"
    )

    assert result.provisioned is True
    stored = await snapshot.order(order.id)
    assert stored.status == OrderStatus.COMPLETED
    assert stored.completed_at is not None

    contract = stored.contract
    assert contract.signed_at is not None
    assert contract.signed_by_name == "Ada Lovelace"
    assert contract.signed_by_email == "ada@example.com"
    assert contract.ip_address == "203.0.113.9"
    assert contract.user_agent == "pytest-agent"
    assert contract.signature_data["data"] == "data:image/png;base64,AAAA"
    assert "timestamp" in contract.signature_data

    assert await snapshot.timeline_titles(order.id) == ["Contract signed", "Services activated"]

    services = await snapshot.services(order.id)
    assert [s.name for s in services] == ["Retainer"]
    assert [t.name for t in await snapshot.tasks(order.id)] == ["Kickoff call", "Draft deliverable"]
    assert (await snapshot.invoice(order.id)) is not None

    metrics = await snapshot.metrics_today()
    assert metrics.contracts_signed == 1

    subjects = email_sender.subjects()
    assert "Contract Signed - Retainer" in subjects
    assert any(s.startswith("Invoice INV-") for s in subjects)
    assert "Service Activated - Retainer" in subjects


async def test_sign_timeline_description_names_signer(db_session, factory, two_tasks, contract_service, snapshot):
    order = await _contract_order(factory, two_tasks)

    await contract_service.sign(
        db_session, user_id="user-1", order_id=order.id, payload=_payload(), ip_address="unknown"
    )

    entries = [e for e in (await snapshot.order(order.id)).timeline if e.title == "Contract signed"]
    assert entries[0].description == "Service agreement signed by Ada Lovelace"


async def test_sign_without_client_record_is_not_found(db_session, factory, two_tasks, contract_service, snapshot):
    order = await _contract_order(factory, two_tasks)

    with pytest.raises(ClientNotFoundError) as exc_info:
        await contract_service.sign(
            db_session, user_id="someone-else", order_id=order.id, payload=_payload(), ip_address="unknown"
        )

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Client not found"
    assert (await snapshot.order(order.id)).contract.signed_at is None


async def test_sign_order_of_other_client_is_not_found(db_session, factory, two_tasks, contract_service, snapshot):
    order = await _contract_order(factory, two_tasks)
    await factory.client(user_id="user-2", email="other@example.com")

    with pytest.raises(ContractOrderNotFoundError) as exc_info:
        await contract_service.sign(
            db_session, user_id="user-2", order_id=order.id, payload=_payload(), ip_address="unknown"
        )

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Order not found"
    assert await snapshot.count(OrderTimeline) == 0


async def test_sign_order_without_contract_is_rejected(db_session, factory, contract_service):
    client = await factory.client()
    template = await factory.template()
    order = await factory.order(client, [template])

    with pytest.raises(NoContractRequiredError) as exc_info:
        await contract_service.sign(
            db_session, user_id="user-1", order_id=order.id, payload=_payload(), ip_address="unknown"
        )

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "No contract required for this order"


async def test_second_signature_is_rejected_without_side_effects(
    db_session, factory, two_tasks, contract_service, snapshot, email_sender
):
    order = await _contract_order(factory, two_tasks)
    await contract_service.sign(
        db_session, user_id="user-1", order_id=order.id, payload=_payload(), ip_address="unknown"
    )
    sent_before = len(email_sender.sent)

    with pytest.raises(ContractAlreadySignedError) as exc_info:
        await contract_service.sign(
            db_session,
            user_id="user-1",
            order_id=order.id,
            payload=_payload(fullName="Someone Else"),
            ip_address="unknown",
        )

    assert exc_info.value.message == "Contract already signed"
    assert len(email_sender.sent) == sent_before
    stored = await snapshot.order(order.id)
    assert stored.contract.signed_by_name == "Ada Lovelace"
    assert await snapshot.count(Service, Service.order_id == order.id) == 1
    assert (await snapshot.metrics_today()).contracts_signed == 1


async def test_lost_signing_race_reports_already_signed(
    db_session, factory, two_tasks, contract_service, snapshot, monkeypatch
):
    order = await _contract_order(factory, two_tasks)
    order_id = order.id

    async def _other_request_signed_first(self, session, contract_id, **kwargs):
        return False

    monkeypatch.setattr(ContractRepository, "sign_if_unsigned", _other_request_signed_first)

    with pytest.raises(ContractAlreadySignedError):
        await contract_service.sign(
            db_session, user_id="user-1", order_id=order_id, payload=_payload(), ip_address="unknown"
        )

    assert await snapshot.count(OrderTimeline) == 0
    assert (await snapshot.order(order_id)).status == OrderStatus.AWAITING_CONTRACT


async def test_sign_on_completed_order_is_rejected_without_writes(
    db_session, factory, two_tasks, contract_service, snapshot
):
    order = await _contract_order(factory, two_tasks)
    async with snapshot.session_factory() as session:
        await session.execute(
            update(Order).where(Order.id == order.id).values(status=OrderStatus.COMPLETED, completed_at=utcnow())
        )
        await session.commit()

    with pytest.raises(OrderNotAwaitingContractError) as exc_info:
        await contract_service.sign(
            db_session, user_id="user-1", order_id=order.id, payload=_payload(), ip_address="unknown"
        )

    assert exc_info.value.status_code == 400
    assert (await snapshot.order(order.id)).contract.signed_at is None
    assert await snapshot.count(Service, Service.order_id == order.id) == 0


async def test_sign_after_full_refund_keeps_order_refunded(
    db_session, factory, two_tasks, contract_service, lifecycle, events, snapshot, email_sender
):
    client = await factory.client()
    template = await factory.template(
        name="Retainer",
        price=25000,
        requires_contract=True,
        contract_template="Terms and conditions",
        default_tasks=two_tasks,
    )
    order = await factory.paid_contract_order(client, template)
    await lifecycle.handle_event(
        db_session, events.refund("pi_contract", amount=25000, amount_refunded=25000)
    )
    sent_before = len(email_sender.sent)

    with pytest.raises(OrderNotAwaitingContractError):
        await contract_service.sign(
            db_session, user_id="user-1", order_id=order.id, payload=_payload(), ip_address="unknown"
        )

    stored = await snapshot.order(order.id)
    assert stored.status == OrderStatus.REFUNDED
    assert stored.completed_at is None
    assert stored.contract.signed_at is None
    assert await snapshot.count(Service, Service.order_id == order.id) == 0
    assert await snapshot.invoice(order.id) is None
    metrics = await snapshot.metrics_today()
    assert metrics is None or metrics.contracts_signed == 0
    assert len(email_sender.sent) == sent_before


async def test_completion_claim_skips_terminal_orders(db_session, factory, two_tasks, snapshot):
    order_id = (await _contract_order(factory, two_tasks)).id
    repo = OrderRepository()

    for terminal in (OrderStatus.REFUNDED, OrderStatus.CANCELLED):
        async with snapshot.session_factory() as session:
            await session.execute(update(Order).where(Order.id == order_id).values(status=terminal))
            await session.commit()

        assert await repo.claim_completion(db_session, order_id, utcnow()) is False
        await db_session.rollback()

    assert (await snapshot.order(order_id)).status == OrderStatus.CANCELLED
