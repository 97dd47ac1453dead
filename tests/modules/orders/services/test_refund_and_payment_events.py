# -*- coding: utf-8 -*-
"""
Tests de charge.refunded, payment_intent.payment_failed,
payment_intent.succeeded y tipos no soportados.

Regla de reembolso: el delta es amount_refunded (acumulado del gateway)
menos lo ya registrado en la orden; un delta <= 0 es reentrega.
"""

import pytest

from app.modules.orders.enums import OrderStatus, PaymentStatus, TimelineStatus
from app.modules.orders.models import OrderTimeline
from app.modules.orders.utils import utc_day

pytestmark = pytest.mark.anyio


async def _completed_order(db_session, factory, lifecycle, events, *, price=10000, payment_intent="pi_refund"):
    client = await factory.client()
    template = await factory.template(price=price)
    order = await factory.order(client, [template])
    await lifecycle.handle_event(
        db_session,
        events.checkout(order.id, event_id=f"evt_checkout_{order.id}", payment_intent=payment_intent),
    )
    return order


async def test_full_refund_marks_order_refunded(db_session, factory, lifecycle, events, snapshot, email_sender):
    order = await _completed_order(db_session, factory, lifecycle, events)

    result = await lifecycle.handle_event(
        db_session, events.refund("pi_refund", amount=10000, amount_refunded=10000)
    )

    assert result.status == "processed"
    stored = await snapshot.order(order.id)
    assert stored.status == OrderStatus.REFUNDED
    assert stored.payment_status == PaymentStatus.REFUNDED
    assert stored.amount_refunded == 10000

    entries = await snapshot.timeline(order.id, TimelineStatus.REFUNDED)
    assert len(entries) == 1
    assert entries[0].title == "Order refunded"
    assert entries[0].description == "$100.00 has been refunded"

    metrics = await snapshot.metrics_for(utc_day(stored.created_at))
    assert metrics.refund_amount == 10000
    assert "Refund Processed - Order #" + order.id in email_sender.subjects()


async def test_partial_refund_keeps_status_and_records_delta(db_session, factory, lifecycle, events, snapshot):
    order = await _completed_order(db_session, factory, lifecycle, events)

    await lifecycle.handle_event(db_session, events.refund("pi_refund", amount=10000, amount_refunded=4000))

    stored = await snapshot.order(order.id)
    assert stored.status == OrderStatus.COMPLETED
    assert stored.payment_status == PaymentStatus.SUCCEEDED
    assert stored.amount_refunded == 4000

    entries = await snapshot.timeline(order.id, TimelineStatus.PARTIAL_REFUND)
    assert [e.title for e in entries] == ["Partial refund issued"]
    assert entries[0].description == "$40.00 has been refunded"

    metrics = await snapshot.metrics_for(utc_day(stored.created_at))
    assert metrics.refund_amount == 4000


async def test_successive_partial_refunds_count_only_the_delta(db_session, factory, lifecycle, events, snapshot):
    order = await _completed_order(db_session, factory, lifecycle, events)

    await lifecycle.handle_event(
        db_session, events.refund("pi_refund", amount=10000, amount_refunded=4000, event_id="evt_r1")
    )
    await lifecycle.handle_event(
        db_session, events.refund("pi_refund", amount=10000, amount_refunded=10000, event_id="evt_r2")
    )

    stored = await snapshot.order(order.id)
    assert stored.status == OrderStatus.REFUNDED
    assert stored.amount_refunded == 10000

    metrics = await snapshot.metrics_for(utc_day(stored.created_at))
    assert metrics.refund_amount == 10000

    final = await snapshot.timeline(order.id, TimelineStatus.REFUNDED)
    assert final[0].description == "$60.00 has been refunded"


async def test_refund_replayed_under_new_event_id_is_a_duplicate(db_session, factory, lifecycle, events, snapshot):
    order = await _completed_order(db_session, factory, lifecycle, events)

    await lifecycle.handle_event(
        db_session, events.refund("pi_refund", amount=10000, amount_refunded=4000, event_id="evt_r1")
    )
    replay = await lifecycle.handle_event(
        db_session, events.refund("pi_refund", amount=10000, amount_refunded=4000, event_id="evt_r1_bis")
    )

    assert replay.status == "duplicate"
    stored = await snapshot.order(order.id)
    metrics = await snapshot.metrics_for(utc_day(stored.created_at))
    assert metrics.refund_amount == 4000
    assert await snapshot.count(OrderTimeline, OrderTimeline.status == TimelineStatus.PARTIAL_REFUND) == 1


async def test_full_refund_lowers_client_lifetime_value(db_session, factory, lifecycle, events, snapshot):
    order = await _completed_order(db_session, factory, lifecycle, events)

    await lifecycle.handle_event(db_session, events.refund("pi_refund", amount=10000, amount_refunded=10000))

    client = await snapshot.client(order.client_id)
    assert client.lifetime_value == 0
    assert client.total_orders == 0


async def test_refund_for_unknown_payment_intent_is_ignored(db_session, lifecycle, events):
    result = await lifecycle.handle_event(db_session, events.refund("pi_nobody", amount=100, amount_refunded=100))

    assert result.status == "ignored"


async def test_payment_failed_marks_payment_status(db_session, factory, lifecycle, events, snapshot):
    client = await factory.client()
    template = await factory.template()
    order = await factory.order(client, [template], payment_intent="pi_fail")

    await lifecycle.handle_event(db_session, events.payment_failed("pi_fail", message="Card declined"))

    stored = await snapshot.order(order.id)
    assert stored.payment_status == PaymentStatus.FAILED
    assert stored.status == OrderStatus.PENDING
    entries = await snapshot.timeline(order.id, TimelineStatus.FAILED)
    assert [(e.title, e.description) for e in entries] == [("Payment failed", "Card declined")]


async def test_payment_failed_uses_default_message(db_session, factory, lifecycle, events, snapshot):
    client = await factory.client()
    template = await factory.template()
    order = await factory.order(client, [template], payment_intent="pi_fail")

    await lifecycle.handle_event(db_session, events.payment_failed("pi_fail"))

    entries = await snapshot.timeline(order.id, TimelineStatus.FAILED)
    assert entries[0].description == "Payment processing failed"


async def test_payment_succeeded_is_logged_only(db_session, lifecycle, snapshot):
    event = {"id": "evt_pi_ok", "type": "payment_intent.succeeded", "data": {"object": {"id": "pi_ok"}}}

    result = await lifecycle.handle_event(db_session, event)

    assert result.status == "processed"
    assert result.order_id is None
    assert await snapshot.count(OrderTimeline) == 0


async def test_unhandled_event_type_is_ignored(db_session, lifecycle):
    event = {"id": "evt_other", "type": "customer.created", "data": {"object": {}}}

    result = await lifecycle.handle_event(db_session, event)

    assert result.status == "ignored"
    assert "customer.created" not in lifecycle.supported_events
