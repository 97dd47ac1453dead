# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/routes/test_admin_order_routes.py

Tests HTTP de los endpoints administrativos (reembolso, reenvío de
factura, analytics). stripe.Refund.create se sustituye con monkeypatch.
"""

from types import SimpleNamespace

import pytest
import stripe

from app.modules.orders.enums import OrderStatus, PaymentStatus

pytestmark = pytest.mark.anyio


async def _paid_order(factory, *, price=10000):
    client = await factory.client()
    template = await factory.template(price=price)
    return await factory.order(
        client,
        [template],
        status=OrderStatus.COMPLETED,
        payment_status=PaymentStatus.SUCCEEDED,
        payment_intent="pi_admin",
    )


async def test_non_admin_is_forbidden(async_client, client_headers):
    response = await async_client.get("/api/admin/analytics/sales", headers=client_headers)

    assert response.status_code == 403
    assert response.json()["detail"]["error"] == "forbidden"


async def test_full_refund_calls_stripe_and_stores_metadata(
    async_client, factory, admin_headers, snapshot, monkeypatch
):
    order = await _paid_order(factory)
    calls = []

    def _fake_create(**params):
        calls.append(params)
        return SimpleNamespace(id="re_123", status="succeeded")

    monkeypatch.setattr(stripe.Refund, "create", _fake_create)

    response = await async_client.post(
        f"/api/admin/orders/{order.id}/refund",
        json={"type": "full", "reason": "Client cancelled"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "refundId": "re_123",
        "amount": 10000,
        "status": "succeeded",
        "type": "full",
    }
    assert calls[0]["payment_intent"] == "pi_admin"
    assert calls[0]["amount"] == 10000
    assert calls[0]["metadata"]["adminId"] == "admin-1"

    stored = await snapshot.order(order.id)
    # El webhook charge.refunded es quien cambia el estado
    assert stored.status == OrderStatus.COMPLETED
    assert stored.refund_metadata["id"] == "re_123"
    assert stored.refund_metadata["processedBy"] == "admin-1"


async def test_partial_refund_above_total_is_400(async_client, factory, admin_headers, monkeypatch):
    order = await _paid_order(factory)
    monkeypatch.setattr(stripe.Refund, "create", lambda **params: pytest.fail("must not call Stripe"))

    response = await async_client.post(
        f"/api/admin/orders/{order.id}/refund",
        json={"type": "partial", "amount": 20000, "reason": "Goodwill"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Refund amount exceeds order total"


async def test_partial_refund_without_amount_is_422(async_client, factory, admin_headers):
    order = await _paid_order(factory)

    response = await async_client.post(
        f"/api/admin/orders/{order.id}/refund",
        json={"type": "partial", "reason": "Goodwill"},
        headers=admin_headers,
    )

    assert response.status_code == 422


async def test_stripe_error_is_502(async_client, factory, admin_headers, monkeypatch):
    order = await _paid_order(factory)

    def _declined(**params):
        raise stripe.InvalidRequestError("Charge already refunded", param="payment_intent")

    monkeypatch.setattr(stripe.Refund, "create", _declined)

    response = await async_client.post(
        f"/api/admin/orders/{order.id}/refund",
        json={"type": "full", "reason": "Duplicate"},
        headers=admin_headers,
    )

    assert response.status_code == 502
    assert "Stripe refund failed" in response.json()["detail"]


async def test_refund_unknown_order_is_404(async_client, admin_headers):
    response = await async_client.post(
        "/api/admin/orders/missing/refund",
        json={"type": "full", "reason": "x"},
        headers=admin_headers,
    )

    assert response.status_code == 404


async def test_send_invoice_without_invoice_is_404(async_client, factory, admin_headers):
    order = await _paid_order(factory)

    response = await async_client.post(f"/api/admin/orders/{order.id}/invoice/send", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Invoice not found"


async def test_send_invoice_emails_client(async_client, factory, admin_headers, lifecycle, db_session, events, email_sender):
    client = await factory.client()
    order = await factory.order(client, [await factory.template()])
    await lifecycle.handle_event(db_session, events.checkout(order.id))
    email_sender.sent.clear()

    response = await async_client.post(f"/api/admin/orders/{order.id}/invoice/send", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["invoiceNumber"].startswith("INV-")
    assert email_sender.subjects() == [f"Invoice {body['invoiceNumber']} Available"]


async def test_sales_analytics_reports_todays_checkout(
    async_client, factory, admin_headers, lifecycle, db_session, events
):
    client = await factory.client()
    order = await factory.order(client, [await factory.template(price=250000)])
    await lifecycle.handle_event(db_session, events.checkout(order.id))

    response = await async_client.get("/api/admin/analytics/sales?days=7", headers=admin_headers)

    assert response.status_code == 200
    totals = response.json()["totals"]
    assert totals["revenue"] == 250000
    assert totals["orderCount"] == 1
    assert totals["newCustomers"] == 1


async def test_sales_analytics_rejects_out_of_range_days(async_client, admin_headers):
    response = await async_client.get("/api/admin/analytics/sales?days=0", headers=admin_headers)

    assert response.status_code == 422
