# -*- coding: utf-8 -*-
"""
backend/tests/modules/orders/routes/test_contract_routes.py

Tests HTTP de POST /api/contracts/{order_id}/sign.
"""

import pytest

from app.modules.orders.enums import OrderStatus

pytestmark = pytest.mark.anyio

SIGN_BODY = {
    "signatureData": "data:image/png;base64,AAAA",
    "fullName": "Ada Lovelace",
    "email": "ada@example.com",
}


def _url(order_id: str) -> str:
    return f"/api/contracts/{order_id}/sign"


async def _awaiting_order(factory, two_tasks):
    client = await factory.client()
    template = await factory.template(
        name="Retainer", requires_contract=True, contract_template="Terms", default_tasks=two_tasks
    )
    return await factory.paid_contract_order(client, template)


async def test_sign_requires_authentication(async_client):
    response = await async_client.post(_url("any"), json=SIGN_BODY)

    assert response.status_code == 401


async def test_sign_without_client_record_is_404(async_client, auth_headers):
    response = await async_client.post(_url("any"), json=SIGN_BODY, headers=auth_headers("stranger"))

    assert response.status_code == 404
    assert response.json()["detail"] == "Client not found"


async def test_sign_unknown_order_is_404(async_client, factory, client_headers):
    await factory.client()

    response = await async_client.post(_url("missing"), json=SIGN_BODY, headers=client_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Order not found"


async def test_sign_order_without_contract_is_400(async_client, factory, client_headers):
    client = await factory.client()
    order = await factory.order(client, [await factory.template()])

    response = await async_client.post(_url(order.id), json=SIGN_BODY, headers=client_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "No contract required for this order"


async def test_malformed_json_is_400(async_client, factory, two_tasks, client_headers):
    order = await _awaiting_order(factory, two_tasks)

    response = await async_client.post(
        _url(order.id),
        content=b"{not json",
        headers={**client_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid JSON body"


async def test_invalid_fields_are_400_with_details(async_client, factory, two_tasks, client_headers):
    order = await _awaiting_order(factory, two_tasks)

    response = await async_client.post(
        _url(order.id),
        json={"signatureData": "x", "fullName": "Ada", "email": "not-an-email"},
        headers=client_headers,
    )

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"] == "Invalid request data"
    assert any(err["loc"][-1] == "email" for err in detail["details"])


async def test_sign_succeeds_and_records_request_metadata(
    async_client, factory, two_tasks, client_headers, snapshot
):
    order = await _awaiting_order(factory, two_tasks)

    response = await async_client.post(
        _url(order.id),
        json=SIGN_BODY,
        headers={**client_headers, "X-Forwarded-For": "198.51.100.7, 10.0.0.1", "User-Agent": "browser/1.0"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Contract signed successfully"}

    stored = await snapshot.order(order.id)
    assert stored.status == OrderStatus.COMPLETED
    assert stored.contract.ip_address == "198.51.100.7"
    assert stored.contract.user_agent == "browser/1.0"

    second = await async_client.post(_url(order.id), json=SIGN_BODY, headers=client_headers)
    assert second.status_code == 400
    assert second.json()["detail"] == "Contract already signed"
