# -*- coding: utf-8 -*-
"""Tests de numeración y get-or-create de facturas."""

from datetime import datetime, timezone

import pytest

from app.modules.orders.enums import InvoiceStatus, OrderStatus
from app.modules.orders.services import InvoiceService, generate_invoice_number


def test_invoice_number_uses_year_and_last_six_epoch_millis():
    now = datetime(2026, 3, 1, tzinfo=timezone.utc)

    assert generate_invoice_number("INV", now) == "INV-2026-200000"


def test_invoice_number_honors_prefix():
    now = datetime(2025, 12, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)

    number = generate_invoice_number("AH", now)

    assert number.startswith("AH-2025-")
    assert len(number.rsplit("-", 1)[1]) == 6


@pytest.mark.anyio
async def test_get_or_create_is_idempotent(db_session, factory):
    client = await factory.client()
    template = await factory.template(price=12345)
    order = await factory.order(client, [template], status=OrderStatus.COMPLETED)
    service = InvoiceService("INV")

    invoice, created = await service.get_or_create_for_order(db_session, order)
    await db_session.commit()
    again, created_again = await service.get_or_create_for_order(db_session, order)

    assert created is True
    assert created_again is False
    assert again.id == invoice.id
    assert invoice.status == InvoiceStatus.PAID
    assert (invoice.subtotal, invoice.tax, invoice.total) == (12345, 0, 12345)
    assert invoice.invoice_number.startswith("INV-")
