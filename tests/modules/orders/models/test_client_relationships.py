# -*- coding: utf-8 -*-
"""Client.orders nunca dispara I/O implícito: los agregados van por repositorio."""

import pytest
from sqlalchemy.exc import InvalidRequestError

from app.modules.orders.models import Client


def test_client_orders_relationship_raises_on_access():
    assert Client.orders.property.lazy == "raise"


@pytest.mark.anyio
async def test_loaded_client_does_not_lazy_load_orders(factory):
    client = await factory.client()

    with pytest.raises(InvalidRequestError):
        _ = client.orders
