# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/order_service.py

Creación y lectura de órdenes del cliente.

Al crear, cada OrderItem copia del template el nombre (store_title o name),
el precio unitario y el texto de contrato: es un snapshot que no sigue
ediciones posteriores del catálogo.

Autor: Agency Hub
Fecha: 2026-09-06
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.orders.enums import OrderStatus, PaymentStatus, TimelineStatus
from app.modules.orders.errors import ClientNotFoundError, OrderNotFoundError, OrderValidationError
from app.modules.orders.models import Order, OrderItem
from app.modules.orders.repositories import ClientRepository, OrderRepository, ServiceTemplateRepository
from app.modules.orders.schemas import CreateOrderRequest

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(
        self,
        order_repo: Optional[OrderRepository] = None,
        client_repo: Optional[ClientRepository] = None,
        template_repo: Optional[ServiceTemplateRepository] = None,
    ):
        self.order_repo = order_repo or OrderRepository()
        self.client_repo = client_repo or ClientRepository()
        self.template_repo = template_repo or ServiceTemplateRepository()

    async def create_order(self, session: AsyncSession, *, user_id: str, request: CreateOrderRequest) -> Order:
        """
        Crea una orden PENDING con snapshot de precios.

        Raises:
            ClientNotFoundError: el usuario no tiene registro de cliente
            OrderValidationError: template inexistente, no vendible o sin precio
        """
        client = await self.client_repo.get_by_user_id(session, user_id)
        if client is None:
            raise ClientNotFoundError()

        templates = await self.template_repo.get_many(
            session, (item.service_template_id for item in request.items)
        )

        items = []
        total = 0
        for position, requested in enumerate(request.items):
            template = templates.get(requested.service_template_id)
            if template is None or not template.is_purchasable:
                raise OrderValidationError("Some services are not available for purchase")
            if template.price is None:
                raise OrderValidationError(f"Service template {template.name} does not have a price set")

            line_total = template.price * requested.quantity
            total += line_total
            items.append(
                OrderItem(
                    position=position,
                    service_template_id=template.id,
                    service_name=template.store_title or template.name,
                    quantity=requested.quantity,
                    unit_price=template.price,
                    total=line_total,
                    requires_contract=template.requires_contract,
                    contract_template=template.contract_template if template.requires_contract else None,
                )
            )

        order = Order(
            client_id=client.id,
            status=OrderStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            total=total,
            items=items,
        )
        session.add(order)
        await session.flush()

        self.order_repo.add_timeline(
            session,
            order.id,
            TimelineStatus.ORDER_CREATED,
            "Order Created",
            "Order created and awaiting payment",
        )
        await session.commit()

        logger.info("Order created: order_id=%s client_id=%s total=%s items=%d", order.id, client.id, total, len(items))
        return order

    async def get_client_order(self, session: AsyncSession, *, user_id: str, order_id: str) -> Order:
        """
        Raises:
            ClientNotFoundError / OrderNotFoundError
        """
        client = await self.client_repo.get_by_user_id(session, user_id)
        if client is None:
            raise ClientNotFoundError()
        order = await self.order_repo.get_for_client(session, order_id, client.id)
        if order is None:
            raise OrderNotFoundError()
        return order


__all__ = ["OrderService"]
