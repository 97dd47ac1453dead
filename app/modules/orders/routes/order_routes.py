# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/order_routes.py

Endpoints de órdenes del cliente autenticado.

- POST /api/orders            → crea una orden PENDING con snapshot de precios
- GET  /api/orders/{order_id} → detalle (items, contrato, factura, timeline)

Autor: Agency Hub
Fecha: 2026-09-07
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database import get_async_session
from app.modules.auth import CurrentUser, get_current_user
from app.modules.orders.dependencies import get_order_service
from app.modules.orders.errors import OrdersError
from app.modules.orders.schemas import CreateOrderRequest, CreateOrderResponse, OrderOut
from app.modules.orders.services import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post(
    "",
    response_model=CreateOrderResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_order(
    body: CreateOrderRequest,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session),
    service: OrderService = Depends(get_order_service),
) -> CreateOrderResponse:
    try:
        order = await service.create_order(session, user_id=user.user_id, request=body)
    except OrdersError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return CreateOrderResponse(order_id=order.id)


@router.get("/{order_id}", response_model=OrderOut, response_model_by_alias=True)
async def get_order(
    order_id: str,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session),
    service: OrderService = Depends(get_order_service),
) -> OrderOut:
    try:
        order = await service.get_client_order(session, user_id=user.user_id, order_id=order_id)
    except OrdersError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return OrderOut.model_validate(order)


__all__ = ["router"]
