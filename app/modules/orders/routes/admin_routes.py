# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/admin_routes.py

Endpoints administrativos de órdenes.

- POST /api/admin/orders/{order_id}/refund        → emite reembolso en Stripe
- POST /api/admin/orders/{order_id}/invoice/send  → reenvía la factura
- GET  /api/admin/analytics/sales?days=N          → SalesMetrics por día

El estado de la orden tras un reembolso lo actualiza el webhook
charge.refunded, no este endpoint.

Requiere: require_admin (JWT con role=ADMIN)

Autor: Agency Hub
Fecha: 2026-09-07
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database import get_async_session
from app.modules.auth import CurrentUser, require_admin
from app.modules.orders.dependencies import get_admin_service
from app.modules.orders.errors import OrdersError
from app.modules.orders.schemas import InvoiceSendResponse, RefundRequest, RefundResponse
from app.modules.orders.services import OrderAdminService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin", "orders"])


@router.post(
    "/orders/{order_id}/refund",
    response_model=RefundResponse,
    response_model_by_alias=True,
)
async def refund_order(
    order_id: str,
    body: RefundRequest,
    admin: CurrentUser = Depends(require_admin),
    session: AsyncSession = Depends(get_async_session),
    service: OrderAdminService = Depends(get_admin_service),
) -> RefundResponse:
    try:
        refund = await service.request_refund(
            session,
            order_id=order_id,
            request=body,
            admin_id=admin.user_id,
        )
    except OrdersError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return RefundResponse(**refund)


@router.post(
    "/orders/{order_id}/invoice/send",
    response_model=InvoiceSendResponse,
    response_model_by_alias=True,
    dependencies=[Depends(require_admin)],
)
async def send_invoice(
    order_id: str,
    session: AsyncSession = Depends(get_async_session),
    service: OrderAdminService = Depends(get_admin_service),
) -> InvoiceSendResponse:
    try:
        invoice_number, outcome = await service.send_invoice(session, order_id=order_id)
    except OrdersError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return InvoiceSendResponse(success=outcome.success, invoice_number=invoice_number, error=outcome.error)


@router.get("/analytics/sales", dependencies=[Depends(require_admin)])
async def sales_analytics(
    days: int = Query(default=30, ge=1, le=365),
    session: AsyncSession = Depends(get_async_session),
    service: OrderAdminService = Depends(get_admin_service),
) -> dict[str, Any]:
    return await service.sales_analytics(session, days=days)


__all__ = ["router"]
