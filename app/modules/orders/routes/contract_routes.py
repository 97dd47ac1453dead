# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/routes/contract_routes.py

Firma de contrato por el cliente dueño de la orden.

Endpoint:
- POST /api/contracts/{order_id}/sign

Body: {signatureData, fullName, email, userAgent?}
Errores: 401 sin sesión, 404 sin cliente u orden, 400 sin contrato,
contrato ya firmado o body inválido.

Autor: Agency Hub
Fecha: 2026-09-07
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database import get_async_session
from app.shared.http_utils import get_client_ip, get_user_agent
from app.modules.auth import CurrentUser, get_current_user
from app.modules.orders.dependencies import get_contract_service
from app.modules.orders.errors import ContractSigningError
from app.modules.orders.schemas import SignContractRequest, SignContractResponse
from app.modules.orders.services import ContractService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contracts", tags=["orders:contracts"])


async def _parse_sign_body(request: Request) -> SignContractRequest:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON body") from e

    try:
        return SignContractRequest.model_validate(body)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid request data", "details": e.errors(include_url=False, include_context=False)},
        ) from e


@router.post("/{order_id}/sign", response_model=SignContractResponse)
async def sign_contract(
    order_id: str,
    request: Request,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_async_session),
    service: ContractService = Depends(get_contract_service),
) -> SignContractResponse:
    payload = await _parse_sign_body(request)
    if not payload.user_agent:
        payload.user_agent = get_user_agent(request)

    try:
        await service.sign(
            session,
            user_id=user.user_id,
            order_id=order_id,
            payload=payload,
            ip_address=get_client_ip(request),
        )
    except ContractSigningError as e:
        logger.info("Contract signing rejected: order_id=%s reason=%s", order_id, e.message)
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    return SignContractResponse()


__all__ = ["router"]
