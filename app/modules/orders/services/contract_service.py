# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/contract_service.py

Firma de contratos de servicio por el cliente dueño de la orden.

Precondiciones (cada una es un error distinto y ninguna escribe):
1. existe un Client para el usuario autenticado     → 404
2. la orden pertenece a ese cliente                  → 404
3. la orden tiene contrato                           → 400
4. el contrato no está firmado                       → 400
5. la orden sigue en AWAITING_CONTRACT               → 400

La firma es un UPDATE condicional (signed_at IS NULL); si dos envíos
compiten, solo uno firma y el otro recibe "Contract already signed".
Tras firmar: entrada "Contract signed", correo de contrato firmado,
contracts_signed += 1 en el día de la firma y la rutina de
aprovisionamiento compartida.

Autor: Agency Hub
Fecha: 2026-09-06
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_orders import OrdersSettings
from app.shared.integrations.email_sender import IEmailSender
from app.modules.orders.enums import OrderStatus, TimelineStatus
from app.modules.orders.errors import (
    ClientNotFoundError,
    ContractAlreadySignedError,
    ContractOrderNotFoundError,
    NoContractRequiredError,
    OrderNotAwaitingContractError,
)
from app.modules.orders.models import Order
from app.modules.orders.repositories import ClientRepository, ContractRepository, OrderRepository
from app.modules.orders.schemas import SignContractRequest
from app.modules.orders.utils import utc_day, utcnow
from .invoice_service import InvoiceService
from .metrics_service import MetricsService
from .notification_service import OrderNotifier
from .provisioning_service import ProvisioningService
from .side_effects import SideEffectReport

logger = logging.getLogger(__name__)


@dataclass
class ContractSignResult:
    order: Order
    provisioned: bool
    side_effects: SideEffectReport = field(default_factory=SideEffectReport)


class ContractService:
    def __init__(
        self,
        email_sender: IEmailSender,
        settings: OrdersSettings,
        *,
        order_repo: Optional[OrderRepository] = None,
    ):
        self.order_repo = order_repo or OrderRepository()
        self.client_repo = ClientRepository()
        self.contract_repo = ContractRepository()
        self.notifier = OrderNotifier(email_sender, settings)
        self.metrics = MetricsService(order_repo=self.order_repo)
        self.provisioning = ProvisioningService(
            self.notifier,
            InvoiceService(settings.invoice_prefix),
            self.order_repo,
        )

    async def sign(
        self,
        session: AsyncSession,
        *,
        user_id: str,
        order_id: str,
        payload: SignContractRequest,
        ip_address: str,
    ) -> ContractSignResult:
        """
        Raises:
            ContractSigningError: precondición violada (sin escrituras)
        """
        client = await self.client_repo.get_by_user_id(session, user_id)
        if client is None:
            raise ClientNotFoundError()

        order = await self.order_repo.get_for_client(session, order_id, client.id)
        if order is None:
            raise ContractOrderNotFoundError()

        contract = order.contract
        if contract is None:
            raise NoContractRequiredError()
        if contract.signed_at is not None:
            raise ContractAlreadySignedError()
        if order.status != OrderStatus.AWAITING_CONTRACT:
            logger.info("Contract signing rejected: order_id=%s status=%s", order_id, order.status)
            raise OrderNotAwaitingContractError()

        now = utcnow()
        signed = await self.contract_repo.sign_if_unsigned(
            session,
            contract.id,
            signed_at=now,
            signature_data={"data": payload.signature_data, "timestamp": now.isoformat()},
            signed_by_name=payload.full_name,
            signed_by_email=str(payload.email),
            ip_address=ip_address,
            user_agent=payload.user_agent,
        )
        if not signed:
            await session.rollback()
            logger.info("Contract signing lost race: order_id=%s", order_id)
            raise ContractAlreadySignedError()

        self.order_repo.add_timeline(
            session,
            order_id,
            TimelineStatus.CONTRACT_SIGNED,
            "Contract signed",
            f"Service agreement signed by {payload.full_name}",
        )
        await session.commit()
        logger.info("Contract signed: order_id=%s client_id=%s ip=%s", order_id, client.id, ip_address)

        report = SideEffectReport()
        service_name = next(
            (item.service_name for item in order.items if item.requires_contract),
            order.items[0].service_name if order.items else "your service",
        )

        try:
            report.record_notification(await self.notifier.contract_signed(order, client, service_name))
        except Exception:
            logger.exception("Contract signed email failed: order_id=%s", order_id)

        try:
            await self.metrics.record_contract_signed(session, utc_day(now))
            await session.commit()
            report.record_step("contracts_signed_metric", True)
        except Exception as exc:
            logger.exception("contracts_signed metric failed: order_id=%s", order_id)
            await session.rollback()
            report.record_step("contracts_signed_metric", False, str(exc))

        order = await self.order_repo.get_by_id(session, order_id, refresh=True)
        outcome = await self.provisioning.provision(session, order)
        report.extend(outcome.side_effects)

        return ContractSignResult(order=outcome.order, provisioned=outcome.provisioned, side_effects=report)


__all__ = ["ContractService", "ContractSignResult"]
