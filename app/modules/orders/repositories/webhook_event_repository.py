# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/repositories/webhook_event_repository.py

Ledger de idempotencia (processed_webhook_events), patrón claim-then-act.

- claim(): INSERT del event_id; un IntegrityError significa que otra entrega
  ya lo reclamó. Un claim `failed`, o uno `processing` abandonado más de
  `stale_after_seconds`, se vuelve a reclamar con un UPDATE condicional.
- mark_processed() / mark_failed(): cierran el claim.

Autor: Agency Hub
Fecha: 2026-09-04
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy import and_, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.orders.enums import WebhookEventStatus
from app.modules.orders.models import ProcessedWebhookEvent
from app.modules.orders.utils import utcnow

logger = logging.getLogger(__name__)

# Un claim `processing` más viejo que esto se considera abandonado (crash)
DEFAULT_STALE_AFTER_SECONDS = 600


class WebhookEventRepository(BaseRepository[ProcessedWebhookEvent]):
    def __init__(self) -> None:
        super().__init__(ProcessedWebhookEvent)

    async def get_by_event_id(self, session: AsyncSession, event_id: str) -> Optional[ProcessedWebhookEvent]:
        stmt = (
            select(ProcessedWebhookEvent)
            .where(ProcessedWebhookEvent.event_id == event_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def claim(
        self,
        session: AsyncSession,
        *,
        event_id: str,
        event_type: str,
        provider: str = "stripe",
        stale_after_seconds: int = DEFAULT_STALE_AFTER_SECONDS,
    ) -> bool:
        """
        Intenta reclamar el evento para esta entrega.

        Debe llamarse con la sesión limpia (el IntegrityError hace rollback).

        Returns:
            True si esta entrega debe actuar; False si es duplicada.
        """
        try:
            await self.create(
                session,
                event_id=event_id,
                event_type=event_type,
                provider=provider,
                status=WebhookEventStatus.PROCESSING,
                attempts=1,
            )
            return True
        except IntegrityError:
            await session.rollback()

        existing = await self.get_by_event_id(session, event_id)
        if existing is None:
            raise RuntimeError(f"webhook event claim vanished: {event_id}")

        now = utcnow()
        stmt = (
            update(ProcessedWebhookEvent)
            .where(
                ProcessedWebhookEvent.id == existing.id,
                or_(
                    ProcessedWebhookEvent.status == WebhookEventStatus.FAILED,
                    and_(
                        ProcessedWebhookEvent.status == WebhookEventStatus.PROCESSING,
                        ProcessedWebhookEvent.claimed_at < now - timedelta(seconds=stale_after_seconds),
                    ),
                ),
            )
            .values(
                status=WebhookEventStatus.PROCESSING,
                attempts=ProcessedWebhookEvent.attempts + 1,
                last_error=None,
                claimed_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        if result.rowcount == 1:
            logger.info(
                "Re-claimed webhook event: event_id=%s previous_status=%s attempt=%s",
                event_id,
                existing.status,
                existing.attempts + 1,
            )
            return True

        logger.info("Duplicate webhook event: event_id=%s status=%s", event_id, existing.status)
        return False

    async def mark_processed(self, session: AsyncSession, event_id: str) -> None:
        await session.execute(
            update(ProcessedWebhookEvent)
            .where(ProcessedWebhookEvent.event_id == event_id)
            .values(status=WebhookEventStatus.PROCESSED, processed_at=utcnow(), last_error=None)
            .execution_options(synchronize_session=False)
        )

    async def mark_failed(self, session: AsyncSession, event_id: str, error: str) -> None:
        await session.execute(
            update(ProcessedWebhookEvent)
            .where(ProcessedWebhookEvent.event_id == event_id)
            .values(status=WebhookEventStatus.FAILED, last_error=error[:2000])
            .execution_options(synchronize_session=False)
        )
