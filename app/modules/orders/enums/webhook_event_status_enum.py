# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/webhook_event_status_enum.py

Estados del ledger de idempotencia de webhooks (claim-then-act).

- processing: la entrega reclamó el evento y está actuando
- processed: efectos aplicados; redeliveries se ignoran
- failed: la entrega falló; un reintento del gateway puede reclamarlo

Autor: Agency Hub
Fecha: 2026-09-03
"""

from enum import StrEnum


class WebhookEventStatus(StrEnum):
    PROCESSING = "processing"
    PROCESSED = "processed"
    FAILED = "failed"


__all__ = ["WebhookEventStatus"]
