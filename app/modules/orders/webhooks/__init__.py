# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/webhooks/__init__.py

Autor: Agency Hub
Fecha: 2026-09-07
"""

from .stripe_handler import (
    WebhookConfigurationError,
    WebhookSignatureError,
    handle_verified_event,
    verify_stripe_event,
)

__all__ = [
    "WebhookConfigurationError",
    "WebhookSignatureError",
    "handle_verified_event",
    "verify_stripe_event",
]
