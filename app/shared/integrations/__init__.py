# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/__init__.py

Clientes de integración con servicios externos (correo).
"""

from .email_sender import EmailSender, EmailSendResult, IEmailSender, StubEmailSender

__all__ = [
    "EmailSender",
    "EmailSendResult",
    "IEmailSender",
    "StubEmailSender",
]
