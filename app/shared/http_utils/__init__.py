# -*- coding: utf-8 -*-
"""
backend/app/shared/http_utils/__init__.py

Helpers HTTP reutilizables.
"""

from app.shared.http_utils.request_meta import (
    UNKNOWN_IP,
    get_client_ip,
    get_user_agent,
    get_request_meta,
)

__all__ = [
    "UNKNOWN_IP",
    "get_client_ip",
    "get_user_agent",
    "get_request_meta",
]
