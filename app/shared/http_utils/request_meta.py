# -*- coding: utf-8 -*-
"""
backend/app/shared/http_utils/request_meta.py

Helpers para extraer metadatos de request (IP, User-Agent) detrás del
proxy del despliegue.

La IP registrada en auditoría (p.ej. firma de contratos) sale de:
    1. X-Forwarded-For (primer salto, cliente original)
    2. X-Real-IP (patrón nginx)
    3. "unknown"

Autor: Agency Hub
Fecha: 2026-09-07
"""
from __future__ import annotations

from typing import Optional

from starlette.requests import Request

UNKNOWN_IP = "unknown"


def get_client_ip(request: Request) -> str:
    """
    Extrae la IP del cliente a partir de los headers del proxy.

    Returns:
        IP del cliente como string, o "unknown" si no se puede determinar
    """
    xff = request.headers.get("x-forwarded-for")
    if xff:
        # X-Forwarded-For: "client, proxy1, proxy2"
        client_ip = xff.split(",")[0].strip()
        if client_ip:
            return client_ip

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return UNKNOWN_IP


def get_user_agent(request: Request) -> Optional[str]:
    ua = request.headers.get("user-agent")
    return ua.strip() if ua else None


def get_request_meta(request: Request) -> dict:
    """Dict con ip_address y user_agent para auditoría."""
    return {
        "ip_address": get_client_ip(request),
        "user_agent": get_user_agent(request),
    }


__all__ = [
    "UNKNOWN_IP",
    "get_client_ip",
    "get_user_agent",
    "get_request_meta",
]
