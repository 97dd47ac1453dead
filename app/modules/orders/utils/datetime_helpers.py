# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/utils/datetime_helpers.py

Utilidades de timestamps UTC y formateo de montos en centavos.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from datetime import date, datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Timestamp UTC actual (timezone-aware)."""
    return datetime.now(timezone.utc)


def utc_day(dt: Optional[datetime] = None) -> date:
    """
    Día calendario UTC de un timestamp (hoy si no se provee).

    SQLite devuelve datetimes naive; se interpretan como UTC.

    Examples:
        >>> utc_day(datetime(2026, 1, 31, 23, 59, tzinfo=timezone.utc))
        datetime.date(2026, 1, 31)
    """
    if dt is None:
        dt = utcnow()
    elif dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.date()


def format_money(cents: int) -> str:
    """
    Formatea centavos como monto en dólares.

    Examples:
        >>> format_money(150000)
        '$1,500.00'
    """
    return f"${cents / 100:,.2f}"


__all__ = ["utcnow", "utc_day", "format_money"]
