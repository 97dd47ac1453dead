# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/utils/__init__.py

Autor: Agency Hub
Fecha: 2026-09-03
"""

from .datetime_helpers import utcnow, utc_day, format_money

__all__ = ["utcnow", "utc_day", "format_money"]
