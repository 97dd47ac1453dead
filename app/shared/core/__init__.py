# -*- coding: utf-8 -*-
"""
backend/app/shared/core/__init__.py

Utilidades compartidas de infraestructura.

Autor: Agency Hub
Fecha: 2026-09-07
"""

from .metrics_helpers import get_or_create_counter, get_or_create_histogram

__all__ = [
    "get_or_create_counter",
    "get_or_create_histogram",
]
