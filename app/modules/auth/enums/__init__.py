# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/enums/__init__.py

Enums del módulo de autenticación.

Autor: Agency Hub
Fecha: 2026-09-02
"""

from .role_enum import UserRole

__all__ = ["UserRole"]
