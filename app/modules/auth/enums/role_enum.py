# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/enums/role_enum.py

Enum de roles de usuario tal como llegan en el claim `role` del JWT.

Autor: Agency Hub
Fecha: 2026-09-07
"""
from enum import StrEnum


class UserRole(StrEnum):
    CLIENT = "CLIENT"
    ADMIN = "ADMIN"


__all__ = ["UserRole"]

# Fin del archivo backend/app/modules/auth/enums/role_enum.py
