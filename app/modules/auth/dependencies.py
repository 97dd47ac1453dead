# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/dependencies.py

Dependencias de autenticación JWT para FastAPI.

Provee:
- CurrentUser: identidad mínima extraída del token (sub + role)
- get_current_user: 401 si el token falta, es inválido o expiró
- require_admin: 403 si el rol no es ADMIN

Autor: Agency Hub
Fecha: 2026-09-07
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, status

from .enums import UserRole
from .security import TokenDecodeError, decode_access_token, oauth2_scheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    role: str = UserRole.CLIENT

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def validate_jwt_token(token: str) -> CurrentUser:
    """
    Valida un JWT y construye el CurrentUser.

    Raises:
        HTTPException 401: token inválido o expirado.
    """
    try:
        payload = decode_access_token(token)
    except TokenDecodeError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "invalid_token", "message": str(e)},
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    role = str(payload.get("role") or UserRole.CLIENT).upper()
    return CurrentUser(user_id=str(payload["sub"]), role=role)


async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    """Dependencia de autenticación para endpoints protegidos."""
    return validate_jwt_token(token)


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """
    Dependencia que requiere rol admin.

    Raises:
        HTTPException 401: token inválido
        HTTPException 403: el usuario no es admin
    """
    if not user.is_admin:
        logger.warning("Admin endpoint denied: user_id=%s role=%s", user.user_id, user.role)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "forbidden", "message": "Admin role required"},
        )
    return user


__all__ = ["CurrentUser", "validate_jwt_token", "get_current_user", "require_admin"]
