# -*- coding: utf-8 -*-
"""
backend/app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import settings

El objeto `settings` es un proxy perezoso: no instancia la configuración
al importar (evita validaciones prematuras en tests) y delega cada
atributo a `config_loader.get_settings()`.
"""

from __future__ import annotations

from typing import Any, Callable

from .config_loader import get_settings
from .settings_orders import OrdersSettings, get_orders_settings


class _SettingsProxy:
    __slots__ = ("_base_getter",)

    def __init__(self, base_getter: Callable[[], object]) -> None:
        object.__setattr__(self, "_base_getter", base_getter)

    def __getattr__(self, name: str) -> Any:
        base = object.__getattribute__(self, "_base_getter")()
        return getattr(base, name)


# Singleton accesible como `settings` (lazy-load via getter)
settings = _SettingsProxy(get_settings)

__all__ = ["settings", "get_settings", "OrdersSettings", "get_orders_settings"]
