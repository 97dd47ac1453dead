# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Selección de la clase de settings a partir de PYTHON_ENV.

`get_settings()` instancia una sola vez y corre `_security_checks`;
cualquier valor desconocido de PYTHON_ENV cae en desarrollo.

Autor: Agency Hub
Fecha: 2026-09-02
"""

import logging
import os
from functools import lru_cache
from typing import Type

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

logger = logging.getLogger(__name__)

_SETTINGS_BY_ENV: dict[str, Type[BaseAppSettings]] = {
    "production": ProdSettings,
    "prod": ProdSettings,
    "test": EnvTestingSettings,
    "testing": EnvTestingSettings,
    "development": DevSettings,
    "dev": DevSettings,
}


def settings_class_for(env: str) -> Type[BaseAppSettings]:
    return _SETTINGS_BY_ENV.get(env.strip().lower(), DevSettings)


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Raises:
        ValueError: configuración insegura para el entorno elegido
    """
    settings_cls = settings_class_for(os.getenv("PYTHON_ENV", "development"))
    settings = settings_cls()
    settings._security_checks()
    logger.debug("Settings loaded: %s (python_env=%s)", settings_cls.__name__, settings.python_env)
    return settings


__all__ = ["get_settings", "settings_class_for"]
