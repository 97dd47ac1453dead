# -*- coding: utf-8 -*-
"""
backend/app/core/logging.py

Fachada de `app.shared.config.logging_config` bajo `app.core`.

Autor: Agency Hub
Fecha: 2026-09-08
"""

from typing import Literal

from app.shared.config.logging_config import setup_logging as _setup_logging


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain",
) -> None:
    _setup_logging(level=level, fmt=fmt)

# Fin del archivo backend/app/core/logging.py
