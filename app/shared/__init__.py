# -*- coding: utf-8 -*-
"""
backend/app/shared/__init__.py

Infraestructura compartida del backend Agency Hub: configuración,
base de datos, integraciones de correo y helpers HTTP.

Los subpaquetes se importan de forma explícita
(p. ej. `from app.shared.config import get_settings`); este módulo no
inicializa nada en import-time.
"""
