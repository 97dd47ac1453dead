# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Paquete principal 'app' del backend Agency Hub.

Autor: Agency Hub
Fecha: 2026-09-02
"""
