# -*- coding: utf-8 -*-
"""
backend/app/shared/core/metrics_helpers.py

Helpers para crear métricas Prometheus sin duplicarlas cuando un módulo
se importa dos veces (recargas en tests).

Autor: Agency Hub
Fecha: 2026-09-07
"""
from prometheus_client import REGISTRY, Counter, Histogram


def _get_existing_metric(name: str):
    """Busca un collector ya registrado por nombre."""
    names_to_collectors = getattr(REGISTRY, "_names_to_collectors", {})
    return names_to_collectors.get(name)


def get_or_create_counter(name: str, description: str, labelnames: tuple = ()) -> Counter:
    existing = _get_existing_metric(name)
    if existing is not None:
        return existing

    try:
        return Counter(name, description, labelnames=labelnames)
    except ValueError:
        # Registrado entre la búsqueda y la creación
        return _get_existing_metric(name)


def get_or_create_histogram(name: str, description: str, labelnames: tuple = ()) -> Histogram:
    existing = _get_existing_metric(name)
    if existing is not None:
        return existing

    try:
        return Histogram(name, description, labelnames=labelnames)
    except ValueError:
        return _get_existing_metric(name)


__all__ = [
    "get_or_create_counter",
    "get_or_create_histogram",
]
