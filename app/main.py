# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend Agency Hub.

Ajustes clave:
- .env cargado antes de cualquier import que lea configuración
- Logging configurado desde settings (plain/json)
- Observabilidad Prometheus (/metrics) vía app.observability.prom
- CORS desde CORS_ORIGINS (sin wildcard en producción)
- Health /health y routers de órdenes bajo /api (app.routes)

Autor: Agency Hub
Fecha: 2026-09-08
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que use os.getenv
# En DEV: override=True para que .env mande sobre variables del entorno
# En PROD: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_ENVIRONMENT = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
_override_env = _ENVIRONMENT not in ("production", "test")
load_dotenv(dotenv_path=_ENV_PATH, override=_override_env)

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.settings import get_settings
from app.core.logging import setup_logging

_settings = get_settings()
setup_logging(level=_settings.log_level, fmt=_settings.log_format)
logger = logging.getLogger(__name__)

logger.info("[dotenv] Loaded %s (override=%s, PYTHON_ENV=%s)", _ENV_PATH, _override_env, _ENVIRONMENT)

from app.observability.prom import setup_observability


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    from app.shared.config import get_orders_settings

    orders_settings = get_orders_settings()
    if orders_settings.allow_insecure_webhooks:
        logger.warning("ALLOW_INSECURE_WEBHOOKS=1: Stripe signatures are NOT verified")
    logger.info(
        "Orders engine ready: emails=%s dashboard=%s",
        orders_settings.orders_send_emails,
        orders_settings.dashboard_base_url,
    )
    logger.info("Agency Hub backend started (env=%s)", _settings.python_env)
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        from app.shared.database import engine

        await engine.dispose()
        logger.info("Agency Hub backend stopped")


openapi_tags = [
    {"name": "orders", "description": "Creación y consulta de órdenes del cliente"},
    {"name": "orders:contracts", "description": "Firma de contratos de servicio"},
    {"name": "orders:webhooks", "description": "Webhooks del gateway de pagos"},
    {"name": "admin", "description": "Reembolsos, facturas y analítica de ventas"},
]

app = FastAPI(
    title="Agency Hub API",
    description="Ciclo de vida de órdenes: pagos, contratos, aprovisionamiento y facturación",
    version=_settings.app_version,
    lifespan=lifespan,
    openapi_tags=openapi_tags,
)


# ══════════════════════════════════════════════
# CORS
# ══════════════════════════════════════════════
def _configure_cors(app_instance: FastAPI) -> dict:
    """
    Configura CORS middleware.

    Returns:
        dict con la configuración aplicada para logging.
    """
    origins_list = _settings.get_cors_origins()
    is_wildcard_only = origins_list == ["*"]

    if is_wildcard_only and _settings.is_prod:
        logger.error("Refusing wildcard CORS in production; set CORS_ORIGINS explicitly")
        return {"cors_disabled": True, "allow_origins": []}

    cors_config = {
        "allow_origins": origins_list,
        # "*" con allow_credentials=True es inválido en navegadores
        "allow_credentials": not is_wildcard_only,
        "allow_methods": ["*"] if is_wildcard_only else ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        "allow_headers": ["*"],
        "max_age": 600,
    }
    app_instance.add_middleware(CORSMiddleware, **cors_config)
    return cors_config


# Orden de middlewares: el último registrado se ejecuta primero.
# Registramos CORS AL FINAL para que sea el más externo.
if _settings.http_metrics_enabled:
    setup_observability(app)

_cors_config = _configure_cors(app)
logger.info("CORS configured: origins=%s", _cors_config.get("allow_origins"))

# Incluye router maestro
from app.routes import router as main_router

app.include_router(main_router)


@app.get("/")
async def root():
    return {"service": "Agency Hub Backend", "status": "active"}


if __name__ == "__main__":
    enable_reload = _settings.is_dev and os.getenv("DISABLE_RELOAD", "").lower() not in ("true", "1", "yes")
    logger.info("Starting server with reload=%s", enable_reload)
    uvicorn.run(
        "app.main:app",
        host=_settings.app_host,
        port=_settings.app_port,
        reload=enable_reload,
    )

# Fin del archivo backend/app/main.py
