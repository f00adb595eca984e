# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend de Mister Ticket.

Ajustes clave:
- Carga de .env antes de resolver la configuración (python-dotenv)
- Logging centralizado (plain/json) vía setup_logging
- Observabilidad Prometheus (/metrics) vía app.observability.prom
- Errores de dominio -> HTTP 500 {"error": "<mensaje>"}
- CORS: lista explícita de CORS_ORIGINS; en producción sin wildcard
- Cierre ordenado del engine de base de datos en shutdown

Autor: Mister Ticket
Fecha: 02/09/2026
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que lea la configuración
# En PROD: override=False para respetar variables del entorno (Railway, etc.)
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV == "development")

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.observability.prom import setup_observability
from app.routes import router as root_router
from app.shared.config import get_settings
from app.shared.config.logging_config import setup_logging
from app.shared.database import engine
from app.shared.orm import load_all_models
from app.shared.middleware import (
    JSONExceptionMiddleware,
    RequestLoggingMiddleware,
    register_exception_handlers,
)

settings = get_settings()
setup_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    # Registra todas las tablas (FKs entre módulos) antes de atender requests
    load_all_models()
    logger.info(
        "app_started name=%s version=%s env=%s",
        settings.app_name, settings.app_version, settings.python_env,
    )
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        await engine.dispose()
        logger.info("app_stopped name=%s", settings.app_name)


openapi_tags = [
    {"name": "checkout", "description": "Sesiones de checkout hospedadas (Stripe)"},
    {"name": "sales", "description": "Verificación de pago y materialización de ventas"},
    {"name": "withdrawals", "description": "Procesamiento admin de retiros"},
    {"name": "fees", "description": "Configuración de tasas (admin)"},
]

app = FastAPI(
    title=f"{settings.app_name} API",
    description="Checkout y liquidación del marketplace de ingresos",
    version=settings.app_version,
    lifespan=lifespan,
    openapi_tags=openapi_tags,
)


# ═══════════════════════════════════════════════════════════════════════════════
# CORS
# ═══════════════════════════════════════════════════════════════════════════════
def _configure_cors(app_instance: FastAPI) -> dict:
    """
    Configura CORS middleware.

    Los handlers /functions/v1/* responden además su propio preflight
    con headers permisivos.
    """
    origins_list = settings.get_cors_origins()
    is_wildcard_only = origins_list == ["*"]

    if settings.is_prod and is_wildcard_only:
        logger.error("cors_wildcard_rejected env=production, set explicit CORS_ORIGINS")
        origins_list = [o for o in [settings.frontend_url] if o]
        is_wildcard_only = False

    cors_config = {
        "allow_origins": origins_list,
        # "*" con allow_credentials=True es inválido en navegadores
        "allow_credentials": not is_wildcard_only,
        "allow_methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        "allow_headers": ["*"],
        "expose_headers": ["X-Request-ID"],
        "max_age": 600,
    }
    app_instance.add_middleware(CORSMiddleware, **cors_config)
    logger.info(
        "cors_configured origins=%s credentials=%s",
        origins_list, cors_config["allow_credentials"],
    )
    return cors_config


# IMPORTANTE: el orden real de ejecución de middlewares en Starlette es inverso al registro.
app.add_middleware(RequestLoggingMiddleware)
setup_observability(app)
app.add_middleware(JSONExceptionMiddleware)
# CORS se registra al final para ejecutarse primero (outermost)
_cors_config = _configure_cors(app)

register_exception_handlers(app)

app.include_router(root_router)


if __name__ == "__main__":
    enable_reload = settings.is_dev and os.getenv("DISABLE_RELOAD", "").lower() not in ("true", "1", "yes")
    logger.info("server_starting reload=%s env=%s", enable_reload, settings.python_env)

    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=enable_reload,
    )

# Fin del archivo backend/app/main.py
