# -*- coding: utf-8 -*-
"""
backend/app/routes/master_routes.py

Router maestro con dos capas:
  - /functions/v1/...  handlers del pipeline (create-checkout,
    verify-payment, process-withdrawal), llamados desde el navegador
  - /api/...           endpoints administrativos (tasas)

Autor: Mister Ticket
Fecha: 02/09/2026
"""
from __future__ import annotations

import logging

from fastapi import APIRouter

from app.modules.checkout.routes import router as checkout_router
from app.modules.fees.routes import router as fee_admin_router
from app.modules.sales.routes import router as verify_payment_router
from app.modules.withdrawals.routes import router as withdrawal_router

logger = logging.getLogger(__name__)

# Capas principales
api = APIRouter(prefix="/api")
functions = APIRouter(prefix="/functions/v1")

_loaded: list[str] = []  # trazabilidad/debug


def _include(target: APIRouter, router: APIRouter, name: str) -> None:
    """Incluye un router en la capa dada y registra trazabilidad en logs."""
    target.include_router(router)
    _loaded.append(f"{target.prefix or '/'}:{name}")
    logger.debug(
        "router_mounted name=%s layer=%s router_prefix=%s",
        name, target.prefix or "/", getattr(router, "prefix", ""),
    )


_include(functions, checkout_router, "checkout")
_include(functions, verify_payment_router, "sales.verify_payment")
_include(functions, withdrawal_router, "withdrawals")
_include(api, fee_admin_router, "fees.admin")


def loaded_routers() -> list[str]:
    return list(_loaded)


__all__ = ["api", "functions", "loaded_routers"]

# Fin del archivo backend/app/routes/master_routes.py
