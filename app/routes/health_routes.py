# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Health checks del backend de Mister Ticket.

- /health        liveness (sin I/O)
- /health/ready  readiness (conectividad a base de datos)

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.shared.database import check_database_health

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness del backend")
async def health_check() -> dict:
    return {"status": "ok"}


@router.get("/health/ready", summary="Readiness (base de datos alcanzable)")
async def readiness_check():
    db_ok = await check_database_health(timeout_s=2.0)
    return JSONResponse(
        status_code=200 if db_ok else 503,
        content={"status": "ok" if db_ok else "degraded", "database": {"reachable": db_ok}},
    )

# Fin del archivo backend/app/routes/health_routes.py
