# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores de Mister Ticket.

Responsabilidades:
- Incluir el router de health (/health).
- Reutilizar las capas `functions` y `api` definidas en master_routes.py.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from fastapi import APIRouter

from .health_routes import router as health_router
from .master_routes import api, functions

router = APIRouter()

# Health check sin prefijo adicional
router.include_router(health_router)

router.include_router(functions)
router.include_router(api)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
