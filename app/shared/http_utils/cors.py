# -*- coding: utf-8 -*-
"""
backend/app/shared/http_utils/cors.py

Headers CORS permisivos de los handlers ``/functions/v1/*``
(llamados directamente desde el navegador).

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from typing import Any, Dict

from starlette.responses import JSONResponse, Response

FUNCTION_CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def preflight_response() -> Response:
    """Respuesta 200 vacía para el preflight OPTIONS."""
    return Response(status_code=200, headers=FUNCTION_CORS_HEADERS)


def cors_json_response(content: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=FUNCTION_CORS_HEADERS)


__all__ = ["FUNCTION_CORS_HEADERS", "preflight_response", "cors_json_response"]
