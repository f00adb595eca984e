# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/exception_handler.py

Conversión de errores a respuestas JSON ``{"error": "<mensaje>"}``.

- JSONExceptionMiddleware: captura excepciones no manejadas (HTTP 500,
  mensaje genérico, X-Request-ID para correlación de logs).
- register_exception_handlers: errores de dominio (MarketplaceError) y de
  validación de FastAPI con la misma forma de respuesta.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.shared.errors import MarketplaceError
from app.shared.http_utils.cors import FUNCTION_CORS_HEADERS

logger = logging.getLogger(__name__)

# Header para request ID (Railway, nginx, etc.)
REQUEST_ID_HEADERS = ["x-request-id", "x-railway-request-id", "x-correlation-id"]

# Todas las fallas del pipeline salen como 500 con {"error": ...}
ERROR_STATUS_CODE = 500


def get_request_id(request: Request) -> str:
    """Extrae request_id de headers o genera uno nuevo."""
    for header in REQUEST_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return uuid.uuid4().hex[:16]


def error_response(message: str, request: Request | None = None) -> JSONResponse:
    headers = dict(FUNCTION_CORS_HEADERS)
    request_id = getattr(getattr(request, "state", None), "request_id", None)
    if request_id:
        headers["X-Request-ID"] = request_id
    return JSONResponse(
        status_code=ERROR_STATUS_CODE,
        content={"error": message},
        headers=headers,
    )


class JSONExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware que captura excepciones no manejadas y devuelve JSON.

    Garantiza:
    - Content-Type: application/json (nunca text/plain)
    - request_id para correlación de logs
    - ningún detalle interno en el cuerpo
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request)
        request.state.request_id = request_id

        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "unhandled_exception request_id=%s method=%s path=%s error=%s",
                request_id,
                request.method,
                request.url.path,
                repr(e),
            )
            return error_response("Internal server error", request)


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    logger.info(
        "request_failed path=%s code=%s message=%s",
        request.url.path, exc.code.value, exc.message,
    )
    return error_response(exc.message, request)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"Invalid {loc}: {first.get('msg', 'invalid value')}" if loc else "Invalid request"
    logger.info("request_validation_failed path=%s detail=%s", request.url.path, message)
    return error_response(message, request)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)


__all__ = [
    "JSONExceptionMiddleware",
    "get_request_id",
    "error_response",
    "register_exception_handlers",
]
