# -*- coding: utf-8 -*-
"""
backend/app/shared/http_utils/request_meta.py

Helpers para extraer metadatos de request de manera segura detrás de proxies
(Railway, nginx, etc.) y para leer el cuerpo JSON sin abortar el pipeline.

Autor: Mister Ticket
Fecha: 02/09/2026
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional

from starlette.requests import Request

logger = logging.getLogger(__name__)


def _trust_proxy_headers() -> bool:
    """
    Verifica si debemos confiar en headers de proxy (X-Forwarded-For).

    Default: false (seguro para producción).
    """
    return os.getenv("TRUST_PROXY_HEADERS", "false").lower() in ("true", "1", "yes")


def get_client_ip(request: Request) -> str:
    """
    Extrae la IP real del cliente.

    Con TRUST_PROXY_HEADERS=true usa X-Forwarded-For / X-Real-IP;
    si no, solo request.client.host.
    """
    if _trust_proxy_headers():
        xff = request.headers.get("x-forwarded-for")
        if xff:
            return xff.split(",")[0].strip()
        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def get_request_origin(request: Request, fallback: str) -> str:
    """Origen del navegador (header Origin) o ``fallback`` sin barra final."""
    origin = request.headers.get("origin") or fallback
    return origin.rstrip("/")


async def read_json_body(request: Request) -> Optional[Any]:
    """
    Lee el cuerpo como JSON.

    Devuelve None si está vacío o mal formado: la validación de campos
    ocurre después de autenticar, dentro del servicio.
    """
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        logger.info("request_body_malformed path=%s bytes=%s", request.url.path, len(raw))
        return None


__all__ = ["get_client_ip", "get_request_origin", "read_json_body"]
