# -*- coding: utf-8 -*-
"""
backend/app/observability/prom.py

Configuración de observabilidad Prometheus para Mister Ticket.

Incluye:
- Middleware HTTP para conteo y latencia por ruta/estado
- Contadores de dominio del pipeline (checkout, ventas, retiros)
- Endpoint /metrics compatible con Prometheus (pull model)
- Soporte multiproceso (Prometheus MultiProcess Collector)

Autor: Mister Ticket
Fecha: 02/09/2026
"""
from __future__ import annotations

import os
from time import perf_counter
from typing import Optional

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from prometheus_client import (
    REGISTRY, CollectorRegistry, multiprocess, generate_latest, CONTENT_TYPE_LATEST,
    Counter, Histogram,
)


def _get_or_create(factory, name: str, description: str, labelnames: tuple = ()):
    """Obtiene la métrica existente o la crea (evita duplicados al recargar en tests)."""
    existing = getattr(REGISTRY, "_names_to_collectors", {}).get(name)
    if existing is not None:
        return existing
    return factory(name, description, labelnames=labelnames)


# Capa HTTP (labels saneados: method/path/status)
REQUEST_COUNT = _get_or_create(
    Counter,
    "http_requests_total",
    "Total HTTP requests",
    ("method", "path", "status"),
)
REQUEST_LATENCY = _get_or_create(
    Histogram,
    "http_request_latency_seconds",
    "Latency per request (s)",
    ("method", "path", "status"),
)

# Dominio
CHECKOUT_SESSIONS_CREATED = _get_or_create(
    Counter,
    "checkout_sessions_created_total",
    "Checkout sessions created with the payment provider",
)
SALES_MATERIALIZED = _get_or_create(
    Counter,
    "sales_materialized_total",
    "Payment verifications by outcome (created/already_recorded)",
    ("result",),
)
WITHDRAWAL_TRANSITIONS = _get_or_create(
    Counter,
    "withdrawal_transitions_total",
    "Withdrawal state transitions applied by admins",
    ("action",),
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware para instrumentar peticiones HTTP en FastAPI."""

    async def dispatch(self, request, call_next):
        method = request.method

        start = perf_counter()
        resp = await call_next(request)
        elapsed = perf_counter() - start

        # Plantilla de ruta (no el path crudo) para acotar cardinalidad
        route = request.scope.get("route")
        path = getattr(route, "path", None) or request.url.path

        status = str(resp.status_code)
        REQUEST_LATENCY.labels(method, path, status).observe(elapsed)
        REQUEST_COUNT.labels(method, path, status).inc()
        return resp


def _build_registry() -> Optional[CollectorRegistry]:
    """Inicializa CollectorRegistry con soporte multiproceso (si aplica)."""
    if os.environ.get("PROMETHEUS_MULTIPROC_DIR"):
        registry = CollectorRegistry()
        multiprocess.MultiProcessCollector(registry)
        return registry
    return None


def mount_metrics(app: FastAPI, path: str = "/metrics") -> None:
    """Registra el endpoint /metrics en la app FastAPI."""
    registry = _build_registry()

    @app.get(path, include_in_schema=False)
    def metrics():
        data = generate_latest(registry) if registry else generate_latest()
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)


def setup_observability(app: FastAPI) -> None:
    """Agrega middleware de Prometheus y monta el endpoint /metrics."""
    app.add_middleware(PrometheusMiddleware)
    mount_metrics(app)


__all__ = [
    "CHECKOUT_SESSIONS_CREATED",
    "SALES_MATERIALIZED",
    "WITHDRAWAL_TRANSITIONS",
    "PrometheusMiddleware",
    "mount_metrics",
    "setup_observability",
]
# Fin del archivo backend/app/observability/prom.py
