# -*- coding: utf-8 -*-
"""
backend/app/shared/observability/step_logging.py

Logging estructurado por paso del pipeline, como preocupación transversal.

Uso:
    with log_step("verify_payment.retrieve_session", session_id=sid):
        session = await gateway.retrieve_checkout_session(sid)

    @log_step("checkout.resolve_fees")
    def resolve(...): ...

Emite:
- step_started / step_completed (DEBUG, con duration_ms)
- step_failed (INFO para errores de dominio esperados, WARNING para el resto)
- security_violation en el logger de auditoría ``app.security.audit``

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import functools
import inspect
import logging
import time
from typing import Any, Callable, Optional

from app.shared.config.logging_config import SECURITY_AUDIT_LOGGER
from app.shared.errors import MarketplaceError, SecurityViolation

logger = logging.getLogger("app.pipeline")
audit_logger = logging.getLogger(SECURITY_AUDIT_LOGGER)


def _fmt_fields(fields: dict[str, Any]) -> str:
    return " ".join(f"{k}={v}" for k, v in fields.items() if v is not None)


class StepLogContext:
    """Context manager (y decorador) que registra inicio, fin y fallo de un paso."""

    def __init__(self, step: str, **fields: Any):
        self.step = step
        self.fields = fields
        self.start_time: float = 0
        self.duration_ms: float = 0

    def __enter__(self) -> "StepLogContext":
        self.start_time = time.perf_counter()
        logger.debug("step_started step=%s %s", self.step, _fmt_fields(self.fields))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000
        extra = _fmt_fields(self.fields)

        if exc_type is None:
            logger.debug(
                "step_completed step=%s duration_ms=%.2f %s",
                self.step, self.duration_ms, extra,
            )
        elif isinstance(exc_val, SecurityViolation):
            audit_logger.warning(
                "event=security_violation step=%s reason=%s %s",
                self.step, exc_val.reason, extra,
            )
        elif isinstance(exc_val, MarketplaceError):
            logger.info(
                "step_failed step=%s error=%s code=%s message=%s %s",
                self.step, exc_type.__name__, exc_val.code.value, exc_val.message, extra,
            )
        else:
            logger.warning(
                "step_failed step=%s error=%s detail=%s %s",
                self.step, exc_type.__name__, exc_val, extra,
            )
        # Nunca suprime la excepción
        return False

    def __call__(self, func: Callable) -> Callable:
        step, fields = self.step, self.fields

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                with StepLogContext(step, **fields):
                    return await func(*args, **kwargs)
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with StepLogContext(step, **fields):
                return func(*args, **kwargs)
        return wrapper


def log_step(step: str, **fields: Optional[Any]) -> StepLogContext:
    """Crea un StepLogContext para ``step`` con campos clave=valor adicionales."""
    return StepLogContext(step, **fields)


__all__ = ["StepLogContext", "log_step"]

# Fin del archivo backend/app/shared/observability/step_logging.py
