# -*- coding: utf-8 -*-
"""
backend/app/modules/notifications/dispatch.py

Envío best-effort: se invoca solo después del commit de las escrituras
autoritativas. Un fallo o timeout se registra (notification_failed) y
nunca se propaga al llamador.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable

logger = logging.getLogger(__name__)


async def notify_best_effort(kind: str, send: Awaitable[Any], timeout_s: float, **fields: Any) -> bool:
    """
    Espera ``send`` con timeout acotado.

    Returns:
        True si se entregó, False si falló (ya registrado).
    """
    context = " ".join(f"{k}={v}" for k, v in fields.items())
    try:
        await asyncio.wait_for(send, timeout=timeout_s)
    except asyncio.TimeoutError:
        logger.warning("notification_failed kind=%s error=timeout timeout_s=%s %s", kind, timeout_s, context)
        return False
    except Exception as e:
        logger.warning("notification_failed kind=%s error=%s %s", kind, repr(e), context)
        return False
    logger.info("notification_sent kind=%s %s", kind, context)
    return True


__all__ = ["notify_best_effort"]
