# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/datetime_helpers.py

Utilidades para manejo consistente de timestamps UTC.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """
    Retorna el timestamp UTC actual (timezone-aware).

    Examples:
        >>> utcnow().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Asegura que un datetime sea UTC timezone-aware.

    Los datetimes naive (p.ej. leídos de SQLite) se interpretan como UTC.

    Examples:
        >>> ensure_utc(datetime(2026, 2, 9, 14, 30)).tzinfo == timezone.utc
        True
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    elif dt.tzinfo != timezone.utc:
        return dt.astimezone(timezone.utc)
    return dt


def format_event_date(dt: Optional[datetime]) -> str:
    """Fecha de evento para el comprador: ``dd/mm/YYYY``."""
    if dt is None:
        return ""
    return ensure_utc(dt).strftime("%d/%m/%Y")


__all__ = ["utcnow", "ensure_utc", "format_event_date"]
# Fin del archivo
