# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Exportación de utilidades comunes.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from .base_models import UTF8SafeModel, CamelModel, Field, parse_request
from .datetime_helpers import utcnow, ensure_utc, format_event_date
from .money import (
    CENT,
    HUNDRED,
    to_decimal,
    round_money,
    format_money,
    to_minor_units,
    split_evenly,
)

__all__ = [
    "UTF8SafeModel",
    "CamelModel",
    "Field",
    "parse_request",
    "CENT",
    "HUNDRED",
    "to_decimal",
    "round_money",
    "format_money",
    "to_minor_units",
    "split_evenly",
    "utcnow",
    "ensure_utc",
    "format_event_date",
]
