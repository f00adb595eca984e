# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/money.py

Aritmética monetaria con Decimal.

Regla: los cálculos internos no redondean; solo se redondea a centavos
(ROUND_HALF_UP) en las fronteras externas (Stripe, metadata, persistencia).

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP
from typing import Any, List

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Convierte a Decimal vía str (nunca desde float binario); ``default`` si no es numérico."""
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    return result if result.is_finite() else default


def round_money(value: Decimal) -> Decimal:
    """Redondeo de presentación a centavos (ROUND_HALF_UP)."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    """Serialización con 2 decimales fijos, p.ej. ``"10.00"``."""
    return f"{round_money(value):.2f}"


def to_minor_units(value: Decimal) -> int:
    """Monto en centavos para el proveedor de pagos."""
    return int((round_money(value) * HUNDRED).to_integral_value(rounding=ROUND_HALF_UP))


def split_evenly(total: Decimal, parts: int) -> List[Decimal]:
    """
    Reparte ``total`` (a centavos) en ``parts`` cuotas por mayor resto.

    Cada cuota recibe el piso de total/parts en centavos; los centavos
    sobrantes van, uno a uno, a las primeras cuotas. La suma es exacta.

        >>> split_evenly(Decimal("10.00"), 3)
        [Decimal('3.34'), Decimal('3.33'), Decimal('3.33')]
    """
    if parts < 1:
        raise ValueError("parts must be >= 1")
    total_cents = int((round_money(total) * HUNDRED).to_integral_value(rounding=ROUND_DOWN))
    sign = -1 if total_cents < 0 else 1
    base, remainder = divmod(abs(total_cents), parts)
    shares = [base + (1 if i < remainder else 0) for i in range(parts)]
    return [(Decimal(sign * s) / HUNDRED).quantize(CENT) for s in shares]


__all__ = [
    "CENT",
    "HUNDRED",
    "to_decimal",
    "round_money",
    "format_money",
    "to_minor_units",
    "split_evenly",
]
