# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/services/fee_policy.py

Resolvedor de tasas (función pura, sin I/O).

Reglas:
- Override de productor activo:
    percentage -> platform_fee = subtotal * value / 100   (percentage = value)
    fixed      -> platform_fee = value * quantity         (percentage = None)
  La tasa global nunca se suma a un override.
- Sin override: la tasa de FeeConfig activa, o el porcentaje por defecto
  de MarketplaceSettings si no hay configuración. Una FeeConfig de tipo
  fixed se aplica por unidad, igual que un override fixed.
- gateway_fee = subtotal * (FeeConfig.payment_gateway_fee_percentage o default) / 100

Los montos se devuelven sin redondear; el redondeo a centavos ocurre en
las fronteras (Stripe, metadata).

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol
from uuid import UUID

from app.shared.config import MarketplaceSettings, get_marketplace_settings
from app.shared.utils.money import HUNDRED, to_decimal
from app.modules.fees.enums import FeeType


class GlobalFeeConfig(Protocol):
    platform_fee_value: Decimal
    platform_fee_type: FeeType
    payment_gateway_fee_percentage: Decimal


class FeeOverride(Protocol):
    fee_value: Decimal
    fee_type: FeeType
    is_active: bool


@dataclass(frozen=True)
class FeeResolution:
    platform_fee: Decimal
    platform_fee_percentage: Optional[Decimal]
    gateway_fee: Decimal
    gateway_fee_percentage: Decimal
    source: str  # "producer_override" | "global_config" | "default"


def resolve_fees(
    producer_id: Optional[UUID],
    subtotal: Decimal,
    quantity: int,
    global_config: Optional[GlobalFeeConfig],
    producer_override: Optional[FeeOverride],
    defaults: Optional[MarketplaceSettings] = None,
) -> FeeResolution:
    """
    Calcula tasa de plataforma y de pasarela para una venta.

    Args:
        producer_id: productor dueño del evento (solo informativo)
        subtotal: precio unitario * cantidad
        quantity: cantidad de ingresos
        global_config: FeeConfig activa (o None)
        producer_override: ProducerCustomFee del productor (o None)
        defaults: políticas por defecto (MarketplaceSettings)
    """
    defaults = defaults or get_marketplace_settings()
    subtotal = to_decimal(subtotal)

    # ── Tasa de pasarela (siempre global)
    gateway_pct = defaults.default_gateway_fee_percentage
    if global_config is not None and global_config.payment_gateway_fee_percentage is not None:
        gateway_pct = to_decimal(global_config.payment_gateway_fee_percentage, gateway_pct)
    gateway_fee = subtotal * gateway_pct / HUNDRED

    # ── Tasa de plataforma
    if producer_override is not None and producer_override.is_active:
        value = to_decimal(producer_override.fee_value)
        fee_type, source = producer_override.fee_type, "producer_override"
    elif global_config is not None and global_config.platform_fee_value is not None:
        value = to_decimal(global_config.platform_fee_value, defaults.default_platform_fee_percentage)
        fee_type, source = global_config.platform_fee_type or FeeType.percentage, "global_config"
    else:
        value = defaults.default_platform_fee_percentage
        fee_type, source = FeeType.percentage, "default"

    if fee_type == FeeType.fixed:
        platform_fee = value * quantity
        platform_pct: Optional[Decimal] = None
    else:
        platform_fee = subtotal * value / HUNDRED
        platform_pct = value

    return FeeResolution(
        platform_fee=platform_fee,
        platform_fee_percentage=platform_pct,
        gateway_fee=gateway_fee,
        gateway_fee_percentage=gateway_pct,
        source=source,
    )


__all__ = ["FeeResolution", "resolve_fees"]
