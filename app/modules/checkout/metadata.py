# -*- coding: utf-8 -*-
"""
backend/app/modules/checkout/metadata.py

Ida y vuelta del desglose de cobro a través de la metadata de la sesión
del proveedor de pagos.

La verificación del pago nunca recalcula tasas desde la configuración
(que pudo cambiar entre checkout y pago): usa lo que viaja aquí.

Claves (todas string, montos con 2 decimales):
    eventId, ticketId, quantity, userId, unitPrice, platformFee,
    gatewayFee, producerAmount, totalAmount, platformFeePercentage,
    customerId (opcional)

El parseo es defensivo: campos ausentes o mal formados toman valores
seguros y nunca lanzan.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Mapping, Optional
from uuid import UUID

from app.shared.utils.money import format_money, round_money, to_decimal

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class ChargeBreakdown:
    """Desglose del cobro, redondeado a centavos en la frontera."""
    unit_price: Decimal
    quantity: int
    subtotal: Decimal
    platform_fee: Decimal
    gateway_fee: Decimal
    platform_fee_percentage: Optional[Decimal]
    gateway_fee_percentage: Decimal

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.platform_fee + self.gateway_fee

    @property
    def producer_amount(self) -> Decimal:
        return self.subtotal


@dataclass(frozen=True)
class SessionMetadata:
    event_id: Optional[UUID]
    ticket_id: Optional[UUID]
    quantity: int
    buyer_id: Optional[str]
    customer_id: Optional[str]
    unit_price: Optional[Decimal]
    platform_fee: Decimal
    gateway_fee: Decimal
    producer_amount: Decimal
    total_amount: Optional[Decimal]


def build_checkout_metadata(
    *,
    event_id: UUID,
    ticket_id: UUID,
    user_id: UUID,
    charge: ChargeBreakdown,
    customer_id: Optional[str] = None,
) -> Dict[str, str]:
    metadata = {
        "eventId": str(event_id),
        "ticketId": str(ticket_id),
        "quantity": str(charge.quantity),
        "userId": str(user_id),
        "unitPrice": format_money(charge.unit_price),
        "platformFee": format_money(charge.platform_fee),
        "gatewayFee": format_money(charge.gateway_fee),
        "producerAmount": format_money(charge.producer_amount),
        "totalAmount": format_money(charge.total),
        # Vacío cuando la tasa es fija
        "platformFeePercentage": (
            f"{charge.platform_fee_percentage.normalize():f}"
            if charge.platform_fee_percentage is not None
            else ""
        ),
    }
    if customer_id:
        metadata["customerId"] = customer_id
    return metadata


def _uuid_or_none(value: Optional[str]) -> Optional[UUID]:
    try:
        return UUID(str(value)) if value else None
    except ValueError:
        return None


def _money_or_none(value: Optional[str]) -> Optional[Decimal]:
    if value is None or not str(value).strip():
        return None
    parsed = to_decimal(value, default=Decimal("-1"))
    return round_money(parsed) if parsed >= 0 else None


def _money_or_zero(key: str, metadata: Mapping[str, str]) -> Decimal:
    value = _money_or_none(metadata.get(key))
    if value is None:
        logger.info("checkout_metadata_defaulted key=%s raw=%r", key, metadata.get(key))
        return ZERO
    return value


def parse_checkout_metadata(metadata: Mapping[str, str]) -> SessionMetadata:
    raw_quantity = metadata.get("quantity")
    try:
        quantity = int(str(raw_quantity).strip()) if raw_quantity is not None else 1
    except ValueError:
        quantity = 0
    if quantity < 1:
        logger.info("checkout_metadata_defaulted key=quantity raw=%r", raw_quantity)
        quantity = 1

    return SessionMetadata(
        event_id=_uuid_or_none(metadata.get("eventId")),
        ticket_id=_uuid_or_none(metadata.get("ticketId")),
        quantity=quantity,
        buyer_id=(metadata.get("userId") or "").strip() or None,
        customer_id=(metadata.get("customerId") or "").strip() or None,
        unit_price=_money_or_none(metadata.get("unitPrice")),
        platform_fee=_money_or_zero("platformFee", metadata),
        gateway_fee=_money_or_zero("gatewayFee", metadata),
        producer_amount=_money_or_zero("producerAmount", metadata),
        total_amount=_money_or_none(metadata.get("totalAmount")),
    )


__all__ = [
    "ChargeBreakdown",
    "SessionMetadata",
    "build_checkout_metadata",
    "parse_checkout_metadata",
]
