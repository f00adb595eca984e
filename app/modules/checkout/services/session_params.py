# -*- coding: utf-8 -*-
"""
backend/app/modules/checkout/services/session_params.py

Construcción del desglose de cobro y de los parámetros de la Stripe
Checkout Session (tres line items: ingreso, tasa de plataforma, tasa de
procesamiento).

Los line items suman exactamente el total: las tasas se redondean a
centavos antes de sumar.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from app.modules.checkout.metadata import ChargeBreakdown
from app.modules.events.models import Event, TicketBatch
from app.modules.fees.services import FeeResolution
from app.shared.utils.datetime_helpers import format_event_date
from app.shared.utils.money import round_money, to_decimal, to_minor_units

PLATFORM_FEE_LABEL = "Taxa da plataforma"
GATEWAY_FEE_LABEL = "Taxa de processamento"


def build_charge(unit_price: Decimal, quantity: int, fees: FeeResolution) -> ChargeBreakdown:
    unit_price = round_money(to_decimal(unit_price))
    return ChargeBreakdown(
        unit_price=unit_price,
        quantity=quantity,
        subtotal=unit_price * quantity,
        platform_fee=round_money(fees.platform_fee),
        gateway_fee=round_money(fees.gateway_fee),
        platform_fee_percentage=fees.platform_fee_percentage,
        gateway_fee_percentage=fees.gateway_fee_percentage,
    )


def _pct(value: Decimal) -> str:
    return f"{value.normalize():f}"


def _line_item(
    currency: str, name: str, description: str, amount: Decimal, quantity: int,
    images: Optional[List[str]] = None,
) -> Dict[str, Any]:
    product_data: Dict[str, Any] = {"name": name}
    if description:
        product_data["description"] = description
    if images:
        product_data["images"] = images
    return {
        "price_data": {
            "currency": currency,
            "unit_amount": to_minor_units(amount),
            "product_data": product_data,
        },
        "quantity": quantity,
    }


def build_line_items(
    event: Event, ticket: TicketBatch, charge: ChargeBreakdown, currency: str
) -> List[Dict[str, Any]]:
    items = [
        _line_item(
            currency,
            f"{event.title} - {ticket.batch_name}",
            f"{ticket.sector or ''} | {format_event_date(event.event_date)}",
            charge.unit_price,
            charge.quantity,
            images=[event.image_url] if event.image_url else None,
        )
    ]
    # Stripe rechaza line items de monto cero
    if charge.platform_fee > 0:
        if charge.platform_fee_percentage is not None:
            description = f"{_pct(charge.platform_fee_percentage)}% sobre o valor do ingresso"
        else:
            description = "Valor fixo por ingresso"
        items.append(_line_item(currency, PLATFORM_FEE_LABEL, description, charge.platform_fee, 1))
    if charge.gateway_fee > 0:
        items.append(
            _line_item(
                currency,
                GATEWAY_FEE_LABEL,
                f"{_pct(charge.gateway_fee_percentage)}% sobre o valor do ingresso",
                charge.gateway_fee,
                1,
            )
        )
    return items


def build_checkout_session_params(
    *,
    event: Event,
    ticket: TicketBatch,
    charge: ChargeBreakdown,
    metadata: Dict[str, str],
    origin: str,
    currency: str,
    customer_id: Optional[str],
    customer_email: str,
) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "mode": "payment",
        "payment_method_types": ["card"],
        "line_items": build_line_items(event, ticket, charge, currency),
        "success_url": f"{origin}/payment-success?session_id={{CHECKOUT_SESSION_ID}}",
        "cancel_url": f"{origin}/event/{event.id}",
        "metadata": metadata,
        "client_reference_id": metadata["userId"],
    }
    if customer_id:
        params["customer"] = customer_id
    else:
        params["customer_email"] = customer_email
    return params


__all__ = [
    "PLATFORM_FEE_LABEL",
    "GATEWAY_FEE_LABEL",
    "build_charge",
    "build_line_items",
    "build_checkout_session_params",
]
