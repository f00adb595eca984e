# -*- coding: utf-8 -*-
"""
backend/app/modules/checkout/services/checkout_service.py

Creación de la sesión de checkout.

Orden de validación (falla rápido, gana la primera violación):
    1. Identidad con email           -> Unauthenticated
    2. Esquema de entrada            -> InvalidRequest
    3. Evento y lote existen         -> NotFound
    4. Disponibilidad                -> InsufficientInventory
    5. Ventana de venta              -> SaleWindowClosed
Luego: tasas, monto mínimo (AmountTooSmall) y la sesión del proveedor.

No toca inventario ni crea ventas: eso ocurre solo al verificar el pago.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.identity import CallerIdentity
from app.modules.checkout.metadata import build_checkout_metadata
from app.modules.checkout.providers import PaymentGateway
from app.modules.checkout.schemas import CreateCheckoutRequest, CreateCheckoutResponse
from app.modules.checkout.services.session_params import (
    build_charge,
    build_checkout_session_params,
)
from app.modules.events.repositories import EventRepository
from app.modules.fees.repositories import FeeRepository
from app.modules.fees.services import resolve_fees
from app.observability.prom import CHECKOUT_SESSIONS_CREATED
from app.shared.config import MarketplaceSettings, get_marketplace_settings
from app.shared.errors import (
    AmountTooSmall,
    InsufficientInventory,
    InvalidRequest,
    NotFound,
    SaleWindowClosed,
    Unauthenticated,
)
from app.shared.observability import log_step
from app.shared.utils.base_models import parse_request
from app.shared.utils.datetime_helpers import ensure_utc, utcnow
from app.shared.utils.money import format_money

logger = logging.getLogger(__name__)


class CheckoutService:
    def __init__(
        self,
        db: AsyncSession,
        gateway: PaymentGateway,
        *,
        policy: Optional[MarketplaceSettings] = None,
        now_fn: Callable[[], datetime] = utcnow,
    ) -> None:
        self._db = db
        self._gateway = gateway
        self._events = EventRepository(db)
        self._fees = FeeRepository(db)
        self._policy = policy or get_marketplace_settings()
        self._now = now_fn

    async def create_checkout(
        self, caller: Optional[CallerIdentity], payload: Any, origin: str
    ) -> CreateCheckoutResponse:
        with log_step("checkout.authenticate"):
            if caller is None or not caller.email:
                raise Unauthenticated("User not authenticated or email not available")

        with log_step("checkout.validate_input", user_id=caller.user_id()):
            request = parse_request(CreateCheckoutRequest, payload)
            max_qty = self._policy.max_tickets_per_purchase
            if request.quantity > max_qty:
                raise InvalidRequest(
                    f"Invalid quantity: must be between 1 and {max_qty}", field="quantity"
                )

        with log_step("checkout.load_inventory", event_id=request.event_id, ticket_id=request.ticket_id):
            event = await self._events.get_event(request.event_id)
            if event is None:
                raise NotFound("Event not found")
            ticket = await self._events.get_ticket(request.ticket_id)
            if ticket is None or ticket.event_id != event.id:
                raise NotFound("Ticket not found")

        with log_step("checkout.check_availability", ticket_id=ticket.id, quantity=request.quantity):
            available = ticket.available
            if available < request.quantity:
                raise InsufficientInventory(available)

        with log_step("checkout.check_sale_window", ticket_id=ticket.id):
            now = ensure_utc(self._now())
            if not ensure_utc(ticket.sale_start_date) <= now <= ensure_utc(ticket.sale_end_date):
                raise SaleWindowClosed("Ticket sales are not active for this batch")

        with log_step("checkout.resolve_fees", producer_id=event.producer_id):
            fees = resolve_fees(
                event.producer_id,
                ticket.price * request.quantity,
                request.quantity,
                await self._fees.get_active_config(),
                await self._fees.get_active_producer_fee(event.producer_id),
                defaults=self._policy,
            )
            charge = build_charge(ticket.price, request.quantity, fees)
            if charge.total < self._policy.min_charge_amount:
                raise AmountTooSmall(
                    f"Total amount must be at least {format_money(self._policy.min_charge_amount)} "
                    f"{self._policy.currency.upper()}"
                )

        with log_step("checkout.create_provider_session", ticket_id=ticket.id):
            customer_id = await self._gateway.find_customer_id(caller.email)
            metadata = build_checkout_metadata(
                event_id=event.id,
                ticket_id=ticket.id,
                user_id=caller.user_id(),
                charge=charge,
                customer_id=customer_id,
            )
            params = build_checkout_session_params(
                event=event,
                ticket=ticket,
                charge=charge,
                metadata=metadata,
                origin=origin,
                currency=self._policy.currency,
                customer_id=customer_id,
                customer_email=caller.email,
            )
            session = await self._gateway.create_checkout_session(params)

        CHECKOUT_SESSIONS_CREATED.inc()
        logger.info(
            "checkout_session_created session_id=%s user_id=%s ticket_id=%s quantity=%s total=%s fee_source=%s",
            session.session_id, caller.user_id(), ticket.id, request.quantity,
            format_money(charge.total), fees.source,
        )
        return CreateCheckoutResponse(url=session.checkout_url, session_id=session.session_id)


__all__ = ["CheckoutService"]
