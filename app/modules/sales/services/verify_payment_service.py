# -*- coding: utf-8 -*-
"""
backend/app/modules/sales/services/verify_payment_service.py

Verificación de pago y materialización de ventas.

Flujo:
    1. Identidad                         -> Unauthenticated
    2. Esquema ({sessionId})             -> InvalidRequest
    3. Sesión en el proveedor            -> NotFound
    4. payment_status != "paid"          -> {success: false, status} (no es error)
    5. Controles de identidad            -> SecurityViolation (auditado)
    6. Idempotencia por stripe_session_id -> alreadyRecorded
    7. Una transacción: N inserts + incremento condicional de quantity_sold
       (IntegrityError por la UNIQUE => re-consulta => alreadyRecorded)
    8. Confirmación por email, best-effort, después del commit

Los montos salen de la metadata de la sesión (fijada al crear el
checkout), nunca de la configuración de tasas vigente.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.identity import CallerIdentity
from app.modules.auth.repositories import ProfileRepository
from app.modules.checkout.metadata import SessionMetadata, parse_checkout_metadata
from app.modules.checkout.providers import PaymentGateway, ProviderCheckoutSession
from app.modules.events.models import Event, TicketBatch
from app.modules.events.repositories import EventRepository
from app.modules.notifications import NotificationSink, PurchaseConfirmation, notify_best_effort
from app.modules.sales.enums import PROVIDER_PAID_STATUS, SalePaymentStatus
from app.modules.sales.models import Sale
from app.modules.sales.repositories import SaleRepository
from app.modules.sales.schemas import SaleReceipt, VerifyPaymentRequest, VerifyPaymentResponse
from app.modules.sales.tokens import (
    build_qr_code_url,
    build_redemption_payload,
    generate_redemption_token,
)
from app.observability.prom import SALES_MATERIALIZED
from app.shared.config import MarketplaceSettings, get_marketplace_settings
from app.shared.errors import (
    InsufficientInventory,
    NotFound,
    SecurityViolation,
    Unauthenticated,
    UpstreamFailure,
)
from app.shared.observability import log_step
from app.shared.utils.base_models import parse_request
from app.shared.utils.datetime_helpers import format_event_date
from app.shared.utils.money import format_money, split_evenly

logger = logging.getLogger(__name__)


def _receipts(sales: Sequence[Sale]) -> List[SaleReceipt]:
    return [SaleReceipt(sale_id=s.id, qr_code=s.qr_code) for s in sales]


def check_session_identity(
    caller: CallerIdentity, metadata: SessionMetadata, session: ProviderCheckoutSession
) -> None:
    """
    El comprador de la metadata debe ser el llamador, y el customer de
    Stripe (si ambos lados lo informan) debe coincidir.

    Raises:
        SecurityViolation: con el motivo para auditoría
    """
    caller_id = str(caller.user_id())
    if metadata.buyer_id is None:
        raise SecurityViolation(f"session metadata has no userId caller_id={caller_id}")
    if metadata.buyer_id != caller_id:
        raise SecurityViolation(
            f"buyer mismatch metadata_user_id={metadata.buyer_id} caller_id={caller_id}"
        )
    if session.customer_id and metadata.customer_id and session.customer_id != metadata.customer_id:
        raise SecurityViolation(
            f"customer mismatch session_customer={session.customer_id} "
            f"metadata_customer={metadata.customer_id}"
        )


class VerifyPaymentService:
    def __init__(
        self,
        db: AsyncSession,
        gateway: PaymentGateway,
        notifier: NotificationSink,
        *,
        policy: Optional[MarketplaceSettings] = None,
    ) -> None:
        self._db = db
        self._gateway = gateway
        self._notifier = notifier
        self._sales = SaleRepository(db)
        self._events = EventRepository(db)
        self._profiles = ProfileRepository(db)
        self._policy = policy or get_marketplace_settings()

    async def verify_payment(self, caller: Optional[CallerIdentity], payload: Any) -> VerifyPaymentResponse:
        with log_step("verify_payment.authenticate"):
            if caller is None:
                raise Unauthenticated()

        with log_step("verify_payment.validate_input", user_id=caller.user_id()):
            session_id = parse_request(VerifyPaymentRequest, payload).session_id

        with log_step("verify_payment.retrieve_session", session_id=session_id):
            session = await self._gateway.retrieve_checkout_session(session_id)
            if session is None:
                raise NotFound("Session not found")

        if session.payment_status != PROVIDER_PAID_STATUS:
            logger.info(
                "verify_payment_not_paid session_id=%s status=%s", session_id, session.payment_status
            )
            return VerifyPaymentResponse(success=False, status=session.payment_status)

        with log_step("verify_payment.check_identity", session_id=session_id):
            metadata = parse_checkout_metadata(session.metadata)
            check_session_identity(caller, metadata, session)

        with log_step("verify_payment.idempotency_check", session_id=session_id):
            existing = await self._sales.list_by_session(session_id)
        if existing:
            return self._already_recorded(session_id, existing)

        with log_step("verify_payment.load_inventory", ticket_id=metadata.ticket_id):
            ticket = await self._events.get_ticket(metadata.ticket_id) if metadata.ticket_id else None
            if ticket is None:
                raise NotFound("Ticket not found")
            if metadata.event_id is not None and metadata.event_id != ticket.event_id:
                raise SecurityViolation(
                    f"ticket/event mismatch ticket_id={ticket.id} metadata_event_id={metadata.event_id}"
                )
            event = await self._events.get_event(ticket.event_id)
            if event is None:
                raise NotFound("Event not found")

        with log_step("verify_payment.materialize", session_id=session_id, quantity=metadata.quantity):
            sales = self._build_sales(session, metadata, ticket, event, caller.user_id())
            recorded = await self._materialize(session_id, ticket, metadata.quantity, sales)
        if recorded is not None:
            return self._already_recorded(session_id, recorded)

        SALES_MATERIALIZED.labels(result="created").inc()
        logger.info(
            "sales_materialized session_id=%s ticket_id=%s quantity=%s buyer_id=%s",
            session_id, ticket.id, metadata.quantity, metadata.buyer_id,
        )

        qr_codes = [s.qr_code for s in sales]
        await notify_best_effort(
            "purchase_confirmation",
            self._send_purchase_confirmation(caller, session, metadata, ticket, event, sales),
            self._policy.notification_timeout_seconds,
            session_id=session_id,
        )
        return VerifyPaymentResponse(success=True, sales=_receipts(sales), qr_codes=qr_codes)

    def _already_recorded(self, session_id: str, sales: Sequence[Sale]) -> VerifyPaymentResponse:
        SALES_MATERIALIZED.labels(result="already_recorded").inc()
        logger.info("verify_payment_already_recorded session_id=%s sales=%d", session_id, len(sales))
        return VerifyPaymentResponse(
            success=True,
            already_recorded=True,
            sales=_receipts(sales),
            qr_codes=[s.qr_code for s in sales],
        )

    def _build_sales(
        self,
        session: ProviderCheckoutSession,
        metadata: SessionMetadata,
        ticket: TicketBatch,
        event: Event,
        buyer_id: UUID,
    ) -> List[Sale]:
        quantity = metadata.quantity
        unit_price = metadata.unit_price if metadata.unit_price is not None else ticket.price
        platform_shares = split_evenly(metadata.platform_fee, quantity)
        gateway_shares = split_evenly(metadata.gateway_fee, quantity)
        producer_shares = split_evenly(metadata.producer_amount, quantity)

        sales: List[Sale] = []
        for i in range(quantity):
            token = generate_redemption_token(self._policy.redemption_token_bytes)
            qr_code = build_qr_code_url(
                build_redemption_payload(token, event.id),
                self._policy.qr_code_base_url,
                self._policy.qr_code_size,
            )
            sales.append(
                Sale(
                    buyer_id=buyer_id,
                    event_id=event.id,
                    ticket_id=ticket.id,
                    quantity=1,
                    unit_number=i + 1,
                    unit_price=unit_price,
                    total_price=unit_price + platform_shares[i] + gateway_shares[i],
                    platform_fee=platform_shares[i],
                    gateway_fee=gateway_shares[i],
                    producer_amount=producer_shares[i],
                    payment_status=SalePaymentStatus.paid,
                    stripe_session_id=session.id,
                    stripe_payment_intent_id=session.payment_intent_id,
                    stripe_customer_id=session.customer_id,
                    redemption_token=token,
                    qr_code=qr_code,
                )
            )
        return sales

    async def _materialize(
        self, session_id: str, ticket: TicketBatch, quantity: int, sales: List[Sale]
    ) -> Optional[List[Sale]]:
        """
        Inserta las ventas e incrementa quantity_sold en una transacción.

        Returns:
            None si se creó el lote; las ventas existentes si otra
            verificación concurrente ganó la carrera.
        """
        try:
            await self._sales.add_batch(sales)
            incremented = await self._events.try_increment_sold(ticket.id, quantity)
            if not incremented:
                await self._db.rollback()
                await self._db.refresh(ticket)
                logger.error(
                    "oversell_at_verification session_id=%s ticket_id=%s quantity=%s available=%s "
                    "action=manual_refund_required",
                    session_id, ticket.id, quantity, ticket.available,
                )
                raise InsufficientInventory(ticket.available)
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            existing = await self._sales.list_by_session(session_id)
            if existing:
                logger.info("verify_payment_duplicate_key session_id=%s", session_id)
                return existing
            logger.error("sales_insert_failed session_id=%s error=%s", session_id, repr(e))
            raise UpstreamFailure("Failed to record sales") from e
        except DBAPIError as e:
            await self._db.rollback()
            logger.error("sales_insert_failed session_id=%s error=%s", session_id, repr(e))
            raise UpstreamFailure("Failed to record sales") from e
        return None

    async def _send_purchase_confirmation(
        self,
        caller: CallerIdentity,
        session: ProviderCheckoutSession,
        metadata: SessionMetadata,
        ticket: TicketBatch,
        event: Event,
        sales: Sequence[Sale],
    ) -> None:
        profile = await self._profiles.get_profile(caller.user_id())
        to_email = caller.email or (profile.email if profile else None) or session.customer_email
        if not to_email:
            raise ValueError("buyer email not available")

        total = metadata.total_amount
        if total is None:
            total = sum((s.total_price for s in sales), Decimal("0"))
        await self._notifier.send_purchase_confirmation(
            PurchaseConfirmation(
                to_email=to_email,
                user_name=(profile.full_name if profile and profile.full_name else to_email),
                event_title=event.title,
                event_date=format_event_date(event.event_date),
                event_venue=event.venue or "",
                ticket_type=f"{ticket.batch_name}{f' - {ticket.sector}' if ticket.sector else ''}",
                quantity=metadata.quantity,
                total_price=Decimal(format_money(total)),
                qr_codes=[s.qr_code for s in sales],
            )
        )


__all__ = ["VerifyPaymentService", "check_session_identity"]
