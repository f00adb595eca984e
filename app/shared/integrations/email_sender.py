# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/email_sender.py

Factory unificado para EmailSender.
Soporta dos modos:
- console: stub que solo loguea (desarrollo/tests)
- api: envío via API (MailerSend)

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Protocol, Sequence, Tuple, TYPE_CHECKING

from app.shared.integrations.email_templates import (
    build_purchase_confirmation_body,
    build_withdrawal_completed_body,
    build_withdrawal_rejected_body,
    mask_email,
)

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)


class IEmailSender(Protocol):
    """Protocolo para implementaciones de email sender."""
    async def send_purchase_confirmation_email(
        self, to_email: str, *, user_name: str, event_title: str, event_date: str,
        event_venue: str, ticket_type: str, quantity: int, total_price: Decimal,
        qr_codes: Sequence[str],
    ) -> None: ...
    async def send_withdrawal_completed_email(
        self, to_email: str, *, full_name: str, amount: Decimal,
        producer_document: str, payout_reference: str,
    ) -> None: ...
    async def send_withdrawal_rejected_email(
        self, to_email: str, *, full_name: str, amount: Decimal, rejection_reason: str,
    ) -> None: ...


class TemplatedEmailSender:
    """
    Construye los cuerpos desde templates y delega el transporte
    en ``_send_email`` (implementado por cada proveedor).
    """

    async def _send_email(self, to_email: str, subject: str, html_body: str, text_body: str) -> str:
        raise NotImplementedError

    async def send_purchase_confirmation_email(
        self, to_email: str, *, user_name: str, event_title: str, event_date: str,
        event_venue: str, ticket_type: str, quantity: int, total_price: Decimal,
        qr_codes: Sequence[str],
    ) -> None:
        subject, html, text = build_purchase_confirmation_body(
            user_name=user_name,
            event_title=event_title,
            event_date=event_date,
            event_venue=event_venue,
            ticket_type=ticket_type,
            quantity=quantity,
            total_price=total_price,
            qr_codes=qr_codes,
        )
        await self._send_email(to_email, subject, html, text)

    async def send_withdrawal_completed_email(
        self, to_email: str, *, full_name: str, amount: Decimal,
        producer_document: str, payout_reference: str,
    ) -> None:
        subject, html, text = build_withdrawal_completed_body(
            full_name=full_name,
            amount=amount,
            producer_document=producer_document,
            payout_reference=payout_reference,
        )
        await self._send_email(to_email, subject, html, text)

    async def send_withdrawal_rejected_email(
        self, to_email: str, *, full_name: str, amount: Decimal, rejection_reason: str,
    ) -> None:
        subject, html, text = build_withdrawal_rejected_body(
            full_name=full_name,
            amount=amount,
            rejection_reason=rejection_reason,
        )
        await self._send_email(to_email, subject, html, text)


class StubEmailSender(TemplatedEmailSender):
    """Implementación que no envía correos; solo hace logging (modo console)."""

    def __init__(self) -> None:
        # (to_email, subject) de cada envío, útil para inspección local
        self.outbox: List[Tuple[str, str]] = []

    async def _send_email(self, to_email: str, subject: str, html_body: str, text_body: str) -> str:
        self.outbox.append((to_email, subject))
        logger.info("[CONSOLE EMAIL] to=%s subject=%s", mask_email(to_email), subject)
        return "console"


class EmailSender:
    """
    Factory unificado para selección de email sender.

    Ejemplos de configuración:
    - Desarrollo: EMAIL_MODE=console
    - MailerSend: EMAIL_MODE=api + MAILERSEND_API_KEY + MAILERSEND_FROM_EMAIL
    """

    @staticmethod
    def from_settings(settings: BaseAppSettings) -> IEmailSender:
        """
        Crea el email sender apropiado según settings.

        Raises:
            ValueError: si email_mode=api pero faltan credenciales
        """
        mode = (settings.email_mode or "console").strip().lower()
        logger.info("[EmailSender] mode=%s", mode)

        if mode == "api":
            from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender
            return MailerSendEmailSender.from_settings(settings)

        return StubEmailSender()


__all__ = ["IEmailSender", "TemplatedEmailSender", "StubEmailSender", "EmailSender"]
# Fin del archivo backend/app/shared/integrations/email_sender.py
