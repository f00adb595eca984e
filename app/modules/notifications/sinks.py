# -*- coding: utf-8 -*-
"""
backend/app/modules/notifications/sinks.py

Sinks de notificación.

- NotificationSink: protocolo que consumen los servicios del pipeline
- EmailNotificationSink: implementación sobre IEmailSender
  (console stub o MailerSend según EMAIL_MODE)

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from typing import Optional, Protocol

from app.shared.config import settings
from app.shared.integrations import EmailSender, IEmailSender
from .payloads import PurchaseConfirmation, WithdrawalNotice


class NotificationSink(Protocol):
    async def send_purchase_confirmation(self, notice: PurchaseConfirmation) -> None: ...

    async def send_withdrawal_completed(self, notice: WithdrawalNotice) -> None: ...

    async def send_withdrawal_rejected(self, notice: WithdrawalNotice) -> None: ...


class EmailNotificationSink:
    def __init__(self, sender: IEmailSender) -> None:
        self._sender = sender

    async def send_purchase_confirmation(self, notice: PurchaseConfirmation) -> None:
        await self._sender.send_purchase_confirmation_email(
            notice.to_email,
            user_name=notice.user_name,
            event_title=notice.event_title,
            event_date=notice.event_date,
            event_venue=notice.event_venue,
            ticket_type=notice.ticket_type,
            quantity=notice.quantity,
            total_price=notice.total_price,
            qr_codes=notice.qr_codes,
        )

    async def send_withdrawal_completed(self, notice: WithdrawalNotice) -> None:
        await self._sender.send_withdrawal_completed_email(
            notice.to_email,
            full_name=notice.full_name,
            amount=notice.amount,
            producer_document=notice.producer_document,
            payout_reference=notice.payout_reference or "",
        )

    async def send_withdrawal_rejected(self, notice: WithdrawalNotice) -> None:
        await self._sender.send_withdrawal_rejected_email(
            notice.to_email,
            full_name=notice.full_name,
            amount=notice.amount,
            rejection_reason=notice.rejection_reason or "",
        )


_sink: Optional[EmailNotificationSink] = None


def get_notification_sink() -> NotificationSink:
    """Dependencia FastAPI: sink por defecto (email)."""
    global _sink
    if _sink is None:
        _sink = EmailNotificationSink(EmailSender.from_settings(settings))
    return _sink


__all__ = ["NotificationSink", "EmailNotificationSink", "get_notification_sink"]
