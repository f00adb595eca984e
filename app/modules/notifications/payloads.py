# -*- coding: utf-8 -*-
"""
backend/app/modules/notifications/payloads.py

Datos estructurados que reciben los sinks de notificación.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass(frozen=True)
class PurchaseConfirmation:
    to_email: str
    user_name: str
    event_title: str
    event_date: str
    event_venue: str
    ticket_type: str
    quantity: int
    total_price: Decimal
    qr_codes: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class WithdrawalNotice:
    to_email: str
    full_name: str
    amount: Decimal
    producer_document: str = ""
    payout_reference: Optional[str] = None
    rejection_reason: Optional[str] = None


__all__ = ["PurchaseConfirmation", "WithdrawalNotice"]
