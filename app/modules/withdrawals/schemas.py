# -*- coding: utf-8 -*-
"""
backend/app/modules/withdrawals/schemas.py

Contrato JSON de process-withdrawal.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.shared.utils.base_models import CamelModel


class ProcessWithdrawalRequest(CamelModel):
    withdrawal_id: UUID
    action: str = Field(..., min_length=1, max_length=32)
    rejection_reason: Optional[str] = Field(default=None, max_length=1000)


class PayoutInstructions(CamelModel):
    """Datos para ejecutar la transferencia fuera de banda (PIX)."""
    producer_document: str
    amount: Decimal
    reference: str


class ProcessWithdrawalResponse(CamelModel):
    success: bool = True
    withdrawal_id: UUID
    status: str
    message: str
    payout_id: Optional[str] = None
    payout_instructions: Optional[PayoutInstructions] = None
    rejection_reason: Optional[str] = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["ProcessWithdrawalRequest", "PayoutInstructions", "ProcessWithdrawalResponse"]
