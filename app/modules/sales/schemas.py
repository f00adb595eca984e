# -*- coding: utf-8 -*-
"""
backend/app/modules/sales/schemas.py

Contrato JSON de verify-payment.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.shared.utils.base_models import CamelModel


class VerifyPaymentRequest(CamelModel):
    session_id: str = Field(..., min_length=1, max_length=255)


class SaleReceipt(CamelModel):
    sale_id: UUID
    qr_code: str


class VerifyPaymentResponse(CamelModel):
    """
    - success=False + status: sesión aún no pagada (no es un error)
    - success=True + sales/qrCodes: ventas creadas
    - success=True + alreadyRecorded: la sesión ya estaba materializada
    """
    success: bool
    status: Optional[str] = None
    already_recorded: Optional[bool] = None
    sales: Optional[List[SaleReceipt]] = None
    qr_codes: Optional[List[str]] = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["VerifyPaymentRequest", "SaleReceipt", "VerifyPaymentResponse"]
