# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/schemas.py

Esquemas de administración de tasas.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field, model_validator

from app.shared.utils.base_models import UTF8SafeModel
from app.modules.fees.enums import FeeType


def _check_percentage_cap(value: Decimal, fee_type: FeeType, field: str) -> None:
    if fee_type == FeeType.percentage and value > 100:
        raise ValueError(f"{field} must be <= 100 for percentage fees")


class FeeConfigUpdateRequest(UTF8SafeModel):
    platform_fee_value: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    platform_fee_type: FeeType = FeeType.percentage
    payment_gateway_fee_percentage: Decimal = Field(..., ge=0, le=100, max_digits=5, decimal_places=2)
    min_withdrawal_amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)

    @model_validator(mode="after")
    def _percentage_cap(self) -> "FeeConfigUpdateRequest":
        _check_percentage_cap(self.platform_fee_value, self.platform_fee_type, "platform_fee_value")
        return self


class FeeConfigResponse(UTF8SafeModel):
    id: Optional[UUID] = None
    platform_fee_value: Decimal
    platform_fee_type: FeeType
    payment_gateway_fee_percentage: Decimal
    min_withdrawal_amount: Decimal
    is_active: bool
    is_default: bool = False
    created_at: Optional[datetime] = None


class ProducerFeeUpsertRequest(UTF8SafeModel):
    fee_value: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    fee_type: FeeType
    is_active: bool = True

    @model_validator(mode="after")
    def _percentage_cap(self) -> "ProducerFeeUpsertRequest":
        _check_percentage_cap(self.fee_value, self.fee_type, "fee_value")
        return self


class ProducerFeeResponse(UTF8SafeModel):
    producer_id: UUID
    fee_value: Decimal
    fee_type: FeeType
    is_active: bool


__all__ = [
    "FeeConfigUpdateRequest",
    "FeeConfigResponse",
    "ProducerFeeUpsertRequest",
    "ProducerFeeResponse",
]
