# -*- coding: utf-8 -*-
"""
backend/app/modules/checkout/schemas.py

Contrato JSON de create-checkout.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from app.shared.utils.base_models import CamelModel


class CreateCheckoutRequest(CamelModel):
    event_id: UUID
    ticket_id: UUID
    # strict: sin coerción de true / "3" / 2.0
    quantity: int = Field(..., ge=1, strict=True)


class CreateCheckoutResponse(CamelModel):
    url: str
    session_id: str


__all__ = ["CreateCheckoutRequest", "CreateCheckoutResponse"]
