# -*- coding: utf-8 -*-
"""
backend/app/modules/checkout/routes/checkout_routes.py

Handler create-checkout.

Uso:
  POST    /functions/v1/create-checkout   {eventId, ticketId, quantity}
  OPTIONS /functions/v1/create-checkout   (preflight CORS)

Respuesta 200: {"url": ..., "sessionId": ...}
Fallas: 500 {"error": "<mensaje>"}

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth import AuthenticatedCaller, get_caller_identity
from app.modules.checkout.providers import PaymentGateway, get_payment_gateway
from app.modules.checkout.services import CheckoutService
from app.shared.config import settings
from app.shared.database import get_async_session
from app.shared.http_utils import (
    cors_json_response,
    get_request_origin,
    preflight_response,
    read_json_body,
)

router = APIRouter(tags=["checkout"])


@router.options("/create-checkout", include_in_schema=False)
async def create_checkout_preflight():
    return preflight_response()


@router.post("/create-checkout")
async def create_checkout(
    request: Request,
    caller: Optional[AuthenticatedCaller] = Depends(get_caller_identity),
    db: AsyncSession = Depends(get_async_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
):
    payload = await read_json_body(request)
    origin = get_request_origin(request, settings.frontend_url)
    result = await CheckoutService(db, gateway).create_checkout(caller, payload, origin)
    return cors_json_response(result.model_dump(by_alias=True))


__all__ = ["router"]
