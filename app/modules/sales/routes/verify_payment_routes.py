# -*- coding: utf-8 -*-
"""
backend/app/modules/sales/routes/verify_payment_routes.py

Handler verify-payment.

Uso:
  POST    /functions/v1/verify-payment   {sessionId}
  OPTIONS /functions/v1/verify-payment   (preflight CORS)

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth import AuthenticatedCaller, get_caller_identity
from app.modules.checkout.providers import PaymentGateway, get_payment_gateway
from app.modules.notifications import NotificationSink, get_notification_sink
from app.modules.sales.services import VerifyPaymentService
from app.shared.database import get_async_session
from app.shared.http_utils import cors_json_response, preflight_response, read_json_body

router = APIRouter(tags=["sales"])


@router.options("/verify-payment", include_in_schema=False)
async def verify_payment_preflight():
    return preflight_response()


@router.post("/verify-payment")
async def verify_payment(
    request: Request,
    caller: Optional[AuthenticatedCaller] = Depends(get_caller_identity),
    db: AsyncSession = Depends(get_async_session),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    notifier: NotificationSink = Depends(get_notification_sink),
):
    payload = await read_json_body(request)
    result = await VerifyPaymentService(db, gateway, notifier).verify_payment(caller, payload)
    return cors_json_response(result.to_json())


__all__ = ["router"]
