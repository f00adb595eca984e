# -*- coding: utf-8 -*-
"""
backend/app/modules/withdrawals/routes/withdrawal_routes.py

Handler process-withdrawal (solo admins).

Uso:
  POST    /functions/v1/process-withdrawal   {withdrawalId, action, rejectionReason?}
  OPTIONS /functions/v1/process-withdrawal   (preflight CORS)

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth import AuthenticatedCaller, get_caller_identity
from app.modules.notifications import NotificationSink, get_notification_sink
from app.modules.withdrawals.services import WithdrawalService
from app.shared.database import get_async_session
from app.shared.http_utils import cors_json_response, preflight_response, read_json_body

router = APIRouter(tags=["withdrawals"])


@router.options("/process-withdrawal", include_in_schema=False)
async def process_withdrawal_preflight():
    return preflight_response()


@router.post("/process-withdrawal")
async def process_withdrawal(
    request: Request,
    caller: Optional[AuthenticatedCaller] = Depends(get_caller_identity),
    db: AsyncSession = Depends(get_async_session),
    notifier: NotificationSink = Depends(get_notification_sink),
):
    payload = await read_json_body(request)
    result = await WithdrawalService(db, notifier).process(caller, payload)
    return cors_json_response(result.to_json())


__all__ = ["router"]
