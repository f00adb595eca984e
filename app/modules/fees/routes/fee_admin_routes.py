# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/routes/fee_admin_routes.py

Endpoints admin de tasas.

Uso:
  GET    /api/admin/fees/config
  PUT    /api/admin/fees/config
  PUT    /api/admin/fees/producers/{producer_id}
  DELETE /api/admin/fees/producers/{producer_id}

Requiere: require_admin (JWT + user_roles aprobado)

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database import get_async_session
from app.modules.auth import AuthenticatedCaller, require_admin
from app.modules.fees.schemas import (
    FeeConfigResponse,
    FeeConfigUpdateRequest,
    ProducerFeeResponse,
    ProducerFeeUpsertRequest,
)
from app.modules.fees.services import FeeConfigService

router = APIRouter(prefix="/admin/fees", tags=["admin", "fees"])


@router.get("/config", response_model=FeeConfigResponse)
async def get_fee_config(
    admin: AuthenticatedCaller = Depends(require_admin),
    db: AsyncSession = Depends(get_async_session),
) -> FeeConfigResponse:
    return await FeeConfigService(db).get_active_config()


@router.put("/config", response_model=FeeConfigResponse)
async def update_fee_config(
    payload: FeeConfigUpdateRequest,
    admin: AuthenticatedCaller = Depends(require_admin),
    db: AsyncSession = Depends(get_async_session),
) -> FeeConfigResponse:
    return await FeeConfigService(db).update_config(payload, admin.user_id())


@router.put("/producers/{producer_id}", response_model=ProducerFeeResponse)
async def upsert_producer_fee(
    producer_id: UUID,
    payload: ProducerFeeUpsertRequest,
    admin: AuthenticatedCaller = Depends(require_admin),
    db: AsyncSession = Depends(get_async_session),
) -> ProducerFeeResponse:
    return await FeeConfigService(db).upsert_producer_fee(producer_id, payload, admin.user_id())


@router.delete("/producers/{producer_id}", response_model=ProducerFeeResponse)
async def deactivate_producer_fee(
    producer_id: UUID,
    admin: AuthenticatedCaller = Depends(require_admin),
    db: AsyncSession = Depends(get_async_session),
) -> ProducerFeeResponse:
    return await FeeConfigService(db).deactivate_producer_fee(producer_id, admin.user_id())


__all__ = ["router"]
