# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/repositories/fee_repository.py

Acceso a fee_config y producer_custom_fees. Sin commits: las
transacciones las controla el servicio.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.fees.models import FeeConfig, ProducerCustomFee


class FeeRepository:
    """Repositorio de FeeConfig / ProducerCustomFee."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    # ------------------------------------------------------------------
    # FeeConfig
    # ------------------------------------------------------------------
    async def get_active_config(self) -> Optional[FeeConfig]:
        result = await self._db.execute(
            select(FeeConfig).where(FeeConfig.is_active.is_(True)).limit(1)
        )
        return result.scalar_one_or_none()

    async def deactivate_active_configs(self) -> int:
        result = await self._db.execute(
            update(FeeConfig)
            .where(FeeConfig.is_active.is_(True))
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def add_config(self, config: FeeConfig) -> FeeConfig:
        self._db.add(config)
        await self._db.flush()
        return config

    # ------------------------------------------------------------------
    # ProducerCustomFee
    # ------------------------------------------------------------------
    async def get_producer_fee(self, producer_id: UUID) -> Optional[ProducerCustomFee]:
        result = await self._db.execute(
            select(ProducerCustomFee).where(ProducerCustomFee.producer_id == producer_id)
        )
        return result.scalar_one_or_none()

    async def get_active_producer_fee(self, producer_id: UUID) -> Optional[ProducerCustomFee]:
        result = await self._db.execute(
            select(ProducerCustomFee).where(
                ProducerCustomFee.producer_id == producer_id,
                ProducerCustomFee.is_active.is_(True),
            )
        )
        return result.scalar_one_or_none()

    async def add_producer_fee(self, fee: ProducerCustomFee) -> ProducerCustomFee:
        self._db.add(fee)
        await self._db.flush()
        return fee


__all__ = ["FeeRepository"]
