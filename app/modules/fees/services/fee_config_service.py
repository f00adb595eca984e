# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/services/fee_config_service.py

Administración de tasas (solo admins, la autorización la aplica la ruta).

- update_config: desactiva la fila activa e inserta una nueva en la misma
  transacción (historial append-only, a lo sumo una fila activa).
- upsert_producer_fee / deactivate_producer_fee: override por productor.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config import MarketplaceSettings, get_marketplace_settings
from app.shared.errors import InvalidRequest, NotFound
from app.modules.fees.enums import FeeType
from app.modules.fees.models import FeeConfig, ProducerCustomFee
from app.modules.fees.repositories import FeeRepository
from app.modules.fees.schemas import (
    FeeConfigResponse,
    FeeConfigUpdateRequest,
    ProducerFeeResponse,
    ProducerFeeUpsertRequest,
)

logger = logging.getLogger(__name__)


class FeeConfigService:
    def __init__(self, db: AsyncSession, defaults: MarketplaceSettings | None = None) -> None:
        self._db = db
        self._repo = FeeRepository(db)
        self._defaults = defaults or get_marketplace_settings()

    async def get_active_config(self) -> FeeConfigResponse:
        """Configuración activa, o los valores por defecto si no hay ninguna."""
        config = await self._repo.get_active_config()
        if config is None:
            return FeeConfigResponse(
                platform_fee_value=self._defaults.default_platform_fee_percentage,
                platform_fee_type=FeeType.percentage,
                payment_gateway_fee_percentage=self._defaults.default_gateway_fee_percentage,
                min_withdrawal_amount=self._defaults.default_min_withdrawal_amount,
                is_active=True,
                is_default=True,
            )
        return FeeConfigResponse.model_validate(config)

    async def update_config(self, payload: FeeConfigUpdateRequest, admin_id: UUID) -> FeeConfigResponse:
        try:
            deactivated = await self._repo.deactivate_active_configs()
            config = await self._repo.add_config(
                FeeConfig(
                    platform_fee_value=payload.platform_fee_value,
                    platform_fee_type=payload.platform_fee_type,
                    payment_gateway_fee_percentage=payload.payment_gateway_fee_percentage,
                    min_withdrawal_amount=payload.min_withdrawal_amount,
                    is_active=True,
                    created_by=admin_id,
                )
            )
            await self._db.commit()
        except IntegrityError as e:
            # Otro admin activó una configuración en paralelo
            await self._db.rollback()
            logger.warning("fee_config_update_conflict admin_id=%s error=%s", admin_id, repr(e))
            raise InvalidRequest("Fee configuration changed concurrently, please retry") from e

        await self._db.refresh(config)
        logger.info(
            "fee_config_updated id=%s admin_id=%s platform=%s type=%s gateway_pct=%s deactivated=%d",
            config.id, admin_id, config.platform_fee_value, config.platform_fee_type.value,
            config.payment_gateway_fee_percentage, deactivated,
        )
        return FeeConfigResponse.model_validate(config)

    async def upsert_producer_fee(
        self, producer_id: UUID, payload: ProducerFeeUpsertRequest, admin_id: UUID
    ) -> ProducerFeeResponse:
        fee = await self._repo.get_producer_fee(producer_id)
        if fee is None:
            fee = await self._repo.add_producer_fee(
                ProducerCustomFee(
                    producer_id=producer_id,
                    fee_value=payload.fee_value,
                    fee_type=payload.fee_type,
                    is_active=payload.is_active,
                )
            )
        else:
            fee.fee_value = payload.fee_value
            fee.fee_type = payload.fee_type
            fee.is_active = payload.is_active
        await self._db.commit()

        logger.info(
            "producer_fee_upserted producer_id=%s admin_id=%s value=%s type=%s active=%s",
            producer_id, admin_id, fee.fee_value, fee.fee_type.value, fee.is_active,
        )
        return ProducerFeeResponse.model_validate(fee)

    async def deactivate_producer_fee(self, producer_id: UUID, admin_id: UUID) -> ProducerFeeResponse:
        fee = await self._repo.get_producer_fee(producer_id)
        if fee is None:
            raise NotFound("Producer custom fee not found")
        fee.is_active = False
        await self._db.commit()

        logger.info("producer_fee_deactivated producer_id=%s admin_id=%s", producer_id, admin_id)
        return ProducerFeeResponse.model_validate(fee)


__all__ = ["FeeConfigService"]
