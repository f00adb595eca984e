# -*- coding: utf-8 -*-
"""
backend/app/modules/withdrawals/repositories/withdrawal_repository.py

Acceso a withdrawal_requests.

Las transiciones son un UPDATE condicionado al estado de origen
(``WHERE id = :id AND status = :from``): dos admins procesando la misma
solicitud no pueden aplicar ambas transiciones.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.withdrawals.enums import WithdrawalStatus
from app.modules.withdrawals.models import WithdrawalRequest


class WithdrawalRepository:
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get(self, withdrawal_id: UUID) -> Optional[WithdrawalRequest]:
        return await self._db.get(WithdrawalRequest, withdrawal_id)

    async def transition(
        self, withdrawal_id: UUID, from_status: WithdrawalStatus, **values: Any
    ) -> bool:
        """Aplica ``values`` solo si la fila sigue en ``from_status``. No hace commit."""
        result = await self._db.execute(
            update(WithdrawalRequest)
            .where(
                WithdrawalRequest.id == withdrawal_id,
                WithdrawalRequest.status == from_status,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


__all__ = ["WithdrawalRepository"]
