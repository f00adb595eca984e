# -*- coding: utf-8 -*-
"""
backend/app/modules/sales/repositories/sale_repository.py

Acceso a sales. Sin commits: la materialización (inserts + incremento de
inventario) es una sola transacción controlada por el servicio.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.sales.models import Sale


class SaleRepository:
    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_by_session(self, session_id: str) -> List[Sale]:
        """Ventas ya materializadas para la sesión, en orden de unidad."""
        result = await self._db.execute(
            select(Sale)
            .where(Sale.stripe_session_id == session_id)
            .order_by(Sale.unit_number)
        )
        return list(result.scalars().all())

    async def add_batch(self, sales: Sequence[Sale]) -> List[Sale]:
        self._db.add_all(sales)
        await self._db.flush()
        return list(sales)


__all__ = ["SaleRepository"]
