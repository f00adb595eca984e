# -*- coding: utf-8 -*-
"""
backend/app/modules/events/repositories/event_repository.py

Lecturas de eventos / lotes y el incremento atómico de quantity_sold.

El incremento es un único UPDATE condicional ejecutado por el servidor
de base de datos (sin leer-calcular-escribir en el proceso):

    UPDATE tickets
       SET quantity_sold = quantity_sold + :q
     WHERE id = :id AND quantity_sold + :q <= quantity_total

Cero filas afectadas significa que el incremento sobrevendería.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.events.models import Event, TicketBatch

logger = logging.getLogger(__name__)


class EventRepository:
    """Repositorio de Event / TicketBatch."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get_event(self, event_id: UUID) -> Optional[Event]:
        return await self._db.get(Event, event_id)

    async def get_ticket(self, ticket_id: UUID) -> Optional[TicketBatch]:
        return await self._db.get(TicketBatch, ticket_id)

    async def try_increment_sold(self, ticket_id: UUID, quantity: int) -> bool:
        """
        Incrementa quantity_sold en ``quantity`` si no excede quantity_total.

        No hace commit: participa en la transacción del llamador.

        Returns:
            True si se actualizó la fila, False si sobrevendería (o no existe).
        """
        stmt = (
            update(TicketBatch)
            .where(
                TicketBatch.id == ticket_id,
                TicketBatch.quantity_sold + quantity <= TicketBatch.quantity_total,
            )
            .values(quantity_sold=TicketBatch.quantity_sold + quantity)
            .execution_options(synchronize_session=False)
        )
        result = await self._db.execute(stmt)
        updated = result.rowcount == 1
        logger.debug(
            "ticket_increment ticket_id=%s quantity=%s updated=%s",
            ticket_id, quantity, updated,
        )
        return updated


__all__ = ["EventRepository"]
