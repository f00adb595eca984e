# -*- coding: utf-8 -*-
"""
backend/app/modules/events/models/event_models.py

Modelos ORM de eventos y lotes de ingresos.

Invariante de TicketBatch: 0 <= quantity_sold <= quantity_total, reforzado
por CHECK en la tabla y por el incremento condicional del repositorio.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base


class Event(Base):
    __tablename__ = "events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    producer_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    event_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    venue: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    tickets: Mapped[List["TicketBatch"]] = relationship(back_populates="event", lazy="raise")

    def __repr__(self) -> str:
        return f"<Event id={self.id} title={self.title!r}>"


class TicketBatch(Base):
    """Lote de ingresos ("ticket") con precio y ventana de venta propios."""

    __tablename__ = "tickets"
    __table_args__ = (
        CheckConstraint("quantity_sold >= 0", name="quantity_sold_non_negative"),
        CheckConstraint("quantity_sold <= quantity_total", name="quantity_sold_le_total"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    batch_name: Mapped[str] = mapped_column(String(255), nullable=False)
    sector: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    quantity_total: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity_sold: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    sale_start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    sale_end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    event: Mapped[Event] = relationship(back_populates="tickets", lazy="raise")

    @property
    def available(self) -> int:
        return self.quantity_total - self.quantity_sold

    def __repr__(self) -> str:
        return f"<TicketBatch id={self.id} sold={self.quantity_sold}/{self.quantity_total}>"


__all__ = ["Event", "TicketBatch"]
