# -*- coding: utf-8 -*-
"""
backend/app/modules/sales/models/sale_models.py

Modelo ORM de ventas: una fila por ingreso físico (quantity = 1).

Invariantes en la tabla:
- UNIQUE(stripe_session_id, unit_number): una sesión se materializa una
  sola vez; un segundo intento choca con la constraint.
- UNIQUE(redemption_token)

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, str_enum
from app.modules.sales.enums import SalePaymentStatus


class Sale(Base):
    __tablename__ = "sales"
    __table_args__ = (
        UniqueConstraint("stripe_session_id", "unit_number"),
        UniqueConstraint("redemption_token"),
        CheckConstraint("quantity = 1", name="one_ticket_per_row"),
        CheckConstraint("unit_number >= 1", name="unit_number_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    buyer_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    ticket_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tickets.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    unit_number: Mapped[int] = mapped_column(Integer, nullable=False)

    # Montos por ingreso (cuotas del desglose de la sesión)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    platform_fee: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    gateway_fee: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    producer_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    payment_status: Mapped[SalePaymentStatus] = mapped_column(
        str_enum(SalePaymentStatus, name="sale_payment_status"),
        nullable=False,
        default=SalePaymentStatus.paid,
    )
    payment_method: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    stripe_session_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    stripe_payment_intent_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    stripe_customer_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    redemption_token: Mapped[str] = mapped_column(String(128), nullable=False)
    qr_code: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Sale id={self.id} session={self.stripe_session_id} unit={self.unit_number}>"


__all__ = ["Sale"]
