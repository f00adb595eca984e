# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/models/fee_models.py

Modelos ORM de tasas.

- FeeConfig: historial append-only; a lo sumo una fila con is_active=true
  (índice único parcial en PostgreSQL y SQLite).
- ProducerCustomFee: override por productor (una fila por productor);
  cuando está activa reemplaza por completo la tasa global de plataforma.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, Numeric, Uuid, func, text
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, str_enum
from app.modules.fees.enums import FeeType


class FeeConfig(Base):
    __tablename__ = "fee_config"
    __table_args__ = (
        Index(
            "uq_fee_config_single_active",
            "is_active",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    platform_fee_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    platform_fee_type: Mapped[FeeType] = mapped_column(
        str_enum(FeeType, name="fee_type"), nullable=False, default=FeeType.percentage
    )
    payment_gateway_fee_percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    min_withdrawal_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return (
            f"<FeeConfig id={self.id} platform={self.platform_fee_value} "
            f"({self.platform_fee_type}) active={self.is_active}>"
        )


class ProducerCustomFee(Base):
    __tablename__ = "producer_custom_fees"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    producer_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, unique=True, index=True)
    fee_value: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    fee_type: Mapped[FeeType] = mapped_column(str_enum(FeeType, name="fee_type"), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<ProducerCustomFee producer_id={self.producer_id} {self.fee_value} ({self.fee_type})>"


__all__ = ["FeeConfig", "ProducerCustomFee"]
