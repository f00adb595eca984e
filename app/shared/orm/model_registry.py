# -*- coding: utf-8 -*-
"""
backend/app/shared/orm/model_registry.py

Registro de modelos ORM de todos los módulos.

Importar los modelos registra sus tablas en ``Base.metadata`` y resuelve
las FKs entre módulos (sales -> events/tickets). Lo usan los tests para
``create_all`` y cualquier herramienta que necesite el esquema completo.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import logging

from sqlalchemy import MetaData

from app.shared.database.base import Base

logger = logging.getLogger(__name__)

_MODELS_LOADED = False


def load_all_models() -> MetaData:
    global _MODELS_LOADED

    if not _MODELS_LOADED:
        from app.modules.auth.models import Profile, UserRole  # noqa: F401
        from app.modules.events.models import Event, TicketBatch  # noqa: F401
        from app.modules.fees.models import FeeConfig, ProducerCustomFee  # noqa: F401
        from app.modules.sales.models import Sale  # noqa: F401
        from app.modules.withdrawals.models import WithdrawalRequest  # noqa: F401

        _MODELS_LOADED = True
        logger.debug("orm_models_loaded tables=%s", sorted(Base.metadata.tables))

    return Base.metadata


__all__ = ["load_all_models"]
