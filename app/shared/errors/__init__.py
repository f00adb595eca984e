# -*- coding: utf-8 -*-
"""
backend/app/shared/errors/__init__.py

Taxonomía de errores de dominio del pipeline de checkout y liquidación.
"""

from .marketplace_errors import (
    ErrorCode,
    MarketplaceError,
    Unauthenticated,
    Unauthorized,
    InvalidRequest,
    NotFound,
    InsufficientInventory,
    SaleWindowClosed,
    AmountTooSmall,
    SecurityViolation,
    InvalidStateTransition,
    UpstreamFailure,
)

__all__ = [
    "ErrorCode",
    "MarketplaceError",
    "Unauthenticated",
    "Unauthorized",
    "InvalidRequest",
    "NotFound",
    "InsufficientInventory",
    "SaleWindowClosed",
    "AmountTooSmall",
    "SecurityViolation",
    "InvalidStateTransition",
    "UpstreamFailure",
]
