# -*- coding: utf-8 -*-
"""
backend/app/shared/errors/marketplace_errors.py

Excepciones de dominio para checkout, verificación de pago y retiros.

Todas derivan de MarketplaceError y llevan un ErrorCode estable. La capa HTTP
las convierte a ``{"error": message}`` (ver middleware/exception_handler.py).

Los mensajes son los que ve el cliente; los detalles sensibles
(p.ej. el motivo de una violación de seguridad) viajan en atributos
y solo se registran en logs.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    UNAUTHENTICATED = "Unauthenticated"
    UNAUTHORIZED = "Unauthorized"
    INVALID_REQUEST = "InvalidRequest"
    NOT_FOUND = "NotFound"
    INSUFFICIENT_INVENTORY = "InsufficientInventory"
    SALE_WINDOW_CLOSED = "SaleWindowClosed"
    AMOUNT_TOO_SMALL = "AmountTooSmall"
    SECURITY_VIOLATION = "SecurityViolation"
    INVALID_STATE_TRANSITION = "InvalidStateTransition"
    UPSTREAM_FAILURE = "UpstreamFailure"


class MarketplaceError(Exception):
    """Error base del dominio."""

    code: ErrorCode = ErrorCode.INVALID_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class Unauthenticated(MarketplaceError):
    """El llamador no presentó una identidad válida."""
    code = ErrorCode.UNAUTHENTICATED

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class Unauthorized(MarketplaceError):
    """El llamador no tiene el rol requerido."""
    code = ErrorCode.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized: admin access required"):
        super().__init__(message)


class InvalidRequest(MarketplaceError):
    """Violación de esquema o de campo en la entrada."""
    code = ErrorCode.INVALID_REQUEST

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class NotFound(MarketplaceError):
    code = ErrorCode.NOT_FOUND


class InsufficientInventory(MarketplaceError):
    """No hay suficientes ingresos disponibles en el lote."""
    code = ErrorCode.INSUFFICIENT_INVENTORY

    def __init__(self, available: int, message: Optional[str] = None):
        self.available = available
        super().__init__(message or f"Only {available} tickets available")


class SaleWindowClosed(MarketplaceError):
    code = ErrorCode.SALE_WINDOW_CLOSED


class AmountTooSmall(MarketplaceError):
    code = ErrorCode.AMOUNT_TOO_SMALL


class SecurityViolation(MarketplaceError):
    """
    Discrepancia de identidad durante la verificación de pago.

    El mensaje público es genérico; ``reason`` queda para auditoría.
    """
    code = ErrorCode.SECURITY_VIOLATION
    PUBLIC_MESSAGE = "Payment verification failed"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(self.PUBLIC_MESSAGE)


class InvalidStateTransition(MarketplaceError):
    """Se intenta una acción no permitida desde el estado actual."""
    code = ErrorCode.INVALID_STATE_TRANSITION

    def __init__(self, from_state: str, action: str, message: Optional[str] = None):
        self.from_state = from_state
        self.action = action
        super().__init__(
            message or f"Cannot {action} a withdrawal in status '{from_state}'"
        )


class UpstreamFailure(MarketplaceError):
    """Proveedor de pagos o almacén de datos no disponible."""
    code = ErrorCode.UPSTREAM_FAILURE


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

# Fin del archivo backend/app/shared/errors/marketplace_errors.py
