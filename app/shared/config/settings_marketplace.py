# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_marketplace.py

Configuración de checkout y liquidación para Mister Ticket.

Descripción:
    Centraliza las constantes de política del pipeline de venta:
    moneda, monto mínimo cobrable, tasas por defecto, límites de compra,
    generación de tokens/QR y timeouts de proveedores externos.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarketplaceSettings(BaseSettings):
    """Configuración del pipeline de checkout y liquidación."""

    # =========================================================================
    # MONEDA Y MONTOS
    # =========================================================================

    currency: str = Field(
        default="brl",
        description="Moneda de liquidación (código ISO 4217 en minúsculas, formato Stripe)"
    )

    min_charge_amount: Decimal = Field(
        default=Decimal("0.50"),
        description="Monto mínimo cobrable por el proveedor en la moneda de liquidación"
    )

    # =========================================================================
    # TASAS POR DEFECTO (cuando no hay fee_config activa)
    # =========================================================================

    default_platform_fee_percentage: Decimal = Field(
        default=Decimal("10"),
        description="Porcentaje de tasa de plataforma por defecto (único fallback canónico)"
    )

    default_gateway_fee_percentage: Decimal = Field(
        default=Decimal("3"),
        description="Porcentaje de tasa de la pasarela por defecto"
    )

    default_min_withdrawal_amount: Decimal = Field(
        default=Decimal("50.00"),
        description="Monto mínimo de retiro por defecto"
    )

    # =========================================================================
    # LÍMITES DE COMPRA
    # =========================================================================

    max_tickets_per_purchase: int = Field(
        default=10,
        description="Máximo de ingresos por compra"
    )

    # =========================================================================
    # TOKENS DE CANJE Y QR
    # =========================================================================

    redemption_token_bytes: int = Field(
        default=32,
        description="Bytes aleatorios por token de canje (32 bytes = 256 bits)"
    )

    qr_code_base_url: str = Field(
        default="https://api.qrserver.com/v1/create-qr-code/",
        description="Servicio de renderizado de imágenes QR"
    )

    qr_code_size: str = Field(
        default="300x300",
        description="Tamaño de la imagen QR"
    )

    # =========================================================================
    # TIMEOUTS
    # =========================================================================

    provider_timeout_seconds: float = Field(
        default=15.0,
        description="Timeout de llamadas al proveedor de pagos"
    )

    notification_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout de envío de notificaciones (best-effort)"
    )

    # =========================================================================
    # RETIROS
    # =========================================================================

    default_rejection_reason: str = Field(
        default="Solicitação rejeitada pelo administrador",
        description="Motivo de rechazo cuando el admin no informa uno"
    )

    @field_validator("currency", mode="before")
    @classmethod
    def _normalize_currency(cls, v: Optional[str]) -> str:
        return (v or "brl").strip().lower()

    @field_validator("redemption_token_bytes")
    @classmethod
    def _token_entropy_bounds(cls, v: int) -> int:
        if v < 32:
            raise ValueError("redemption_token_bytes must be >= 32 (256 bits)")
        # base64url de 96 bytes = 128 caracteres, el ancho de sales.redemption_token
        if v > 96:
            raise ValueError("redemption_token_bytes must be <= 96")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_marketplace_settings: Optional[MarketplaceSettings] = None


def get_marketplace_settings() -> MarketplaceSettings:
    """
    Obtiene la instancia global de configuración del marketplace.

    Returns:
        MarketplaceSettings: Configuración de checkout y liquidación
    """
    global _marketplace_settings
    if _marketplace_settings is None:
        _marketplace_settings = MarketplaceSettings()
    return _marketplace_settings


__all__ = [
    "MarketplaceSettings",
    "get_marketplace_settings",
]
# Fin del archivo backend/app/shared/config/settings_marketplace.py
