# -*- coding: utf-8 -*-
"""
backend/app/modules/sales/tokens.py

Tokens de canje y códigos QR.

El token sale de ``secrets`` (CSPRNG), nunca de un contador ni de la hora;
el payload del QR lo liga al evento: ``{"token": ..., "eventId": ...}``.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import json
import secrets
from urllib.parse import quote
from uuid import UUID

MIN_TOKEN_BYTES = 32

# Caracteres que encodeURIComponent deja sin escapar
_URI_COMPONENT_SAFE = "-_.!~*'()"


def generate_redemption_token(nbytes: int = MIN_TOKEN_BYTES) -> str:
    """Token URL-safe con al menos 256 bits de entropía."""
    return secrets.token_urlsafe(max(nbytes, MIN_TOKEN_BYTES))


def build_redemption_payload(token: str, event_id: UUID) -> str:
    return json.dumps({"token": token, "eventId": str(event_id)}, separators=(",", ":"))


def build_qr_code_url(payload: str, base_url: str, size: str = "300x300") -> str:
    return f"{base_url}?size={size}&data={quote(payload, safe=_URI_COMPONENT_SAFE)}"


__all__ = [
    "MIN_TOKEN_BYTES",
    "generate_redemption_token",
    "build_redemption_payload",
    "build_qr_code_url",
]
