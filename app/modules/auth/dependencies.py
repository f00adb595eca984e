# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/dependencies.py

Dependencias de autenticación JWT para FastAPI.

Provee:
- resolve_caller: Core logic token -> AuthenticatedCaller (única fuente de verdad)
- get_caller_identity: Dependencia FastAPI; devuelve None si no hay token válido.
  Los servicios deciden (Unauthenticated) para respetar su orden de validación.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database import get_async_session
from app.shared.errors import Unauthenticated, Unauthorized
from .identity import AuthenticatedCaller
from .repositories import ProfileRepository
from .security import oauth2_scheme, decode_access_token, TokenDecodeError

logger = logging.getLogger(__name__)


async def resolve_caller(token: Optional[str], db: AsyncSession) -> Optional[AuthenticatedCaller]:
    """
    Valida el JWT y carga (una sola vez) email y roles aprobados.

    El email sale del claim ``email``; si falta, del perfil.

    Returns:
        AuthenticatedCaller o None si el token falta o es inválido.
    """
    if not token:
        return None

    try:
        payload = decode_access_token(token)
        user_id = UUID(str(payload["sub"]))
    except (TokenDecodeError, ValueError) as e:
        logger.info("auth_token_rejected reason=%s", str(e))
        return None

    repo = ProfileRepository(db)
    email = payload.get("email") or None
    if not email:
        profile = await repo.get_profile(user_id)
        email = profile.email if profile else None

    roles = await repo.get_approved_roles(user_id)
    return AuthenticatedCaller(subject=user_id, email=email, roles=roles)


async def get_caller_identity(
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_async_session),
) -> Optional[AuthenticatedCaller]:
    """
    Dependencia de identidad para los handlers del pipeline.

    Extrae el JWT del header Authorization: Bearer <token>.
    """
    return await resolve_caller(token, db)


async def require_admin(
    caller: Optional[AuthenticatedCaller] = Depends(get_caller_identity),
) -> AuthenticatedCaller:
    """
    Dependencia que requiere rol admin aprobado.

    Raises:
        Unauthenticated: sin token válido
        Unauthorized: el usuario no es admin
    """
    if caller is None:
        raise Unauthenticated()
    if not caller.is_admin():
        logger.info("admin_access_denied user_id=%s", caller.user_id())
        raise Unauthorized()
    return caller


__all__ = [
    "resolve_caller",
    "get_caller_identity",
    "require_admin",
]
