# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/repositories/profile_repository.py

Lecturas de perfiles y roles aprobados.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.enums import AppRole
from app.modules.auth.models import Profile, UserRole


class ProfileRepository:
    """Repositorio de Profile / UserRole."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get_profile(self, user_id: UUID) -> Optional[Profile]:
        result = await self._db.execute(select(Profile).where(Profile.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_approved_roles(self, user_id: UUID) -> frozenset[AppRole]:
        """Roles con ``is_approved = true`` del usuario."""
        result = await self._db.execute(
            select(UserRole.role).where(
                UserRole.user_id == user_id,
                UserRole.is_approved.is_(True),
            )
        )
        return frozenset(result.scalars().all())


__all__ = ["ProfileRepository"]
