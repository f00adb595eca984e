# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/identity.py

Identidad del llamador como capacidad opaca: quién es y qué rol tiene.

Los servicios no consultan tablas de roles; reciben un CallerIdentity
resuelto una sola vez por request (ver dependencies.get_caller_identity).

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol
from uuid import UUID

from app.modules.auth.enums import AppRole


class CallerIdentity(Protocol):
    email: Optional[str]

    def is_admin(self) -> bool: ...

    def user_id(self) -> UUID: ...


@dataclass(frozen=True)
class AuthenticatedCaller:
    """Implementación respaldada por el JWT + user_roles aprobados."""

    subject: UUID
    email: Optional[str] = None
    roles: frozenset[AppRole] = field(default_factory=frozenset)

    def is_admin(self) -> bool:
        return AppRole.admin in self.roles

    def user_id(self) -> UUID:
        return self.subject


__all__ = ["CallerIdentity", "AuthenticatedCaller"]
