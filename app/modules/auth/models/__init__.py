# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/models/__init__.py

Modelos ORM del módulo de autenticación.
"""

from .user_models import Profile, UserRole

__all__ = ["Profile", "UserRole"]
