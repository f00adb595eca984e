# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/repositories/__init__.py
"""

from .profile_repository import ProfileRepository

__all__ = ["ProfileRepository"]
