# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/enums/__init__.py

Export central de enums de autenticación.
"""

from .role_enum import AppRole

__all__ = ["AppRole"]
