# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/__init__.py

Auth package public API:

Expone:
- CallerIdentity / AuthenticatedCaller
- get_caller_identity (dependencia FastAPI)
"""

from .identity import CallerIdentity, AuthenticatedCaller
from .dependencies import get_caller_identity, require_admin, resolve_caller

__all__ = [
    "CallerIdentity",
    "AuthenticatedCaller",
    "get_caller_identity",
    "require_admin",
    "resolve_caller",
]
# Fin del archivo backend/app/modules/auth/__init__.py
