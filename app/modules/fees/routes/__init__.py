# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/routes/__init__.py
"""

from .fee_admin_routes import router

__all__ = ["router"]
