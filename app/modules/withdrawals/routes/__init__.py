# -*- coding: utf-8 -*-
"""
backend/app/modules/withdrawals/routes/__init__.py
"""

from .withdrawal_routes import router

__all__ = ["router"]
