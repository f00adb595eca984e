# -*- coding: utf-8 -*-
"""
backend/app/modules/sales/routes/__init__.py
"""

from .verify_payment_routes import router

__all__ = ["router"]
