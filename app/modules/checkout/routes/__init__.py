# -*- coding: utf-8 -*-
"""
backend/app/modules/checkout/routes/__init__.py
"""

from .checkout_routes import router

__all__ = ["router"]
