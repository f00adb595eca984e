# -*- coding: utf-8 -*-
"""
backend/app/modules/checkout/services/__init__.py
"""

from .checkout_service import CheckoutService
from .session_params import build_charge, build_checkout_session_params, build_line_items

__all__ = [
    "CheckoutService",
    "build_charge",
    "build_checkout_session_params",
    "build_line_items",
]
