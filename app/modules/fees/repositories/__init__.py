# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/repositories/__init__.py
"""

from .fee_repository import FeeRepository

__all__ = ["FeeRepository"]
