# -*- coding: utf-8 -*-
"""
backend/app/modules/sales/repositories/__init__.py
"""

from .sale_repository import SaleRepository

__all__ = ["SaleRepository"]
