# -*- coding: utf-8 -*-
"""
backend/app/modules/withdrawals/repositories/__init__.py
"""

from .withdrawal_repository import WithdrawalRepository

__all__ = ["WithdrawalRepository"]
