# -*- coding: utf-8 -*-
"""
backend/app/modules/withdrawals/models/__init__.py
"""

from .withdrawal_models import WithdrawalRequest

__all__ = ["WithdrawalRequest"]
