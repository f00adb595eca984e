# -*- coding: utf-8 -*-
"""
backend/app/modules/withdrawals/services/__init__.py
"""

from .withdrawal_service import WithdrawalService, generate_payout_id, payout_reference_for

__all__ = ["WithdrawalService", "generate_payout_id", "payout_reference_for"]
