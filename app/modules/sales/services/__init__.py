# -*- coding: utf-8 -*-
"""
backend/app/modules/sales/services/__init__.py
"""

from .verify_payment_service import VerifyPaymentService, check_session_identity

__all__ = ["VerifyPaymentService", "check_session_identity"]
