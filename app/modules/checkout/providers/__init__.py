# -*- coding: utf-8 -*-
"""
backend/app/modules/checkout/providers/__init__.py
"""

from .stripe_provider import (
    PaymentGateway,
    ProviderCheckoutSession,
    StripeProvider,
    StripeSessionResult,
    get_payment_gateway,
)

__all__ = [
    "PaymentGateway",
    "ProviderCheckoutSession",
    "StripeProvider",
    "StripeSessionResult",
    "get_payment_gateway",
]
