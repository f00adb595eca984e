# -*- coding: utf-8 -*-
"""
backend/app/modules/sales/enums.py

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from enum import StrEnum


class SalePaymentStatus(StrEnum):
    paid = "paid"
    refunded = "refunded"


# Estado de pago que reporta Stripe para una sesión cobrada
PROVIDER_PAID_STATUS = "paid"


__all__ = ["SalePaymentStatus", "PROVIDER_PAID_STATUS"]
