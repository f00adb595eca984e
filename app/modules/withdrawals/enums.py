# -*- coding: utf-8 -*-
"""
backend/app/modules/withdrawals/enums.py

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from enum import StrEnum


class WithdrawalStatus(StrEnum):
    pending = "pending"
    awaiting_transfer = "awaiting_transfer"
    completed = "completed"
    rejected = "rejected"


class WithdrawalAction(StrEnum):
    approve = "approve"
    reject = "reject"
    confirm_transfer = "confirm_transfer"


TERMINAL_STATUSES = frozenset({WithdrawalStatus.completed, WithdrawalStatus.rejected})


__all__ = ["WithdrawalStatus", "WithdrawalAction", "TERMINAL_STATUSES"]
