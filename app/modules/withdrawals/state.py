# -*- coding: utf-8 -*-
"""
backend/app/modules/withdrawals/state.py

Tabla de transiciones de WithdrawalRequest.

    pending --reject--> rejected
    pending --approve--> awaiting_transfer --confirm_transfer--> completed

Cualquier otro par (estado, acción) es InvalidStateTransition.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

from typing import Dict, Tuple

from app.shared.errors import InvalidRequest, InvalidStateTransition
from app.modules.withdrawals.enums import WithdrawalAction, WithdrawalStatus

TRANSITIONS: Dict[Tuple[WithdrawalStatus, WithdrawalAction], WithdrawalStatus] = {
    (WithdrawalStatus.pending, WithdrawalAction.reject): WithdrawalStatus.rejected,
    (WithdrawalStatus.pending, WithdrawalAction.approve): WithdrawalStatus.awaiting_transfer,
    (WithdrawalStatus.awaiting_transfer, WithdrawalAction.confirm_transfer): WithdrawalStatus.completed,
}


def parse_action(raw: str) -> WithdrawalAction:
    try:
        return WithdrawalAction(raw)
    except ValueError:
        allowed = ", ".join(a.value for a in WithdrawalAction)
        raise InvalidRequest(f"Invalid action: must be one of {allowed}", field="action") from None


def next_status(current: WithdrawalStatus, action: WithdrawalAction) -> WithdrawalStatus:
    try:
        return TRANSITIONS[(current, action)]
    except KeyError:
        raise InvalidStateTransition(current.value, action.value) from None


__all__ = ["TRANSITIONS", "parse_action", "next_status"]
