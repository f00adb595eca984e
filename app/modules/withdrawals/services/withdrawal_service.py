# -*- coding: utf-8 -*-
"""
backend/app/modules/withdrawals/services/withdrawal_service.py

Procesamiento admin de solicitudes de retiro.

    1. Admin aprobado           -> Unauthenticated / Unauthorized
    2. Esquema de entrada       -> InvalidRequest
    3. Solicitud existe         -> NotFound
    4. Acción válida            -> InvalidRequest
    5. Transición permitida     -> InvalidStateTransition

approve no notifica: devuelve las instrucciones para la transferencia
manual. reject y confirm_transfer notifican al productor (best-effort,
después del commit).

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.identity import CallerIdentity
from app.modules.auth.repositories import ProfileRepository
from app.modules.notifications import NotificationSink, WithdrawalNotice, notify_best_effort
from app.modules.withdrawals.enums import WithdrawalAction, WithdrawalStatus
from app.modules.withdrawals.models import WithdrawalRequest
from app.modules.withdrawals.repositories import WithdrawalRepository
from app.modules.withdrawals.schemas import (
    PayoutInstructions,
    ProcessWithdrawalRequest,
    ProcessWithdrawalResponse,
)
from app.modules.withdrawals.state import next_status, parse_action
from app.observability.prom import WITHDRAWAL_TRANSITIONS
from app.shared.config import MarketplaceSettings, get_marketplace_settings
from app.shared.errors import InvalidStateTransition, NotFound, Unauthenticated, Unauthorized
from app.shared.observability import log_step
from app.shared.utils.base_models import parse_request
from app.shared.utils.datetime_helpers import utcnow

logger = logging.getLogger(__name__)


def payout_reference_for(withdrawal_id: uuid.UUID) -> str:
    """Referencia legible para el concepto de la transferencia."""
    return f"MT-SAQUE-{withdrawal_id.hex[:8].upper()}"


def generate_payout_id() -> str:
    return f"manual_payout_{uuid.uuid4().hex}"


class WithdrawalService:
    def __init__(
        self,
        db: AsyncSession,
        notifier: NotificationSink,
        *,
        policy: Optional[MarketplaceSettings] = None,
        now_fn: Callable[[], datetime] = utcnow,
    ) -> None:
        self._db = db
        self._notifier = notifier
        self._repo = WithdrawalRepository(db)
        self._profiles = ProfileRepository(db)
        self._policy = policy or get_marketplace_settings()
        self._now = now_fn

    async def process(self, caller: Optional[CallerIdentity], payload: Any) -> ProcessWithdrawalResponse:
        with log_step("process_withdrawal.authorize"):
            if caller is None:
                raise Unauthenticated()
            if not caller.is_admin():
                raise Unauthorized()
        admin_id = caller.user_id()

        with log_step("process_withdrawal.validate_input", admin_id=admin_id):
            request = parse_request(ProcessWithdrawalRequest, payload)

        with log_step("process_withdrawal.load", withdrawal_id=request.withdrawal_id):
            withdrawal = await self._repo.get(request.withdrawal_id)
            if withdrawal is None:
                raise NotFound("Withdrawal request not found")

        with log_step(
            "process_withdrawal.transition",
            withdrawal_id=withdrawal.id, action=request.action, from_status=withdrawal.status,
        ):
            action = parse_action(request.action)
            from_status = withdrawal.status
            to_status = next_status(from_status, action)
            values = self._transition_values(withdrawal, action, admin_id, request.rejection_reason)
            if not await self._repo.transition(withdrawal.id, from_status, status=to_status, **values):
                # Otro admin cambió el estado entre la lectura y el UPDATE
                await self._db.rollback()
                raise InvalidStateTransition(from_status.value, action.value)
            await self._db.commit()
            await self._db.refresh(withdrawal)

        WITHDRAWAL_TRANSITIONS.labels(action=action.value).inc()
        logger.info(
            "withdrawal_transitioned withdrawal_id=%s action=%s from=%s to=%s admin_id=%s",
            withdrawal.id, action.value, from_status.value, to_status.value, admin_id,
        )

        if action == WithdrawalAction.reject:
            await notify_best_effort(
                "withdrawal_rejected",
                self._notify(withdrawal, self._notifier.send_withdrawal_rejected),
                self._policy.notification_timeout_seconds,
                withdrawal_id=withdrawal.id,
            )
            return ProcessWithdrawalResponse(
                withdrawal_id=withdrawal.id,
                status=withdrawal.status.value,
                message="Solicitação de saque rejeitada",
                rejection_reason=withdrawal.rejection_reason,
            )

        if action == WithdrawalAction.approve:
            return ProcessWithdrawalResponse(
                withdrawal_id=withdrawal.id,
                status=withdrawal.status.value,
                message=(
                    "Saque aprovado. Execute a transferência via PIX para o CPF/CNPJ "
                    "informado e confirme a transferência em seguida."
                ),
                payout_instructions=PayoutInstructions(
                    producer_document=withdrawal.producer_document,
                    amount=withdrawal.amount,
                    reference=payout_reference_for(withdrawal.id),
                ),
            )

        await notify_best_effort(
            "withdrawal_completed",
            self._notify(withdrawal, self._notifier.send_withdrawal_completed),
            self._policy.notification_timeout_seconds,
            withdrawal_id=withdrawal.id,
        )
        return ProcessWithdrawalResponse(
            withdrawal_id=withdrawal.id,
            status=withdrawal.status.value,
            message="Transferência confirmada e saque concluído",
            payout_id=withdrawal.stripe_payout_id,
        )

    def _transition_values(
        self,
        withdrawal: WithdrawalRequest,
        action: WithdrawalAction,
        admin_id: uuid.UUID,
        rejection_reason: Optional[str],
    ) -> dict:
        now = self._now()
        if action == WithdrawalAction.reject:
            return {
                "approved_by": admin_id,
                "approved_at": now,
                "rejection_reason": rejection_reason or self._policy.default_rejection_reason,
            }
        if action == WithdrawalAction.approve:
            return {"approved_by": admin_id, "approved_at": now}
        return {"stripe_payout_id": generate_payout_id(), "completed_at": now}

    async def _notify(self, withdrawal: WithdrawalRequest, send: Callable[[WithdrawalNotice], Any]) -> None:
        profile = await self._profiles.get_profile(withdrawal.producer_id)
        if profile is None or not profile.email:
            raise ValueError(f"producer profile or email not available producer_id={withdrawal.producer_id}")
        await send(
            WithdrawalNotice(
                to_email=profile.email,
                full_name=profile.full_name or profile.email,
                amount=withdrawal.amount,
                producer_document=withdrawal.producer_document,
                payout_reference=withdrawal.stripe_payout_id,
                rejection_reason=withdrawal.rejection_reason,
            )
        )


__all__ = ["WithdrawalService", "payout_reference_for", "generate_payout_id"]
