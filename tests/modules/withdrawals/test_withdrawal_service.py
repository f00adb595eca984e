# -*- coding: utf-8 -*-
"""
backend/tests/modules/withdrawals/test_withdrawal_service.py

Tests de WithdrawalService y del handler /functions/v1/process-withdrawal.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

import uuid
from decimal import Decimal

import pytest

from app.modules.auth import AuthenticatedCaller
from app.modules.auth.enums import AppRole
from app.modules.withdrawals.enums import WithdrawalStatus
from app.modules.withdrawals.models import WithdrawalRequest
from app.modules.withdrawals.services import WithdrawalService, payout_reference_for
from app.shared.errors import (
    InvalidRequest,
    InvalidStateTransition,
    NotFound,
    Unauthenticated,
    Unauthorized,
)

URL = "/functions/v1/process-withdrawal"


@pytest.fixture
def admin():
    return AuthenticatedCaller(subject=uuid.uuid4(), email="admin@misterticket.test", roles=frozenset({AppRole.admin}))


@pytest.fixture
async def producer_id(seed):
    return await seed.user(email="produtor@example.com", full_name="Carlos Lima", roles=(AppRole.producer,))


@pytest.fixture
async def service(session_factory, recording_sink, policy):
    async with session_factory() as session:
        yield WithdrawalService(session, recording_sink, policy=policy)


async def _reload(session_factory, withdrawal_id):
    async with session_factory() as s:
        return await s.get(WithdrawalRequest, withdrawal_id)


class TestAuthorization:
    async def test_no_caller(self, service):
        with pytest.raises(Unauthenticated):
            await service.process(None, {})

    async def test_non_admin(self, service):
        producer = AuthenticatedCaller(subject=uuid.uuid4(), roles=frozenset({AppRole.producer}))
        with pytest.raises(Unauthorized):
            await service.process(producer, {"withdrawalId": str(uuid.uuid4()), "action": "approve"})


class TestValidation:
    async def test_unknown_withdrawal(self, service, admin):
        with pytest.raises(NotFound) as exc:
            await service.process(admin, {"withdrawalId": str(uuid.uuid4()), "action": "approve"})
        assert exc.value.message == "Withdrawal request not found"

    async def test_unknown_action(self, service, admin, seed, producer_id):
        withdrawal = await seed.withdrawal(producer_id)
        with pytest.raises(InvalidRequest) as exc:
            await service.process(admin, {"withdrawalId": str(withdrawal.id), "action": "cancel"})
        assert exc.value.field == "action"

    async def test_malformed_id(self, service, admin):
        with pytest.raises(InvalidRequest) as exc:
            await service.process(admin, {"withdrawalId": "42", "action": "approve"})
        assert exc.value.field == "withdrawalId"


class TestActions:
    async def test_approve_returns_payout_instructions(
        self, service, admin, seed, producer_id, recording_sink, session_factory
    ):
        withdrawal = await seed.withdrawal(producer_id, amount="250.00")

        result = await service.process(admin, {"withdrawalId": str(withdrawal.id), "action": "approve"})

        body = result.to_json()
        assert body["success"] is True
        assert body["status"] == "awaiting_transfer"
        assert body["payoutInstructions"] == {
            "producerDocument": "123.456.789-09",
            "amount": "250.00",
            "reference": payout_reference_for(withdrawal.id),
        }
        assert payout_reference_for(withdrawal.id).startswith("MT-SAQUE-")
        # approve no notifica
        assert recording_sink.completed == [] and recording_sink.rejected == []

        stored = await _reload(session_factory, withdrawal.id)
        assert stored.status == WithdrawalStatus.awaiting_transfer
        assert stored.approved_by == admin.user_id()
        assert stored.approved_at is not None

    async def test_reject_with_default_reason(self, service, admin, seed, producer_id, recording_sink, session_factory):
        withdrawal = await seed.withdrawal(producer_id)

        result = await service.process(admin, {"withdrawalId": str(withdrawal.id), "action": "reject"})

        assert result.status == "rejected"
        assert result.rejection_reason == "Solicitação rejeitada pelo administrador"
        (notice,) = recording_sink.rejected
        assert notice.to_email == "produtor@example.com"
        assert notice.full_name == "Carlos Lima"
        assert notice.rejection_reason == "Solicitação rejeitada pelo administrador"

        stored = await _reload(session_factory, withdrawal.id)
        assert stored.status == WithdrawalStatus.rejected
        assert stored.approved_by == admin.user_id()

    async def test_reject_with_reason(self, service, admin, seed, producer_id, recording_sink):
        withdrawal = await seed.withdrawal(producer_id)

        result = await service.process(
            admin,
            {"withdrawalId": str(withdrawal.id), "action": "reject", "rejectionReason": "Documento inválido"},
        )
        assert result.rejection_reason == "Documento inválido"
        assert recording_sink.rejected[0].rejection_reason == "Documento inválido"

    async def test_confirm_transfer_completes(self, service, admin, seed, producer_id, recording_sink, session_factory):
        withdrawal = await seed.withdrawal(producer_id, status=WithdrawalStatus.awaiting_transfer)

        result = await service.process(
            admin, {"withdrawalId": str(withdrawal.id), "action": "confirm_transfer"}
        )

        assert result.status == "completed"
        assert result.payout_id.startswith("manual_payout_")
        (notice,) = recording_sink.completed
        assert notice.payout_reference == result.payout_id
        assert notice.amount == Decimal("150.00")

        stored = await _reload(session_factory, withdrawal.id)
        assert stored.status == WithdrawalStatus.completed
        assert stored.stripe_payout_id == result.payout_id
        assert stored.completed_at is not None

    async def test_full_lifecycle(self, service, admin, seed, producer_id, session_factory):
        withdrawal = await seed.withdrawal(producer_id)
        body = {"withdrawalId": str(withdrawal.id)}

        await service.process(admin, {**body, "action": "approve"})
        await service.process(admin, {**body, "action": "confirm_transfer"})

        assert (await _reload(session_factory, withdrawal.id)).status == WithdrawalStatus.completed

    async def test_reject_completed_fails(self, service, admin, seed, producer_id):
        withdrawal = await seed.withdrawal(producer_id, status=WithdrawalStatus.completed)
        with pytest.raises(InvalidStateTransition):
            await service.process(admin, {"withdrawalId": str(withdrawal.id), "action": "reject"})

    async def test_confirm_pending_fails(self, service, admin, seed, producer_id, session_factory):
        withdrawal = await seed.withdrawal(producer_id)
        with pytest.raises(InvalidStateTransition) as exc:
            await service.process(admin, {"withdrawalId": str(withdrawal.id), "action": "confirm_transfer"})
        assert exc.value.message == "Cannot confirm_transfer a withdrawal in status 'pending'"
        assert (await _reload(session_factory, withdrawal.id)).status == WithdrawalStatus.pending

    async def test_concurrent_admin_loses(self, service, admin, seed, producer_id, session_factory):
        """Test: el UPDATE condicional rechaza si otro admin ya cambió el estado."""
        withdrawal = await seed.withdrawal(producer_id)

        # Otro admin rechaza después de que este request leyó la fila
        original_get = service._repo.get

        async def stale_get(withdrawal_id):
            row = await original_get(withdrawal_id)
            async with session_factory() as other:
                other_row = await other.get(WithdrawalRequest, withdrawal_id)
                other_row.status = WithdrawalStatus.rejected
                await other.commit()
            return row

        service._repo.get = stale_get

        with pytest.raises(InvalidStateTransition):
            await service.process(admin, {"withdrawalId": str(withdrawal.id), "action": "approve"})
        assert (await _reload(session_factory, withdrawal.id)).status == WithdrawalStatus.rejected

    async def test_missing_producer_email_is_tolerated(self, service, admin, seed, recording_sink):
        withdrawal = await seed.withdrawal(uuid.uuid4())

        result = await service.process(admin, {"withdrawalId": str(withdrawal.id), "action": "reject"})

        assert result.status == "rejected"
        assert recording_sink.rejected == []


class TestProcessWithdrawalRoute:
    async def test_preflight(self, async_client):
        response = await async_client.options(URL)
        assert response.status_code == 200

    async def test_non_admin_gets_error_shape(self, async_client, seed, auth_headers):
        user_id = await seed.user()
        response = await async_client.post(
            URL, headers=auth_headers(user_id), json={"withdrawalId": str(uuid.uuid4()), "action": "approve"}
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Unauthorized: admin access required"}

    async def test_admin_approves(self, async_client, seed, auth_headers, producer_id):
        admin_id = await seed.admin()
        withdrawal = await seed.withdrawal(producer_id)

        response = await async_client.post(
            URL,
            headers=auth_headers(admin_id, email="admin@misterticket.test"),
            json={"withdrawalId": str(withdrawal.id), "action": "approve"},
        )

        assert response.status_code == 200, response.text
        body = response.json()
        assert body["success"] is True
        assert body["withdrawalId"] == str(withdrawal.id)
        assert body["status"] == "awaiting_transfer"
        assert body["payoutInstructions"]["reference"] == payout_reference_for(withdrawal.id)
