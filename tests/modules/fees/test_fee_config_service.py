# -*- coding: utf-8 -*-
"""
backend/tests/modules/fees/test_fee_config_service.py

Tests de administración de tasas: historial append-only de fee_config,
overrides por productor y los endpoints admin.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

import uuid
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.modules.fees.enums import FeeType
from app.modules.fees.models import FeeConfig, ProducerCustomFee
from app.modules.fees.schemas import FeeConfigUpdateRequest, ProducerFeeUpsertRequest
from app.modules.fees.services import FeeConfigService
from app.shared.errors import NotFound


def _update(platform="12", fee_type=FeeType.percentage, gateway="4", min_withdrawal="30"):
    return FeeConfigUpdateRequest(
        platform_fee_value=Decimal(platform),
        platform_fee_type=fee_type,
        payment_gateway_fee_percentage=Decimal(gateway),
        min_withdrawal_amount=Decimal(min_withdrawal),
    )


class TestFeeConfigHistory:
    async def test_get_active_without_rows_returns_defaults(self, db_session, policy):
        config = await FeeConfigService(db_session, policy).get_active_config()

        assert config.is_default is True
        assert config.platform_fee_value == policy.default_platform_fee_percentage
        assert config.payment_gateway_fee_percentage == policy.default_gateway_fee_percentage

    async def test_update_deactivates_previous_and_appends(self, db_session, seed, policy):
        """Test: update_config deja una sola fila activa y conserva el historial."""
        previous = await seed.fee_config(platform="10", gateway="3")
        admin_id = uuid.uuid4()

        service = FeeConfigService(db_session, policy)
        first = await service.update_config(_update(platform="12"), admin_id)
        second = await service.update_config(_update(platform="15", gateway="2.5"), admin_id)

        total = await db_session.scalar(select(func.count()).select_from(FeeConfig))
        active = (
            await db_session.execute(select(FeeConfig).where(FeeConfig.is_active.is_(True)))
        ).scalars().all()

        assert total == 3
        assert [c.id for c in active] == [second.id]
        assert second.platform_fee_value == Decimal("15")
        assert first.id != previous.id

        old = await db_session.get(FeeConfig, previous.id)
        await db_session.refresh(old)
        assert old.is_active is False

    async def test_update_records_admin(self, db_session, policy):
        admin_id = uuid.uuid4()
        await FeeConfigService(db_session, policy).update_config(_update(), admin_id)

        row = (await db_session.execute(select(FeeConfig))).scalar_one()
        assert row.created_by == admin_id
        assert row.platform_fee_type == FeeType.percentage

    def test_percentage_above_100_rejected(self):
        with pytest.raises(ValueError):
            _update(platform="150")

    def test_fixed_fee_may_exceed_100(self):
        payload = _update(platform="150", fee_type=FeeType.fixed)
        assert payload.platform_fee_value == Decimal("150")


class TestProducerFees:
    async def test_upsert_creates_then_updates_single_row(self, db_session, policy):
        producer_id, admin_id = uuid.uuid4(), uuid.uuid4()
        service = FeeConfigService(db_session, policy)

        await service.upsert_producer_fee(
            producer_id, ProducerFeeUpsertRequest(fee_value=Decimal("5"), fee_type=FeeType.percentage), admin_id
        )
        updated = await service.upsert_producer_fee(
            producer_id, ProducerFeeUpsertRequest(fee_value=Decimal("2.00"), fee_type=FeeType.fixed), admin_id
        )

        rows = (await db_session.execute(select(ProducerCustomFee))).scalars().all()
        assert len(rows) == 1
        assert updated.fee_type == FeeType.fixed
        assert updated.fee_value == Decimal("2.00")

    async def test_deactivate(self, db_session, seed, policy):
        producer_id = uuid.uuid4()
        await seed.producer_fee(producer_id, "3", FeeType.percentage)

        result = await FeeConfigService(db_session, policy).deactivate_producer_fee(producer_id, uuid.uuid4())
        assert result.is_active is False

    async def test_deactivate_unknown_producer(self, db_session, policy):
        with pytest.raises(NotFound):
            await FeeConfigService(db_session, policy).deactivate_producer_fee(uuid.uuid4(), uuid.uuid4())


class TestFeeAdminRoutes:
    async def test_requires_token(self, async_client):
        response = await async_client.get("/api/admin/fees/config")

        assert response.status_code == 500
        assert response.json() == {"error": "User not authenticated"}

    async def test_requires_admin_role(self, async_client, seed, auth_headers):
        user_id = await seed.user()
        response = await async_client.get("/api/admin/fees/config", headers=auth_headers(user_id))

        assert response.status_code == 500
        assert response.json() == {"error": "Unauthorized: admin access required"}

    async def test_unapproved_admin_is_rejected(self, async_client, seed, auth_headers):
        from app.modules.auth.enums import AppRole
        from app.modules.auth.models import UserRole

        user_id = await seed.user()
        await seed.add(UserRole(user_id=user_id, role=AppRole.admin, is_approved=False))

        response = await async_client.get("/api/admin/fees/config", headers=auth_headers(user_id))
        assert response.json() == {"error": "Unauthorized: admin access required"}

    async def test_admin_updates_config(self, async_client, seed, auth_headers):
        admin_id = await seed.admin()
        headers = auth_headers(admin_id, email="admin@misterticket.test")

        response = await async_client.put(
            "/api/admin/fees/config",
            headers=headers,
            json={
                "platform_fee_value": "8.5",
                "platform_fee_type": "percentage",
                "payment_gateway_fee_percentage": "3.99",
                "min_withdrawal_amount": "50",
            },
        )
        assert response.status_code == 200, response.text
        body = response.json()
        assert Decimal(body["platform_fee_value"]) == Decimal("8.5")
        assert body["is_active"] is True

        current = await async_client.get("/api/admin/fees/config", headers=headers)
        assert current.json()["id"] == body["id"]
        assert current.json()["is_default"] is False

    async def test_invalid_body_uses_error_shape(self, async_client, seed, auth_headers):
        admin_id = await seed.admin()
        response = await async_client.put(
            "/api/admin/fees/config",
            headers=auth_headers(admin_id),
            json={"platform_fee_value": "-1"},
        )

        assert response.status_code == 500
        assert response.json()["error"].startswith("Invalid ")
