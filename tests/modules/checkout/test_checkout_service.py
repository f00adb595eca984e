# -*- coding: utf-8 -*-
"""
backend/tests/modules/checkout/test_checkout_service.py

Tests de CheckoutService: orden de validación, mensajes de error,
parámetros de la Stripe Checkout Session y metadata embebida.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy import select

from app.modules.auth import AuthenticatedCaller
from app.modules.checkout.services import CheckoutService
from app.modules.events.models import TicketBatch
from app.modules.fees.enums import FeeType
from app.shared.errors import (
    AmountTooSmall,
    InsufficientInventory,
    InvalidRequest,
    NotFound,
    SaleWindowClosed,
    Unauthenticated,
)
from app.shared.utils.datetime_helpers import utcnow

ORIGIN = "https://misterticket.test"


@pytest.fixture
def buyer():
    return AuthenticatedCaller(subject=uuid.uuid4(), email="comprador@example.com")


@pytest.fixture
def service(db_session, fake_gateway, policy):
    return CheckoutService(db_session, fake_gateway, policy=policy)


def _body(event, ticket, quantity=2):
    return {"eventId": str(event.id), "ticketId": str(ticket.id), "quantity": quantity}


class TestValidationOrder:
    async def test_no_caller(self, service):
        with pytest.raises(Unauthenticated) as exc:
            await service.create_checkout(None, {"quantity": "nope"}, ORIGIN)
        assert exc.value.message == "User not authenticated or email not available"

    async def test_caller_without_email(self, service):
        caller = AuthenticatedCaller(subject=uuid.uuid4(), email=None)
        with pytest.raises(Unauthenticated):
            await service.create_checkout(caller, {}, ORIGIN)

    async def test_malformed_event_id(self, service, buyer):
        with pytest.raises(InvalidRequest) as exc:
            await service.create_checkout(
                buyer, {"eventId": "x", "ticketId": str(uuid.uuid4()), "quantity": 1}, ORIGIN
            )
        assert exc.value.field == "eventId"
        assert exc.value.message.startswith("Invalid eventId:")

    @pytest.mark.parametrize("quantity", [0, 11, -3])
    async def test_quantity_out_of_range(self, service, buyer, quantity):
        """Test: quantity fuera de [1, 10] -> InvalidRequest antes de tocar la base."""
        body = {"eventId": str(uuid.uuid4()), "ticketId": str(uuid.uuid4()), "quantity": quantity}
        with pytest.raises(InvalidRequest) as exc:
            await service.create_checkout(buyer, body, ORIGIN)
        assert exc.value.field == "quantity"

    @pytest.mark.parametrize("quantity", [True, "3", 2.0, None])
    async def test_quantity_must_be_integer(self, service, buyer, quantity):
        """Test: quantity no entero (bool, string, float) no se coerciona."""
        body = {"eventId": str(uuid.uuid4()), "ticketId": str(uuid.uuid4()), "quantity": quantity}
        with pytest.raises(InvalidRequest) as exc:
            await service.create_checkout(buyer, body, ORIGIN)
        assert exc.value.field == "quantity"
        assert exc.value.message.startswith("Invalid quantity:")

    async def test_body_not_an_object(self, service, buyer):
        with pytest.raises(InvalidRequest):
            await service.create_checkout(buyer, None, ORIGIN)

    async def test_unknown_event(self, service, buyer):
        body = {"eventId": str(uuid.uuid4()), "ticketId": str(uuid.uuid4()), "quantity": 1}
        with pytest.raises(NotFound) as exc:
            await service.create_checkout(buyer, body, ORIGIN)
        assert exc.value.message == "Event not found"

    async def test_ticket_of_another_event(self, service, buyer, seed):
        event, _ = await seed.event_with_ticket()
        _, foreign_ticket = await seed.event_with_ticket()

        with pytest.raises(NotFound) as exc:
            await service.create_checkout(buyer, _body(event, foreign_ticket), ORIGIN)
        assert exc.value.message == "Ticket not found"

    async def test_insufficient_inventory_states_remaining(self, service, buyer, seed):
        event, ticket = await seed.event_with_ticket(quantity_total=10, quantity_sold=8)

        with pytest.raises(InsufficientInventory) as exc:
            await service.create_checkout(buyer, _body(event, ticket, quantity=3), ORIGIN)
        assert exc.value.available == 2
        assert exc.value.message == "Only 2 tickets available"

    async def test_inventory_checked_before_sale_window(self, service, buyer, seed):
        now = utcnow()
        event, ticket = await seed.event_with_ticket(
            quantity_total=1, sale_start=now + timedelta(days=1), sale_end=now + timedelta(days=2)
        )
        with pytest.raises(InsufficientInventory):
            await service.create_checkout(buyer, _body(event, ticket, quantity=2), ORIGIN)

    @pytest.mark.parametrize("offset", [timedelta(days=-3), timedelta(days=3)])
    async def test_outside_sale_window(self, service, buyer, seed, offset):
        """Test: fuera de [sale_start, sale_end] -> SaleWindowClosed aun con inventario."""
        now = utcnow()
        event, ticket = await seed.event_with_ticket(
            sale_start=now + offset - timedelta(hours=1), sale_end=now + offset + timedelta(hours=1)
        )
        with pytest.raises(SaleWindowClosed) as exc:
            await service.create_checkout(buyer, _body(event, ticket), ORIGIN)
        assert exc.value.message == "Ticket sales are not active for this batch"

    async def test_amount_too_small(self, service, buyer, seed):
        event, ticket = await seed.event_with_ticket(price="0.30")

        with pytest.raises(AmountTooSmall) as exc:
            await service.create_checkout(buyer, _body(event, ticket, quantity=1), ORIGIN)
        assert exc.value.message == "Total amount must be at least 0.50 BRL"

    async def test_failures_do_not_touch_provider(self, service, buyer, seed, fake_gateway):
        event, ticket = await seed.event_with_ticket(quantity_total=1)
        with pytest.raises(InsufficientInventory):
            await service.create_checkout(buyer, _body(event, ticket, quantity=2), ORIGIN)
        assert fake_gateway.created_params == []


class TestSessionCreation:
    async def test_happy_path(self, service, buyer, seed, fake_gateway, db_session):
        """Test: 50.00 x 2 con 10% / 3% -> line items 50.00 x2, 10.00, 3.00."""
        await seed.fee_config(platform="10", gateway="3")
        event, ticket = await seed.event_with_ticket(price="50.00")

        result = await service.create_checkout(buyer, _body(event, ticket, quantity=2), ORIGIN)

        assert result.session_id == "cs_test_1"
        assert result.url.endswith("/cs_test_1")
        assert result.model_dump(by_alias=True) == {"url": result.url, "sessionId": "cs_test_1"}

        params = fake_gateway.created_params[0]
        assert params["mode"] == "payment"
        assert params["payment_method_types"] == ["card"]
        assert params["success_url"] == f"{ORIGIN}/payment-success?session_id={{CHECKOUT_SESSION_ID}}"
        assert params["cancel_url"] == f"{ORIGIN}/event/{event.id}"
        assert params["customer_email"] == "comprador@example.com"
        assert "customer" not in params
        assert params["client_reference_id"] == str(buyer.user_id())

        items = params["line_items"]
        assert [i["price_data"]["unit_amount"] for i in items] == [5000, 1000, 300]
        assert [i["quantity"] for i in items] == [2, 1, 1]
        assert all(i["price_data"]["currency"] == "brl" for i in items)
        assert items[0]["price_data"]["product_data"]["name"] == "Festival de Verão - Lote 1"
        assert items[0]["price_data"]["product_data"]["description"] == "Pista | 14/03/2026"
        assert items[1]["price_data"]["product_data"]["description"] == "10% sobre o valor do ingresso"

        total_cents = sum(i["price_data"]["unit_amount"] * i["quantity"] for i in items)
        assert total_cents == 11300

        meta = params["metadata"]
        assert meta["eventId"] == str(event.id)
        assert meta["ticketId"] == str(ticket.id)
        assert meta["quantity"] == "2"
        assert meta["userId"] == str(buyer.user_id())
        assert meta["platformFee"] == "10.00"
        assert meta["gatewayFee"] == "3.00"
        assert meta["producerAmount"] == "100.00"
        assert meta["totalAmount"] == "113.00"
        assert meta["unitPrice"] == "50.00"
        assert meta["platformFeePercentage"] == "10"
        assert "customerId" not in meta

        # Ni inventario ni ventas
        refreshed = (
            await db_session.execute(select(TicketBatch).where(TicketBatch.id == ticket.id))
        ).scalar_one()
        assert refreshed.quantity_sold == 0

    async def test_existing_customer_is_reused(self, service, buyer, seed, fake_gateway):
        fake_gateway.customers["comprador@example.com"] = "cus_123"
        event, ticket = await seed.event_with_ticket()

        await service.create_checkout(buyer, _body(event, ticket), ORIGIN)

        params = fake_gateway.created_params[0]
        assert params["customer"] == "cus_123"
        assert "customer_email" not in params
        assert params["metadata"]["customerId"] == "cus_123"

    async def test_fixed_producer_override(self, service, buyer, seed, fake_gateway):
        """Test: override fijo 2.00 por ingreso, sin tasa global."""
        producer_id = uuid.uuid4()
        await seed.fee_config(platform="10", gateway="3")
        await seed.producer_fee(producer_id, "2.00", FeeType.fixed)
        event, ticket = await seed.event_with_ticket(price="20.00", producer_id=producer_id)

        await service.create_checkout(buyer, _body(event, ticket, quantity=3), ORIGIN)

        params = fake_gateway.created_params[0]
        fee_item = params["line_items"][1]["price_data"]
        assert fee_item["unit_amount"] == 600
        assert fee_item["product_data"]["description"] == "Valor fixo por ingresso"
        assert params["metadata"]["platformFee"] == "6.00"
        assert params["metadata"]["platformFeePercentage"] == ""
        # gateway 3% de 60.00
        assert params["metadata"]["gatewayFee"] == "1.80"
        assert params["metadata"]["totalAmount"] == "67.80"

    async def test_zero_fee_items_are_omitted(self, service, buyer, seed, fake_gateway):
        await seed.fee_config(platform="0", gateway="0")
        event, ticket = await seed.event_with_ticket(price="10.00", image_url="https://img.test/e.png")

        await service.create_checkout(buyer, _body(event, ticket, quantity=1), ORIGIN)

        items = fake_gateway.created_params[0]["line_items"]
        assert len(items) == 1
        assert items[0]["price_data"]["product_data"]["images"] == ["https://img.test/e.png"]

    async def test_exact_remaining_inventory_is_allowed(self, service, buyer, seed):
        event, ticket = await seed.event_with_ticket(quantity_total=5, quantity_sold=3)
        result = await service.create_checkout(buyer, _body(event, ticket, quantity=2), ORIGIN)
        assert result.session_id

    async def test_rounding_half_up_at_boundary(self, service, buyer, seed, fake_gateway):
        await seed.fee_config(platform="10", gateway="3.99")
        event, ticket = await seed.event_with_ticket(price="12.35")

        await service.create_checkout(buyer, _body(event, ticket, quantity=1), ORIGIN)

        meta = fake_gateway.created_params[0]["metadata"]
        # 12.35 * 10% = 1.235 -> 1.24 ; 12.35 * 3.99% = 0.492765 -> 0.49
        assert meta["platformFee"] == "1.24"
        assert meta["gatewayFee"] == "0.49"
        assert Decimal(meta["totalAmount"]) == Decimal("14.08")
