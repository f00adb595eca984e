# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para Mister Ticket.

- PYTHON_ENV=test ANTES de importar la app (EnvTestingSettings)
- Base SQLite temporal por test (aiosqlite + NullPool) con create_all
- Gateway de pagos falso y sink de notificaciones que registra envíos
- Cliente httpx con ciclo de vida (asgi-lifespan) y dependency_overrides
"""

import os
import pathlib
import sys
import uuid
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("JWT_AUDIENCE", "authenticated")

# -----------------------------------------------------------------------------
# Asegura .../backend en sys.path
# -----------------------------------------------------------------------------
BACKEND_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))
assert (BACKEND_ROOT / "app").exists(), f"'app' no existe en {BACKEND_ROOT}"

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.modules.auth.enums import AppRole
from app.modules.auth.models import Profile, UserRole
from app.modules.auth.security import create_access_token
from app.modules.checkout.providers import ProviderCheckoutSession, StripeSessionResult
from app.modules.events.models import Event, TicketBatch
from app.modules.fees.enums import FeeType
from app.modules.fees.models import FeeConfig, ProducerCustomFee
from app.modules.notifications import PurchaseConfirmation, WithdrawalNotice
from app.modules.withdrawals.enums import WithdrawalStatus
from app.modules.withdrawals.models import WithdrawalRequest
from app.shared.config import MarketplaceSettings
from app.shared.orm import load_all_models
from app.shared.utils.datetime_helpers import utcnow

NOW = utcnow()


# -----------------------------------------------------------------------------
# Base de datos
# -----------------------------------------------------------------------------
@pytest.fixture
async def db_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'misterticket_test.db'}",
        poolclass=NullPool,
    )
    metadata = load_all_models()
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=db_engine, expire_on_commit=False, class_=AsyncSession, autoflush=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def policy() -> MarketplaceSettings:
    return MarketplaceSettings(_env_file=None)


# -----------------------------------------------------------------------------
# Colaboradores falsos
# -----------------------------------------------------------------------------
class FakeGateway:
    """PaymentGateway en memoria."""

    def __init__(self) -> None:
        self.customers: Dict[str, str] = {}
        self.sessions: Dict[str, ProviderCheckoutSession] = {}
        self.created_params: List[Dict[str, Any]] = []
        self.retrieve_calls: List[str] = []

    async def find_customer_id(self, email: str) -> Optional[str]:
        return self.customers.get(email)

    async def create_checkout_session(self, params: Dict[str, Any]) -> StripeSessionResult:
        self.created_params.append(params)
        session_id = f"cs_test_{len(self.created_params)}"
        return StripeSessionResult(
            checkout_url=f"https://checkout.stripe.test/pay/{session_id}",
            session_id=session_id,
        )

    async def retrieve_checkout_session(self, session_id: str) -> Optional[ProviderCheckoutSession]:
        self.retrieve_calls.append(session_id)
        return self.sessions.get(session_id)

    def add_session(
        self,
        session_id: str,
        metadata: Dict[str, str],
        payment_status: str = "paid",
        customer_id: Optional[str] = None,
        customer_email: Optional[str] = None,
    ) -> ProviderCheckoutSession:
        session = ProviderCheckoutSession(
            id=session_id,
            payment_status=payment_status,
            customer_id=customer_id,
            payment_intent_id=f"pi_{session_id}",
            customer_email=customer_email,
            metadata=dict(metadata),
        )
        self.sessions[session_id] = session
        return session


@dataclass
class RecordingSink:
    """NotificationSink que registra (o falla, si se pide)."""

    fail_with: Optional[Exception] = None
    purchases: List[PurchaseConfirmation] = field(default_factory=list)
    completed: List[WithdrawalNotice] = field(default_factory=list)
    rejected: List[WithdrawalNotice] = field(default_factory=list)

    async def send_purchase_confirmation(self, notice: PurchaseConfirmation) -> None:
        if self.fail_with:
            raise self.fail_with
        self.purchases.append(notice)

    async def send_withdrawal_completed(self, notice: WithdrawalNotice) -> None:
        if self.fail_with:
            raise self.fail_with
        self.completed.append(notice)

    async def send_withdrawal_rejected(self, notice: WithdrawalNotice) -> None:
        if self.fail_with:
            raise self.fail_with
        self.rejected.append(notice)


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


# -----------------------------------------------------------------------------
# Datos de prueba
# -----------------------------------------------------------------------------
@pytest.fixture
def seed(session_factory):
    """Helpers async para poblar la base."""

    class _Seed:
        async def add(self, *objs):
            async with session_factory() as s:
                s.add_all(objs)
                await s.commit()
            return objs[0] if len(objs) == 1 else objs

        async def event_with_ticket(
            self,
            *,
            price: str = "50.00",
            quantity_total: int = 100,
            quantity_sold: int = 0,
            sale_start: Optional[datetime] = None,
            sale_end: Optional[datetime] = None,
            producer_id: Optional[uuid.UUID] = None,
            sector: Optional[str] = "Pista",
            image_url: Optional[str] = None,
        ):
            event = Event(
                id=uuid.uuid4(),
                producer_id=producer_id or uuid.uuid4(),
                title="Festival de Verão",
                event_date=datetime(2026, 3, 14, 20, 0, tzinfo=timezone.utc),
                venue="Arena Central",
                image_url=image_url,
            )
            ticket = TicketBatch(
                id=uuid.uuid4(),
                event_id=event.id,
                batch_name="Lote 1",
                sector=sector,
                price=Decimal(price),
                quantity_total=quantity_total,
                quantity_sold=quantity_sold,
                sale_start_date=sale_start or NOW - timedelta(days=1),
                sale_end_date=sale_end or NOW + timedelta(days=1),
            )
            await self.add(event, ticket)
            return event, ticket

        async def fee_config(self, platform: str = "10", gateway: str = "3", fee_type: FeeType = FeeType.percentage):
            return await self.add(
                FeeConfig(
                    platform_fee_value=Decimal(platform),
                    platform_fee_type=fee_type,
                    payment_gateway_fee_percentage=Decimal(gateway),
                    min_withdrawal_amount=Decimal("50.00"),
                    is_active=True,
                )
            )

        async def producer_fee(self, producer_id: uuid.UUID, value: str, fee_type: FeeType, is_active: bool = True):
            return await self.add(
                ProducerCustomFee(
                    producer_id=producer_id, fee_value=Decimal(value), fee_type=fee_type, is_active=is_active
                )
            )

        async def user(
            self,
            *,
            email: str = "comprador@example.com",
            full_name: str = "Ana Souza",
            roles: tuple = (),
        ) -> uuid.UUID:
            user_id = uuid.uuid4()
            objs = [Profile(user_id=user_id, email=email, full_name=full_name)]
            objs += [UserRole(user_id=user_id, role=r, is_approved=True) for r in roles]
            await self.add(*objs)
            return user_id

        async def admin(self) -> uuid.UUID:
            return await self.user(email="admin@misterticket.test", full_name="Admin", roles=(AppRole.admin,))

        async def withdrawal(
            self,
            producer_id: uuid.UUID,
            status: WithdrawalStatus = WithdrawalStatus.pending,
            amount: str = "150.00",
        ) -> WithdrawalRequest:
            return await self.add(
                WithdrawalRequest(
                    id=uuid.uuid4(),
                    producer_id=producer_id,
                    amount=Decimal(amount),
                    producer_document="123.456.789-09",
                    status=status,
                )
            )

    return _Seed()


def bearer(user_id: uuid.UUID, email: Optional[str] = "comprador@example.com") -> Dict[str, str]:
    extra = {"email": email} if email else {}
    return {"Authorization": f"Bearer {create_access_token(user_id, **extra)}"}


@pytest.fixture
def auth_headers():
    return bearer


# -----------------------------------------------------------------------------
# App FastAPI y cliente httpx (con ciclo de vida)
# -----------------------------------------------------------------------------
@pytest.fixture(scope="session")
def app():
    from app.main import app as fastapi_app
    return fastapi_app


@pytest.fixture
async def async_client(app, session_factory, fake_gateway, recording_sink) -> AsyncIterator[AsyncClient]:
    from app.modules.checkout.providers import get_payment_gateway
    from app.modules.notifications import get_notification_sink
    from app.shared.database import get_async_session

    async def _session_override():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = _session_override
    app.dependency_overrides[get_payment_gateway] = lambda: fake_gateway
    app.dependency_overrides[get_notification_sink] = lambda: recording_sink
    try:
        async with LifespanManager(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://testserver") as client:
                yield client
    finally:
        app.dependency_overrides.clear()
