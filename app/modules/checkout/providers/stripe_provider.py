# -*- coding: utf-8 -*-
"""
backend/app/modules/checkout/providers/stripe_provider.py

Proveedor Stripe para el checkout de ingresos.

- Busca clientes existentes por email (reutilización de customer)
- Crea Stripe Checkout Sessions con line items dinámicos
- Recupera sesiones para verificar el pago

Las llamadas al SDK (bloqueantes) corren en threadpool con timeout acotado
y sin reintentos automáticos; cualquier StripeError se propaga como
UpstreamFailure.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Protocol

import stripe
from fastapi.concurrency import run_in_threadpool

from app.shared.config import get_marketplace_settings, settings
from app.shared.errors import UpstreamFailure

logger = logging.getLogger(__name__)

# Sin reintentos dentro del handler: la política de reintento es del llamador
stripe.max_network_retries = 0


@dataclass
class StripeSessionResult:
    """Resultado de crear una sesión de checkout en Stripe."""
    checkout_url: str
    session_id: str
    provider: str = "stripe"


@dataclass
class ProviderCheckoutSession:
    """Vista mínima de una Checkout Session recuperada."""
    id: str
    payment_status: str
    customer_id: Optional[str] = None
    payment_intent_id: Optional[str] = None
    customer_email: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)


class PaymentGateway(Protocol):
    async def find_customer_id(self, email: str) -> Optional[str]: ...

    async def create_checkout_session(self, params: Dict[str, Any]) -> StripeSessionResult: ...

    async def retrieve_checkout_session(self, session_id: str) -> Optional[ProviderCheckoutSession]: ...


def _as_dict(value: Any) -> Dict[str, Any]:
    if value is None:
        return {}
    to_dict = getattr(value, "to_dict", None)
    return to_dict() if callable(to_dict) else dict(value)


def _object_id(value: Any) -> Optional[str]:
    """IDs de Stripe pueden venir como string o como objeto expandido."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return getattr(value, "id", None)


class StripeProvider:
    """Proveedor de pagos Stripe."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        api_version: Optional[str] = None,
    ):
        self._secret_key = secret_key or self._load_secret_key()
        self._timeout = timeout_seconds or get_marketplace_settings().provider_timeout_seconds
        self._api_version = api_version or settings.stripe_api_version

    def _load_secret_key(self) -> Optional[str]:
        key = settings.stripe_secret_key
        if key is None:
            logger.warning("STRIPE_SECRET_KEY not configured")
            return None
        return key.get_secret_value()

    @property
    def is_configured(self) -> bool:
        return bool(self._secret_key)

    def _request_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"api_key": self._secret_key}
        if self._api_version:
            options["stripe_version"] = self._api_version
        return options

    async def _call(self, operation: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        if not self.is_configured:
            raise UpstreamFailure("Payment provider is not configured")
        try:
            return await asyncio.wait_for(
                run_in_threadpool(fn, *args, **kwargs, **self._request_options()),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("stripe_timeout operation=%s timeout_s=%s", operation, self._timeout)
            raise UpstreamFailure("Payment provider timed out") from e
        except stripe.StripeError as e:
            logger.error(
                "stripe_error operation=%s type=%s code=%s message=%s",
                operation, type(e).__name__, getattr(e, "code", None), e.user_message or str(e),
            )
            raise UpstreamFailure(f"Payment provider error: {e.user_message or str(e)}") from e

    async def find_customer_id(self, email: str) -> Optional[str]:
        customers = await self._call("customers.list", stripe.Customer.list, email=email, limit=1)
        data = list(customers.data or [])
        if data:
            logger.debug("stripe_customer_found customer_id=%s", data[0].id)
            return data[0].id
        return None

    async def create_checkout_session(self, params: Dict[str, Any]) -> StripeSessionResult:
        session = await self._call("checkout.sessions.create", stripe.checkout.Session.create, **params)
        logger.info("stripe_checkout_session_created session_id=%s", session.id)
        return StripeSessionResult(checkout_url=session.url, session_id=session.id)

    async def retrieve_checkout_session(self, session_id: str) -> Optional[ProviderCheckoutSession]:
        try:
            session = await self._call(
                "checkout.sessions.retrieve", stripe.checkout.Session.retrieve, session_id
            )
        except UpstreamFailure as e:
            cause = e.__cause__
            if isinstance(cause, stripe.InvalidRequestError) and cause.code == "resource_missing":
                return None
            raise

        customer_details = getattr(session, "customer_details", None)
        return ProviderCheckoutSession(
            id=session.id,
            payment_status=session.payment_status,
            customer_id=_object_id(session.customer),
            payment_intent_id=_object_id(session.payment_intent),
            customer_email=getattr(customer_details, "email", None) if customer_details else None,
            metadata={k: str(v) for k, v in _as_dict(session.metadata).items()},
        )


_gateway: Optional[StripeProvider] = None


def get_payment_gateway() -> PaymentGateway:
    """Dependencia FastAPI: gateway de pagos por defecto (Stripe)."""
    global _gateway
    if _gateway is None:
        _gateway = StripeProvider()
    return _gateway


__all__ = [
    "PaymentGateway",
    "ProviderCheckoutSession",
    "StripeProvider",
    "StripeSessionResult",
    "get_payment_gateway",
]
