# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

SQLAlchemy 2.0 async: engine, sesiones y dependencias FastAPI.

Provee:
- engine (create_async_engine)
- SessionLocal (async_sessionmaker)
- Dependencia FastAPI: get_async_session
- context manager: session_scope()
- check_database_health()

Notas:
- En PostgreSQL (asyncpg) se fijan timeouts de conexión y de comando,
  para que ninguna llamada al almacén quede sin límite.
- En SQLite (tests) no se pasan connect_args específicos de asyncpg.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.shared.config import settings
from app.shared.database.base import Base  # reutilizamos la Base única

logger = logging.getLogger(__name__)


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Crea el engine async con connect_args acordes al dialecto."""
    connect_args: dict[str, Any] = {}
    kwargs: dict[str, Any] = {}

    if make_url(url).get_backend_name() == "postgresql":
        connect_args = {
            "timeout": settings.db_connect_timeout_s,         # timeout de conexión
            "command_timeout": settings.db_command_timeout_s,  # timeout por consulta
            "server_settings": {"search_path": "public"},
        }
        kwargs["pool_pre_ping"] = True

    return create_async_engine(url, echo=echo, connect_args=connect_args, **kwargs)


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )


_url = settings.database_url
logger.info(
    "db_engine_configured backend=%s echo=%s",
    make_url(_url).get_backend_name(), settings.db_echo_sql,
)

engine = build_engine(_url, echo=settings.db_echo_sql)
SessionLocal = build_sessionmaker(engine)


# ── Dependencia FastAPI
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        finally:
            # Rollback de cualquier transacción que el handler haya dejado abierta
            if session.in_transaction():
                await session.rollback()


# ── Context manager reutilizable en scripts/tests
@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
            # El commit/rollback queda a cargo de quien use el scope
        finally:
            if session.in_transaction():
                await session.rollback()


# ── Health check
async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Args:
        timeout_s: Tiempo máximo de espera en segundos
        sql: Query SQL a ejecutar (default: "SELECT 1")

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except Exception as e:
        logger.warning("db_health_check_failed error=%s", repr(e))
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "build_engine",
    "build_sessionmaker",
    "get_async_session",
    "session_scope",
    "check_database_health",
]
# Fin del archivo backend/app/shared/database/database.py
