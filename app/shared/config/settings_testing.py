# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Busca ser determinista y seguro: logging moderado, base de datos aislada
y Stripe con claves dummy (los tests inyectan un gateway falso).

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from typing import Literal, Optional

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    # --- Identidad de entorno ---
    python_env: Literal["development", "test", "production"] = "test"

    # --- Logging en test: menos ruido ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_format: Literal["json", "pretty", "plain"] = "pretty"

    # --- Base de datos: SQLite local salvo que se indique DB_URL ---
    db_url: Optional[str] = "sqlite+aiosqlite:///./misterticket_test.db"

    # --- Auth ---
    jwt_secret_key: SecretStr = SecretStr("test-secret-for-misterticket-suite")

    # --- Stripe con valores dummy ---
    stripe_secret_key: Optional[SecretStr] = SecretStr("sk_test_dummy")

    # --- Emails ---
    email_mode: Literal["console", "api"] = "console"

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo backend/app/shared/config/settings_testing.py
