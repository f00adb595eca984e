# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Carga dinámica de configuración según PYTHON_ENV.
Ejecuta validaciones de seguridad y cachea la instancia (singleton).

Autor: Mister Ticket
Actualizado: 02/09/2026
"""

from functools import lru_cache
import os
from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_testing import EnvTestingSettings
from .settings_prod import ProdSettings


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Devuelve la configuración apropiada según PYTHON_ENV.

    Carga la subclase correcta (Dev/Test/Prod), ejecuta validaciones
    de seguridad y cachea el resultado como singleton.

    Raises:
        ValueError: Si las validaciones de seguridad fallan
    """
    env = os.getenv("PYTHON_ENV", "development").strip().lower()

    # El entorno ya normalizado se pasa explícito: un PYTHON_ENV desconocido
    # cae en desarrollo en lugar de fallar la validación de la subclase.
    if env == "production":
        settings: BaseAppSettings = ProdSettings(python_env="production")
    elif env == "test":
        settings = EnvTestingSettings(python_env="test")
    else:
        settings = DevSettings(python_env="development")

    settings._security_and_payments_checks()
    return settings


def reset_settings_cache() -> None:
    """Invalida el singleton (útil en tests que cambian variables de entorno)."""
    get_settings.cache_clear()


__all__ = ["get_settings", "reset_settings_cache"]
# Fin del archivo backend/app/shared/config/config_loader.py
