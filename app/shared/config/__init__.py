# -*- coding: utf-8 -*-
"""
backend/app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import settings

El objeto `settings` es un proxy perezoso: no instancia la configuración
al importar (evita validaciones prematuras en tests) y delega cada atributo
en la instancia cacheada por config_loader.get_settings().
"""

from __future__ import annotations

from typing import Any

from .config_loader import get_settings, reset_settings_cache
from .settings_marketplace import MarketplaceSettings, get_marketplace_settings


class _SettingsProxy:
    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        return getattr(get_settings(), name)

    def __repr__(self) -> str:
        return f"<SettingsProxy env={get_settings().python_env!r}>"


settings = _SettingsProxy()

__all__ = [
    "settings",
    "get_settings",
    "reset_settings_cache",
    "MarketplaceSettings",
    "get_marketplace_settings",
]
# Fin del archivo
