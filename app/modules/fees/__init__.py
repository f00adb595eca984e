# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/__init__.py

Política de tasas: configuración global (append-only), overrides por
productor y el resolvedor puro de tasas.
"""
