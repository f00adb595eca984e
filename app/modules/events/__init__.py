# -*- coding: utf-8 -*-
"""
backend/app/modules/events/__init__.py

Eventos y lotes de ingresos (inventario).
"""
