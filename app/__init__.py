# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Inicializador del paquete principal 'app' del backend Mister Ticket.

Funciones:
- Asegura compatibilidad del event loop de asyncio en Windows
  (SQLAlchemy Async + asyncpg).

Autor: Mister Ticket
Fecha: 02/09/2026
"""
import sys
import asyncio

if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Fin del archivo backend/app/__init__.py
