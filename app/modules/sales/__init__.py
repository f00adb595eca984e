# -*- coding: utf-8 -*-
"""
backend/app/modules/sales/__init__.py

Verificación de pago y materialización de ventas (una fila por ingreso).
"""
