# -*- coding: utf-8 -*-
"""
backend/app/shared/__init__.py

Infraestructura compartida: configuración, base de datos, errores,
middleware, integraciones (email) y observabilidad.
"""
