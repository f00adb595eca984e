# -*- coding: utf-8 -*-
"""
backend/app/modules/checkout/__init__.py

Construcción de sesiones de checkout hospedadas (Stripe).
"""
