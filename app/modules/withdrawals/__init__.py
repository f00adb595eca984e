# -*- coding: utf-8 -*-
"""
backend/app/modules/withdrawals/__init__.py

Solicitudes de retiro de productores y su máquina de estados.
"""
