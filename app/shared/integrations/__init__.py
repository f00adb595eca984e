# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/__init__.py

Clientes de integración con servicios externos (email).
"""

from .email_sender import EmailSender, IEmailSender, StubEmailSender

__all__ = [
    "EmailSender",
    "IEmailSender",
    "StubEmailSender",
]
