# -*- coding: utf-8 -*-
"""
backend/app/modules/events/models/__init__.py
"""

from .event_models import Event, TicketBatch

__all__ = ["Event", "TicketBatch"]
