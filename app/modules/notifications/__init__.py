# -*- coding: utf-8 -*-
"""
backend/app/modules/notifications/__init__.py

Notificaciones best-effort (compra confirmada, retiro completado/rechazado).
"""

from .payloads import PurchaseConfirmation, WithdrawalNotice
from .sinks import EmailNotificationSink, NotificationSink, get_notification_sink
from .dispatch import notify_best_effort

__all__ = [
    "PurchaseConfirmation",
    "WithdrawalNotice",
    "NotificationSink",
    "EmailNotificationSink",
    "get_notification_sink",
    "notify_best_effort",
]
