# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/mailersend_email_sender.py

Implementación de envío de correos usando MailerSend API.
Usa templates de templates/emails/ como fuente de verdad.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from app.shared.integrations.email_sender import TemplatedEmailSender
from app.shared.integrations.email_templates import mask_email

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

logger = logging.getLogger(__name__)

# MailerSend API endpoint
MAILERSEND_API_URL = "https://api.mailersend.com/v1/email"


class MailerSendError(RuntimeError):
    """Fallo al entregar un correo a MailerSend."""


class MailerSendEmailSender(TemplatedEmailSender):
    """Envío de correos usando MailerSend API."""

    def __init__(
        self,
        api_key: str,
        from_email: str,
        from_name: str = "Mister Ticket",
        timeout: int = 30,
    ):
        if not api_key:
            raise ValueError("MAILERSEND_API_KEY es requerido")
        if not from_email:
            raise ValueError("MAILERSEND_FROM_EMAIL es requerido")

        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: BaseAppSettings) -> "MailerSendEmailSender":
        """
        Crea instancia desde settings.

        Raises:
            ValueError: si faltan credenciales requeridas
        """
        api_key = ""
        if settings.mailersend_api_key:
            api_key = settings.mailersend_api_key.get_secret_value().strip()

        from_email = (settings.mailersend_from_email or "").strip()
        from_name = (settings.mailersend_from_name or "Mister Ticket").strip()
        timeout = settings.email_timeout_sec or 30

        logger.info("[MailerSend] config: from=%s (%s) timeout=%ss", from_email, from_name, timeout)

        return cls(api_key=api_key, from_email=from_email, from_name=from_name, timeout=timeout)

    async def _send_email(self, to_email: str, subject: str, html_body: str, text_body: str) -> str:
        """Envía email via MailerSend API. Retorna message_id."""
        payload = {
            "from": {"email": self.from_email, "name": self.from_name},
            "to": [{"email": to_email}],
            "subject": subject,
            "html": html_body,
            "text": text_body,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.info("[MailerSend] sending: to=%s subject=%s", mask_email(to_email), subject)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(MAILERSEND_API_URL, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.error("[MailerSend] timeout: to=%s error=%s", mask_email(to_email), str(e))
            raise MailerSendError(f"MailerSend timeout: {e}") from e
        except httpx.RequestError as e:
            logger.error("[MailerSend] request error: to=%s error=%s", mask_email(to_email), str(e))
            raise MailerSendError(f"MailerSend request error: {e}") from e

        # MailerSend responde 202 Accepted en éxito
        if response.status_code == 202:
            message_id = response.headers.get("X-Message-Id", "accepted")
            logger.info("[MailerSend] sent ok: to=%s message_id=%s", mask_email(to_email), message_id)
            return message_id

        logger.error(
            "[MailerSend] send failed: to=%s status=%d body=%s",
            mask_email(to_email),
            response.status_code,
            response.text[:500],
        )
        raise MailerSendError(
            f"MailerSend API error: {response.status_code} - {response.text[:200]}"
        )


__all__ = ["MAILERSEND_API_URL", "MailerSendError", "MailerSendEmailSender"]
# Fin del archivo backend/app/shared/integrations/mailersend_email_sender.py
