# -*- coding: utf-8 -*-
"""
backend/tests/shared/integrations/test_email_templates.py

Tests de cuerpos de email y del factory de EmailSender.

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from decimal import Decimal
from types import SimpleNamespace

import pytest
from pydantic import SecretStr

from app.shared.integrations.email_sender import EmailSender, StubEmailSender
from app.shared.integrations.email_templates import (
    build_purchase_confirmation_body,
    build_withdrawal_rejected_body,
    format_brl,
    mask_email,
    render_template,
)
from app.shared.integrations.mailersend_email_sender import MailerSendEmailSender


class TestFormatting:
    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Decimal("1234.5"), "R$ 1.234,50"),
            (Decimal("0.5"), "R$ 0,50"),
            (Decimal("1000000"), "R$ 1.000.000,00"),
            (Decimal("-12.345"), "-R$ 12,35"),
        ],
    )
    def test_format_brl(self, amount, expected):
        assert format_brl(amount) == expected

    def test_mask_email(self):
        assert mask_email("comprador@example.com") == "com***"
        assert mask_email("") == "unknown"

    def test_render_escapes_html_values(self):
        raw = "<p>{{ name }}</p>{{ block_html }}"
        out = render_template(raw, {"name": "<b>Ana</b>", "block_html": "<i>ok</i>"}, escape=True)
        assert out == "<p>&lt;b&gt;Ana&lt;/b&gt;</p><i>ok</i>"


class TestBodies:
    def test_purchase_confirmation(self):
        subject, html, text = build_purchase_confirmation_body(
            user_name="Ana Souza",
            event_title="Festival de Verão",
            event_date="14/03/2026",
            event_venue="Arena Central",
            ticket_type="Pista - Lote 1",
            quantity=2,
            total_price=Decimal("113"),
            qr_codes=["https://qr.test/a", "https://qr.test/b"],
        )

        assert subject == "Confirmação de Compra - Festival de Verão"
        assert "R$ 113,00" in html
        assert "Ingresso 1</h3>" in html and "Ingresso 2</h3>" in html
        assert "https://qr.test/b" in text

    def test_withdrawal_rejected(self):
        subject, html, text = build_withdrawal_rejected_body(
            full_name="Carlos Lima", amount=Decimal("150"), rejection_reason="Documento inválido"
        )
        assert subject == "Saque rejeitado - Mister Ticket"
        assert "Documento inválido" in text
        assert "R$ 150,00" in html


def _email_settings(**overrides):
    base = dict(
        email_mode="console",
        mailersend_api_key=None,
        mailersend_from_email=None,
        mailersend_from_name="Mister Ticket",
        email_timeout_sec=30,
    )
    base.update(overrides)
    return SimpleNamespace(**base)


class TestEmailSenderFactory:
    def test_console_is_stub(self):
        assert isinstance(EmailSender.from_settings(_email_settings()), StubEmailSender)

    def test_api_requires_credentials(self):
        with pytest.raises(ValueError, match="MAILERSEND_API_KEY"):
            EmailSender.from_settings(_email_settings(email_mode="api"))

    def test_api_mode(self):
        sender = EmailSender.from_settings(
            _email_settings(
                email_mode="api",
                mailersend_api_key=SecretStr("mlsn.key"),
                mailersend_from_email="no-reply@misterticket.test",
            )
        )
        assert isinstance(sender, MailerSendEmailSender)
        assert sender.from_email == "no-reply@misterticket.test"
