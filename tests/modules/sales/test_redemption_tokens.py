# -*- coding: utf-8 -*-
"""
backend/tests/modules/sales/test_redemption_tokens.py

Autor: Mister Ticket
Fecha: 02/09/2026
"""

import json
import uuid
from urllib.parse import unquote

import pytest

from app.modules.sales.tokens import (
    MIN_TOKEN_BYTES,
    build_qr_code_url,
    build_redemption_payload,
    generate_redemption_token,
)
from app.shared.config import MarketplaceSettings


class TestRedemptionToken:
    def test_url_safe_and_256_bits(self):
        token = generate_redemption_token()
        # 32 bytes en base64url sin padding
        assert len(token) >= 43
        assert all(c.isalnum() or c in "-_" for c in token)

    def test_never_below_minimum_entropy(self):
        assert len(generate_redemption_token(8)) >= 43
        assert MIN_TOKEN_BYTES == 32

    def test_unique(self):
        tokens = {generate_redemption_token() for _ in range(500)}
        assert len(tokens) == 500

    def test_settings_reject_weak_tokens(self):
        with pytest.raises(ValueError):
            MarketplaceSettings(_env_file=None, redemption_token_bytes=16)

    def test_settings_cap_token_to_column_width(self):
        """Test: 96 bytes caben en sales.redemption_token (128); más se rechaza."""
        policy = MarketplaceSettings(_env_file=None, redemption_token_bytes=96)
        assert len(generate_redemption_token(policy.redemption_token_bytes)) <= 128
        with pytest.raises(ValueError):
            MarketplaceSettings(_env_file=None, redemption_token_bytes=97)


class TestQrCode:
    def test_payload_is_compact_json(self):
        event_id = uuid.uuid4()
        payload = build_redemption_payload("tok", event_id)

        assert payload == f'{{"token":"tok","eventId":"{event_id}"}}'

    def test_url_encodes_payload(self):
        payload = build_redemption_payload("a-b_c", uuid.uuid4())
        url = build_qr_code_url(payload, "https://api.qrserver.com/v1/create-qr-code/", "300x300")

        base, _, data = url.partition("&data=")
        assert base == "https://api.qrserver.com/v1/create-qr-code/?size=300x300"
        assert "{" not in data and '"' not in data
        assert json.loads(unquote(data))["token"] == "a-b_c"
