# -*- coding: utf-8 -*-
"""
backend/app/shared/http_utils/__init__.py

Helpers HTTP reutilizables.
"""

from app.shared.http_utils.cors import (
    FUNCTION_CORS_HEADERS,
    cors_json_response,
    preflight_response,
)
from app.shared.http_utils.request_meta import (
    get_client_ip,
    get_request_origin,
    read_json_body,
)

__all__ = [
    "FUNCTION_CORS_HEADERS",
    "cors_json_response",
    "preflight_response",
    "get_client_ip",
    "get_request_origin",
    "read_json_body",
]
