# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/services/__init__.py
"""

from .fee_policy import FeeResolution, resolve_fees
from .fee_config_service import FeeConfigService

__all__ = ["FeeResolution", "resolve_fees", "FeeConfigService"]
