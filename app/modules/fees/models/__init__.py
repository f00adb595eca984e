# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/models/__init__.py
"""

from .fee_models import FeeConfig, ProducerCustomFee

__all__ = ["FeeConfig", "ProducerCustomFee"]
