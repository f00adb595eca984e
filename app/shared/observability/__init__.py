# -*- coding: utf-8 -*-
"""
backend/app/shared/observability/__init__.py

Módulo de observabilidad: logging estructurado por paso del pipeline.
"""
from .step_logging import StepLogContext, log_step

__all__ = [
    "StepLogContext",
    "log_step",
]
