# -*- coding: utf-8 -*-
"""
backend/app/modules/fees/enums.py

Autor: Mister Ticket
Fecha: 02/09/2026
"""
from enum import StrEnum


class FeeType(StrEnum):
    percentage = "percentage"
    fixed = "fixed"


__all__ = ["FeeType"]
