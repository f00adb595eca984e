# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/enums/role_enum.py

Enum de roles de la plataforma (tabla user_roles).

Roles disponibles: admin, producer, user

Autor: Mister Ticket
Fecha: 02/09/2026
"""
from enum import StrEnum


class AppRole(StrEnum):
    admin = "admin"
    producer = "producer"
    user = "user"


__all__ = ["AppRole"]

# Fin del archivo backend/app/modules/auth/enums/role_enum.py
