# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/base_models.py

Modelos base personalizados para Pydantic en el backend de Mister Ticket.

Incluye:
- UTF8SafeModel: strip de espacios, modo atributos (ORM), aliases por nombre
- CamelModel: igual, con aliases camelCase para el contrato JSON de los
  handlers del pipeline (eventId, sessionId, alreadyRecorded, ...)

Autor: Mister Ticket
Fecha: 02/09/2026
"""

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from app.shared.errors import InvalidRequest

ModelT = TypeVar("ModelT", bound=BaseModel)


class UTF8SafeModel(BaseModel):
    """Modelo base con configuración común para esquemas de la API."""
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class CamelModel(UTF8SafeModel):
    """Esquema cuyo JSON usa claves camelCase."""
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
    )


def parse_request(model: Type[ModelT], payload: Any) -> ModelT:
    """
    Valida un cuerpo JSON contra ``model``.

    Raises:
        InvalidRequest: con el primer campo violado (nombre del contrato JSON)
    """
    if not isinstance(payload, dict):
        raise InvalidRequest("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or None
        message = first.get("msg", "invalid value")
        if field:
            raise InvalidRequest(f"Invalid {field}: {message}", field=field) from e
        raise InvalidRequest(f"Invalid request: {message}") from e


__all__ = ["UTF8SafeModel", "CamelModel", "Field", "parse_request"]
# Fin del archivo base_models.py
