# src/validador/modules/schema/__init__.py
"""
Módulo de Esquemas: declaración de modelos, campos y configuración.
"""

from __future__ import annotations

# Domain
from .domain.config import ConfigDict
from .domain.decorators import (
    computed_field,
    field_serializer,
    field_validator,
    model_serializer,
    model_validator,
)
from .domain.exceptions import SchemaError, UndefinedModelError
from .domain.fields import Field, FieldInfo
from .domain.model import BaseModel
from .domain.value_objects import Constraints

__all__ = [
    "BaseModel",
    "ConfigDict",
    "Constraints",
    "Field",
    "FieldInfo",
    "SchemaError",
    "UndefinedModelError",
    "computed_field",
    "field_serializer",
    "field_validator",
    "model_serializer",
    "model_validator",
]
