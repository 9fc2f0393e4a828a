"""
validador — Validación declarativa de datos con modelos tipados.

Uso rápido:
    from validador import BaseModel, Field, ValidationError

    class Producto(BaseModel):
        nombre: str = Field(min_length=1)
        precio: float = Field(gt=0)

    Producto(nombre="Café", precio="2.5")   # precio -> 2.5
"""

from __future__ import annotations

from validador.core.value_objects import MISSING
from validador.modules.schema import (
    BaseModel,
    ConfigDict,
    Field,
    FieldInfo,
    SchemaError,
    UndefinedModelError,
    computed_field,
    field_serializer,
    field_validator,
    model_serializer,
    model_validator,
)
from validador.modules.serialization import SerializationInfo, to_jsonable
from validador.modules.validation import (
    CustomError,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
)

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "BaseModel",
    "ConfigDict",
    "Field",
    "FieldInfo",
    "SchemaError",
    "UndefinedModelError",
    "computed_field",
    "field_serializer",
    "field_validator",
    "model_serializer",
    "model_validator",
    "to_jsonable",
    "CustomError",
    "SerializationInfo",
    "TypeAdapter",
    "ValidationError",
    "ValidationInfo",
]
