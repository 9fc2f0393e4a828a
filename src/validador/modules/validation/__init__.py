# src/validador/modules/validation/__init__.py
"""
Módulo de Validación: coerción de tipos, pipeline de validadores y colector de errores.
"""

from __future__ import annotations

# Application
from .application.coercion import ValidationState, validate_value
from .application.type_adapter import TypeAdapter

# Domain
from .domain.exceptions import CustomError, ValidationError
from .domain.value_objects import ErrorDetail, ValidationInfo

__all__ = [
    "CustomError",
    "ErrorDetail",
    "TypeAdapter",
    "ValidationError",
    "ValidationInfo",
    "ValidationState",
    "validate_value",
]
