"""
Value Objects universales.

Arquitectura: Modular Monolith
Capa: Core
Responsabilidad: Centinelas y primitivos validados sin dependencias.
"""

from __future__ import annotations

from typing import Any


class _MissingType:
    """
    Centinela para distinguir "sin valor" de ``None``.
    Se usa como default de campos requeridos y como marca de claves ausentes.
    """

    _instance: _MissingType | None = None

    def __new__(cls) -> _MissingType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _MissingType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _MissingType:
        return self

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Any = _MissingType()


class NonNegativeInt:
    """
    Value Object universal: valida invariante (entero >= 0).
    Usado para longitudes y conteos declarados en restricciones.
    """

    def __init__(self, value: int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Debe ser un entero: {value!r}")
        if value < 0:
            raise ValueError(f"No puede ser negativo: {value}")
        self.value = value

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"NonNegativeInt({self.value})"
