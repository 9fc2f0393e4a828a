# src/validador/modules/schema/domain/value_objects.py
"""
Constraints Value Object.

Arquitectura: Modular Monolith
Componente: Value Object (Domain)
Responsabilidad: Representar las restricciones declarativas de un campo, validadas e inmutables.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from typing import Any

from validador.core.value_objects import NonNegativeInt
from validador.modules.schema.domain.exceptions import SchemaError

# === 🧭 Protocolos Arquitectónicos ===
# ✅ CORE: Solo depende de core/ y de las excepciones del esquema.
# 🔒 Inmutabilidad: frozen=True.


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compila (y cachea) una expresión regular declarada en un campo."""
    return re.compile(pattern)


@dataclass(frozen=True)
class Constraints:
    """
    Restricciones declarativas de un campo.

    Invariantes:
    1. min_length y max_length son enteros >= 0
    2. min_length <= max_length
    3. multiple_of > 0
    4. pattern es una expresión regular compilable
    5. Los límites inferiores no superan a los superiores
    """

    gt: Any = None
    ge: Any = None
    lt: Any = None
    le: Any = None
    multiple_of: Any = None
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    strict: bool | None = None

    def __post_init__(self):
        """Validación de invariantes al instanciar."""
        for name in ("min_length", "max_length"):
            value = getattr(self, name)
            if value is None:
                continue
            try:
                NonNegativeInt(value)
            except ValueError as exc:
                raise SchemaError(f"{name} inválido: {exc}") from exc

        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise SchemaError(
                f"min_length ({self.min_length}) no puede ser mayor a "
                f"max_length ({self.max_length})"
            )

        if self.multiple_of is not None and self.multiple_of <= 0:
            raise SchemaError(f"multiple_of debe ser positivo: {self.multiple_of}")

        lower = self.ge if self.ge is not None else self.gt
        upper = self.le if self.le is not None else self.lt
        if lower is not None and upper is not None and lower > upper:
            raise SchemaError(
                f"El límite inferior ({lower}) no puede ser mayor al superior ({upper})"
            )

        if self.pattern is not None:
            try:
                compile_pattern(self.pattern)
            except re.error as exc:
                raise SchemaError(f"Patrón inválido {self.pattern!r}: {exc}") from exc

    @property
    def is_empty(self) -> bool:
        """Indica si no hay ninguna restricción declarada."""
        return all(getattr(self, f.name) is None for f in fields(self))

    def merge(self, other: Constraints) -> Constraints:
        """
        Combina dos conjuntos de restricciones.
        Los valores declarados en ``other`` tienen prioridad.
        """
        overrides = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **overrides)

    def as_context(self) -> dict[str, Any]:
        """Devuelve solo las restricciones declaradas (para repr y errores)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
