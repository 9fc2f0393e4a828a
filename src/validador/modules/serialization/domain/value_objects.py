# src/validador/modules/serialization/domain/value_objects.py
"""
Value Objects del dominio de Serialización.

Arquitectura: Modular Monolith
Componente: Value Object (Domain)
Responsabilidad: Contexto inmutable que reciben los serializadores de usuario.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SerializationInfo:
    """Contexto de solo lectura que reciben los serializadores con firma extendida."""

    mode: str = "python"
    by_alias: bool = False
    exclude_unset: bool = False
    exclude_defaults: bool = False
    exclude_none: bool = False
    include: Any = None
    exclude: Any = None
    field_name: str | None = None

    def mode_is_json(self) -> bool:
        return self.mode == "json"
