# src/validador/modules/validation/domain/value_objects.py
"""
Value Objects del dominio de Validación.

Arquitectura: Modular Monolith
Componente: Value Object (Domain)
Responsabilidad: Representar un error individual y el contexto que reciben los validadores.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Union

from validador.core.value_objects import MISSING
from validador.modules.validation.domain.messages import render

Loc = tuple[Union[str, int], ...]


@dataclass(frozen=True)
class ErrorDetail:
    """
    Una violación concreta detectada durante la validación.

    Invariantes:
    1. ``type`` es un código estable (ej: 'missing', 'int_parsing').
    2. ``loc`` es relativa al valor que la produjo; los contenedores la prefijan.
    """

    type: str
    loc: Loc = ()
    input: Any = MISSING
    ctx: dict[str, Any] | None = None
    message: str | None = None

    @property
    def msg(self) -> str:
        if self.message is not None:
            return self.message
        return render(self.type, self.ctx)

    def with_prefix(self, *segments: str | int) -> ErrorDetail:
        """Devuelve una copia con la ubicación prefijada por ``segments``."""
        return replace(self, loc=(*segments, *self.loc))

    def to_dict(self, include_input: bool = True, include_context: bool = True) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "loc": self.loc, "msg": self.msg}
        if include_input and self.input is not MISSING:
            data["input"] = self.input
        if include_context and self.ctx:
            data["ctx"] = dict(self.ctx)
        return data


@dataclass(frozen=True)
class ValidationInfo:
    """
    Contexto de solo lectura que recibe un validador con firma ``(cls, v, info)``.

    - data: campos ya validados del modelo (en orden de declaración).
    - field_name: campo en validación (None en validadores de modelo).
    - context: objeto arbitrario pasado a ``model_validate(..., context=...)``.
    """

    data: dict[str, Any] = field(default_factory=dict)
    field_name: str | None = None
    context: Any = None
    config: dict[str, Any] = field(default_factory=dict)
    mode: str = "python"

