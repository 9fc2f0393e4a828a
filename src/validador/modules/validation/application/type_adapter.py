# src/validador/modules/validation/application/type_adapter.py
"""
Adaptador de Tipos.

Arquitectura: Application Layer
Responsabilidad: Validar y serializar tipos arbitrarios (``list[int]``, uniones
discriminadas, ``Annotated[...]``) sin declarar un modelo.
"""

from __future__ import annotations

import json
from typing import Any

from validador.modules.serialization.application.serializer import _Options, _serialize, dumps_json
from validador.modules.validation.application.coercion import ValidationState, type_repr, validate_value
from validador.modules.validation.domain.exceptions import LineErrors, ValidationError
from validador.modules.validation.domain.value_objects import ErrorDetail


class TypeAdapter:
    """
    Valida valores contra un tipo cualquiera.

    Uso:
        adapter = TypeAdapter(list[int])
        adapter.validate_python(["1", 2])   # [1, 2]
    """

    def __init__(self, type_: Any):
        self.type = type_
        self.title = type_repr(type_)

    def validate_python(self, value: Any, *, strict: bool | None = None, context: Any = None) -> Any:
        state = ValidationState(strict=strict, context=context)
        return self._run(value, state)

    def validate_json(self, data: str | bytes | bytearray, *, strict: bool | None = None, context: Any = None) -> Any:
        if not isinstance(data, (str, bytes, bytearray)):
            raise ValidationError(self.title, [ErrorDetail(type="json_type", input=data)], "json")
        try:
            value = json.loads(data)
        except ValueError as exc:
            raise ValidationError(
                self.title,
                [ErrorDetail(type="json_invalid", input=data, ctx={"error": str(exc)})],
                "json",
            ) from None
        state = ValidationState(strict=strict, context=context, mode="json")
        return self._run(value, state)

    def dump_python(self, value: Any, *, mode: str = "python", exclude_none: bool = False) -> Any:
        options = _Options(mode, False, False, False, exclude_none)
        return _serialize(value, options, None, None)

    def dump_json(self, value: Any, *, indent: int | None = None) -> str:
        return dumps_json(self.dump_python(value, mode="json"), indent=indent)

    def _run(self, value: Any, state: ValidationState) -> Any:
        try:
            return validate_value(self.type, value, state)
        except LineErrors as exc:
            raise ValidationError.from_line_errors(self.title, exc, input_type=state.mode) from None

    def __repr__(self) -> str:
        return f"TypeAdapter({self.title})"
