# src/validador/modules/validation/domain/exceptions.py
"""
Excepciones del dominio de Validación.

Arquitectura: Domain Layer
Responsabilidad: Reportar TODAS las violaciones de una entrada en un único error estructurado.
"""

from __future__ import annotations

import json
from typing import Any

from validador.core.value_objects import MISSING
from validador.modules.validation.domain.value_objects import ErrorDetail


class LineErrors(Exception):
    """
    Transporte interno de errores entre capas de coerción.
    Nunca llega al usuario: la frontera del pipeline la convierte en ValidationError.
    """

    def __init__(self, errors: list[ErrorDetail]):
        super().__init__(errors)
        self.errors = errors

    @classmethod
    def single(cls, error_type: str, value: Any, **ctx: Any) -> LineErrors:
        return cls([ErrorDetail(type=error_type, input=value, ctx=ctx or None)])


class ValidationError(ValueError):
    """
    Error agregado de validación.

    A diferencia de fallar en la primera violación, acumula todas las encontradas
    y las expone estructuradas con ``errors()``.
    """

    def __init__(self, title: str, line_errors: list[ErrorDetail], input_type: str = "python"):
        self.title = title
        self.line_errors = list(line_errors)
        self.input_type = input_type
        super().__init__(self._render())

    @classmethod
    def from_line_errors(cls, title: str, exc: LineErrors, input_type: str = "python") -> ValidationError:
        return cls(title, exc.errors, input_type)

    def errors(self, *, include_input: bool = True, include_context: bool = True) -> list[dict[str, Any]]:
        """Lista de errores como diccionarios ``{type, loc, msg, input, ctx}``."""
        return [
            e.to_dict(include_input=include_input, include_context=include_context)
            for e in self.line_errors
        ]

    def error_count(self) -> int:
        return len(self.line_errors)

    def json(self, *, indent: int | None = None, include_input: bool = True) -> str:
        """Serializa los errores a JSON (los valores no serializables se convierten a texto)."""
        return json.dumps(
            self.errors(include_input=include_input),
            indent=indent,
            default=str,
            ensure_ascii=False,
        )

    def _render(self) -> str:
        count = len(self.line_errors)
        noun = "error de validación" if count == 1 else "errores de validación"
        lines = [f"{count} {noun} para {self.title}"]
        for error in self.line_errors:
            if error.loc:
                lines.append(".".join(str(part) for part in error.loc))
            suffix = f"type={error.type}"
            if error.input is not MISSING:
                suffix += f", input_value={_truncate(error.input)}, input_type={type(error.input).__name__}"
            lines.append(f"  {error.msg} [{suffix}]")
        return "\n".join(lines)

    def __reduce__(self) -> Any:
        return (self.__class__, (self.title, self.line_errors, self.input_type))


def _truncate(value: Any, limit: int = 50) -> str:
    text = repr(value)
    if len(text) > limit:
        return text[: limit // 2 - 2] + "..." + text[-(limit // 2 - 1):]
    return text


class CustomError(ValueError):
    """
    Error lanzable desde un validador para elegir el tipo y el mensaje reportados.

    Uso:
        raise CustomError("codigo_invalido", "El código {codigo} no existe", {"codigo": v})
    """

    def __init__(self, error_type: str, message_template: str, context: dict[str, Any] | None = None):
        self.error_type = error_type
        self.message_template = message_template
        self.context = context
        super().__init__(self.message())

    def message(self) -> str:
        if not self.context:
            return self.message_template
        try:
            return self.message_template.format(**self.context)
        except (KeyError, IndexError):
            return self.message_template

    def to_detail(self, value: Any) -> ErrorDetail:
        return ErrorDetail(type=self.error_type, input=value, ctx=self.context, message=self.message())


def value_error_detail(exc: Exception, value: Any) -> ErrorDetail:
    """Convierte una excepción de validador de usuario en un ErrorDetail."""
    if isinstance(exc, CustomError):
        return exc.to_detail(value)
    if isinstance(exc, AssertionError):
        return ErrorDetail(type="assertion_error", input=value, ctx={"error": str(exc)})
    return ErrorDetail(type="value_error", input=value, ctx={"error": str(exc)})
