# src/validador/modules/schema/domain/fields.py
"""
Definición de Campos.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Describir un campo (tipo, default, alias, restricciones) de forma declarativa.
"""

from __future__ import annotations

import copy
from typing import Any, Callable

from validador.core.value_objects import MISSING
from validador.modules.schema.domain.exceptions import SchemaError
from validador.modules.schema.domain.value_objects import Constraints

# === Guía de Organización ===
# ✅ DECLARATIVO: FieldInfo solo describe; la coerción vive en modules/validation.
# ✅ EXPLÍCITO: Se recuerda qué atributos declaró el usuario para poder combinarlos.

_IMMUTABLE_DEFAULTS = (type(None), bool, int, float, complex, str, bytes, frozenset, tuple)

_ATTRIBUTES = (
    "default",
    "default_factory",
    "alias",
    "validation_alias",
    "serialization_alias",
    "title",
    "description",
    "examples",
    "exclude",
    "frozen",
    "repr",
    "discriminator",
    "validate_default",
)


class FieldInfo:
    """
    Metadatos de un campo de modelo.

    Invariantes:
    1. ``default`` y ``default_factory`` son excluyentes.
    2. ``constraints`` siempre es un Constraints (posiblemente vacío).
    """

    def __init__(
        self,
        *,
        annotation: Any = Any,
        default: Any = MISSING,
        default_factory: Callable[[], Any] | None = None,
        alias: str | None = None,
        validation_alias: str | None = None,
        serialization_alias: str | None = None,
        title: str | None = None,
        description: str | None = None,
        examples: list[Any] | None = None,
        exclude: bool | None = None,
        frozen: bool | None = None,
        repr: bool = True,
        discriminator: str | None = None,
        validate_default: bool | None = None,
        constraints: Constraints | None = None,
        _explicit: frozenset[str] = frozenset(),
    ):
        if default is Ellipsis:
            default = MISSING
        if default is not MISSING and default_factory is not None:
            raise SchemaError("No se pueden declarar 'default' y 'default_factory' a la vez.")
        if default_factory is not None and not callable(default_factory):
            raise SchemaError("default_factory debe ser invocable.")

        self.annotation = annotation
        self.default = default
        self.default_factory = default_factory
        self.alias = alias
        self.validation_alias = validation_alias
        self.serialization_alias = serialization_alias
        self.title = title
        self.description = description
        self.examples = examples
        self.exclude = exclude
        self.frozen = frozen
        self.repr = repr
        self.discriminator = discriminator
        self.validate_default = validate_default
        self.constraints = constraints or Constraints()
        self._explicit = _explicit

    # --- Consultas ---

    def is_required(self) -> bool:
        """Un campo es requerido si no tiene default ni default_factory."""
        return self.default is MISSING and self.default_factory is None

    def get_default(self) -> Any:
        """
        Produce el valor por defecto.
        Los defaults mutables se copian para no compartir estado entre instancias.
        """
        if self.default_factory is not None:
            return self.default_factory()
        if isinstance(self.default, _IMMUTABLE_DEFAULTS):
            return self.default
        return copy.deepcopy(self.default)

    def input_keys(self, name: str, populate_by_name: bool) -> list[str]:
        """Claves bajo las que se busca el valor de entrada, en orden de prioridad."""
        alias = self.validation_alias or self.alias
        if alias is None:
            return [name]
        if populate_by_name and alias != name:
            return [alias, name]
        return [alias]

    def dump_key(self, name: str, by_alias: bool) -> str:
        """Clave bajo la que se serializa el campo."""
        if by_alias:
            return self.serialization_alias or self.alias or name
        return name

    # --- Construcción ---

    @classmethod
    def from_default(cls, default: Any, annotation: Any = Any) -> FieldInfo:
        """Crea un FieldInfo a partir de un default plano (``x: int = 3``)."""
        if isinstance(default, FieldInfo):
            info = default.copy()
            info.annotation = annotation
            return info
        return cls(annotation=annotation, default=default, _explicit=frozenset({"default"}))

    def copy(self) -> FieldInfo:
        """Copia superficial conservando los atributos explícitos."""
        clone = copy.copy(self)
        clone._explicit = frozenset(self._explicit)
        return clone

    def merge(self, override: FieldInfo) -> FieldInfo:
        """
        Combina este FieldInfo con otro.
        Solo se sobreescriben los atributos que ``override`` declaró explícitamente.
        """
        merged = self.copy()
        for name in override._explicit:
            setattr(merged, name, getattr(override, name))
        merged.constraints = self.constraints.merge(override.constraints)
        merged._explicit = self._explicit | override._explicit
        if merged.default is not MISSING and merged.default_factory is not None:
            # El último en declararse gana
            if "default_factory" in override._explicit:
                merged.default = MISSING
            else:
                merged.default_factory = None
        return merged

    def __repr__(self) -> str:
        parts = [f"annotation={_type_name(self.annotation)}"]
        parts.append(f"required={self.is_required()}")
        if self.default is not MISSING:
            parts.append(f"default={self.default!r}")
        if self.default_factory is not None:
            parts.append(f"default_factory={getattr(self.default_factory, '__name__', self.default_factory)}")
        for name in ("alias", "validation_alias", "serialization_alias", "discriminator"):
            value = getattr(self, name)
            if value is not None:
                parts.append(f"{name}={value!r}")
        for name, value in self.constraints.as_context().items():
            parts.append(f"{name}={value!r}")
        return f"FieldInfo({', '.join(parts)})"


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__name__
    return repr(tp).replace("typing.", "")


def Field(  # noqa: N802
    default: Any = MISSING,
    *,
    default_factory: Callable[[], Any] | None = None,
    alias: str | None = None,
    validation_alias: str | None = None,
    serialization_alias: str | None = None,
    title: str | None = None,
    description: str | None = None,
    examples: list[Any] | None = None,
    exclude: bool | None = None,
    frozen: bool | None = None,
    repr: bool = True,
    discriminator: str | None = None,
    validate_default: bool | None = None,
    gt: Any = None,
    ge: Any = None,
    lt: Any = None,
    le: Any = None,
    multiple_of: Any = None,
    min_length: int | None = None,
    max_length: int | None = None,
    pattern: str | None = None,
    strict: bool | None = None,
) -> Any:
    """
    Declara un campo con metadatos y restricciones.

    Uso:
        class Usuario(BaseModel):
            nombre: str = Field(min_length=2, max_length=50)
            edad: int = Field(default=18, ge=0, le=130)
            etiquetas: list[str] = Field(default_factory=list)

    También puede usarse como metadato: ``Annotated[int, Field(gt=0)]``.
    """
    passed = {
        "default": default is not MISSING and default is not Ellipsis,
        "default_factory": default_factory is not None,
        "alias": alias is not None,
        "validation_alias": validation_alias is not None,
        "serialization_alias": serialization_alias is not None,
        "title": title is not None,
        "description": description is not None,
        "examples": examples is not None,
        "exclude": exclude is not None,
        "frozen": frozen is not None,
        "repr": repr is not True,
        "discriminator": discriminator is not None,
        "validate_default": validate_default is not None,
    }
    constraints = Constraints(
        gt=gt,
        ge=ge,
        lt=lt,
        le=le,
        multiple_of=multiple_of,
        min_length=min_length,
        max_length=max_length,
        pattern=pattern,
        strict=strict,
    )
    return FieldInfo(
        default=default,
        default_factory=default_factory,
        alias=alias,
        validation_alias=validation_alias,
        serialization_alias=serialization_alias,
        title=title,
        description=description,
        examples=examples,
        exclude=exclude,
        frozen=frozen,
        repr=repr,
        discriminator=discriminator,
        validate_default=validate_default,
        constraints=constraints,
        _explicit=frozenset(name for name in _ATTRIBUTES if passed[name]),
    )
