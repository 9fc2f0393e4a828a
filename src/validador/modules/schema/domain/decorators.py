# src/validador/modules/schema/domain/decorators.py
"""
Decoradores de Validación y Serialización.

Arquitectura: Domain Layer
Responsabilidad: Marcar funciones del modelo como validadores, serializadores o
campos calculados para que la metaclase las registre.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Literal

from validador.modules.schema.domain.exceptions import SchemaError

# === Guía de Organización ===
# ✅ MARCADORES: Los decoradores solo envuelven; la metaclase desenvuelve y registra.
# ❌ SIN EJECUCIÓN: Aquí no se valida ningún dato.

FieldValidatorMode = Literal["before", "after", "plain", "wrap"]
ModelValidatorMode = Literal["before", "after", "wrap"]
WhenUsed = Literal["always", "json", "unless-none", "json-unless-none"]


@dataclass(frozen=True)
class FieldValidatorInfo:
    fields: tuple[str, ...]
    mode: FieldValidatorMode
    check_fields: bool = True

    def applies_to(self, name: str) -> bool:
        return "*" in self.fields or name in self.fields


@dataclass(frozen=True)
class ModelValidatorInfo:
    mode: ModelValidatorMode


@dataclass(frozen=True)
class FieldSerializerInfo:
    fields: tuple[str, ...]
    mode: Literal["plain", "wrap"] = "plain"
    when_used: WhenUsed = "always"
    check_fields: bool = True

    def applies_to(self, name: str) -> bool:
        return "*" in self.fields or name in self.fields


@dataclass(frozen=True)
class ModelSerializerInfo:
    mode: Literal["plain", "wrap"] = "plain"
    when_used: WhenUsed = "always"


@dataclass(frozen=True)
class ComputedFieldInfo:
    """Metadatos de un campo calculado (property incluida al serializar)."""

    return_type: Any = Any
    alias: str | None = None
    title: str | None = None
    description: str | None = None
    repr: bool = True


@dataclass
class DecoratorMarker:
    """Envoltorio temporal que vive en el namespace de la clase hasta la metaclase."""

    func: Any
    info: Any


@dataclass
class Decorator:
    """Decorador ya registrado en un modelo, resuelto por nombre de atributo."""

    attr_name: str
    info: Any
    func: Callable[..., Any] = field(repr=False)


def _unwrap(func: Any) -> Callable[..., Any]:
    if isinstance(func, (classmethod, staticmethod)):
        return func.__func__
    return func


def count_positional(func: Callable[..., Any]) -> int:
    """
    Cuenta los parámetros posicionales de un callable ya enlazado.
    Permite aceptar firmas ``(cls, v)`` y ``(cls, v, info)`` indistintamente.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return 1
    count = 0
    for param in signature.parameters.values():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            count += 1
        elif param.kind is param.VAR_POSITIONAL:
            return 99
    return count


# === Decoradores Públicos ===


def field_validator(
    field_name: str,
    /,
    *fields: str,
    mode: FieldValidatorMode = "after",
    check_fields: bool | None = None,
) -> Callable[[Any], Any]:
    """
    Registra un validador para uno o varios campos.

    Modos:
    - ``before``: recibe el valor crudo, antes de la coerción.
    - ``after``: recibe el valor ya convertido al tipo declarado.
    - ``plain``: reemplaza por completo la validación del tipo.
    - ``wrap``: recibe ``(valor, handler)`` y decide cuándo invocar la validación interna.

    ``'*'`` aplica el validador a todos los campos.
    """
    if callable(field_name) or isinstance(field_name, (classmethod, staticmethod)):
        raise SchemaError(
            "@field_validator debe recibir los nombres de campo: "
            "@field_validator('campo')"
        )
    if mode not in ("before", "after", "plain", "wrap"):
        raise SchemaError(f"Modo de field_validator inválido: {mode!r}")
    names = (field_name, *fields)
    info = FieldValidatorInfo(
        fields=names,
        mode=mode,
        check_fields=True if check_fields is None else check_fields,
    )

    def decorator(func: Any) -> DecoratorMarker:
        return DecoratorMarker(func=func, info=info)

    return decorator


def model_validator(*, mode: ModelValidatorMode) -> Callable[[Any], Any]:
    """
    Registra un validador a nivel de modelo.

    - ``before``: ``(cls, data)`` recibe la entrada cruda (normalmente un dict).
    - ``after``: ``(self)`` recibe la instancia ya construida y la devuelve.
    - ``wrap``: ``(cls, data, handler)`` envuelve toda la validación.
    """
    if mode not in ("before", "after", "wrap"):
        raise SchemaError(f"Modo de model_validator inválido: {mode!r}")
    info = ModelValidatorInfo(mode=mode)

    def decorator(func: Any) -> DecoratorMarker:
        return DecoratorMarker(func=func, info=info)

    return decorator


def field_serializer(
    field_name: str,
    /,
    *fields: str,
    mode: Literal["plain", "wrap"] = "plain",
    when_used: WhenUsed = "always",
    check_fields: bool | None = None,
) -> Callable[[Any], Any]:
    """Registra una función ``(self, valor[, info])`` que serializa campos concretos."""
    if mode not in ("plain", "wrap"):
        raise SchemaError(f"Modo de field_serializer inválido: {mode!r}")
    info = FieldSerializerInfo(
        fields=(field_name, *fields),
        mode=mode,
        when_used=when_used,
        check_fields=True if check_fields is None else check_fields,
    )

    def decorator(func: Any) -> DecoratorMarker:
        return DecoratorMarker(func=func, info=info)

    return decorator


def model_serializer(
    func: Any = None,
    /,
    *,
    mode: Literal["plain", "wrap"] = "plain",
    when_used: WhenUsed = "always",
) -> Any:
    """Reemplaza la serialización completa del modelo. Usable con o sin paréntesis."""
    info = ModelSerializerInfo(mode=mode, when_used=when_used)

    def decorator(f: Any) -> DecoratorMarker:
        return DecoratorMarker(func=f, info=info)

    if func is not None:
        return decorator(func)
    return decorator


def computed_field(
    func: Any = None,
    /,
    *,
    alias: str | None = None,
    title: str | None = None,
    description: str | None = None,
    repr: bool = True,
) -> Any:
    """
    Expone una property como campo de solo lectura en ``model_dump``.

    Uso:
        @computed_field
        @property
        def area(self) -> float:
            return self.ancho * self.alto
    """

    def decorator(f: Any) -> DecoratorMarker:
        prop = f if isinstance(f, property) else property(f)
        getter = prop.fget
        return_type = Any
        if getter is not None:
            return_type = getattr(getter, "__annotations__", {}).get("return", Any)
        info = ComputedFieldInfo(
            return_type=return_type,
            alias=alias,
            title=title,
            description=description,
            repr=repr,
        )
        return DecoratorMarker(func=prop, info=info)

    if func is not None:
        return decorator(func)
    return decorator


# === Registro (usado por la metaclase) ===


@dataclass
class DecoratorSet:
    """Colección de decoradores de un modelo (propios + heredados)."""

    field_validators: dict[str, Decorator] = field(default_factory=dict)
    model_validators: dict[str, Decorator] = field(default_factory=dict)
    field_serializers: dict[str, Decorator] = field(default_factory=dict)
    model_serializers: dict[str, Decorator] = field(default_factory=dict)
    computed_fields: dict[str, Decorator] = field(default_factory=dict)

    def copy(self) -> DecoratorSet:
        return DecoratorSet(
            field_validators=dict(self.field_validators),
            model_validators=dict(self.model_validators),
            field_serializers=dict(self.field_serializers),
            model_serializers=dict(self.model_serializers),
            computed_fields=dict(self.computed_fields),
        )

    def register(self, attr_name: str, marker: DecoratorMarker) -> Any:
        """
        Registra un marcador y devuelve el objeto que debe quedar en la clase.
        Los validadores de campo y los ``before``/``wrap`` de modelo son classmethods.
        """
        info = marker.info
        func = marker.func
        self._forget(attr_name)
        if isinstance(info, FieldValidatorInfo):
            self.field_validators[attr_name] = Decorator(attr_name, info, _unwrap(func))
            return func if isinstance(func, (classmethod, staticmethod)) else classmethod(func)
        if isinstance(info, ModelValidatorInfo):
            self.model_validators[attr_name] = Decorator(attr_name, info, _unwrap(func))
            if info.mode == "after":
                return func
            return func if isinstance(func, (classmethod, staticmethod)) else classmethod(func)
        if isinstance(info, FieldSerializerInfo):
            self.field_serializers[attr_name] = Decorator(attr_name, info, _unwrap(func))
            return func
        if isinstance(info, ModelSerializerInfo):
            self.model_serializers[attr_name] = Decorator(attr_name, info, _unwrap(func))
            return func
        if isinstance(info, ComputedFieldInfo):
            self.computed_fields[attr_name] = Decorator(attr_name, info, func)
            return func
        raise SchemaError(f"Decorador desconocido en {attr_name!r}: {info!r}")

    def _forget(self, attr_name: str) -> None:
        # Un atributo redefinido en la subclase reemplaza al heredado
        for registry in (
            self.field_validators,
            self.model_validators,
            self.field_serializers,
            self.model_serializers,
            self.computed_fields,
        ):
            registry.pop(attr_name, None)

    def forget_overridden(self, attr_name: str) -> None:
        """Olvida un decorador heredado cuyo atributo la subclase redefinió sin decorar."""
        self._forget(attr_name)

    def validators_for(self, name: str) -> list[Decorator]:
        return [d for d in self.field_validators.values() if d.info.applies_to(name)]

    def serializer_for(self, name: str) -> Decorator | None:
        found = None
        for dec in self.field_serializers.values():
            if dec.info.applies_to(name):
                found = dec
        return found

    @property
    def model_serializer(self) -> Decorator | None:
        if not self.model_serializers:
            return None
        return list(self.model_serializers.values())[-1]
