# src/validador/modules/schema/domain/model.py
"""
BaseModel y su Metaclase.

Arquitectura: Modular Monolith
Capa: Domain (Agregado Raíz del esquema)
Responsabilidad: Recolectar campos, configuración y decoradores al declarar la clase,
y exponer la API pública de validación y serialización de instancias.
"""

from __future__ import annotations

import copy
import json
import typing
from typing import Any, ClassVar, get_origin

from validador.core.value_objects import MISSING
from validador.modules.schema.domain.config import DEFAULT_CONFIG, merge_config
from validador.modules.schema.domain.decorators import (
    ComputedFieldInfo,
    DecoratorMarker,
    DecoratorSet,
    FieldSerializerInfo,
    FieldValidatorInfo,
)
from validador.modules.schema.domain.exceptions import SchemaError, UndefinedModelError
from validador.modules.schema.domain.fields import FieldInfo
from validador.modules.serialization.application import serializer
from validador.modules.validation.application import pipeline
from validador.modules.validation.application.coercion import split_annotated
from validador.modules.validation.domain.exceptions import ValidationError
from validador.modules.validation.domain.value_objects import ErrorDetail

# === Guía de Organización ===
# ✅ DECLARACIÓN: La metaclase solo recolecta; validar y serializar se delega.
# ✅ ESTADO: Valores en __dict__; campos asignados y extras en slots propios.


def _own_annotations(cls: type) -> dict[str, Any]:
    """Anotaciones declaradas en el cuerpo de ``cls`` (sin evaluar si es posible)."""
    raw = cls.__dict__.get("__annotations__")
    if raw is not None:
        return dict(raw)
    # Python 3.14+ (PEP 649): sin __annotations__ en __dict__; FORWARDREF tolera nombres aún no definidos
    try:
        import annotationlib
    except ImportError:
        return {}
    return dict(
        annotationlib.get_annotations(cls, format=annotationlib.Format.FORWARDREF)
    )


def _is_classvar(tp: Any) -> bool:
    if tp is ClassVar or get_origin(tp) is ClassVar:
        return True
    return isinstance(tp, str) and tp.startswith(("ClassVar", "typing.ClassVar"))


def _split_field_metadata(tp: Any) -> tuple[Any, list[FieldInfo]]:
    """Extrae los ``Field(...)`` de ``Annotated`` dejando el resto de metadatos."""
    base, metadata = split_annotated(tp)
    infos = [m for m in metadata if isinstance(m, FieldInfo)]
    others = tuple(m for m in metadata if not isinstance(m, FieldInfo))
    if not infos:
        return tp, []
    if others:
        base = typing.Annotated[(base, *others)]
    return base, infos


class ModelMetaclass(type):
    """
    Construye el esquema de cada subclase de BaseModel.

    Atributos que deja en la clase:
    - ``__validador_fields__`` / ``model_fields``: nombre -> FieldInfo (orden de declaración)
    - ``__validador_config__`` / ``model_config``: configuración combinada con la herencia
    - ``__validador_decorators__``: validadores, serializadores y campos calculados
    - ``__validador_complete__``: False si quedan referencias adelantadas sin resolver
    """

    def __new__(mcs, cls_name: str, bases: tuple[type, ...], namespace: dict[str, Any], **kwargs: Any):
        model_bases = [b for b in bases if isinstance(b, ModelMetaclass)]
        if not model_bases:
            return super().__new__(mcs, cls_name, bases, namespace)

        own_config = dict(namespace.get("model_config") or {})
        own_config.update(kwargs)
        config = merge_config(
            [b.__validador_config__ for b in reversed(model_bases)], own_config, cls_name
        )

        decorators = DecoratorSet()
        for base in reversed(model_bases):
            inherited = base.__validador_decorators__
            decorators.field_validators.update(inherited.field_validators)
            decorators.model_validators.update(inherited.model_validators)
            decorators.field_serializers.update(inherited.field_serializers)
            decorators.model_serializers.update(inherited.model_serializers)
            decorators.computed_fields.update(inherited.computed_fields)

        for attr_name, value in list(namespace.items()):
            if isinstance(value, DecoratorMarker):
                namespace[attr_name] = decorators.register(attr_name, value)
            elif not attr_name.startswith("__"):
                decorators.forget_overridden(attr_name)

        namespace["model_config"] = config
        cls = super().__new__(mcs, cls_name, bases, namespace)
        cls.__validador_config__ = config
        cls.__validador_decorators__ = decorators
        cls.model_computed_fields = {
            name: dec.info for name, dec in decorators.computed_fields.items()
        }

        own = _own_annotations(cls)
        raw_defaults = {name: cls.__dict__[name] for name in own if name in cls.__dict__}
        cls.__validador_raw_defaults__ = raw_defaults
        cls.__validador_own_names__ = tuple(own)

        parent_fields: dict[str, FieldInfo] = {}
        for base in reversed(model_bases):
            parent_fields.update(base.__validador_fields__)
        cls.__validador_parent_fields__ = parent_fields

        for name, tp in own.items():
            if name.startswith("_") or _is_classvar(tp):
                continue
            if name in raw_defaults:
                delattr(cls, name)

        if not cls._build_fields(raise_errors=False):
            fields = dict(parent_fields)
            for name, tp in own.items():
                if not name.startswith("_") and not _is_classvar(tp):
                    fields.setdefault(name, FieldInfo())
            cls.__validador_fields__ = fields
            cls.model_fields = fields

        mcs._check_decorator_fields(cls)

        if config["frozen"] and "__hash__" not in namespace:
            cls.__hash__ = _frozen_hash
        return cls

    def __init__(cls, cls_name: str, bases: tuple[type, ...], namespace: dict[str, Any], **kwargs: Any):
        super().__init__(cls_name, bases, namespace)

    def _build_fields(cls, raise_errors: bool, localns: dict[str, Any] | None = None) -> bool:
        """
        Resuelve anotaciones y construye los FieldInfo.
        Devuelve False si una referencia adelantada aún no existe.
        """
        namespace = {cls.__name__: cls}
        if localns:
            namespace.update(localns)
        try:
            hints = typing.get_type_hints(cls, localns=namespace, include_extras=True)
        except NameError as exc:
            cls.__validador_complete__ = False
            if raise_errors:
                raise UndefinedModelError(
                    f"{cls.__name__} no está completamente definido: {exc}. "
                    f"Define los tipos referenciados y llama a {cls.__name__}.model_rebuild()."
                ) from exc
            return False

        own_names = cls.__validador_own_names__
        raw_defaults = cls.__validador_raw_defaults__
        parent_fields = cls.__validador_parent_fields__
        alias_generator = cls.__validador_config__["alias_generator"]

        fields: dict[str, FieldInfo] = {}
        for name, tp in hints.items():
            if name.startswith("_") or _is_classvar(tp):
                continue
            if name in parent_fields and name not in own_names:
                fields[name] = parent_fields[name]
                continue

            base, annotated_infos = _split_field_metadata(tp)
            info = FieldInfo()
            for meta in annotated_infos:
                info = info.merge(meta)
            if name in raw_defaults:
                info = info.merge(FieldInfo.from_default(raw_defaults[name]))
            elif name in parent_fields:
                info = parent_fields[name].merge(info)
            info.annotation = base

            if alias_generator is not None and info.alias is None:
                info.alias = alias_generator(name)
            fields[name] = info

        cls.__validador_fields__ = fields
        cls.model_fields = fields
        cls.__validador_complete__ = True
        return True

    @staticmethod
    def _check_decorator_fields(cls: type) -> None:
        names = set(cls.__validador_fields__)
        decorators = cls.__validador_decorators__
        for dec in [*decorators.field_validators.values(), *decorators.field_serializers.values()]:
            info = dec.info
            if not isinstance(info, (FieldValidatorInfo, FieldSerializerInfo)) or not info.check_fields:
                continue
            missing = [f for f in info.fields if f != "*" and f not in names]
            if missing:
                raise SchemaError(
                    f"El decorador {cls.__name__}.{dec.attr_name} referencia campos "
                    f"inexistentes: {missing}. Usa check_fields=False si se definen en subclases."
                )


def _frozen_hash(self: Any) -> int:
    return hash((type(self), *self.__dict__.values()))


class BaseModel(metaclass=ModelMetaclass):
    """
    Clase base para modelos validados.

    Uso:
        class Usuario(BaseModel):
            model_config = ConfigDict(extra="forbid")

            nombre: str = Field(min_length=2)
            edad: int = Field(ge=0)

        usuario = Usuario(nombre="Ana", edad="30")   # edad -> 30
        usuario.model_dump()                          # {'nombre': 'Ana', 'edad': 30}
    """

    __slots__ = ("__dict__", "__validador_fields_set__", "__validador_extra__")

    __validador_fields__: ClassVar[dict[str, FieldInfo]] = {}
    __validador_config__: ClassVar[dict[str, Any]] = dict(DEFAULT_CONFIG)
    __validador_decorators__: ClassVar[DecoratorSet] = DecoratorSet()
    __validador_complete__: ClassVar[bool] = True
    model_config: ClassVar[dict[str, Any]] = {}
    model_fields: ClassVar[dict[str, FieldInfo]] = {}
    model_computed_fields: ClassVar[dict[str, ComputedFieldInfo]] = {}

    def __init__(self, /, **data: Any) -> None:
        pipeline.validate_model(type(self), data, self_instance=self)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__()

    # --- Validación ---

    @classmethod
    def model_validate(
        cls,
        obj: Any,
        *,
        strict: bool | None = None,
        from_attributes: bool | None = None,
        context: Any = None,
    ) -> Any:
        """Valida un dict (u objeto con atributos si ``from_attributes``) y devuelve una instancia."""
        return pipeline.validate_model(
            cls, obj, strict=strict, context=context, from_attributes=from_attributes
        )

    @classmethod
    def model_validate_json(
        cls,
        json_data: str | bytes | bytearray,
        *,
        strict: bool | None = None,
        context: Any = None,
    ) -> Any:
        """Parsea texto JSON y valida el resultado en modo 'json'."""
        title = pipeline.model_title(cls)
        if not isinstance(json_data, (str, bytes, bytearray)):
            raise ValidationError(title, [ErrorDetail(type="json_type", input=json_data)], "json")
        try:
            data = json.loads(json_data)
        except ValueError as exc:
            raise ValidationError(
                title,
                [ErrorDetail(type="json_invalid", input=json_data, ctx={"error": str(exc)})],
                "json",
            ) from None
        return pipeline.validate_model(cls, data, strict=strict, context=context, mode="json")

    @classmethod
    def model_construct(cls, _fields_set: set[str] | None = None, **values: Any) -> Any:
        """Crea una instancia SIN validar (para datos ya confiables)."""
        pipeline.ensure_complete(cls)
        instance = cls.__new__(cls)
        data: dict[str, Any] = {}
        provided: set[str] = set()
        populate_by_name = cls.__validador_config__["populate_by_name"]
        for name, info in cls.__validador_fields__.items():
            for key in (*info.input_keys(name, populate_by_name), name):
                if key in values:
                    data[name] = values.pop(key)
                    provided.add(name)
                    break
            else:
                if not info.is_required():
                    data[name] = info.get_default()
        extra = None
        if cls.__validador_config__["extra"] == "allow":
            extra = dict(values)
        object.__setattr__(instance, "__dict__", data)
        object.__setattr__(
            instance, "__validador_fields_set__", set(_fields_set) if _fields_set is not None else provided
        )
        object.__setattr__(instance, "__validador_extra__", extra)
        return instance

    @classmethod
    def model_rebuild(
        cls,
        *,
        force: bool = False,
        raise_errors: bool = True,
        _types_namespace: dict[str, Any] | None = None,
    ) -> bool | None:
        """
        Reintenta resolver referencias adelantadas.
        Devuelve None si ya estaba completo (y no se fuerza), True si se resolvió.
        """
        if cls.__validador_complete__ and not force:
            return None
        built = cls._build_fields(raise_errors=raise_errors, localns=_types_namespace)
        if built:
            ModelMetaclass._check_decorator_fields(cls)
        return built

    # --- Serialización ---

    def model_dump(
        self,
        *,
        mode: str = "python",
        include: Any = None,
        exclude: Any = None,
        by_alias: bool = False,
        exclude_unset: bool = False,
        exclude_defaults: bool = False,
        exclude_none: bool = False,
    ) -> dict[str, Any]:
        """Convierte la instancia en dict ('python' conserva tipos, 'json' los simplifica)."""
        return serializer.dump_model(
            self,
            mode=mode,
            include=include,
            exclude=exclude,
            by_alias=by_alias,
            exclude_unset=exclude_unset,
            exclude_defaults=exclude_defaults,
            exclude_none=exclude_none,
        )

    def model_dump_json(
        self,
        *,
        indent: int | None = None,
        include: Any = None,
        exclude: Any = None,
        by_alias: bool = False,
        exclude_unset: bool = False,
        exclude_defaults: bool = False,
        exclude_none: bool = False,
    ) -> str:
        """Serializa la instancia a texto JSON."""
        return serializer.dump_model_json(
            self,
            indent=indent,
            include=include,
            exclude=exclude,
            by_alias=by_alias,
            exclude_unset=exclude_unset,
            exclude_defaults=exclude_defaults,
            exclude_none=exclude_none,
        )

    def model_copy(self, *, update: dict[str, Any] | None = None, deep: bool = False) -> Any:
        """Copia la instancia aplicando ``update`` sin validar."""
        cls = type(self)
        data = copy.deepcopy(self.__dict__) if deep else dict(self.__dict__)
        fields_set = set(self.__validador_fields_set__)
        extra = self.__validador_extra__
        extra = (copy.deepcopy(extra) if deep else dict(extra)) if extra is not None else None
        for name, value in (update or {}).items():
            if name in cls.__validador_fields__:
                data[name] = value
                fields_set.add(name)
            elif extra is not None:
                extra[name] = value
            else:
                data[name] = value
        clone = cls.__new__(cls)
        object.__setattr__(clone, "__dict__", data)
        object.__setattr__(clone, "__validador_fields_set__", fields_set)
        object.__setattr__(clone, "__validador_extra__", extra)
        return clone

    # --- Introspección ---

    @property
    def model_fields_set(self) -> set[str]:
        """Campos que vinieron explícitamente en la entrada."""
        return self.__validador_fields_set__

    @property
    def model_extra(self) -> dict[str, Any] | None:
        """Campos adicionales conservados con ``extra='allow'``."""
        return self.__validador_extra__

    # --- Protocolo de Objeto ---

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
            return
        attr = getattr(type(self), name, None)
        if isinstance(attr, property):
            if attr.fset is None:
                raise AttributeError(f"La propiedad '{name}' es de solo lectura")
            attr.__set__(self, value)
            return
        pipeline.validate_assignment(self, name, value)

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("__validador"):
            try:
                extra = object.__getattribute__(self, "__validador_extra__")
            except AttributeError:
                extra = None
            if extra and name in extra:
                return extra[name]
        raise AttributeError(f"'{type(self).__name__}' no tiene el atributo '{name}'")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BaseModel) or type(self) is not type(other):
            return NotImplemented
        return (
            self.__dict__ == other.__dict__
            and self.__validador_extra__ == other.__validador_extra__
        )

    def __iter__(self) -> Any:
        yield from self.__dict__.items()
        extra = self.__validador_extra__
        if extra:
            yield from extra.items()

    def __repr_args__(self) -> list[tuple[str, Any]]:
        fields = type(self).__validador_fields__
        args = [
            (name, value)
            for name, value in self.__dict__.items()
            if name not in fields or fields[name].repr
        ]
        for name, dec in type(self).__validador_decorators__.computed_fields.items():
            if dec.info.repr:
                args.append((name, getattr(self, name)))
        extra = self.__validador_extra__
        if extra:
            args.extend(extra.items())
        return args

    def __repr__(self) -> str:
        body = ", ".join(f"{name}={value!r}" for name, value in self.__repr_args__())
        return f"{type(self).__name__}({body})"

    def __str__(self) -> str:
        return " ".join(f"{name}={value!r}" for name, value in self.__repr_args__())

    def __copy__(self) -> Any:
        return self.model_copy()

    def __deepcopy__(self, memo: dict[int, Any] | None = None) -> Any:
        return self.model_copy(deep=True)

    def __getstate__(self) -> dict[str, Any]:
        return {
            "__dict__": self.__dict__,
            "__validador_fields_set__": self.__validador_fields_set__,
            "__validador_extra__": self.__validador_extra__,
        }

    def __setstate__(self, state: dict[str, Any]) -> None:
        object.__setattr__(self, "__dict__", state["__dict__"])
        object.__setattr__(self, "__validador_fields_set__", state["__validador_fields_set__"])
        object.__setattr__(self, "__validador_extra__", state["__validador_extra__"])
