# src/validador/modules/serialization/application/serializer.py
"""
Motor de Serialización.

Arquitectura: Application Layer
Responsabilidad: Convertir instancias validadas en diccionarios o JSON respetando
include/exclude, alias, valores no asignados y serializadores de usuario.
"""

from __future__ import annotations

import datetime as dt
import enum
import json
import uuid
from decimal import Decimal
from pathlib import PurePath
from typing import Any, Callable

from validador.core.value_objects import MISSING
from validador.modules.schema.domain.decorators import count_positional
from validador.modules.serialization.domain.value_objects import SerializationInfo

# === Guía de Organización ===
# ✅ SIN VALIDACIÓN: Se asume que la instancia ya es válida.
# ✅ FILTROS ANIDADOS: include/exclude admiten sets y dicts con sets/dicts anidados.


def _is_model(value: Any) -> bool:
    return hasattr(type(value), "__validador_fields__") and not isinstance(value, type)


# === Filtros include / exclude ===


def normalize_filter(spec: Any) -> dict[Any, Any] | None:
    """
    Normaliza un filtro a ``{clave: True | filtro_anidado}``.

    Acepta: None, set/list/tuple de claves, o dict cuyos valores son
    ``True``, ``...``, sets o dicts anidados.
    """
    if spec is None:
        return None
    if isinstance(spec, dict):
        normalized: dict[Any, Any] = {}
        for key, value in spec.items():
            if value is True or value is Ellipsis:
                normalized[key] = True
            elif value is False or value is None:
                continue
            else:
                normalized[key] = normalize_filter(value)
        return normalized
    if isinstance(spec, (set, frozenset, list, tuple)):
        return {key: True for key in spec}
    raise TypeError(f"Filtro include/exclude inválido: {spec!r}")


def _sub_filter(spec: dict[Any, Any] | None, key: Any) -> Any:
    """Filtro a aplicar dentro de ``key``. ``True`` significa "todo"."""
    if spec is None:
        return None
    nested = spec.get(key, spec.get("__all__"))
    if nested is True:
        return None
    return nested


def _included(key: Any, include: dict[Any, Any] | None) -> bool:
    if include is None:
        return True
    return key in include or "__all__" in include


def _excluded(key: Any, exclude: dict[Any, Any] | None) -> bool:
    if exclude is None:
        return False
    return exclude.get(key, exclude.get("__all__")) is True


# === Conversión de Valores ===


def to_jsonable(value: Any) -> Any:
    """Convierte un valor Python a tipos nativos de JSON."""
    if value is None or isinstance(value, (bool, int, float, str)):
        if isinstance(value, enum.Enum):
            return value.value
        return value
    if isinstance(value, enum.Enum):
        return to_jsonable(value.value)
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    if isinstance(value, dt.timedelta):
        return value.total_seconds()
    if isinstance(value, (Decimal, uuid.UUID, PurePath)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    if isinstance(value, dict):
        return {_json_key(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    if _is_model(value):
        return dump_model(value, mode="json")
    raise TypeError(f"No se puede serializar a JSON un valor de tipo {type(value).__name__}")


def _json_key(key: Any) -> Any:
    if isinstance(key, str):
        return key
    if isinstance(key, enum.Enum):
        return str(key.value)
    if isinstance(key, (int, float, bool)) or key is None:
        return key
    return str(to_jsonable(key))


class _Options:
    """Opciones de una llamada a ``model_dump`` (se propagan a modelos anidados)."""

    __slots__ = ("mode", "by_alias", "exclude_unset", "exclude_defaults", "exclude_none")

    def __init__(
        self,
        mode: str,
        by_alias: bool,
        exclude_unset: bool,
        exclude_defaults: bool,
        exclude_none: bool,
    ):
        if mode not in ("python", "json"):
            raise ValueError(f"mode debe ser 'python' o 'json', no {mode!r}")
        self.mode = mode
        self.by_alias = by_alias
        self.exclude_unset = exclude_unset
        self.exclude_defaults = exclude_defaults
        self.exclude_none = exclude_none

    def info(self, include: Any, exclude: Any, field_name: str | None = None) -> SerializationInfo:
        return SerializationInfo(
            mode=self.mode,
            by_alias=self.by_alias,
            exclude_unset=self.exclude_unset,
            exclude_defaults=self.exclude_defaults,
            exclude_none=self.exclude_none,
            include=include,
            exclude=exclude,
            field_name=field_name,
        )


def _serialize(value: Any, options: _Options, include: Any, exclude: Any) -> Any:
    if _is_model(value):
        return _dump(value, options, include, exclude)
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            if not _included(key, include) or _excluded(key, exclude):
                continue
            out_key = _json_key(key) if options.mode == "json" else key
            result[out_key] = _serialize(item, options, _sub_filter(include, key), _sub_filter(exclude, key))
        return result
    if isinstance(value, (list, tuple)):
        items = [
            _serialize(item, options, _sub_filter(include, index), _sub_filter(exclude, index))
            for index, item in enumerate(value)
            if _included(index, include) and not _excluded(index, exclude)
        ]
        if options.mode == "json" or isinstance(value, list):
            return items
        return tuple(items)
    if isinstance(value, (set, frozenset)):
        items = [_serialize(item, options, None, None) for item in value]
        if options.mode == "json":
            return items
        return type(value)(items)
    if options.mode == "json":
        return to_jsonable(value)
    return value


def _call_user(func: Callable[..., Any], base_args: int, info: SerializationInfo, *args: Any) -> Any:
    if count_positional(func) > base_args:
        return func(*args, info)
    return func(*args)


def _should_apply(when_used: str, value: Any, mode: str) -> bool:
    if when_used == "always":
        return True
    if when_used == "unless-none":
        return value is not None
    if when_used == "json":
        return mode == "json"
    return mode == "json" and value is not None


def _is_default(info: Any, value: Any) -> bool:
    if info.default_factory is not None:
        return value == info.default_factory()
    return info.default is not MISSING and value == info.default


def _dump_fields(model: Any, options: _Options, include: Any, exclude: Any) -> dict[str, Any]:
    cls = type(model)
    decorators = cls.__validador_decorators__
    fields_set = model.__validador_fields_set__
    result: dict[str, Any] = {}

    for name, info in cls.__validador_fields__.items():
        if info.exclude:
            continue
        if not _included(name, include) or _excluded(name, exclude):
            continue
        if options.exclude_unset and name not in fields_set:
            continue
        value = model.__dict__.get(name, MISSING)
        if value is MISSING:
            continue
        if options.exclude_defaults and _is_default(info, value):
            continue
        if options.exclude_none and value is None:
            continue

        sub_include = _sub_filter(include, name)
        sub_exclude = _sub_filter(exclude, name)
        serializer = decorators.serializer_for(name)
        if serializer is not None and _should_apply(serializer.info.when_used, value, options.mode):
            func = getattr(model, serializer.attr_name)
            sinfo = options.info(sub_include, sub_exclude, field_name=name)
            if serializer.info.mode == "wrap":

                def handler(v: Any, _inc: Any = sub_include, _exc: Any = sub_exclude) -> Any:
                    return _serialize(v, options, _inc, _exc)

                out = _call_user(func, 2, sinfo, value, handler)
            else:
                out = _call_user(func, 1, sinfo, value)
            if options.mode == "json":
                out = to_jsonable(out)
        else:
            out = _serialize(value, options, sub_include, sub_exclude)

        result[info.dump_key(name, options.by_alias)] = out

    for name, decorator in decorators.computed_fields.items():
        if not _included(name, include) or _excluded(name, exclude):
            continue
        value = getattr(model, name)
        if options.exclude_none and value is None:
            continue
        key = decorator.info.alias if options.by_alias and decorator.info.alias else name
        result[key] = _serialize(value, options, _sub_filter(include, name), _sub_filter(exclude, name))

    extra = model.__validador_extra__
    if extra:
        for key, value in extra.items():
            if not _included(key, include) or _excluded(key, exclude):
                continue
            if options.exclude_none and value is None:
                continue
            result[key] = _serialize(value, options, _sub_filter(include, key), _sub_filter(exclude, key))

    return result


def _dump(model: Any, options: _Options, include: Any, exclude: Any) -> Any:
    serializer = type(model).__validador_decorators__.model_serializer
    if serializer is None or not _should_apply(serializer.info.when_used, model, options.mode):
        return _dump_fields(model, options, include, exclude)

    func = getattr(model, serializer.attr_name)
    sinfo = options.info(include, exclude)
    if serializer.info.mode == "wrap":

        def handler(m: Any) -> Any:
            return _dump_fields(m, options, include, exclude)

        out = _call_user(func, 1, sinfo, handler)
    else:
        out = _call_user(func, 0, sinfo)
    if options.mode == "json":
        return to_jsonable(out)
    return out


# === API Pública ===


def dump_model(
    model: Any,
    *,
    mode: str = "python",
    include: Any = None,
    exclude: Any = None,
    by_alias: bool = False,
    exclude_unset: bool = False,
    exclude_defaults: bool = False,
    exclude_none: bool = False,
) -> Any:
    """
    Serializa una instancia de modelo.

    Args:
        mode: 'python' conserva los tipos (datetime, Enum, set...);
              'json' los convierte a tipos nativos de JSON.
        include / exclude: Claves a incluir / excluir (sets o dicts anidados).
        by_alias: Usar ``serialization_alias`` o ``alias`` como claves.
        exclude_unset: Omitir campos que no venían en la entrada.
        exclude_defaults: Omitir campos cuyo valor es igual al default.
        exclude_none: Omitir campos con valor None.
    """
    options = _Options(mode, by_alias, exclude_unset, exclude_defaults, exclude_none)
    return _dump(model, options, normalize_filter(include), normalize_filter(exclude))


def dump_model_json(model: Any, *, indent: int | None = None, **kwargs: Any) -> str:
    """Serializa una instancia de modelo a texto JSON."""
    data = dump_model(model, mode="json", **kwargs)
    return dumps_json(data, indent=indent)


def dumps_json(data: Any, indent: int | None = None) -> str:
    """JSON compacto (sin espacios) salvo que se pida ``indent``."""
    if indent is None:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(data, ensure_ascii=False, indent=indent)
