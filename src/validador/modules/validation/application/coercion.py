# src/validador/modules/validation/application/coercion.py
"""
Motor de Coerción y Parseo.

Arquitectura: Application Layer
Responsabilidad: Convertir valores crudos al tipo declarado (modo laxo o estricto),
aplicar restricciones y acumular errores con su ubicación relativa.
"""

from __future__ import annotations

import collections
import datetime as dt
import enum
import math
import types
import typing
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Literal, Union, get_args, get_origin

from validador.core.value_objects import MISSING
from validador.modules.schema.domain.config import DEFAULT_CONFIG
from validador.modules.schema.domain.exceptions import SchemaError
from validador.modules.schema.domain.fields import FieldInfo
from validador.modules.schema.domain.value_objects import Constraints, compile_pattern
from validador.modules.validation.domain.exceptions import LineErrors
from validador.modules.validation.domain.value_objects import ErrorDetail

# === Guía de Organización ===
# ✅ PURO: Sin I/O ni logging; solo transforma valores o lanza LineErrors.
# ✅ UBICACIÓN RELATIVA: Cada contenedor prefija la loc de los errores de sus hijos.

_TRUE_STRINGS = frozenset({"1", "on", "t", "true", "y", "yes"})
_FALSE_STRINGS = frozenset({"0", "off", "f", "false", "n", "no"})

_LAX_SEQUENCES = (
    list,
    tuple,
    set,
    frozenset,
    collections.deque,
    types.GeneratorType,
    type({}.keys()),
    type({}.values()),
)

_COLLECTION_NAMES = {
    list: "List",
    tuple: "Tuple",
    set: "Set",
    frozenset: "Set",
    dict: "Dictionary",
}

_NONE_TYPES = (None, type(None))


@dataclass(frozen=True)
class ValidationState:
    """
    Estado compartido durante una validación.

    - strict: modo estricto forzado por la llamada o el campo (None = usar config).
    - mode: 'python' o 'json' (en JSON se aceptan textos para fechas, UUID, etc.).
    - config: configuración del modelo que se está validando.
    """

    strict: bool | None = None
    context: Any = None
    mode: str = "python"
    config: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_CONFIG))
    from_attributes: bool | None = None

    @property
    def is_strict(self) -> bool:
        if self.strict is not None:
            return self.strict
        return bool(self.config.get("strict"))

    @property
    def strict_python(self) -> bool:
        """Estricto y sin las concesiones propias de la entrada JSON."""
        return self.is_strict and self.mode != "json"


# === Utilidades de Tipos ===


def split_annotated(tp: Any) -> tuple[Any, tuple[Any, ...]]:
    """Separa ``Annotated[T, *meta]`` en ``(T, meta)``."""
    if get_origin(tp) is Annotated:
        args = get_args(tp)
        return args[0], tuple(args[1:])
    return tp, ()


def is_union(tp: Any) -> bool:
    origin = get_origin(tp)
    if origin is Union:
        return True
    union_type = getattr(types, "UnionType", None)
    return union_type is not None and isinstance(tp, union_type)


def is_model_class(tp: Any) -> bool:
    return isinstance(tp, type) and hasattr(tp, "__validador_fields__")


def type_repr(tp: Any) -> str:
    """Nombre corto de un tipo, usado como segmento de ubicación en uniones."""
    base, _ = split_annotated(tp)
    if base in _NONE_TYPES:
        return "none"
    origin = get_origin(base)
    if origin is Literal:
        return "literal[" + ",".join(repr(a) for a in get_args(base)) + "]"
    if origin is not None:
        args = get_args(base)
        name = getattr(origin, "__name__", repr(origin))
        if is_union(base):
            name = "union"
        if args:
            return f"{name}[{','.join(type_repr(a) if a is not Ellipsis else '...' for a in args)}]"
        return name
    if isinstance(base, type):
        return base.__name__
    return repr(base).replace("typing.", "")


def join_expected(values: Any) -> str:
    """Formatea ``['a', 'b', 'c']`` como ``'a', 'b' o 'c'``."""
    reprs = [repr(v.value if isinstance(v, enum.Enum) else v) for v in values]
    if len(reprs) <= 1:
        return "".join(reprs)
    return ", ".join(reprs[:-1]) + " o " + reprs[-1]


def _fail(error_type: str, value: Any, **ctx: Any) -> LineErrors:
    return LineErrors.single(error_type, value, **ctx)


def _prefixed(errors: list[ErrorDetail], *segments: Any) -> list[ErrorDetail]:
    return [e.with_prefix(*segments) for e in errors]


# === Punto de Entrada ===


def validate_value(
    tp: Any,
    value: Any,
    state: ValidationState,
    constraints: Constraints | None = None,
    discriminator: str | None = None,
) -> Any:
    """
    Valida ``value`` contra el tipo ``tp``.

    Returns:
        El valor convertido.

    Raises:
        LineErrors: Con todas las violaciones (ubicaciones relativas a ``value``).
    """
    base, metadata = split_annotated(tp)
    for meta in metadata:
        if isinstance(meta, FieldInfo):
            constraints = meta.constraints if constraints is None else meta.constraints.merge(constraints)
            discriminator = discriminator or meta.discriminator

    if constraints is not None and constraints.strict is not None:
        state = replace(state, strict=constraints.strict)

    if is_union(base) and discriminator is None:
        # Las restricciones se aplican a cada miembro, nunca a None
        return _validate_union(get_args(base), value, state, None, constraints)

    result = _validate_type(base, value, state, discriminator)

    if base is str:
        constraints = _string_defaults(state.config, constraints)
    if constraints is not None and not constraints.is_empty:
        _check_constraints(result, constraints)
    return result


def _validate_type(base: Any, value: Any, state: ValidationState, discriminator: str | None) -> Any:
    if base is Any or base is object:
        return value
    if base in _NONE_TYPES:
        if value is None:
            return None
        raise _fail("none_required", value)

    if is_union(base):
        return _validate_union(get_args(base), value, state, discriminator)

    origin = get_origin(base)
    if origin is Literal:
        return _validate_literal(get_args(base), value, state)
    if origin is not None:
        return _validate_generic(origin, get_args(base), value, state)
    if base in _COLLECTION_NAMES:
        return _validate_generic(base, (), value, state)

    supertype = getattr(base, "__supertype__", None)
    if supertype is not None:
        return validate_value(supertype, value, state)

    if is_model_class(base):
        # Import diferido: el pipeline de modelos también depende de este módulo
        from validador.modules.validation.application import pipeline

        return pipeline.run_nested(base, value, state)

    if not isinstance(base, type):
        raise SchemaError(f"Tipo no soportado: {base!r}")

    if issubclass(base, enum.Enum):
        return _validate_enum(base, value, state)
    if base is bool:
        return _validate_bool(value, state)
    if base is int:
        return _validate_int(value, state)
    if base is float:
        return _validate_float(value, state)
    if base is str:
        return _validate_str(value, state)
    if base is bytes:
        return _validate_bytes(value, state)
    if base is Decimal:
        return _validate_decimal(value, state)
    if base is dt.datetime:
        return _validate_datetime(value, state)
    if base is dt.date:
        return _validate_date(value, state)
    if base is dt.time:
        return _validate_time(value, state)
    if base is uuid.UUID:
        return _validate_uuid(value, state)

    if isinstance(value, base):
        return value
    raise _fail("is_instance_of", value, class_name=base.__name__)


# === Escalares ===


def _as_text(value: str | bytes, error_type: str, **ctx: Any) -> str:
    """Texto de la entrada; bytes que no son UTF-8 se reportan como ``error_type``."""
    if isinstance(value, str):
        return value
    try:
        return value.decode()
    except UnicodeDecodeError:
        raise _fail(error_type, value, **ctx) from None


def _validate_bool(value: Any, state: ValidationState) -> bool:
    if isinstance(value, bool):
        return value
    if state.is_strict:
        raise _fail("bool_type", value)
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, (str, bytes)):
        text = _as_text(value, "bool_parsing").strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        raise _fail("bool_parsing", value)
    if isinstance(value, (int, float)):
        raise _fail("bool_parsing", value)
    raise _fail("bool_type", value)


def _validate_int(value: Any, state: ValidationState) -> int:
    if isinstance(value, bool):
        if state.is_strict:
            raise _fail("int_type", value)
        return int(value)
    if isinstance(value, int):
        return value
    if state.is_strict:
        raise _fail("int_type", value)
    if isinstance(value, (float, Decimal)):
        if not math.isfinite(value):
            raise _fail("finite_number", value)
        if value % 1 != 0:
            raise _fail("int_from_float", value)
        return int(value)
    if isinstance(value, (str, bytes)):
        text = _as_text(value, "int_parsing").strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise _fail("int_parsing", value) from None
        if math.isfinite(number) and number.is_integer():
            return int(number)
        raise _fail("int_parsing", value)
    raise _fail("int_type", value)


def _validate_float(value: Any, state: ValidationState) -> float:
    if isinstance(value, bool):
        if state.is_strict:
            raise _fail("float_type", value)
        return float(value)
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        return float(value)
    if state.is_strict:
        raise _fail("float_type", value)
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (str, bytes)):
        text = _as_text(value, "float_parsing").strip()
        try:
            return float(text)
        except ValueError:
            raise _fail("float_parsing", value) from None
    raise _fail("float_type", value)


def _validate_str(value: Any, state: ValidationState) -> str:
    if isinstance(value, enum.Enum) and isinstance(value, str):
        text = value.value
    elif isinstance(value, str):
        text = value
    elif not state.is_strict and isinstance(value, enum.Enum) and isinstance(value.value, str):
        text = value.value
    else:
        raise _fail("string_type", value)

    config = state.config
    if config.get("str_strip_whitespace"):
        text = text.strip()
    if config.get("str_to_lower"):
        text = text.lower()
    elif config.get("str_to_upper"):
        text = text.upper()
    return text


def _validate_bytes(value: Any, state: ValidationState) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, bytearray):
        return bytes(value)
    if not state.strict_python and isinstance(value, str):
        return value.encode("utf-8")
    raise _fail("bytes_type", value)


def _validate_decimal(value: Any, state: ValidationState) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if state.strict_python or isinstance(value, bool):
        raise _fail("decimal_type", value)
    if isinstance(value, (int, float, str)):
        try:
            return Decimal(str(value).strip())
        except InvalidOperation:
            raise _fail("decimal_parsing", value) from None
    raise _fail("decimal_type", value)


def _validate_uuid(value: Any, state: ValidationState) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    if state.strict_python:
        raise _fail("uuid_type", value)
    try:
        if isinstance(value, str):
            return uuid.UUID(value.strip())
        if isinstance(value, bytes):
            if len(value) == 16:
                return uuid.UUID(bytes=value)
            return uuid.UUID(value.decode())
    except ValueError as exc:
        raise _fail("uuid_parsing", value, error=str(exc)) from None
    raise _fail("uuid_type", value)


def _parse_iso(text: str) -> str:
    text = text.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    return text


def _validate_datetime(value: Any, state: ValidationState) -> dt.datetime:
    if isinstance(value, dt.datetime):
        return value
    if state.strict_python or isinstance(value, bool):
        raise _fail("datetime_type", value)
    if isinstance(value, (int, float)) and not (state.is_strict and state.mode == "json"):
        seconds = value / 1000 if abs(value) > 2e10 else value
        try:
            return dt.datetime.fromtimestamp(seconds, tz=dt.timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise _fail("datetime_parsing", value, error="marca de tiempo fuera de rango") from None
    if isinstance(value, (str, bytes)):
        text = _as_text(value, "datetime_parsing", error="el texto no es UTF-8")
        try:
            return dt.datetime.fromisoformat(_parse_iso(text))
        except ValueError:
            raise _fail("datetime_parsing", value, error="formato ISO 8601 inválido") from None
    raise _fail("datetime_type", value)


def _validate_date(value: Any, state: ValidationState) -> dt.date:
    if isinstance(value, dt.datetime):
        if state.strict_python:
            raise _fail("date_type", value)
        if value.time() == dt.time(0):
            return value.date()
        raise _fail("date_from_datetime_inexact", value)
    if isinstance(value, dt.date):
        return value
    if state.strict_python:
        raise _fail("date_type", value)
    if isinstance(value, (str, bytes)):
        text = _as_text(value, "date_parsing", error="el texto no es UTF-8")
        try:
            return dt.date.fromisoformat(text.strip())
        except ValueError:
            raise _fail("date_parsing", value, error="formato ISO 8601 inválido") from None
    raise _fail("date_type", value)


def _validate_time(value: Any, state: ValidationState) -> dt.time:
    if isinstance(value, dt.time):
        return value
    if state.strict_python:
        raise _fail("time_type", value)
    if isinstance(value, (str, bytes)):
        text = _as_text(value, "time_parsing", error="el texto no es UTF-8")
        try:
            return dt.time.fromisoformat(_parse_iso(text))
        except ValueError:
            raise _fail("time_parsing", value, error="formato ISO 8601 inválido") from None
    raise _fail("time_type", value)


def _validate_enum(base: type[enum.Enum], value: Any, state: ValidationState) -> Any:
    if isinstance(value, base):
        member = value
    elif state.strict_python:
        raise _fail("enum", value, expected=join_expected(list(base)))
    else:
        try:
            member = base(value)
        except ValueError:
            raise _fail("enum", value, expected=join_expected(list(base))) from None
    if state.config.get("use_enum_values"):
        return member.value
    return member


def _validate_literal(expected: tuple[Any, ...], value: Any, state: ValidationState) -> Any:
    for option in expected:
        if value == option and type(value) is type(option):
            return option
    if not state.is_strict:
        for option in expected:
            if isinstance(option, enum.Enum) and value == option.value:
                return option
            if isinstance(value, enum.Enum) and value.value == option:
                return option
    raise _fail("literal_error", value, expected=join_expected(expected))


# === Uniones ===


def _validate_union(
    members: tuple[Any, ...],
    value: Any,
    state: ValidationState,
    discriminator: str | None,
    constraints: Constraints | None = None,
) -> Any:
    if discriminator is not None:
        return _validate_discriminated(members, value, state, discriminator)

    candidates = [m for m in members if m not in _NONE_TYPES]
    nullable = len(candidates) != len(members)
    if nullable:
        if value is None:
            return None
        if len(candidates) == 1:
            return validate_value(candidates[0], value, state, constraints)

    # Modo "smart": tipo exacto, luego primer éxito estricto, luego lax de izquierda a derecha
    strict_state = replace(state, strict=True)
    first_strict: Any = MISSING
    for member in candidates:
        try:
            result = validate_value(member, value, strict_state, constraints)
        except LineErrors:
            continue
        if type(result) is type(value):
            return result
        if first_strict is MISSING:
            first_strict = result
    if first_strict is not MISSING:
        return first_strict

    errors: list[ErrorDetail] = []
    for member in candidates:
        try:
            return validate_value(member, value, state, constraints)
        except LineErrors as exc:
            errors.extend(_prefixed(exc.errors, type_repr(member)))
    if nullable:
        errors.append(ErrorDetail(type="none_required", loc=("none",), input=value))
    raise LineErrors(errors)


def tag_mapping(members: tuple[Any, ...], discriminator: str) -> tuple[dict[Any, type], list[str]]:
    """
    Construye el mapa etiqueta -> modelo de una unión discriminada.

    Returns:
        (mapa de etiquetas, claves de entrada donde buscar la etiqueta)

    Raises:
        SchemaError: Si algún miembro no es un modelo con el discriminador como Literal.
    """
    from validador.modules.validation.application import pipeline

    mapping: dict[Any, type] = {}
    keys: list[str] = []
    for member in members:
        model, _ = split_annotated(member)
        if not is_model_class(model):
            raise SchemaError(
                f"Los miembros de una unión discriminada deben ser modelos: {model!r}"
            )
        pipeline.ensure_complete(model)
        info = model.__validador_fields__.get(discriminator)
        if info is None:
            raise SchemaError(
                f"El modelo {model.__name__} no define el discriminador '{discriminator}'"
            )
        annotation, _ = split_annotated(info.annotation)
        if get_origin(annotation) is not Literal:
            raise SchemaError(
                f"El discriminador '{discriminator}' de {model.__name__} debe ser un Literal"
            )
        for tag in get_args(annotation):
            mapping[tag] = model
            if isinstance(tag, enum.Enum):
                mapping[tag.value] = model
        key = info.validation_alias or info.alias or discriminator
        if key not in keys:
            keys.append(key)
        if discriminator not in keys and model.__validador_config__.get("populate_by_name"):
            keys.append(discriminator)
    return mapping, keys


def _validate_discriminated(
    members: tuple[Any, ...], value: Any, state: ValidationState, discriminator: str
) -> Any:
    mapping, keys = tag_mapping(members, discriminator)
    models = tuple(dict.fromkeys(mapping.values()))
    if isinstance(value, models):
        return value

    tag = MISSING
    if isinstance(value, Mapping):
        for key in keys:
            if key in value:
                tag = value[key]
                break
    elif state.from_attributes or state.config.get("from_attributes"):
        tag = getattr(value, discriminator, MISSING)
    else:
        raise _fail("model_attributes_type", value)

    if tag is MISSING:
        raise _fail("union_tag_not_found", value, discriminator=discriminator)

    try:
        model = mapping.get(tag)
    except TypeError:
        model = None
    if model is None:
        expected = ", ".join(repr(t) for t in mapping if not isinstance(t, enum.Enum))
        raise _fail(
            "union_tag_invalid",
            value,
            discriminator=discriminator,
            tag=str(tag),
            expected_tags=expected,
        )

    try:
        return validate_value(model, value, state)
    except LineErrors as exc:
        raise LineErrors(_prefixed(exc.errors, str(tag))) from None


# === Colecciones ===


def _validate_generic(origin: Any, args: tuple[Any, ...], value: Any, state: ValidationState) -> Any:
    if origin is list:
        return _validate_list(args[0] if args else Any, value, state)
    if origin is tuple:
        return _validate_tuple(args, value, state)
    if origin in (set, frozenset):
        return _validate_set(origin, args[0] if args else Any, value, state)
    if origin is dict:
        key_tp, value_tp = args if args else (Any, Any)
        return _validate_dict(key_tp, value_tp, value, state)
    if origin in (typing.Sequence, collections.abc.Sequence):
        if isinstance(value, tuple):
            return _validate_tuple((args[0] if args else Any, Ellipsis), value, state)
        return _validate_list(args[0] if args else Any, value, state)
    if origin in (typing.Mapping, collections.abc.Mapping):
        key_tp, value_tp = args if args else (Any, Any)
        return _validate_dict(key_tp, value_tp, value, state)
    if origin is type:
        target = args[0] if args else object
        if isinstance(value, type) and (target is Any or issubclass(value, target)):
            return value
        raise _fail("is_instance_of", value, class_name=f"type[{type_repr(target)}]")
    raise SchemaError(f"Tipo genérico no soportado: {origin!r}")


def _lax_items(value: Any, exact: type | tuple[type, ...], state: ValidationState, error_type: str) -> list[Any]:
    if isinstance(value, exact):
        return list(value)
    if state.is_strict:
        if state.mode == "json" and isinstance(value, list):
            return value
        raise _fail(error_type, value)
    if isinstance(value, _LAX_SEQUENCES):
        return list(value)
    raise _fail(error_type, value)


def _validate_items(item_tp: Any, items: list[Any], state: ValidationState) -> list[Any]:
    result: list[Any] = []
    errors: list[ErrorDetail] = []
    for index, item in enumerate(items):
        try:
            result.append(validate_value(item_tp, item, state))
        except LineErrors as exc:
            errors.extend(_prefixed(exc.errors, index))
    if errors:
        raise LineErrors(errors)
    return result


def _validate_list(item_tp: Any, value: Any, state: ValidationState) -> list[Any]:
    items = _lax_items(value, list, state, "list_type")
    return _validate_items(item_tp, items, state)


def _validate_tuple(args: tuple[Any, ...], value: Any, state: ValidationState) -> tuple[Any, ...]:
    items = _lax_items(value, tuple, state, "tuple_type")

    if not args:
        return tuple(items)
    if len(args) == 2 and args[1] is Ellipsis:
        return tuple(_validate_items(args[0], items, state))
    if args == ((),):
        args = ()

    result: list[Any] = []
    errors: list[ErrorDetail] = []
    for index, item_tp in enumerate(args):
        if index >= len(items):
            errors.append(ErrorDetail(type="missing", loc=(index,), input=value))
            continue
        try:
            result.append(validate_value(item_tp, items[index], state))
        except LineErrors as exc:
            errors.extend(_prefixed(exc.errors, index))
    if len(items) > len(args):
        errors.append(
            ErrorDetail(
                type="too_long",
                input=value,
                ctx={"field_type": "Tuple", "max_length": len(args), "actual_length": len(items)},
            )
        )
    if errors:
        raise LineErrors(errors)
    return tuple(result)


def _validate_set(origin: type, item_tp: Any, value: Any, state: ValidationState) -> Any:
    error_type = "set_type" if origin is set else "frozen_set_type"
    if isinstance(value, (set, frozenset)) and not isinstance(value, origin) and state.strict_python:
        raise _fail(error_type, value)
    items = _lax_items(value, (set, frozenset), state, error_type)
    validated = _validate_items(item_tp, items, state)
    try:
        return origin(validated)
    except TypeError:
        raise _fail("set_item_not_hashable", value) from None


def _validate_dict(key_tp: Any, value_tp: Any, value: Any, state: ValidationState) -> dict[Any, Any]:
    if not isinstance(value, dict) and (state.is_strict or not isinstance(value, Mapping)):
        raise _fail("dict_type", value)

    result: dict[Any, Any] = {}
    errors: list[ErrorDetail] = []
    for key, item in value.items():
        try:
            new_key = validate_value(key_tp, key, state)
        except LineErrors as exc:
            errors.extend(_prefixed(exc.errors, key, "[key]"))
            continue
        try:
            result[new_key] = validate_value(value_tp, item, state)
        except LineErrors as exc:
            errors.extend(_prefixed(exc.errors, key))
    if errors:
        raise LineErrors(errors)
    return result


# === Restricciones ===


def _string_defaults(config: dict[str, Any], constraints: Constraints | None) -> Constraints | None:
    min_length = config.get("str_min_length")
    max_length = config.get("str_max_length")
    if min_length is None and max_length is None:
        return constraints
    defaults = Constraints(min_length=min_length, max_length=max_length)
    return defaults if constraints is None else defaults.merge(constraints)


def _is_multiple(value: Any, multiple_of: Any) -> bool:
    if isinstance(value, Decimal):
        return value % Decimal(str(multiple_of)) == 0
    if isinstance(value, float) or isinstance(multiple_of, float):
        quotient = value / multiple_of
        return math.isclose(quotient, round(quotient), rel_tol=0, abs_tol=1e-9)
    return value % multiple_of == 0


def _check_constraints(value: Any, c: Constraints) -> None:
    """Aplica las restricciones sobre el valor ya convertido (falla en la primera)."""
    if c.gt is not None and not value > c.gt:
        raise _fail("greater_than", value, gt=c.gt)
    if c.ge is not None and not value >= c.ge:
        raise _fail("greater_than_equal", value, ge=c.ge)
    if c.lt is not None and not value < c.lt:
        raise _fail("less_than", value, lt=c.lt)
    if c.le is not None and not value <= c.le:
        raise _fail("less_than_equal", value, le=c.le)
    if c.multiple_of is not None and not _is_multiple(value, c.multiple_of):
        raise _fail("multiple_of", value, multiple_of=c.multiple_of)

    if c.min_length is None and c.max_length is None and c.pattern is None:
        return

    if isinstance(value, str):
        prefix = "string"
    elif isinstance(value, bytes):
        prefix = "bytes"
    else:
        prefix = None

    length = len(value)
    if c.min_length is not None and length < c.min_length:
        if prefix:
            raise _fail(f"{prefix}_too_short", value, min_length=c.min_length)
        raise _fail(
            "too_short",
            value,
            field_type=_COLLECTION_NAMES.get(type(value), type(value).__name__),
            min_length=c.min_length,
            actual_length=length,
        )
    if c.max_length is not None and length > c.max_length:
        if prefix:
            raise _fail(f"{prefix}_too_long", value, max_length=c.max_length)
        raise _fail(
            "too_long",
            value,
            field_type=_COLLECTION_NAMES.get(type(value), type(value).__name__),
            max_length=c.max_length,
            actual_length=length,
        )
    if c.pattern is not None and isinstance(value, str):
        if compile_pattern(c.pattern).search(value) is None:
            raise _fail("string_pattern_mismatch", value, pattern=c.pattern)
