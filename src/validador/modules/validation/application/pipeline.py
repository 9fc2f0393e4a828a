# src/validador/modules/validation/application/pipeline.py
"""
Pipeline de Validación de Modelos.

Arquitectura: Application Layer
Responsabilidad: Orquestar validadores de modelo y de campo alrededor del motor de
coerción, acumulando todos los errores antes de construir la instancia.

Orden por modelo:
    1. Validadores de modelo ``before`` / ``wrap``
    2. Por cada campo: ``before`` / ``wrap`` / ``plain`` -> coerción + restricciones -> ``after``
    3. Campos extra (ignore / forbid / allow)
    4. Validadores de modelo ``after``
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Callable

from validador.core.value_objects import MISSING
from validador.modules.schema.domain.decorators import Decorator, count_positional
from validador.modules.schema.domain.fields import FieldInfo
from validador.modules.validation.application.coercion import ValidationState, validate_value
from validador.modules.validation.domain.exceptions import (
    LineErrors,
    ValidationError,
    value_error_detail,
)
from validador.modules.validation.domain.value_objects import ErrorDetail, ValidationInfo

logger = logging.getLogger(__name__)

_SCALARS = (str, bytes, bytearray, int, float, bool)


def model_title(cls: type) -> str:
    return cls.__validador_config__.get("title") or cls.__name__


def ensure_complete(cls: type) -> None:
    """Resuelve referencias adelantadas pendientes antes de validar."""
    if not cls.__validador_complete__:
        cls.model_rebuild(raise_errors=True)


# === Fronteras Públicas (LineErrors -> ValidationError) ===


def validate_model(
    cls: type,
    obj: Any,
    *,
    strict: bool | None = None,
    context: Any = None,
    from_attributes: bool | None = None,
    mode: str = "python",
    self_instance: Any = None,
) -> Any:
    """
    Valida ``obj`` contra el modelo ``cls``.

    Args:
        obj: Mapping, instancia del modelo u objeto con atributos (si from_attributes).
        strict: Fuerza (o desactiva) el modo estricto para toda la validación.
        context: Objeto arbitrario accesible desde ``info.context`` en los validadores.
        mode: 'python' o 'json'.
        self_instance: Instancia a poblar (usado por ``__init__``).

    Returns:
        La instancia validada.

    Raises:
        ValidationError: Con todas las violaciones encontradas.
    """
    ensure_complete(cls)
    state = ValidationState(
        strict=strict,
        context=context,
        mode=mode,
        config=cls.__validador_config__,
        from_attributes=from_attributes,
    )
    try:
        return _model_chain(cls, state, self_instance)(obj)
    except LineErrors as exc:
        logger.debug(f"Validación fallida para {cls.__name__}: {len(exc.errors)} error(es)")
        raise ValidationError.from_line_errors(model_title(cls), exc, input_type=mode) from None


def validate_assignment(instance: Any, name: str, value: Any) -> None:
    """
    Asigna ``value`` al campo ``name`` respetando frozen / validate_assignment / extra.

    Raises:
        ValidationError: Si el modelo o el campo son inmutables, o el valor no es válido.
        ValueError: Si el campo no existe y el modelo no admite extras.
    """
    cls = type(instance)
    config = cls.__validador_config__
    title = model_title(cls)

    if config["frozen"]:
        raise ValidationError(title, [ErrorDetail(type="frozen_instance", loc=(name,), input=value)])

    info = cls.__validador_fields__.get(name)
    if info is None:
        if config["extra"] == "allow":
            extra = instance.__validador_extra__
            if extra is None:
                object.__setattr__(instance, "__validador_extra__", {name: value})
            else:
                extra[name] = value
            return
        raise ValueError(f'El objeto "{cls.__name__}" no tiene el campo "{name}"')

    if info.frozen:
        raise ValidationError(title, [ErrorDetail(type="frozen_field", loc=(name,), input=value)])

    if config["validate_assignment"]:
        state = ValidationState(config=config)
        data = {k: v for k, v in instance.__dict__.items() if k != name}
        vinfo = ValidationInfo(data=data, field_name=name, config=config)
        try:
            value = field_chain(cls, name, info, state, vinfo)(value)
        except LineErrors as exc:
            loc_key = info.input_keys(name, config["populate_by_name"])[0]
            errors = [e.with_prefix(loc_key) for e in exc.errors]
            raise ValidationError(title, errors) from None

    instance.__dict__[name] = value
    instance.__validador_fields_set__.add(name)


def run_nested(cls: type, value: Any, state: ValidationState) -> Any:
    """Valida un modelo anidado dentro de otro (los errores siguen siendo LineErrors)."""
    ensure_complete(cls)
    nested_state = replace(state, config=cls.__validador_config__)
    return _model_chain(cls, nested_state, None)(value)


# === Invocación de Funciones de Usuario ===


def _invoke(func: Callable[..., Any], takes_info: bool, vinfo: Any, input_value: Any, *args: Any) -> Any:
    """Llama a un validador de usuario traduciendo sus excepciones a LineErrors."""
    try:
        if takes_info:
            return func(*args, vinfo)
        return func(*args)
    except ValidationError as exc:
        raise LineErrors(exc.line_errors) from exc
    except (ValueError, AssertionError) as exc:
        raise LineErrors([value_error_detail(exc, input_value)]) from exc


def _user_handler(inner: Callable[[Any], Any], title: str) -> Callable[[Any], Any]:
    """Handler que recibe un validador ``wrap``: expone ValidationError, no LineErrors."""

    def handler(value: Any) -> Any:
        try:
            return inner(value)
        except LineErrors as exc:
            raise ValidationError.from_line_errors(title, exc) from None

    return handler


# === Cadena de Campo ===


def field_chain(
    cls: type, name: str, info: FieldInfo, state: ValidationState, vinfo: ValidationInfo
) -> Callable[[Any], Any]:
    """
    Compone los validadores de un campo alrededor de la coerción.
    ``before``/``wrap`` se ejecutan en orden inverso de declaración; ``after`` en orden.
    """

    def core(value: Any) -> Any:
        return validate_value(info.annotation, value, state, info.constraints, info.discriminator)

    handler = core
    for decorator in cls.__validador_decorators__.validators_for(name):
        handler = _wrap_field_validator(cls, decorator, handler, vinfo, name)
    return handler


def _wrap_field_validator(
    cls: type,
    decorator: Decorator,
    inner: Callable[[Any], Any],
    vinfo: ValidationInfo,
    name: str,
) -> Callable[[Any], Any]:
    func = getattr(cls, decorator.attr_name)
    mode = decorator.info.mode
    takes_info = count_positional(func) >= (3 if mode == "wrap" else 2)

    if mode == "before":

        def step(value: Any) -> Any:
            return inner(_invoke(func, takes_info, vinfo, value, value))

    elif mode == "after":

        def step(value: Any) -> Any:
            result = inner(value)
            return _invoke(func, takes_info, vinfo, result, result)

    elif mode == "plain":

        def step(value: Any) -> Any:
            return _invoke(func, takes_info, vinfo, value, value)

    else:

        def step(value: Any) -> Any:
            return _invoke(func, takes_info, vinfo, value, value, _user_handler(inner, name))

    return step


# === Cadena de Modelo ===


def _model_chain(cls: type, state: ValidationState, self_instance: Any) -> Callable[[Any], Any]:
    def core(data: Any) -> Any:
        return _validate_fields(cls, data, state, self_instance)

    handler = core
    for decorator in cls.__validador_decorators__.model_validators.values():
        handler = _wrap_model_validator(cls, decorator, handler, state)
    return handler


def _wrap_model_validator(
    cls: type, decorator: Decorator, inner: Callable[[Any], Any], state: ValidationState
) -> Callable[[Any], Any]:
    mode = decorator.info.mode
    vinfo = ValidationInfo(context=state.context, config=state.config, mode=state.mode)

    if mode == "after":

        def step(data: Any) -> Any:
            instance = inner(data)
            bound = getattr(instance, decorator.attr_name)
            takes_info = count_positional(bound) >= 1
            after_info = replace(vinfo, data=dict(instance.__dict__))
            result = _invoke(bound, takes_info, after_info, instance)
            return instance if result is None else result

        return step

    func = getattr(cls, decorator.attr_name)

    if mode == "before":
        takes_info = count_positional(func) >= 2

        def step(data: Any) -> Any:
            return inner(_invoke(func, takes_info, vinfo, data, data))

    else:
        takes_info = count_positional(func) >= 3

        def step(data: Any) -> Any:
            return _invoke(func, takes_info, vinfo, data, data, _user_handler(inner, model_title(cls)))

    return step


# === Validación de Campos ===


def _input_getter(cls: type, obj: Any, state: ValidationState) -> Callable[[str], Any]:
    if isinstance(obj, Mapping):
        return lambda key: obj[key] if key in obj else MISSING

    from_attributes = state.from_attributes
    if from_attributes is None:
        from_attributes = state.config.get("from_attributes")
    if from_attributes and not isinstance(obj, _SCALARS) and obj is not None:
        return lambda key: getattr(obj, key, MISSING)

    raise LineErrors.single("model_type", obj, class_name=cls.__name__)


def _validate_fields(cls: type, obj: Any, state: ValidationState, self_instance: Any) -> Any:
    if self_instance is None and isinstance(obj, cls):
        return obj

    lookup = _input_getter(cls, obj, state)
    config = state.config
    populate_by_name = config["populate_by_name"]

    values: dict[str, Any] = {}
    fields_set: set[str] = set()
    errors: list[ErrorDetail] = []
    candidates: set[str] = set()

    for name, info in cls.__validador_fields__.items():
        keys = info.input_keys(name, populate_by_name)
        candidates.update(keys)
        loc_key = keys[0]

        raw = MISSING
        for key in keys:
            raw = lookup(key)
            if raw is not MISSING:
                break

        if raw is MISSING:
            if info.is_required():
                errors.append(ErrorDetail(type="missing", loc=(loc_key,), input=obj))
                continue
            raw = info.get_default()
            validate_default = info.validate_default
            if validate_default is None:
                validate_default = config["validate_default"]
            if not validate_default:
                values[name] = raw
                continue
        else:
            fields_set.add(name)

        vinfo = ValidationInfo(
            data=values,
            field_name=name,
            context=state.context,
            config=config,
            mode=state.mode,
        )
        try:
            values[name] = field_chain(cls, name, info, state, vinfo)(raw)
        except LineErrors as exc:
            errors.extend(e.with_prefix(loc_key) for e in exc.errors)

    extra = None
    if isinstance(obj, Mapping):
        leftovers = [key for key in obj if key not in candidates]
        if config["extra"] == "forbid":
            errors.extend(
                ErrorDetail(type="extra_forbidden", loc=(key,), input=obj[key]) for key in leftovers
            )
        elif config["extra"] == "allow":
            extra = {key: obj[key] for key in leftovers}

    if errors:
        raise LineErrors(errors)

    instance = self_instance if self_instance is not None else cls.__new__(cls)
    object.__setattr__(instance, "__dict__", values)
    object.__setattr__(instance, "__validador_fields_set__", fields_set)
    object.__setattr__(instance, "__validador_extra__", extra)
    return instance
