# src/validador/modules/schema/domain/config.py
"""
Configuración por modelo (``model_config``).

Arquitectura: Domain Layer
Responsabilidad: Declarar las claves admitidas, sus valores por defecto y la herencia.
"""

from __future__ import annotations

from typing import Any, Callable, Literal, TypedDict

from validador.modules.schema.domain.exceptions import SchemaError

ExtraBehavior = Literal["ignore", "forbid", "allow"]


class ConfigDict(TypedDict, total=False):
    """Claves admitidas en ``model_config``."""

    title: str | None
    extra: ExtraBehavior
    strict: bool
    frozen: bool
    populate_by_name: bool
    validate_assignment: bool
    validate_default: bool
    from_attributes: bool
    use_enum_values: bool
    str_strip_whitespace: bool
    str_to_lower: bool
    str_to_upper: bool
    str_min_length: int | None
    str_max_length: int | None
    alias_generator: Callable[[str], str] | None


DEFAULT_CONFIG: dict[str, Any] = {
    "title": None,
    "extra": "ignore",
    "strict": False,
    "frozen": False,
    "populate_by_name": False,
    "validate_assignment": False,
    "validate_default": False,
    "from_attributes": False,
    "use_enum_values": False,
    "str_strip_whitespace": False,
    "str_to_lower": False,
    "str_to_upper": False,
    "str_min_length": None,
    "str_max_length": None,
    "alias_generator": None,
}

_EXTRA_VALUES = ("ignore", "forbid", "allow")


def check_config(config: dict[str, Any], owner: str) -> None:
    """Verifica claves y valores de una configuración declarada."""
    unknown = set(config) - set(DEFAULT_CONFIG)
    if unknown:
        raise SchemaError(
            f"Claves de configuración desconocidas en {owner}: {sorted(unknown)}"
        )
    extra = config.get("extra", "ignore")
    if extra not in _EXTRA_VALUES:
        raise SchemaError(
            f"extra debe ser uno de {_EXTRA_VALUES} en {owner}, no {extra!r}"
        )
    generator = config.get("alias_generator")
    if generator is not None and not callable(generator):
        raise SchemaError(f"alias_generator debe ser invocable en {owner}")


def merge_config(
    parents: list[dict[str, Any]], own: dict[str, Any], owner: str
) -> dict[str, Any]:
    """
    Combina la configuración heredada con la propia.
    El orden de ``parents`` es el de la MRO invertida (el más lejano primero).
    """
    check_config(own, owner)
    merged = dict(DEFAULT_CONFIG)
    for parent in parents:
        merged.update(parent)
    merged.update(own)
    return merged
