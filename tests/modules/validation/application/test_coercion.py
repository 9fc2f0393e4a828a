# tests/modules/validation/application/test_coercion.py
"""
Tests para: Motor de Coerción (modo laxo y estricto)
Tipo: Unitario (Application)
Enfoque: Cada tipo acepta lo que debe, rechaza lo que debe, y reporta el código correcto.
"""

import datetime as dt
import uuid
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Any, Literal, Optional, Union

import pytest

from validador.modules.schema.domain.value_objects import Constraints
from validador.modules.validation.application.coercion import (
    ValidationState,
    join_expected,
    type_repr,
    validate_value,
)
from validador.modules.validation.domain.exceptions import LineErrors

LAX = ValidationState()
STRICT = ValidationState(strict=True)


class Color(Enum):
    ROJO = "rojo"
    AZUL = "azul"


class Nivel(IntEnum):
    BAJO = 1
    ALTO = 2


def error_types(tp, value, state=LAX, constraints=None):
    with pytest.raises(LineErrors) as exc_info:
        validate_value(tp, value, state, constraints)
    return [(e.type, e.loc) for e in exc_info.value.errors]


# === Escalares ===


@pytest.mark.parametrize(
    "value, expected",
    [(5, 5), (5.0, 5), ("  42 ", 42), ("1e3", 1000), (True, 1), (Decimal("3"), 3)],
)
def test_int_lax(value, expected):
    assert validate_value(int, value, LAX) == expected


@pytest.mark.parametrize(
    "value, error",
    [(5.5, "int_from_float"), ("abc", "int_parsing"), ("1.5", "int_parsing"), ([1], "int_type"), (float("inf"), "finite_number")],
)
def test_int_lax_errors(value, error):
    assert error_types(int, value) == [(error, ())]


def test_int_strict_rejects_strings_floats_and_bools():
    assert validate_value(int, 3, STRICT) == 3
    for value in ("3", 3.0, True):
        assert error_types(int, value, STRICT) == [("int_type", ())]


@pytest.mark.parametrize(
    "tp, error",
    [
        (int, "int_parsing"),
        (float, "float_parsing"),
        (bool, "bool_parsing"),
        (dt.datetime, "datetime_parsing"),
        (dt.date, "date_parsing"),
        (dt.time, "time_parsing"),
    ],
)
def test_bytes_that_are_not_utf8_are_parsing_errors(tp, error):
    assert error_types(tp, b"\xff\xfe") == [(error, ())]


def test_float():
    assert validate_value(float, "2.5", LAX) == 2.5
    assert validate_value(float, 2, STRICT) == 2.0
    assert error_types(float, "x") == [("float_parsing", ())]
    assert error_types(float, "2.5", STRICT) == [("float_type", ())]


@pytest.mark.parametrize("value", [True, 1, "true", "YES", " on ", "t", "y", "1"])
def test_bool_truthy(value):
    assert validate_value(bool, value, LAX) is True


@pytest.mark.parametrize("value", [False, 0, "false", "No", "off", "f", "n", "0"])
def test_bool_falsy(value):
    assert validate_value(bool, value, LAX) is False


def test_bool_errors():
    assert error_types(bool, "quizás") == [("bool_parsing", ())]
    assert error_types(bool, 2) == [("bool_parsing", ())]
    assert error_types(bool, None) == [("bool_type", ())]
    assert error_types(bool, 1, STRICT) == [("bool_type", ())]


def test_str_does_not_coerce_other_types():
    assert validate_value(str, "hola", LAX) == "hola"
    assert error_types(str, 12) == [("string_type", ())]
    assert error_types(str, b"bytes") == [("string_type", ())]


def test_str_config_transforms():
    state = ValidationState(config={"str_strip_whitespace": True, "str_to_upper": True})

    assert validate_value(str, "  hola ", state) == "HOLA"


def test_str_config_length_applies_after_stripping():
    state = ValidationState(config={"str_strip_whitespace": True, "str_min_length": 3})

    assert error_types(str, "  ab  ", state) == [("string_too_short", ())]


def test_bytes():
    assert validate_value(bytes, "ñ", LAX) == "ñ".encode()
    assert validate_value(bytes, bytearray(b"x"), STRICT) == b"x"
    assert error_types(bytes, "x", STRICT) == [("bytes_type", ())]


def test_none_and_any():
    assert validate_value(None, None, LAX) is None
    assert error_types(type(None), 0) == [("none_required", ())]
    marker = object()
    assert validate_value(Any, marker, LAX) is marker


# === Fechas, Decimal, UUID ===


def test_datetime_from_iso_and_timestamp():
    assert validate_value(dt.datetime, "2024-01-02T03:04:05Z", LAX) == dt.datetime(
        2024, 1, 2, 3, 4, 5, tzinfo=dt.timezone.utc
    )
    assert validate_value(dt.datetime, 0, LAX) == dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
    assert error_types(dt.datetime, "ayer") == [("datetime_parsing", ())]
    assert error_types(dt.datetime, "2024-01-02", STRICT) == [("datetime_type", ())]


def test_datetime_strings_are_accepted_in_strict_json_mode():
    state = ValidationState(strict=True, mode="json")

    assert validate_value(dt.datetime, "2024-01-02T00:00:00", state).year == 2024


def test_date_and_time():
    assert validate_value(dt.date, "2024-02-29", LAX) == dt.date(2024, 2, 29)
    assert validate_value(dt.date, dt.datetime(2024, 1, 1), LAX) == dt.date(2024, 1, 1)
    assert error_types(dt.date, dt.datetime(2024, 1, 1, 10)) == [("date_from_datetime_inexact", ())]
    assert error_types(dt.date, "2024-13-01") == [("date_parsing", ())]
    assert validate_value(dt.time, "10:30", LAX) == dt.time(10, 30)


def test_decimal_and_uuid():
    assert validate_value(Decimal, "1.10", LAX) == Decimal("1.10")
    assert validate_value(Decimal, 0.5, LAX) == Decimal("0.5")
    assert error_types(Decimal, "uno") == [("decimal_parsing", ())]

    ident = uuid.uuid4()
    assert validate_value(uuid.UUID, str(ident), LAX) == ident
    assert error_types(uuid.UUID, "no-uuid") == [("uuid_parsing", ())]


# === Enum y Literal ===


def test_enum_by_value_or_member():
    assert validate_value(Color, "rojo", LAX) is Color.ROJO
    assert validate_value(Color, Color.AZUL, STRICT) is Color.AZUL
    assert validate_value(Nivel, 2, LAX) is Nivel.ALTO
    assert error_types(Color, "verde") == [("enum", ())]


def test_enum_error_lists_expected_values():
    with pytest.raises(LineErrors) as exc_info:
        validate_value(Color, "verde", LAX)

    assert exc_info.value.errors[0].msg == "La entrada debe ser 'rojo' o 'azul'"


def test_use_enum_values():
    state = ValidationState(config={"use_enum_values": True})

    assert validate_value(Color, "azul", state) == "azul"


def test_literal():
    assert validate_value(Literal["a", 1], "a", LAX) == "a"
    assert validate_value(Literal["a", 1], 1, LAX) == 1
    assert error_types(Literal["a", 1], True) == [("literal_error", ())]
    assert error_types(Literal["a", "b"], "c") == [("literal_error", ())]


# === Uniones ===


def test_optional():
    assert validate_value(Optional[int], None, LAX) is None
    assert validate_value(Optional[int], "3", LAX) == 3
    assert error_types(Optional[int], "x") == [("int_parsing", ())]


def test_smart_union_prefers_exact_type():
    assert validate_value(Union[int, str], "5", LAX) == "5"
    assert validate_value(Union[str, int], 5, LAX) == 5
    assert validate_value(Union[int, float], "5", LAX) == 5


def test_smart_union_keeps_numeric_input_type():
    """
    Given: Uniones numéricas en ambos órdenes
    When: La entrada ya es de uno de los tipos miembro
    Then: Se conserva ese tipo aunque otro miembro anterior también la acepte
    """
    as_int = validate_value(Union[float, int], 1, LAX)
    as_float = validate_value(Union[int, float], 1.0, LAX)

    assert type(as_int) is int
    assert type(as_float) is float
    assert type(validate_value(Union[float, int], 1, STRICT)) is int


def test_union_reports_every_member():
    assert error_types(Union[int, bool], "x") == [
        ("int_parsing", ("int",)),
        ("bool_parsing", ("bool",)),
    ]


def test_union_constraints_apply_to_members_not_none():
    constraints = Constraints(ge=10)

    assert validate_value(Optional[int], None, LAX, constraints) is None
    assert error_types(Optional[int], 3, LAX, constraints) == [("greater_than_equal", ())]


# === Colecciones ===


def test_list_lax_accepts_tuples_sets_and_generators():
    assert validate_value(list[int], ("1", 2), LAX) == [1, 2]
    assert validate_value(list[int], (i for i in range(2)), LAX) == [0, 1]
    assert error_types(list[int], (1,), STRICT) == [("list_type", ())]
    assert error_types(list[int], "123") == [("list_type", ())]


def test_list_items_report_their_index():
    assert error_types(list[int], [1, "x", 3, "y"]) == [
        ("int_parsing", (1,)),
        ("int_parsing", (3,)),
    ]


def test_fixed_and_variadic_tuples():
    assert validate_value(tuple[int, str], ["1", "a"], LAX) == (1, "a")
    assert validate_value(tuple[int, ...], [1, "2"], LAX) == (1, 2)
    assert error_types(tuple[int, str], [1]) == [("missing", (1,))]
    assert error_types(tuple[int], [1, 2]) == [("too_long", ())]


def test_sets():
    assert validate_value(set[int], [1, "1", 2], LAX) == {1, 2}
    assert validate_value(frozenset[str], {"a"}, LAX) == frozenset({"a"})
    assert error_types(set[int], "ab") == [("set_type", ())]


def test_dict_key_and_value_locations():
    assert validate_value(dict[str, int], {"a": "1"}, LAX) == {"a": 1}
    assert error_types(dict[int, int], {"x": 1, "2": "y"}) == [
        ("int_parsing", ("x", "[key]")),
        ("int_parsing", ("2",)),
    ]
    assert error_types(dict[str, int], [("a", 1)]) == [("dict_type", ())]


# === Restricciones ===


@pytest.mark.parametrize(
    "constraints, value, error",
    [
        (Constraints(gt=0), 0, "greater_than"),
        (Constraints(ge=1), 0, "greater_than_equal"),
        (Constraints(lt=5), 5, "less_than"),
        (Constraints(le=5), 6, "less_than_equal"),
        (Constraints(multiple_of=3), 4, "multiple_of"),
    ],
)
def test_numeric_constraints(constraints, value, error):
    assert error_types(int, value, LAX, constraints) == [(error, ())]


def test_multiple_of_with_floats_tolerates_rounding():
    assert validate_value(float, 0.3, LAX, Constraints(multiple_of=0.1)) == 0.3


def test_multiple_of_decimal_with_float_step():
    step = Constraints(multiple_of=0.5)

    assert validate_value(Decimal, "1.5", LAX, step) == Decimal("1.5")
    assert error_types(Decimal, "1.3", LAX, step) == [("multiple_of", ())]


def test_length_constraints_per_kind():
    short = Constraints(min_length=2)
    long = Constraints(max_length=1)

    assert error_types(str, "a", LAX, short) == [("string_too_short", ())]
    assert error_types(bytes, b"ab", LAX, long) == [("bytes_too_long", ())]
    assert error_types(list[int], [1], LAX, short) == [("too_short", ())]


def test_too_short_message_names_the_collection():
    with pytest.raises(LineErrors) as exc_info:
        validate_value(list[int], [], LAX, Constraints(min_length=1))

    assert exc_info.value.errors[0].msg == "List debe tener al menos 1 elemento(s) tras la validación, no 0"


def test_pattern_uses_search_semantics():
    assert validate_value(str, "abc123", LAX, Constraints(pattern=r"\d+")) == "abc123"
    assert error_types(str, "abc", LAX, Constraints(pattern=r"^\d+$")) == [("string_pattern_mismatch", ())]


def test_field_level_strict_overrides_lax_state():
    assert error_types(int, "1", LAX, Constraints(strict=True)) == [("int_type", ())]


# === Utilidades ===


def test_type_repr_and_join_expected():
    assert type_repr(int) == "int"
    assert type_repr(list[int]) == "list[int]"
    assert type_repr(Literal["a"]) == "literal['a']"
    assert type_repr(type(None)) == "none"
    assert join_expected(["a"]) == "'a'"
    assert join_expected(["a", "b", "c"]) == "'a', 'b' o 'c'"
