# tests/modules/validation/application/test_pipeline.py
"""
Tests para: Pipeline de Validación (validadores de campo y de modelo)
Tipo: Unitario (Application)
Enfoque: Orden de ejecución, contexto recibido y traducción de errores.
"""

import logging
from typing import Annotated, Any, Literal, Union
from unittest.mock import patch

import pytest

from validador import (
    BaseModel,
    ConfigDict,
    CustomError,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

# === Orden de Validadores ===


def test_field_validator_order():
    """
    Given: Validadores before, wrap y after sobre el mismo campo
    When: Se valida
    Then: before/wrap corren en orden inverso de declaración y after en orden
    """
    calls = []

    class Modelo(BaseModel):
        valor: int

        @field_validator("valor", mode="before")
        @classmethod
        def before_1(cls, v):
            calls.append("before_1")
            return v

        @field_validator("valor", mode="before")
        @classmethod
        def before_2(cls, v):
            calls.append("before_2")
            return v

        @field_validator("valor", mode="after")
        @classmethod
        def after_1(cls, v):
            calls.append("after_1")
            return v

        @field_validator("valor", mode="after")
        @classmethod
        def after_2(cls, v):
            calls.append("after_2")
            return v

    Modelo(valor="1")

    assert calls == ["before_2", "before_1", "after_1", "after_2"]


def test_before_sees_raw_value_and_after_sees_coerced():
    seen = {}

    class Modelo(BaseModel):
        valor: int

        @field_validator("valor", mode="before")
        @classmethod
        def antes(cls, v):
            seen["before"] = v
            return v

        @field_validator("valor")
        @classmethod
        def despues(cls, v):
            seen["after"] = v
            return v * 10

    assert Modelo(valor="3").valor == 30
    assert seen == {"before": "3", "after": 3}


def test_after_validators_are_skipped_when_type_check_fails():
    class Modelo(BaseModel):
        valor: int

        @field_validator("valor")
        @classmethod
        def nunca(cls, v):
            raise AssertionError("no debería ejecutarse")

    with pytest.raises(ValidationError) as exc_info:
        Modelo(valor="x")

    assert [e["type"] for e in exc_info.value.errors()] == ["int_parsing"]


def test_plain_validator_replaces_type_validation():
    class Modelo(BaseModel):
        valor: int

        @field_validator("valor", mode="plain")
        @classmethod
        def tal_cual(cls, v):
            return f"<{v}>"

    assert Modelo(valor="x").valor == "<x>"


def test_wrap_validator_controls_the_inner_handler():
    class Modelo(BaseModel):
        valor: int = Field(ge=0)

        @field_validator("valor", mode="wrap")
        @classmethod
        def a_cero(cls, v, handler):
            try:
                return handler(v)
            except ValidationError as exc:
                if exc.errors()[0]["type"] == "greater_than_equal":
                    return 0
                raise

    assert Modelo(valor="-5").valor == 0
    with pytest.raises(ValidationError) as exc_info:
        Modelo(valor="x")
    assert exc_info.value.errors()[0]["loc"] == ("valor",)


def test_validation_info_exposes_previous_fields_and_context():
    class Rango(BaseModel):
        minimo: int
        maximo: int

        @field_validator("maximo")
        @classmethod
        def mayor_que_minimo(cls, v, info: ValidationInfo):
            assert info.field_name == "maximo"
            if "minimo" in info.data and v < info.data["minimo"]:
                raise ValueError("maximo debe superar a minimo")
            if info.context and v > info.context["tope"]:
                raise ValueError("excede el tope")
            return v

    assert Rango(minimo=1, maximo=5).maximo == 5
    with pytest.raises(ValidationError, match="maximo debe superar a minimo"):
        Rango(minimo=5, maximo=1)
    with pytest.raises(ValidationError, match="excede el tope"):
        Rango.model_validate({"minimo": 1, "maximo": 50}, context={"tope": 10})


# === Traducción de Errores ===


def test_value_and_assertion_errors_become_entries():
    class Modelo(BaseModel):
        a: int
        b: int

        @field_validator("a")
        @classmethod
        def par(cls, v):
            if v % 2:
                raise ValueError("debe ser par")
            return v

        @field_validator("b")
        @classmethod
        def positivo(cls, v):
            assert v > 0, "debe ser positivo"
            return v

    with pytest.raises(ValidationError) as exc_info:
        Modelo(a=3, b=-1)

    errors = exc_info.value.errors()
    assert errors[0]["type"] == "value_error"
    assert errors[0]["msg"] == "Error de valor, debe ser par"
    assert errors[0]["input"] == 3
    assert errors[1]["type"] == "assertion_error"
    # pytest reescribe los assert del módulo y añade la comparación al mensaje
    assert errors[1]["msg"].startswith("Aserción fallida, debe ser positivo")


def test_custom_error_sets_type_and_message():
    class Modelo(BaseModel):
        codigo: str

        @field_validator("codigo")
        @classmethod
        def conocido(cls, v):
            raise CustomError("codigo_desconocido", "Código {codigo} no registrado", {"codigo": v})

    with pytest.raises(ValidationError) as exc_info:
        Modelo(codigo="Z9")

    error = exc_info.value.errors()[0]
    assert error["type"] == "codigo_desconocido"
    assert error["msg"] == "Código Z9 no registrado"
    assert error["ctx"] == {"codigo": "Z9"}


def test_other_exceptions_propagate_unchanged():
    class Modelo(BaseModel):
        valor: int

        @field_validator("valor")
        @classmethod
        def roto(cls, v):
            raise KeyError("bug")

    with pytest.raises(KeyError):
        Modelo(valor=1)


# === Validadores de Modelo ===


def test_model_before_validator_receives_raw_data():
    class Persona(BaseModel):
        nombre: str
        apellido: str

        @model_validator(mode="before")
        @classmethod
        def partir(cls, data: Any):
            if isinstance(data, str):
                nombre, apellido = data.split(" ", 1)
                return {"nombre": nombre, "apellido": apellido}
            return data

    assert Persona.model_validate("Ana Pérez").apellido == "Pérez"


def test_model_after_validator_runs_on_instance():
    class Rango(BaseModel):
        minimo: int
        maximo: int

        @model_validator(mode="after")
        def ordenado(self):
            if self.minimo > self.maximo:
                raise ValueError("rango invertido")
            return self

    with pytest.raises(ValidationError) as exc_info:
        Rango(minimo=3, maximo=1)

    error = exc_info.value.errors()[0]
    assert error["loc"] == ()
    assert error["msg"] == "Error de valor, rango invertido"


def test_model_after_validator_is_skipped_when_fields_fail():
    class Modelo(BaseModel):
        valor: int

        @model_validator(mode="after")
        def nunca(self):
            raise AssertionError("no debería ejecutarse")

    with pytest.raises(ValidationError) as exc_info:
        Modelo(valor="x")

    assert exc_info.value.error_count() == 1


def test_model_wrap_validator():
    class Modelo(BaseModel):
        valor: int

        @model_validator(mode="wrap")
        @classmethod
        def envolver(cls, data, handler):
            if data == "vacío":
                data = {"valor": 0}
            instance = handler(data)
            instance.valor += 1
            return instance

    assert Modelo.model_validate("vacío").valor == 1
    assert Modelo(valor=4).valor == 5


# === Campos Ausentes, Defaults y Extras ===


def test_defaults_are_not_validated_unless_requested():
    class Modelo(BaseModel):
        a: int = "no validado"
        b: int = Field(default="7", validate_default=True)

    modelo = Modelo()

    assert modelo.a == "no validado"
    assert modelo.b == 7
    assert modelo.model_fields_set == set()


def test_validate_default_from_config():
    class Modelo(BaseModel):
        model_config = ConfigDict(validate_default=True)

        valor: int = "x"

    with pytest.raises(ValidationError) as exc_info:
        Modelo()

    assert exc_info.value.errors()[0]["type"] == "int_parsing"


def test_extra_forbid_reports_each_key():
    class Cerrado(BaseModel):
        model_config = ConfigDict(extra="forbid")

        a: int

    with pytest.raises(ValidationError) as exc_info:
        Cerrado(a=1, b=2, c=3)

    assert [(e["type"], e["loc"]) for e in exc_info.value.errors()] == [
        ("extra_forbidden", ("b",)),
        ("extra_forbidden", ("c",)),
    ]


def test_alias_is_used_for_input_and_error_location():
    class Modelo(BaseModel):
        nombre_completo: str = Field(alias="nombreCompleto")

    assert Modelo(nombreCompleto="Ana").nombre_completo == "Ana"
    with pytest.raises(ValidationError) as exc_info:
        Modelo(nombre_completo="Ana")
    assert exc_info.value.errors()[0]["loc"] == ("nombreCompleto",)


def test_strict_call_overrides_lax_model():
    class Modelo(BaseModel):
        valor: int

    assert Modelo.model_validate({"valor": "1"}).valor == 1
    with pytest.raises(ValidationError):
        Modelo.model_validate({"valor": "1"}, strict=True)


def test_strict_config():
    class Estricto(BaseModel):
        model_config = ConfigDict(strict=True)

        valor: int
        laxo: int = Field(default=0, strict=False)

    with pytest.raises(ValidationError):
        Estricto(valor="1")
    assert Estricto(valor=1, laxo="2").laxo == 2


# === Uniones Discriminadas ===


class Tarjeta(BaseModel):
    metodo: Literal["tarjeta"]
    numero: str = Field(min_length=4)


class Transferencia(BaseModel):
    metodo: Literal["transferencia"]
    iban: str


class Pago(BaseModel):
    importe: float
    medio: Annotated[Union[Tarjeta, Transferencia], Field(discriminator="metodo")]


def test_discriminated_union_dispatches_by_tag():
    pago = Pago(importe=10, medio={"metodo": "transferencia", "iban": "ES00"})

    assert isinstance(pago.medio, Transferencia)


def test_discriminated_union_errors_are_located_under_the_tag():
    with pytest.raises(ValidationError) as exc_info:
        Pago(importe=10, medio={"metodo": "tarjeta", "numero": "12"})

    error = exc_info.value.errors()[0]
    assert error["loc"] == ("medio", "tarjeta", "numero")
    assert error["type"] == "string_too_short"


@pytest.mark.parametrize(
    "medio, error_type",
    [
        ({"metodo": "bizum"}, "union_tag_invalid"),
        ({"iban": "ES00"}, "union_tag_not_found"),
        ("tarjeta", "model_attributes_type"),
    ],
)
def test_discriminated_union_tag_errors(medio, error_type):
    with pytest.raises(ValidationError) as exc_info:
        Pago(importe=1, medio=medio)

    assert exc_info.value.errors()[0]["type"] == error_type


def test_union_tag_invalid_message_lists_expected_tags():
    with pytest.raises(ValidationError) as exc_info:
        Pago(importe=1, medio={"metodo": "bizum"})

    assert exc_info.value.errors()[0]["msg"] == (
        "La etiqueta 'bizum' encontrada con 'metodo' no coincide con ninguna de las "
        "esperadas: 'tarjeta', 'transferencia'"
    )


def test_discriminated_union_accepts_member_instances():
    tarjeta = Tarjeta(metodo="tarjeta", numero="1234")

    assert Pago(importe=1, medio=tarjeta).medio is tarjeta


# === Observabilidad ===


def test_failed_validation_is_logged_at_debug_level():
    class Modelo(BaseModel):
        valor: int

    with patch("validador.modules.validation.application.pipeline.logger") as mock_logger:
        with pytest.raises(ValidationError):
            Modelo(valor="x")

    mock_logger.debug.assert_called_once()
    assert "Modelo" in mock_logger.debug.call_args[0][0]


def test_successful_validation_logs_nothing_above_debug(caplog):
    class Modelo(BaseModel):
        valor: int

    with caplog.at_level(logging.INFO, logger="validador"):
        Modelo(valor=1)

    assert caplog.records == []
