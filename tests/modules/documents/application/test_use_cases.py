# tests/modules/documents/application/test_use_cases.py
"""
Tests para: ValidateDocument (Use Case)
Tipo: Unitario (Application)
"""
from pathlib import Path

import pytest

from validador import BaseModel, Field, ValidationError
from validador.modules.documents.application.use_cases import ValidateDocument
from validador.modules.documents.domain.exceptions import DocumentFileError, ModelImportError
from validador.modules.documents.infrastructure.adapters import StaticModelLoader


class Usuario(BaseModel):
    nombre: str = Field(min_length=2)
    edad: int = Field(ge=0)


# === Fixtures ===

@pytest.fixture
def loader():
    """Retorna un cargador fake con el modelo 'app:Usuario' registrado."""
    return StaticModelLoader({"app:Usuario": Usuario})


@pytest.fixture
def use_case(loader):
    """Inyecta el cargador fake en el caso de uso."""
    return ValidateDocument(loader=loader)


# === Casos de Prueba ===

def test_validate_document_success(use_case, json_file_factory):
    """
    Given: Un archivo JSON que cumple el modelo
    When: Se ejecuta el caso de uso
    Then: Retorna la instancia validada (con coerción lax)
    """
    # Arrange
    document = json_file_factory("usuario.json", {"nombre": "Ana", "edad": "30"})

    # Act
    result = use_case.execute("app:Usuario", document)

    # Assert
    assert isinstance(result, Usuario)
    assert result.edad == 30
    assert result.model_fields_set == {"nombre", "edad"}


def test_validate_document_fails_if_file_missing(use_case):
    """
    Given: Una ruta a un archivo inexistente
    When: Se ejecuta el caso de uso
    Then: Lanza DocumentFileError (Fail Fast)
    """
    with pytest.raises(DocumentFileError) as exc:
        use_case.execute("app:Usuario", Path("ghost_file.json"))

    assert "no existe" in str(exc.value).lower()


def test_validate_document_fails_if_path_is_directory(use_case, tmp_path):
    with pytest.raises(DocumentFileError, match="no es un archivo"):
        use_case.execute("app:Usuario", tmp_path)


def test_model_is_resolved_before_reading_file(use_case):
    """
    Given: Una referencia de modelo desconocida y un archivo inexistente
    When: Se ejecuta el caso de uso
    Then: El error reportado es el del modelo, no el del archivo
    """
    with pytest.raises(ModelImportError, match="no registrado"):
        use_case.execute("app:Desconocido", Path("ghost_file.json"))


def test_invalid_document_raises_all_errors(use_case, json_file_factory):
    """
    Given: Un documento con dos campos inválidos
    When: Se ejecuta el caso de uso
    Then: ValidationError acumula ambos errores con su ubicación
    """
    document = json_file_factory("malo.json", {"nombre": "A", "edad": -1})

    with pytest.raises(ValidationError) as exc:
        use_case.execute("app:Usuario", document)

    errors = exc.value.errors()
    assert [(e["loc"], e["type"]) for e in errors] == [
        (("nombre",), "string_too_short"),
        (("edad",), "greater_than_equal"),
    ]


def test_malformed_json_is_a_validation_error(use_case, json_file_factory):
    document = json_file_factory("roto.json", "{nombre: Ana")

    with pytest.raises(ValidationError) as exc:
        use_case.execute("app:Usuario", document)

    assert exc.value.errors()[0]["type"] == "json_invalid"


def test_strict_mode_rejects_string_numbers(use_case, json_file_factory):
    """
    Given: Un documento con edad como string
    When: Se ejecuta con strict=True
    Then: No hay coerción y se reporta int_type
    """
    document = json_file_factory("usuario.json", {"nombre": "Ana", "edad": "30"})

    with pytest.raises(ValidationError) as exc:
        use_case.execute("app:Usuario", document, strict=True)

    assert exc.value.errors()[0]["type"] == "int_type"
    assert exc.value.errors()[0]["loc"] == ("edad",)
