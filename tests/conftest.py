# tests/conftest.py
import json
import sys
import textwrap

import pytest


@pytest.fixture
def json_file_factory(tmp_path):
    """Factory para escribir documentos JSON (o texto arbitrario) en archivos temporales."""

    def _create(filename: str, content):
        path = tmp_path / filename
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content, ensure_ascii=False), encoding="utf-8")
        return path

    return _create


@pytest.fixture
def models_module(tmp_path, monkeypatch):
    """
    Crea un módulo importable 'modelos_tmp' con modelos de ejemplo
    para probar la carga por referencia 'paquete.modulo:Clase'.
    """
    source = textwrap.dedent(
        """
        from validador import BaseModel, Field


        class Usuario(BaseModel):
            nombre: str = Field(min_length=2)
            edad: int = Field(ge=0)


        class Contenedor:
            class Interno(BaseModel):
                valor: int


        NO_ES_MODELO = 42
        """
    )
    (tmp_path / "modelos_tmp.py").write_text(source, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    yield "modelos_tmp"
    sys.modules.pop("modelos_tmp", None)
