# src/validador/modules/documents/application/use_cases.py
"""
Casos de Uso para la Validación de Documentos.

Arquitectura: Application Layer
Responsabilidad: Orquestar carga del modelo, lectura del archivo y validación.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from validador.modules.documents.domain.exceptions import DocumentFileError
from validador.modules.documents.domain.ports.loader import ModelLoader
from validador.modules.documents.infrastructure.observability import ObservabilityService


class ValidateDocument:
    """
    Caso de Uso: Validar un archivo JSON contra un modelo.

    Colaboradores:
    - loader: ModelLoader (Puerto)
    """

    def __init__(self, loader: ModelLoader):
        self._loader = loader

    # ✅ Instrumentación: Medimos "Latency" y "Errors" automáticamente
    @ObservabilityService.measure_latency(operation_name="validate_document_use_case")
    def execute(self, model_reference: str, file_path: Path, strict: bool = False) -> Any:
        """
        Ejecuta la validación del documento indicado.

        Args:
            model_reference: Referencia ``paquete.modulo:Clase`` del modelo.
            file_path: Ruta al archivo JSON.
            strict: Activa el modo estricto para toda la validación.

        Returns:
            La instancia del modelo ya validada.

        Raises:
            ModelImportError: Si la referencia no apunta a un modelo.
            DocumentFileError: Si el archivo no existe o no se puede leer.
            ValidationError: Si el contenido no cumple el modelo (incluye JSON inválido).
        """
        # 1. Resolver el modelo antes de tocar el disco (Fail Fast)
        model = self._loader.load(model_reference)

        # 2. Validación de Capa de Aplicación
        if not file_path.exists():
            raise DocumentFileError(f"El archivo no existe: {file_path}")

        if not file_path.is_file():
            raise DocumentFileError(f"La ruta no es un archivo: {file_path}")

        try:
            raw = file_path.read_bytes()
        except OSError as exc:
            raise DocumentFileError(f"No se pudo leer {file_path}: {exc}") from exc

        # 3. Delegación al motor de validación
        return model.model_validate_json(raw, strict=True if strict else None)
