# src/validador/modules/documents/domain/ports/loader.py
"""
Puerto para la Carga de Modelos.

Arquitectura: Domain Port (Interface)
Responsabilidad: Definir el contrato para obtener una clase de modelo a partir de una referencia textual.
"""

from __future__ import annotations

from typing import Protocol


class ModelLoader(Protocol):
    """
    Contrato abstracto para resolver modelos.

    Implementaciones esperadas:
    - ImportlibModelLoader (Infraestructura)
    - StaticModelLoader (Testing)
    """

    def load(self, reference: str) -> type:
        """
        Resuelve una referencia del estilo ``paquete.modulo:Clase``.

        Args:
            reference: Ruta de importación y nombre de la clase separados por ':'.

        Returns:
            Una subclase de BaseModel.

        Raises:
            ModelImportError: Si el módulo o la clase no existen o no es un modelo.
        """
        ...
