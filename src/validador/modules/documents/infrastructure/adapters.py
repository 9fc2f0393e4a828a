# src/validador/modules/documents/infrastructure/adapters.py
"""
Adaptadores de Infraestructura para Documentos.

Arquitectura: Infrastructure Layer
Responsabilidad: Implementar el puerto ModelLoader usando importlib (o un Fake en memoria).
"""

from __future__ import annotations

import importlib
import logging

from validador.modules.documents.domain.exceptions import ModelImportError
from validador.modules.schema.domain.model import BaseModel

logger = logging.getLogger(__name__)


def _ensure_model(reference: str, candidate: object) -> type:
    if not isinstance(candidate, type) or not issubclass(candidate, BaseModel):
        raise ModelImportError(f"'{reference}' no es una subclase de BaseModel")
    return candidate


class ImportlibModelLoader:
    """
    Resuelve ``paquete.modulo:Clase`` importando el módulo.
    La parte de la clase admite atributos anidados: ``modulo:Externa.Interna``.
    """

    def load(self, reference: str) -> type:
        module_name, sep, qualname = reference.partition(":")
        if not sep or not module_name or not qualname:
            raise ModelImportError(
                f"Referencia inválida '{reference}': se esperaba 'paquete.modulo:Clase'"
            )

        logger.debug(f"Importando módulo {module_name}")
        try:
            target: object = importlib.import_module(module_name)
        except ImportError as exc:
            raise ModelImportError(f"No se pudo importar el módulo '{module_name}': {exc}") from exc

        for part in qualname.split("."):
            try:
                target = getattr(target, part)
            except AttributeError as exc:
                raise ModelImportError(
                    f"El módulo '{module_name}' no define '{qualname}'"
                ) from exc

        return _ensure_model(reference, target)


class StaticModelLoader:
    """
    Implementación simulada (Fake) del cargador.
    Útil para tests unitarios: resuelve referencias desde un diccionario en memoria.
    """

    def __init__(self, models: dict[str, type] | None = None):
        self._models = dict(models or {})

    def register(self, reference: str, model: type) -> None:
        self._models[reference] = model

    def load(self, reference: str) -> type:
        if reference not in self._models:
            raise ModelImportError(f"Modelo no registrado: '{reference}'")
        return _ensure_model(reference, self._models[reference])
