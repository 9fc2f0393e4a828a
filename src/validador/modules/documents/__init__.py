# src/validador/modules/documents/__init__.py
"""
Módulo de Documentos: validar archivos JSON contra un modelo desde la línea de comandos.
"""

from __future__ import annotations

# Application
from .application.use_cases import ValidateDocument

# Domain
from .domain.exceptions import DocumentError, DocumentFileError, ModelImportError

# Infrastructure
from .infrastructure.adapters import ImportlibModelLoader, StaticModelLoader

__all__ = [
    "DocumentError",
    "DocumentFileError",
    "ImportlibModelLoader",
    "ModelImportError",
    "StaticModelLoader",
    "ValidateDocument",
]
