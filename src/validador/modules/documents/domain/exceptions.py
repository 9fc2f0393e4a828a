# src/validador/modules/documents/domain/exceptions.py
"""
Excepciones del dominio de Documentos.

Arquitectura: Domain Layer
Responsabilidad: Errores de la operación sobre el documento, no de los datos que contiene.
"""


class DocumentError(Exception):
    """Clase base para errores en el módulo de documentos."""

    pass


class DocumentFileError(DocumentError):
    """El archivo no existe, no es un archivo regular o no se puede leer."""

    pass


class ModelImportError(DocumentError):
    """La referencia 'paquete.modulo:Clase' no se pudo resolver a un modelo."""

    pass
