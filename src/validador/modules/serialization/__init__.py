# src/validador/modules/serialization/__init__.py
"""
Módulo de Serialización: de instancias validadas a dict / JSON.
"""

from __future__ import annotations

# Application
from .application.serializer import dump_model, dump_model_json, to_jsonable

# Domain
from .domain.value_objects import SerializationInfo

__all__ = [
    "SerializationInfo",
    "dump_model",
    "dump_model_json",
    "to_jsonable",
]
