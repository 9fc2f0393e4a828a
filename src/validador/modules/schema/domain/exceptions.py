# src/validador/modules/schema/domain/exceptions.py
"""
Excepciones del dominio de Esquemas.

Arquitectura: Domain Layer
Responsabilidad: Señalar errores de DEFINICIÓN (no de datos) al declarar modelos.
"""


class SchemaError(TypeError):
    """
    El modelo, un campo o un decorador está mal declarado.
    Se lanza al crear la clase, nunca al validar datos de entrada.
    """

    pass


class UndefinedModelError(SchemaError):
    """El modelo tiene referencias adelantadas que aún no se pueden resolver."""

    pass
