# src/validador/modules/validation/domain/messages.py
"""
Catálogo de Mensajes de Error.

Arquitectura: Domain Layer
Responsabilidad: Asociar cada tipo de error (código estable) con su plantilla legible.
"""

# Los códigos (claves) son estables y pensados para máquinas.
# Los mensajes (valores) son para humanos y se formatean con el ``ctx`` del error.
MESSAGES: dict[str, str] = {
    # Estructura
    "missing": "Campo requerido",
    "extra_forbidden": "No se permiten campos adicionales",
    "model_type": "La entrada debe ser un diccionario o una instancia de {class_name}",
    "model_attributes_type": "La entrada debe ser un diccionario o un objeto del que extraer campos",
    "json_invalid": "JSON inválido: {error}",
    "json_type": "El JSON debe ser str, bytes o bytearray",
    "frozen_instance": "La instancia es inmutable",
    "frozen_field": "El campo es inmutable",
    "no_such_attribute": "El objeto no tiene el atributo '{attribute}'",
    # Escalares
    "none_required": "La entrada debe ser None",
    "int_type": "La entrada debe ser un entero válido",
    "int_parsing": "La entrada debe ser un entero válido, no se pudo interpretar el texto como entero",
    "int_from_float": "La entrada debe ser un entero válido, se recibió un número con parte decimal",
    "float_type": "La entrada debe ser un número válido",
    "float_parsing": "La entrada debe ser un número válido, no se pudo interpretar el texto como número",
    "finite_number": "La entrada debe ser un número finito",
    "bool_type": "La entrada debe ser un booleano válido",
    "bool_parsing": "La entrada debe ser un booleano válido, no se pudo interpretar la entrada",
    "string_type": "La entrada debe ser un texto válido",
    "bytes_type": "La entrada debe ser bytes válidos",
    "decimal_type": "La entrada debe ser un decimal válido",
    "decimal_parsing": "La entrada debe ser un decimal válido, no se pudo interpretar",
    "uuid_type": "La entrada debe ser un UUID válido",
    "uuid_parsing": "La entrada debe ser un UUID válido, {error}",
    "datetime_type": "La entrada debe ser una fecha y hora válida",
    "datetime_parsing": "La entrada debe ser una fecha y hora válida, {error}",
    "date_type": "La entrada debe ser una fecha válida",
    "date_parsing": "La entrada debe ser una fecha válida, {error}",
    "date_from_datetime_inexact": "La fecha y hora debe tener la hora en cero para convertirse en fecha",
    "time_type": "La entrada debe ser una hora válida",
    "time_parsing": "La entrada debe ser una hora válida, {error}",
    "literal_error": "La entrada debe ser {expected}",
    "enum": "La entrada debe ser {expected}",
    "is_instance_of": "La entrada debe ser una instancia de {class_name}",
    # Colecciones
    "list_type": "La entrada debe ser una lista válida",
    "tuple_type": "La entrada debe ser una tupla válida",
    "set_type": "La entrada debe ser un conjunto válido",
    "frozen_set_type": "La entrada debe ser un conjunto inmutable válido",
    "dict_type": "La entrada debe ser un diccionario válido",
    "set_item_not_hashable": "Los elementos del conjunto deben ser hashables",
    # Restricciones
    "greater_than": "La entrada debe ser mayor que {gt}",
    "greater_than_equal": "La entrada debe ser mayor o igual que {ge}",
    "less_than": "La entrada debe ser menor que {lt}",
    "less_than_equal": "La entrada debe ser menor o igual que {le}",
    "multiple_of": "La entrada debe ser múltiplo de {multiple_of}",
    "string_too_short": "El texto debe tener al menos {min_length} carácter(es)",
    "string_too_long": "El texto debe tener como máximo {max_length} carácter(es)",
    "string_pattern_mismatch": "El texto debe coincidir con el patrón '{pattern}'",
    "bytes_too_short": "Los bytes deben tener al menos {min_length} byte(s)",
    "bytes_too_long": "Los bytes deben tener como máximo {max_length} byte(s)",
    "too_short": "{field_type} debe tener al menos {min_length} elemento(s) tras la validación, no {actual_length}",
    "too_long": "{field_type} debe tener como máximo {max_length} elemento(s) tras la validación, no {actual_length}",
    # Uniones discriminadas
    "union_tag_invalid": (
        "La etiqueta '{tag}' encontrada con '{discriminator}' no coincide con "
        "ninguna de las esperadas: {expected_tags}"
    ),
    "union_tag_not_found": "No se pudo extraer la etiqueta usando el discriminador '{discriminator}'",
    # Validadores de usuario
    "value_error": "Error de valor, {error}",
    "assertion_error": "Aserción fallida, {error}",
}


def render(error_type: str, ctx: dict | None = None) -> str:
    """Formatea el mensaje de un tipo de error con su contexto."""
    template = MESSAGES.get(error_type, error_type)
    if not ctx:
        return template
    try:
        return template.format(**ctx)
    except (KeyError, IndexError):
        return template
