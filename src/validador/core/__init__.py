"""📦 core/ — Building blocks universales de la librería

✨ ¿Qué pertenece aquí?
   • Value Objects lógicos reusables por CUALQUIER módulo:
     - MISSING (centinela "sin valor"), NonNegativeInt
   • Helpers genéricos SIN dependencia de los módulos de negocio

🚫 ¿Qué NO pertenece aquí?
   • Conceptos del esquema (FieldInfo, BaseModel, ConfigDict)
   • Reglas de coerción o serialización
   • Cualquier concepto que solo tenga sentido en UN módulo

✅ Dónde poner lo específico:
   → modules/{schema,validation,serialization,documents}/

💡 Principio preventivo:
   Si no podrías reusar este código fuera de la validación de datos,
   probablemente NO pertenece a core/.
"""
