"""📦 modules/ — Bounded contexts de la librería

✅ Contextos actuales:
   • schema/         → Definición declarativa: BaseModel, Field, ConfigDict, decoradores
   • validation/     → Coerción, pipeline de validadores y colector de errores
   • serialization/  → model_dump / model_dump_json, include/exclude, alias
   • documents/      → Caso de uso y CLI para validar archivos JSON contra un modelo

📚 Cada módulo mantiene sus propias capas Clean Architecture:
   • domain/         → Tipos y reglas puras del subdominio
   • application/    → Motores y casos de uso
   • infrastructure/ → Adaptadores concretos (importlib, logging, psutil)
"""
