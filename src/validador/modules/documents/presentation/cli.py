# src/validador/modules/documents/presentation/cli.py
"""
Interfaz de Línea de Comandos (CLI) para Validación de Documentos.

Arquitectura: Presentation Layer (Interface Adapter)
Responsabilidad:
    1. Parsear argumentos (argv).
    2. Instanciar el Composition Root.
    3. Formatear la salida (JSON/Texto).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from validador.modules.documents.application.use_cases import ValidateDocument
from validador.modules.documents.domain.exceptions import DocumentError
from validador.modules.documents.infrastructure.adapters import ImportlibModelLoader
from validador.modules.documents.infrastructure.observability import configure_logging
from validador.modules.serialization.application.serializer import dumps_json
from validador.modules.validation.domain.exceptions import ValidationError

EXIT_OK = 0
EXIT_BAD_INPUT = 1
EXIT_INVALID = 2
EXIT_UNEXPECTED = 3
EXIT_INTERRUPTED = 130


def setup_parser() -> argparse.ArgumentParser:
    """Configura los argumentos aceptados por la herramienta."""
    parser = argparse.ArgumentParser(
        prog="validador",
        description="✅ Validador - Valida documentos JSON contra un modelo declarativo",
        epilog="Ejemplo: validador mi_app.modelos:Usuario usuario.json --json",
    )

    parser.add_argument("model", help="Referencia al modelo: 'paquete.modulo:Clase'")

    parser.add_argument("input_file", type=Path, help="Ruta al documento JSON")

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Modo estricto: sin conversiones implícitas de tipos",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Salida en formato JSON (útil para tuberías/pipes)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Muestra logs detallados de progreso",
    )

    return parser


def format_output_text(instance: Any) -> None:
    """Presentación amigable para humanos."""
    print(f"\n✅ DOCUMENTO VÁLIDO ({type(instance).__name__})")
    print("=" * 60)
    data = instance.model_dump(mode="json")
    if not data:
        print("   (Sin campos)")
    else:
        width = max(len(str(key)) for key in data)
        for key, value in data.items():
            print(f"{key:<{width}} | {dumps_json(value)}")
    print("=" * 60)


def format_output_json(instance: Any) -> None:
    """Presentación para máquinas (Machine Readable)."""
    print(instance.model_dump_json(indent=2))


def format_errors_json(error: ValidationError) -> None:
    """Reporte de errores para máquinas: va a stdout, los logs quedan en stderr."""
    print(error.json(indent=2))


def main(argv: list[str] | None = None) -> int:
    parser = setup_parser()
    args = parser.parse_args(argv)

    configure_logging("INFO" if args.verbose else None)

    # 1. Validación de Presentación
    if not args.input_file.exists():
        print(f"❌ Error: El archivo '{args.input_file}' no existe.", file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.verbose:
        print(f"⚙️  Cargando modelo {args.model}...", file=sys.stderr)

    try:
        # 2. Composition Root (Wiring)
        use_case = ValidateDocument(loader=ImportlibModelLoader())

        # 3. Ejecución
        instance = use_case.execute(args.model, args.input_file, strict=args.strict)

        # 4. Renderizado (Output)
        if args.json:
            format_output_json(instance)
        else:
            format_output_text(instance)

    except DocumentError as e:
        print(f"❌ Error de Documento: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except ValidationError as e:
        if args.json:
            format_errors_json(e)
        else:
            print(f"❌ {e}", file=sys.stderr)
        return EXIT_INVALID
    except KeyboardInterrupt:
        print("\n⚠️  Operación cancelada por el usuario.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        # Errores inesperados (Bugs)
        print(f"❌ Error Crítico: {e}", file=sys.stderr)
        return EXIT_UNEXPECTED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
