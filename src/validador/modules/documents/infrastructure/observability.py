# src/validador/modules/documents/infrastructure/observability.py
"""
Servicio de Observabilidad SRE: Logs, Latency & Saturation (RAM).
Soporta modo "Pretty Print" para depuración visual.
"""

from __future__ import annotations

import functools
import json
import logging
import os
import sys
import time
import uuid
from pathlib import Path
from typing import Any, Callable

import psutil

logger = logging.getLogger("validador")


def configure_logging(level: str | int | None = None) -> None:
    """
    Configura la salida de logs a consola (solo para la CLI).

    El nivel se toma del argumento o de ``VALIDADOR_LOG_LEVEL`` (default: WARNING).
    """
    if level is None:
        level = os.getenv("VALIDADOR_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = level.upper()

    root = logging.getLogger("validador")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)


class ObservabilityService:

    # 🌍 CONFIGURACIÓN GLOBAL
    # Si esta variable de entorno existe, activamos la vista vertical
    PRETTY_PRINT = os.getenv("LOG_FORMAT") == "PRETTY"

    @staticmethod
    def get_correlation_id() -> str:
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _get_ram_usage_mb() -> float:
        try:
            process = psutil.Process(os.getpid())
            return round(process.memory_info().rss / 1024 / 1024, 2)
        except psutil.Error:
            return 0.0

    @staticmethod
    def log_event(
        event_name: str,
        correlation_id: str,
        payload: dict[str, Any],
        level: str = "INFO",
    ) -> None:
        """Emite un log estructurado en JSON (Horizontal o Vertical)."""

        log_entry = {
            "timestamp": time.time(),
            "level": level,
            "event": event_name,
            "correlation_id": correlation_id,
            "data": payload,
        }

        # 🎨 LÓGICA DE VISUALIZACIÓN
        if ObservabilityService.PRETTY_PRINT:
            # MODO VERTICAL (Human-Readable)
            msg = json.dumps(log_entry, indent=4, ensure_ascii=False)
        else:
            # MODO HORIZONTAL (Machine-Readable - Default)
            msg = json.dumps(log_entry, ensure_ascii=False)

        if level == "ERROR":
            logger.error(msg)
        else:
            logger.info(msg)

    @staticmethod
    def measure_latency(operation_name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            @functools.wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                start_time = time.time()
                start_ram = ObservabilityService._get_ram_usage_mb()
                correlation_id = ObservabilityService.get_correlation_id()

                file_context = "unknown"
                for arg in (*args, *kwargs.values()):
                    if isinstance(arg, Path):
                        file_context = arg.name
                        break

                ObservabilityService.log_event(
                    event_name=f"{operation_name}.started",
                    correlation_id=correlation_id,
                    payload={"target": file_context, "start_ram_mb": start_ram},
                )

                try:
                    result = func(*args, **kwargs)
                except Exception as e:
                    crash_ram = ObservabilityService._get_ram_usage_mb()

                    ObservabilityService.log_event(
                        event_name=f"{operation_name}.failed",
                        correlation_id=correlation_id,
                        payload={
                            "duration_sec": round(time.time() - start_time, 3),
                            "crash_ram_mb": crash_ram,
                            "target": file_context,
                            "error_type": type(e).__name__,
                            "error_msg": str(e),
                        },
                        level="ERROR",
                    )
                    raise

                end_ram = ObservabilityService._get_ram_usage_mb()
                ObservabilityService.log_event(
                    event_name=f"{operation_name}.completed",
                    correlation_id=correlation_id,
                    payload={
                        "duration_sec": round(time.time() - start_time, 3),
                        "end_ram_mb": end_ram,
                        "ram_delta_mb": round(end_ram - start_ram, 2),
                        "target": file_context,
                        "status": "success",
                    },
                )
                return result

            return wrapper

        return decorator
