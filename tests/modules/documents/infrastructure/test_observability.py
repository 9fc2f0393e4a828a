# tests/modules/documents/infrastructure/test_observability.py
"""
Tests para: ObservabilityService (SRE Edition)
Tipo: Unitario
Validación Completa:
  1. Estructura de Logs (JSON)
  2. Manejo de Errores (Exceptions)
  3. Métricas SRE (Latency + RAM Saturation)
"""

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import psutil
import pytest

from validador.modules.documents.infrastructure.observability import (
    ObservabilityService,
    configure_logging,
)

MODULE = "validador.modules.documents.infrastructure.observability"


def _fake_process(rss_bytes: int) -> MagicMock:
    process_mock = MagicMock()
    process_mock.memory_info.return_value.rss = rss_bytes
    return process_mock


class TestObservabilityService:

    # ─── 1. Pruebas de Utilidad Básica ────────────────────────────────────────

    def test_correlation_id_format(self):
        """Debe devolver un string de 8 caracteres."""
        cid = ObservabilityService.get_correlation_id()
        assert isinstance(cid, str)
        assert len(cid) == 8

    @patch(f"{MODULE}.logger")
    def test_log_structure_compliance(self, mock_logger):
        """Verifica que el JSON cumple el estándar para Datadog/ELK."""
        ObservabilityService.log_event("test.evt", "123", {"modelo": "Usuario"})

        args, _ = mock_logger.info.call_args
        log_json = json.loads(args[0])

        for field in ["timestamp", "level", "event", "correlation_id", "data"]:
            assert field in log_json
        assert log_json["data"] == {"modelo": "Usuario"}

    @patch(f"{MODULE}.logger")
    def test_pretty_print_mode(self, mock_logger, monkeypatch):
        """LOG_FORMAT=PRETTY produce JSON indentado (vertical)."""
        monkeypatch.setattr(ObservabilityService, "PRETTY_PRINT", True)

        ObservabilityService.log_event("test.evt", "123", {"a": 1})

        assert "\n    " in mock_logger.info.call_args[0][0]

    @patch(f"{MODULE}.logger")
    def test_error_level_uses_logger_error(self, mock_logger):
        ObservabilityService.log_event("x.failed", "1", {}, level="ERROR")

        mock_logger.error.assert_called_once()
        mock_logger.info.assert_not_called()

    # ─── 2. Pruebas de Decorador & Métricas SRE (RAM) ─────────────────────────

    @patch(f"{MODULE}.psutil")
    @patch(f"{MODULE}.logger")
    def test_measure_latency_should_log_ram_metrics(self, mock_logger, mock_psutil):
        """
        Happy Path SRE:
        Verifica que al ejecutar exitosamente, se registran métricas de RAM.
        """
        mock_psutil.Process.return_value = _fake_process(104857600)  # 100 MB

        @ObservabilityService.measure_latency("sre_op")
        def work():
            return "done"

        assert work() == "done"

        first = json.loads(mock_logger.info.call_args_list[0][0][0])
        last = json.loads(mock_logger.info.call_args_list[-1][0][0])
        assert first["event"] == "sre_op.started"
        assert last["event"] == "sre_op.completed"
        assert last["correlation_id"] == first["correlation_id"]
        assert last["data"]["end_ram_mb"] == 100.0
        assert last["data"]["ram_delta_mb"] == 0.0
        assert last["data"]["status"] == "success"

    def test_ram_usage_is_zero_when_process_is_unavailable(self):
        with patch(f"{MODULE}.psutil.Process", side_effect=psutil.NoSuchProcess(1)):
            assert ObservabilityService._get_ram_usage_mb() == 0.0

    # ─── 3. Pruebas de Manejo de Errores ──────────────────────────────────────

    @patch(f"{MODULE}.psutil")
    @patch(f"{MODULE}.logger")
    def test_measure_latency_should_reraise_and_log_crash_ram(self, mock_logger, mock_psutil):
        """
        Error Path SRE:
        Si falla, debe loguear cuánta RAM había al momento del crash y re-lanzar error.
        """
        mock_psutil.Process.return_value = _fake_process(52428800)  # 50 MB

        @ObservabilityService.measure_latency("fail_op")
        def broken():
            raise ValueError("Critical Failure")

        with pytest.raises(ValueError, match="Critical Failure"):
            broken()

        mock_logger.error.assert_called_once()
        log_json = json.loads(mock_logger.error.call_args[0][0])
        assert log_json["event"] == "fail_op.failed"
        assert log_json["data"]["error_type"] == "ValueError"
        assert log_json["data"]["error_msg"] == "Critical Failure"
        assert log_json["data"]["crash_ram_mb"] == 50.0

    # ─── 4. Prueba de Contexto (Archivos) ─────────────────────────────────────

    @patch(f"{MODULE}.logger")
    def test_context_extraction(self, mock_logger):
        """Si se pasa un Path (posicional o por nombre), debe salir en los logs."""

        @ObservabilityService.measure_latency("file_op")
        def read_file(modelo, f=None):
            pass

        read_file("m:M", f=Path("datos/usuario.json"))

        log_json = json.loads(mock_logger.info.call_args_list[0][0][0])
        assert log_json["data"]["target"] == "usuario.json"


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_logger(self):
        logger = logging.getLogger("validador")
        level, handlers = logger.level, list(logger.handlers)
        yield
        logger.setLevel(level)
        logger.handlers[:] = handlers

    def test_level_from_argument(self):
        configure_logging("debug")

        logger = logging.getLogger("validador")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("VALIDADOR_LOG_LEVEL", "ERROR")

        configure_logging()

        assert logging.getLogger("validador").level == logging.ERROR

    def test_handlers_are_not_duplicated(self):
        configure_logging("INFO")
        configure_logging("INFO")

        assert len(logging.getLogger("validador").handlers) == 1
