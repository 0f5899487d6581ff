from __future__ import annotations

from typing import Any, List, Tuple

import pytest

from text_replacer.runtime import telemetry
from text_replacer.runtime.telemetry import SpanHandle, TelemetrySettings


class RecordingLogger:
    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Any]] = []

    def error_with(self, message: str, pairs: Any) -> None:
        self.records.append(("error", message, dict(pairs)))

    def debug(self, message: str) -> None:
        self.records.append(("debug", message, None))


@pytest.fixture(autouse=True)
def restore_telemetry():
    yield
    telemetry.configure(preset="quiet")


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEXT_REPLACER_LOG_LEVEL", "debug")
    monkeypatch.setenv("TEXT_REPLACER_LOGGER", "replacer-tests")
    monkeypatch.setenv("TEXT_REPLACER_NO_COLOR", "yes")
    monkeypatch.setenv("TEXT_REPLACER_LOG_BUFFERED", "1")
    monkeypatch.setenv("TEXT_REPLACER_LOG_BUFFER_SIZE", "512")

    settings = TelemetrySettings.from_env()

    assert settings.level == "DEBUG"
    assert settings.logger_name == "replacer-tests"
    assert settings.console is True
    assert settings.colored is False
    assert settings.buffered is True
    assert settings.buffer_size == 512


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("LOG_LEVEL", "LOGGER", "DISABLE_CONSOLE", "LOG_FILE", "LOG_JSON"):
        monkeypatch.delenv(f"TEXT_REPLACER_{name}", raising=False)

    settings = TelemetrySettings.from_env()

    assert settings.level == "WARNING"
    assert settings.logger_name == "text_replacer"
    assert settings.log_file == ""
    assert settings.json_format is False


def test_presets() -> None:
    assert TelemetrySettings.preset("development").level == "DEBUG"
    production = TelemetrySettings.preset("production")
    assert production.console is False
    assert production.log_file
    assert TelemetrySettings.preset("quiet").profiling is False

    with pytest.raises(ValueError):
        TelemetrySettings.preset("verbose")


def test_settings_reject_bad_buffer_size() -> None:
    with pytest.raises(ValueError):
        TelemetrySettings(buffer_size=0)


def test_configure_rejects_settings_and_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(settings=TelemetrySettings(), preset="quiet")


def test_configure_adopts_settings() -> None:
    settings = TelemetrySettings(logger_name="custom", level="error", console=False)

    adopted = telemetry.configure(settings=settings)

    assert adopted is settings
    assert telemetry.active_settings().level == "ERROR"
    assert telemetry.get_logger() is telemetry.get_logger("custom")


def test_span_handle_fail_emits_once() -> None:
    logger = RecordingLogger()
    handle = SpanHandle(logger=logger, span_name="replacer::enter", component_name="replacer")
    handle.add_metadata("status", "overlap_error")

    handle.fail("overlap error")
    handle.fail("overlap error")

    assert len(logger.records) == 1
    level, message, payload = logger.records[0]
    assert (level, message) == ("error", "span::fail")
    assert payload["status"] == "overlap_error"
    assert payload["component"] == "replacer"


def test_span_handle_falls_back_to_plain_method() -> None:
    logger = RecordingLogger()
    handle = SpanHandle(logger=logger, span_name="replacer::enter")

    handle.debug("replacer::applied", result_length=3)

    assert logger.records[0][0] == "debug"
    assert "result_length" in logger.records[0][1]
