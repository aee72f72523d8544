"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from crpt_client.core.config import ApiSettings, GateSettings, LogSettings, Settings


def test_defaults_match_registry_endpoint(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CRPT_BASE_URL", raising=False)

    api = ApiSettings()

    assert api.base_url == "https://ismp.crpt.ru"
    assert api.create_document_path == "/api/v3/lk/documents/create"
    assert api.document_format == "MANUAL"
    assert api.document_type == "LP_INTRODUCE_GOODS"


def test_gate_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GATE_REQUEST_LIMIT", "7")
    monkeypatch.setenv("GATE_WINDOW_SECONDS", "0.5")
    monkeypatch.setenv("GATE_CLOSE_GRACE_SECONDS", "2")

    gate = GateSettings()

    assert gate.request_limit == 7
    assert gate.window_seconds == 0.5
    assert gate.close_grace_seconds == 2.0


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("GATE_REQUEST_LIMIT", "0"),
        ("GATE_WINDOW_SECONDS", "0"),
        ("GATE_WINDOW_SECONDS", "inf"),
        ("GATE_WINDOW_SECONDS", "nan"),
        ("GATE_CLOSE_GRACE_SECONDS", "-1"),
    ],
)
def test_out_of_range_gate_settings_fail_validation(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        GateSettings()


def test_log_settings_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "plain")

    log = LogSettings()

    assert log.level == "debug"
    assert log.format == "plain"


def test_settings_container_composes_sections() -> None:
    cfg = Settings()

    assert cfg.app_env == "testing"
    assert isinstance(cfg.api, ApiSettings)
    assert isinstance(cfg.gate, GateSettings)
    assert isinstance(cfg.log, LogSettings)
