from __future__ import annotations

import pytest

from addr_engine.address import InvalidPatternError, evaluate
from addr_engine.buffer import BufferView
from addr_engine.runtime import telemetry
from addr_engine.runtime.settings import EngineSettings


def test_settings_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("MAX_SPAN", "PATTERN_TIMEOUT", "STRICT_PATTERNS", "BLOCK_STYLE"):
        monkeypatch.delenv(f"ADDR_ENGINE_{name}", raising=False)

    settings = EngineSettings.from_env()

    assert settings == EngineSettings()
    assert settings.max_span is None
    assert settings.pattern_timeout == 1.0
    assert settings.strict_patterns is False
    assert settings.block_style == "paragraph"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADDR_ENGINE_MAX_SPAN", "25")
    monkeypatch.setenv("ADDR_ENGINE_PATTERN_TIMEOUT", "0.25")
    monkeypatch.setenv("ADDR_ENGINE_STRICT_PATTERNS", "yes")
    monkeypatch.setenv("ADDR_ENGINE_BLOCK_STYLE", "Indent")

    settings = EngineSettings.from_env()

    assert settings.max_span == 25
    assert settings.pattern_timeout == 0.25
    assert settings.strict_patterns is True
    assert settings.block_style == "indent"


def test_settings_reject_bad_values(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(ValueError):
        EngineSettings(max_span=0)
    with pytest.raises(ValueError):
        EngineSettings(pattern_timeout=0)
    with pytest.raises(ValueError):
        EngineSettings(block_style="braces")

    monkeypatch.setenv("ADDR_ENGINE_MAX_SPAN", "lots")
    with pytest.raises(ValueError):
        EngineSettings.from_env()

    monkeypatch.delenv("ADDR_ENGINE_MAX_SPAN")
    monkeypatch.setenv("ADDR_ENGINE_PATTERN_TIMEOUT", "soon")
    with pytest.raises(ValueError):
        EngineSettings.from_env()


def test_settings_overrides_return_a_copy() -> None:
    base = EngineSettings()

    tuned = base.with_overrides(max_span=5)

    assert tuned.max_span == 5
    assert base.max_span is None


def test_strict_patterns_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADDR_ENGINE_STRICT_PATTERNS", "1")
    view = BufferView.of(["alpha"], cursor=[0])

    with pytest.raises(InvalidPatternError):
        evaluate("/a[/", view)


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_configure_accepts_the_development_preset() -> None:
    try:
        telemetry.configure(preset="Development")
        logger = telemetry.get_logger("addr_engine.tests.preset")

        assert telemetry.get_logger("addr_engine.tests.preset") is logger
        telemetry.record_event("address.test", level="debug", data={"preset": "dev"})
    finally:
        telemetry.configure()

    assert telemetry.get_logger("addr_engine.tests.preset") is not logger


def test_get_logger_is_cached_per_name() -> None:
    first = telemetry.get_logger("addr_engine.tests")
    second = telemetry.get_logger("addr_engine.tests")

    assert first is second


def test_record_event_rejects_unknown_levels() -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("address.test", level="shout")


def test_span_reraises_body_errors() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("address::test", component=True) as handle:
            handle.add_metadata("step", 1)
            raise RuntimeError("boom")
