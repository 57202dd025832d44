from __future__ import annotations

from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from volumecalc.config import CalculatorSettings, LoggingSettings, get_settings, reload_settings
from volumecalc.sizing.rounding import RoundingPolicy


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in (
        "VOLUMECALC_ROUNDING_POLICY",
        "VOLUMECALC_STORE_PATH",
        "VOLUMECALC_CAPITAL",
        "VOLUMECALC_RISK_PERCENTAGE",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    get_settings.cache_clear()


def test_defaults() -> None:
    settings = CalculatorSettings()

    assert settings.rounding_policy is RoundingPolicy.LOT_FLOORED
    assert settings.default_instrument == "SPX500"
    assert settings.capital == Decimal("6000")
    assert settings.risk_percentage == Decimal("1")
    assert settings.stop_loss_points == Decimal("12")
    assert settings.logging.log_level == "INFO"
    assert settings.logging.log_format == "text"
    assert settings.resolved_store_path == Path("~/.volumecalc/store.json").expanduser()


@pytest.mark.parametrize("raw", ["unrounded", "UNROUNDED"])
def test_rounding_policy_from_env(monkeypatch, raw) -> None:
    monkeypatch.setenv("VOLUMECALC_ROUNDING_POLICY", raw)
    assert CalculatorSettings().rounding_policy is RoundingPolicy.UNROUNDED


def test_rounding_policy_accepts_dashes(monkeypatch) -> None:
    monkeypatch.setenv("VOLUMECALC_ROUNDING_POLICY", "lot-floored")
    assert CalculatorSettings().rounding_policy is RoundingPolicy.LOT_FLOORED


def test_invalid_rounding_policy_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("VOLUMECALC_ROUNDING_POLICY", "nearest")
    with pytest.raises(ValidationError):
        CalculatorSettings()


def test_numeric_fields_from_env(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("VOLUMECALC_CAPITAL", "25000.50")
    monkeypatch.setenv("VOLUMECALC_STORE_PATH", str(tmp_path / "kv.json"))

    settings = CalculatorSettings()

    assert settings.capital == Decimal("25000.50")
    assert settings.resolved_store_path == tmp_path / "kv.json"


def test_risk_percentage_above_hundred_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("VOLUMECALC_RISK_PERCENTAGE", "150")
    with pytest.raises(ValidationError):
        CalculatorSettings()


def test_env_file_is_read(tmp_path) -> None:
    (tmp_path / ".env").write_text("VOLUMECALC_DEFAULT_INSTRUMENT=NAS100\n", encoding="utf-8")
    assert CalculatorSettings().default_instrument == "NAS100"


def test_log_format_is_validated(monkeypatch) -> None:
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    assert LoggingSettings().log_format == "json"

    monkeypatch.setenv("LOG_FORMAT", "xml")
    with pytest.raises(ValidationError):
        LoggingSettings()


def test_reload_settings_clears_cache(monkeypatch) -> None:
    first = get_settings()
    assert get_settings() is first

    monkeypatch.setenv("VOLUMECALC_ROUNDING_POLICY", "unrounded")
    reloaded = reload_settings()

    assert reloaded is not first
    assert reloaded.rounding_policy is RoundingPolicy.UNROUNDED
