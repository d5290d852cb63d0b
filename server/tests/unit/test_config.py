from __future__ import annotations

import pytest
from pydantic import ValidationError

from inline_calc.core.config import AppSettings
from inline_calc.services.calculator import Calculator


def clear_env(monkeypatch) -> None:
    for name in ("CORS_ORIGINS", "DECIMAL_PRECISION", "DIVISION_PLACES", "MAX_EXACT_DIGITS", "FRACTION_DIGITS", "CACHE_MAX_ENTRIES"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch) -> None:
    clear_env(monkeypatch)

    settings = AppSettings(_env_file=None)

    assert settings.decimal_precision == 1000
    assert settings.division_places == 20
    assert settings.max_exact_digits == 100_000
    assert settings.fraction_digits == 20
    assert settings.cache_max_entries is None


def test_resolved_cors_origins_deduplicates(monkeypatch) -> None:
    clear_env(monkeypatch)
    monkeypatch.setenv(
        "CORS_ORIGINS",
        '["http://localhost:5173", "http://localhost:5173/", ""]',
    )

    settings = AppSettings(_env_file=None)

    assert settings.resolved_cors_origins == ["http://localhost:5173"]


def test_rejects_precision_below_decimal_default(monkeypatch) -> None:
    clear_env(monkeypatch)
    monkeypatch.setenv("DECIMAL_PRECISION", "10")

    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)


def test_calculator_from_settings_applies_overrides(monkeypatch) -> None:
    clear_env(monkeypatch)
    monkeypatch.setenv("DIVISION_PLACES", "4")
    monkeypatch.setenv("FRACTION_DIGITS", "2")
    monkeypatch.setenv("CACHE_MAX_ENTRIES", "1")

    calculator = Calculator.from_settings(AppSettings(_env_file=None))

    assert calculator.evaluate("1/3").value.as_tuple().exponent == -4
    assert calculator.to_string(calculator.evaluate("1/3")) == "0.33"

    calculator.evaluate("1+1")
    assert len(calculator.cache) == 1
