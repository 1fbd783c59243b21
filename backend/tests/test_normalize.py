from __future__ import annotations

import math

import pytest

from backend.core.normalize import DEFAULTS, normalize, normalize_with_warnings, to_number
from backend.schemas.simulation import RawParams


def test_defaults_for_missing_values():
    for raw in (None, {}, RawParams()):
        config = normalize(raw)
        assert config.periodicAmount == DEFAULTS["periodicAmount"]
        assert config.horizonYears == DEFAULTS["horizonYears"]
        assert config.annualReturnPct == DEFAULTS["annualReturnPct"]
        assert config.annualFeePct == DEFAULTS["annualFeePct"]
        assert config.periodsPerYear == 52
        assert config.inflationPct == 0
        assert config.shock is None


def test_limits_are_enforced():
    config = normalize(
        {
            "periodicAmount": -100,
            "horizonYears": 100,
            "annualReturnPct": 500,
            "annualFeePct": 10,
            "periodsPerYear": 400,
            "inflationPct": -3,
        }
    )
    assert config.periodicAmount == 0
    assert config.horizonYears == 50
    assert config.annualReturnPct == 200
    assert config.annualFeePct == 5
    assert config.periodsPerYear == 52
    assert config.inflationPct == 0

    assert normalize({"annualReturnPct": -400}).annualReturnPct == -100
    assert normalize({"periodsPerYear": 0}).periodsPerYear == 1


@pytest.mark.parametrize("bad", ["abc", "", math.nan, math.inf, -math.inf, True, [1], {"x": 1}])
def test_non_numbers_fall_back_to_default(bad):
    config = normalize({"periodicAmount": bad, "horizonYears": bad})
    assert config.periodicAmount == 100
    assert config.horizonYears == 10


def test_numeric_strings_are_accepted():
    config = normalize({"periodicAmount": " 250 ", "annualReturnPct": "8.5", "periodsPerYear": "12"})
    assert config.periodicAmount == 250
    assert config.annualReturnPct == 8.5
    assert config.periodsPerYear == 12


def test_periods_per_year_is_truncated():
    assert normalize({"periodsPerYear": 12.7}).periodsPerYear == 12


def test_shock_requires_both_components():
    with_shock = normalize({"shockPct": -30, "shockYear": 5, "horizonYears": 10})
    assert with_shock.shock is not None
    assert with_shock.shock.pctDrop == -30
    assert with_shock.shock.atYear == 5

    assert normalize({"shockPct": None, "shockYear": None}).shock is None
    assert normalize({"shockPct": -30}).shock is None
    assert normalize({"shockYear": 3}).shock is None


def test_partial_shock_is_reported():
    result = normalize_with_warnings({"shockPct": -30})
    assert result.config.shock is None
    assert any("shock ignored" in warning for warning in result.warnings)


def test_shock_year_clamped_to_clamped_horizon():
    assert normalize({"shockPct": -30, "shockYear": 15, "horizonYears": 10}).shock.atYear == 10
    assert normalize({"shockPct": -30, "shockYear": 80, "horizonYears": 70}).shock.atYear == 50
    assert normalize({"shockPct": -30, "shockYear": -2}).shock.atYear == 0


def test_shock_percentage_limits():
    assert normalize({"shockPct": -99, "shockYear": 3}).shock.pctDrop == -95
    assert normalize({"shockPct": 10, "shockYear": 3}).shock.pctDrop == 0


def test_non_numeric_shock_components_use_shock_defaults():
    config = normalize({"shockPct": "crash", "shockYear": "soon"})
    assert config.shock.pctDrop == -30
    assert config.shock.atYear == 3


def test_dumped_config_normalizes_to_itself():
    config = normalize({"periodicAmount": 50, "horizonYears": 7.5, "shockPct": -40, "shockYear": 2, "periodsPerYear": 12})
    assert normalize(config.model_dump()) == config
    assert normalize(config) == config


def test_warnings_describe_adjustments():
    result = normalize_with_warnings({"horizonYears": 100, "periodicAmount": "lots"})
    assert "horizonYears: 100 clamped to 50" in result.warnings
    assert any(warning.startswith("periodicAmount: 'lots'") for warning in result.warnings)

    assert normalize_with_warnings({"horizonYears": 5}).warnings == []


def test_to_number():
    assert to_number(42, 0) == 42
    assert to_number("100", 0) == 100
    assert to_number(3.14, 0) == 3.14
    assert to_number("abc", 10) == 10
    assert to_number(None, 99) == 99
    assert to_number(math.inf, 7) == 7


def test_huge_integers_fall_back_to_default():
    assert normalize({"periodicAmount": 10 ** 400}).periodicAmount == 100
