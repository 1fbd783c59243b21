"""Turn loosely typed parameter bundles into a safe SimulationConfig.

Normalization never fails: anything that is not a finite number falls back to
the field default, and every number is then clamped into its allowed range.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel

from backend.schemas.simulation import (
    NormalizationResult,
    RawParams,
    ShockConfig,
    SimulationConfig,
)

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, float] = {
    "periodicAmount": 100.0,
    "horizonYears": 10.0,
    "annualReturnPct": 7.0,
    "annualFeePct": 0.0,
    "shockPct": -30.0,
    "shockYear": 3.0,
    "periodsPerYear": 52,
    "inflationPct": 0.0,
}

# (min, max); shockYear's max is the clamped horizon, filled in at runtime
LIMITS: Dict[str, Tuple[float, Optional[float]]] = {
    "periodicAmount": (0.0, 1_000_000_000.0),
    "horizonYears": (0.0, 50.0),
    "annualReturnPct": (-100.0, 200.0),
    "annualFeePct": (0.0, 5.0),
    "shockPct": (-95.0, 0.0),
    "shockYear": (0.0, None),
    "periodsPerYear": (1, 52),
    "inflationPct": (0.0, 100.0),
}

RawInput = Union[None, Mapping[str, Any], RawParams, SimulationConfig]


def to_number(value: Any, default: float) -> float:
    """Interpret ``value`` as a finite float, or return ``default``."""
    if isinstance(value, bool):
        return default
    if not isinstance(value, (int, float, str)):
        return default
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def as_raw_dict(raw: RawInput) -> Dict[str, Any]:
    if raw is None:
        return {}
    if isinstance(raw, SimulationConfig):
        data = raw.model_dump()
    elif isinstance(raw, BaseModel):
        data = raw.model_dump(exclude_none=True)
    else:
        data = dict(raw)

    # accept the nested shape of a dumped SimulationConfig
    shock = data.pop("shock", None)
    if isinstance(shock, Mapping):
        data.setdefault("shockPct", shock.get("pctDrop"))
        data.setdefault("shockYear", shock.get("atYear"))
    return data


class _Normalizer:
    def __init__(self, data: Mapping[str, Any]):
        self.data = data
        self.warnings: List[str] = []

    def _read(self, name: str) -> float:
        raw_value = self.data.get(name)
        default = DEFAULTS[name]
        if raw_value is not None and math.isnan(to_number(raw_value, math.nan)):
            self.warnings.append(f"{name}: {raw_value!r} is not a number, using {default:g}")
        return to_number(raw_value, default)

    def number(self, name: str, high: Optional[float] = None) -> float:
        value = self._read(name)
        low, limit_high = LIMITS[name]
        clamped = clamp(value, low, high if high is not None else limit_high)
        if clamped != value:
            self.warnings.append(f"{name}: {value:g} clamped to {clamped:g}")
        return clamped

    def integer(self, name: str) -> int:
        value = self._read(name)
        low, high = LIMITS[name]
        adjusted = int(clamp(int(value), low, high))
        if adjusted != value:
            self.warnings.append(f"{name}: {value:g} adjusted to {adjusted}")
        return adjusted

    def build(self) -> SimulationConfig:
        horizon = self.number("horizonYears")

        shock: Optional[ShockConfig] = None
        shock_pct = self.data.get("shockPct")
        shock_year = self.data.get("shockYear")
        if shock_pct is not None and shock_year is not None:
            shock = ShockConfig(
                pctDrop=self.number("shockPct"),
                atYear=self.number("shockYear", high=horizon),
            )
        elif shock_pct is not None or shock_year is not None:
            self.warnings.append("shock ignored: both shockPct and shockYear are required")

        return SimulationConfig(
            periodicAmount=self.number("periodicAmount"),
            horizonYears=horizon,
            annualReturnPct=self.number("annualReturnPct"),
            annualFeePct=self.number("annualFeePct"),
            shock=shock,
            periodsPerYear=self.integer("periodsPerYear"),
            inflationPct=self.number("inflationPct"),
        )


def normalize_with_warnings(raw: RawInput = None) -> NormalizationResult:
    """Normalize ``raw`` and describe every field that was replaced or clamped."""
    normalizer = _Normalizer(as_raw_dict(raw))
    config = normalizer.build()
    for warning in normalizer.warnings:
        logger.debug("normalize: %s", warning)
    return NormalizationResult(config=config, warnings=normalizer.warnings)


def normalize(raw: RawInput = None) -> SimulationConfig:
    return normalize_with_warnings(raw).config


__all__ = [
    "DEFAULTS",
    "RawInput",
    "LIMITS",
    "as_raw_dict",
    "clamp",
    "normalize",
    "normalize_with_warnings",
    "to_number",
]
