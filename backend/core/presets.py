"""Named scenario presets merged over the caller's current configuration."""

from __future__ import annotations

from typing import Any, Dict, Optional

from backend.core.normalize import RawInput, as_raw_dict, normalize_with_warnings
from backend.schemas.simulation import NormalizationResult

PRESETS: Dict[str, Dict[str, Any]] = {
    "base": {
        "periodicAmount": 100,
        "horizonYears": 10,
        "annualReturnPct": 7,
        "annualFeePct": 0,
        "shockPct": -30,
        "shockYear": 3,
    },
    "bull": {
        "periodicAmount": 100,
        "horizonYears": 10,
        "annualReturnPct": 12,
        "annualFeePct": 0,
        "shockPct": None,
        "shockYear": None,
    },
    "pain": {
        "periodicAmount": 100,
        "horizonYears": 10,
        "annualReturnPct": 7,
        "annualFeePct": 0,
        "shockPct": -50,
        "shockYear": 2,
    },
}


class UnknownPresetError(KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown preset {self.name!r}; expected one of {', '.join(sorted(PRESETS))}"


def apply_preset(name: str, current: Optional[RawInput] = None) -> NormalizationResult:
    """Overlay preset ``name`` on ``current`` (or on the defaults)."""
    try:
        fragment = PRESETS[name.lower()]
    except KeyError:
        raise UnknownPresetError(name) from None

    merged = as_raw_dict(current)
    merged.update(fragment)
    return normalize_with_warnings(merged)
