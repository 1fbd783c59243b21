"""Text command parsing for ``/dca <amount> <years> <return> [...]``.

Optional clauses after the three positional numbers, in any order:
``fee <pct>``, ``shock <pct> at <year>``, ``every week|month``, ``periods <n>`` and
``inflation <pct>``. Malformed clauses are skipped.
"""

from __future__ import annotations

import math
from typing import Any, Dict, List

from backend.core.normalize import DEFAULTS, normalize_with_warnings, to_number
from backend.schemas.simulation import NormalizationResult, SimulationConfig

CADENCES: Dict[str, int] = {"week": 52, "weekly": 52, "month": 12, "monthly": 12}
POSITIONAL_FIELDS = ("periodicAmount", "horizonYears", "annualReturnPct")


def _number_or_none(token: str) -> Any:
    number = to_number(token, math.nan)
    return None if math.isnan(number) else number


def parse_command(text: str) -> NormalizationResult:
    parts: List[str] = str(text or "").split()
    raw: Dict[str, Any] = {}

    for index, name in enumerate(POSITIONAL_FIELDS, start=1):
        if index < len(parts):
            raw[name] = to_number(parts[index], DEFAULTS[name])

    i = len(POSITIONAL_FIELDS) + 1
    while i < len(parts):
        keyword = parts[i].lower()

        if keyword == "fee" and i + 1 < len(parts):
            raw["annualFeePct"] = to_number(parts[i + 1], DEFAULTS["annualFeePct"])
            i += 2
            continue

        if keyword == "inflation" and i + 1 < len(parts):
            raw["inflationPct"] = to_number(parts[i + 1], DEFAULTS["inflationPct"])
            i += 2
            continue

        if keyword == "every" and i + 1 < len(parts) and parts[i + 1].lower() in CADENCES:
            raw["periodsPerYear"] = CADENCES[parts[i + 1].lower()]
            i += 2
            continue

        if keyword == "periods" and i + 1 < len(parts):
            raw["periodsPerYear"] = to_number(parts[i + 1], DEFAULTS["periodsPerYear"])
            i += 2
            continue

        if keyword == "shock" and i + 3 < len(parts):
            pct = _number_or_none(parts[i + 1])
            year = _number_or_none(parts[i + 3])
            if pct is not None and parts[i + 2].lower() == "at" and year is not None:
                raw["shockPct"] = pct
                raw["shockYear"] = year
                i += 4
                continue

        i += 1

    return normalize_with_warnings(raw)


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def to_command(config: SimulationConfig) -> str:
    """Format the command that reproduces ``config``."""
    parts = [
        "/dca",
        _fmt(config.periodicAmount),
        _fmt(config.horizonYears),
        _fmt(config.annualReturnPct),
    ]
    if config.annualFeePct > 0:
        parts += ["fee", _fmt(config.annualFeePct)]
    if config.shock is not None:
        parts += ["shock", _fmt(config.shock.pctDrop), "at", _fmt(config.shock.atYear)]
    if config.periodsPerYear == 12:
        parts += ["every", "month"]
    elif config.periodsPerYear != DEFAULTS["periodsPerYear"]:
        parts += ["periods", str(config.periodsPerYear)]
    if config.inflationPct > 0:
        parts += ["inflation", _fmt(config.inflationPct)]
    return " ".join(parts)
