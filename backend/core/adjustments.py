"""Step-wise tweaks of a session's configuration.

Actions use the ``<field>:<signed int>`` shape (``years:+1``, ``ret:-2``,
``shockyear:+1``) plus ``shock:toggle``. Every result is re-normalized, so a
tweak past a limit simply sticks at the limit.
"""

from __future__ import annotations

import re
from typing import Any, Dict

from backend.core.normalize import DEFAULTS, RawInput, as_raw_dict, normalize_with_warnings
from backend.schemas.simulation import NormalizationResult

_STEP_ACTION = re.compile(r"^(years|ret|shockyear):([+-]\d+)$")

STEP_FIELDS: Dict[str, str] = {
    "years": "horizonYears",
    "ret": "annualReturnPct",
    "shockyear": "shockYear",
}


class UnknownActionError(ValueError):
    pass


class ShockNotActiveError(ValueError):
    pass


def _has_shock(raw: Dict[str, Any]) -> bool:
    return raw.get("shockPct") is not None and raw.get("shockYear") is not None


def toggle_shock(current: RawInput) -> NormalizationResult:
    config = normalize_with_warnings(current).config
    raw = config.model_dump()
    if config.shock is not None:
        raw["shock"] = None
    else:
        raw["shock"] = {
            "pctDrop": DEFAULTS["shockPct"],
            "atYear": min(config.horizonYears, DEFAULTS["shockYear"]),
        }
    return normalize_with_warnings(raw)


def adjust(current: RawInput, action: str) -> NormalizationResult:
    """Apply ``action`` to ``current`` and return the new normalized config."""
    if action == "shock:toggle":
        return toggle_shock(current)

    match = _STEP_ACTION.match(action or "")
    if match is None:
        raise UnknownActionError(f"unknown action {action!r}")

    field = STEP_FIELDS[match.group(1)]
    delta = int(match.group(2))

    raw = as_raw_dict(normalize_with_warnings(current).config)
    if field == "shockYear" and not _has_shock(raw):
        raise ShockNotActiveError("turn the shock on first")

    raw[field] = raw[field] + delta
    return normalize_with_warnings(raw)
