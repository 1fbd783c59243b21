"""Annual-to-period rate conversions shared by the projection engine."""

from __future__ import annotations


def period_rate_from_annual(annual_pct: float, periods_per_year: int) -> float:
    """Compound-equivalent per-period growth rate.

    An annual return at or below -100% maps to exactly -1 (total wipeout).
    """
    annual = annual_pct / 100
    if annual <= -1:
        return -1.0
    return (1 + annual) ** (1 / periods_per_year) - 1


def period_fee_factor_from_annual(fee_pct: float, periods_per_year: int) -> float:
    """Multiplicative decay applied each period for an annual fee drag."""
    fee = fee_pct / 100
    if fee <= 0:
        return 1.0
    if fee >= 1:
        return 0.0
    return (1 - fee) ** (1 / periods_per_year)


def inflation_deflator(inflation_pct: float, years: float) -> float:
    return (1 + inflation_pct / 100) ** years
