from __future__ import annotations

import math
from typing import Dict, List, Optional

from backend.core.rates import (
    inflation_deflator,
    period_fee_factor_from_annual,
    period_rate_from_annual,
)
from backend.schemas.simulation import SimulationConfig, SimulationResult


def shock_period_for(config: SimulationConfig) -> Optional[int]:
    """1-based period at which the shock fires, or None without a shock/periods."""
    total = config.total_periods
    if config.shock is None or total == 0:
        return None
    # round half up
    period = math.floor(config.shock.atYear * config.periodsPerYear + 0.5)
    return min(total, max(1, period))


def project(config: SimulationConfig) -> SimulationResult:
    """
    Run the period-by-period DCA projection for a normalized config.

    Order of operations (per period):
      1) Contribution at START of period.
      2) Growth for the period, then the fee drag.
      3) Shock, if this is the shock period (fires once).
      4) Peak, drawdown and recovery bookkeeping.
      5) Record series value, plus a milestone at whole-year boundaries.
    """
    periods_per_year = config.periodsPerYear
    total_periods = config.total_periods
    rate = period_rate_from_annual(config.annualReturnPct, periods_per_year)
    fee_factor = period_fee_factor_from_annual(config.annualFeePct, periods_per_year)
    shock_period = shock_period_for(config)

    value = 0.0
    contributed = 0.0
    peak = 0.0
    max_drawdown = 0.0

    pre_shock_peak: Optional[float] = None
    recovery_periods: Optional[int] = None
    since_shock = 0

    series: List[float] = []
    milestones: Dict[float, float] = {}

    for period in range(1, total_periods + 1):
        value += config.periodicAmount
        contributed += config.periodicAmount

        value *= 1 + rate
        value *= fee_factor

        if period == shock_period:
            pre_shock_peak = peak if peak > 0 else value
            value *= 1 + config.shock.pctDrop / 100

        if value > peak:
            peak = value

        if peak > 0:
            drawdown = (value - peak) / peak
            if drawdown < max_drawdown:
                max_drawdown = drawdown

        if pre_shock_peak is not None and recovery_periods is None:
            since_shock += 1
            if value >= pre_shock_peak:
                recovery_periods = since_shock

        series.append(value)
        if period % periods_per_year == 0:
            milestones[float(period // periods_per_year)] = value

    if total_periods:
        milestones[total_periods / periods_per_year] = value

    return SimulationResult(
        totalContributed=contributed,
        finalValue=value,
        totalGains=value - contributed,
        maxDrawdownPct=max_drawdown * 100,
        recoveryPeriods=recovery_periods,
        series=series,
        milestones=milestones,
        inflationAdjustedFinalValue=value / inflation_deflator(config.inflationPct, config.horizonYears),
        totalPeriods=total_periods,
        shockPeriod=shock_period,
        preShockPeak=pre_shock_peak,
    )


__all__ = ["project", "shock_period_for"]
