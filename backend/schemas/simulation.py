"""Data contracts for DCA projections."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ShockConfig(BaseModel):
    """A single one-period value drop."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pctDrop: float = Field(ge=-95, le=0)
    atYear: float = Field(ge=0, le=50)


class SimulationConfig(BaseModel):
    """Normalized, internally consistent projection inputs."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    periodicAmount: float = Field(ge=0, le=1_000_000_000)
    horizonYears: float = Field(ge=0, le=50)
    annualReturnPct: float = Field(ge=-100, le=200)
    annualFeePct: float = Field(ge=0, le=5)
    shock: Optional[ShockConfig] = None
    periodsPerYear: int = Field(ge=1, le=52)
    inflationPct: float = Field(ge=0, le=100)

    @model_validator(mode="after")
    def ensure_shock_within_horizon(self) -> "SimulationConfig":
        if self.shock is not None and self.shock.atYear > self.horizonYears:
            raise ValueError("shock.atYear must not exceed horizonYears")
        return self

    @property
    def total_periods(self) -> int:
        return int(self.horizonYears * self.periodsPerYear)


class RawParams(BaseModel):
    """Loosely typed bundle accepted by the normalizer; every field optional."""

    model_config = ConfigDict(extra="ignore")

    periodicAmount: Any = None
    horizonYears: Any = None
    annualReturnPct: Any = None
    annualFeePct: Any = None
    shockPct: Any = None
    shockYear: Any = None
    periodsPerYear: Any = None
    inflationPct: Any = None


class NormalizationResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    config: SimulationConfig
    warnings: List[str] = Field(default_factory=list)


class SimulationResult(BaseModel):
    """Time series and summary metrics of one projection run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    totalContributed: float
    finalValue: float
    totalGains: float
    maxDrawdownPct: float = Field(le=0)
    recoveryPeriods: Optional[int] = Field(default=None, ge=1)
    series: List[float]
    milestones: Dict[float, float]
    inflationAdjustedFinalValue: float

    totalPeriods: int = Field(ge=0)
    shockPeriod: Optional[int] = Field(default=None, ge=1)
    preShockPeak: Optional[float] = None


class ProjectionResponse(BaseModel):
    """Envelope returned by the projection endpoints."""

    config: SimulationConfig
    result: SimulationResult
    warnings: List[str] = Field(default_factory=list)
    command: Optional[str] = None


class CommandRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    text: str = Field(max_length=500)


class AdjustRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    config: Dict[str, Any] = Field(default_factory=dict)
    action: str
