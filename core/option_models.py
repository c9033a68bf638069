"""
Option Models
=============

Immutable data model shared by the pricing, signal and PnL components.

Features:
- Option contract and market snapshot with construction-time validation
- Analysis result carrying the originating contract and snapshot
- Trading signal and PnL projection value objects
- Time-to-expiry in years (365.25-day year)
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


SECONDS_PER_YEAR = 365.25 * 24 * 3600


class OptionValidationError(ValueError):
    """Raised when option inputs fail validation."""
    pass


class OptionType(str, Enum):
    """Option type enumeration."""
    CALL = "call"
    PUT = "put"


class VolatilitySource(str, Enum):
    """Where the volatility used for an analysis came from."""
    GIVEN = "given"
    IMPLIED = "implied"
    DEFAULT = "default"


class TradingAction(str, Enum):
    """Recommendation emitted by the signal strategy."""
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"
    AVOID = "AVOID"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _is_positive(value: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value) and value > 0


def time_to_expiry(expiry: datetime, as_of: datetime) -> float:
    """
    Time from as_of to expiry in years, floored at zero.

    Naive datetimes are interpreted as UTC.
    """
    delta = _as_utc(expiry) - _as_utc(as_of)
    return max(delta.total_seconds() / SECONDS_PER_YEAR, 0.0)


@dataclass(frozen=True)
class OptionContract:
    """European option contract under analysis."""
    underlying: str
    strike: float
    expiry: datetime
    option_type: OptionType
    market_price: float | None = None

    def __post_init__(self):
        if not _is_positive(self.strike):
            raise OptionValidationError(f"Strike must be positive, got {self.strike}")
        if self.market_price is not None and not _is_positive(self.market_price):
            raise OptionValidationError(
                f"Market price must be positive when given, got {self.market_price}"
            )
        if not isinstance(self.option_type, OptionType):
            try:
                object.__setattr__(self, "option_type", OptionType(str(self.option_type).lower()))
            except ValueError:
                raise OptionValidationError(f"Unknown option type: {self.option_type}") from None
        object.__setattr__(self, "underlying", self.underlying.strip().upper())

    def to_dict(self) -> dict[str, Any]:
        return {
            "underlying": self.underlying,
            "strike": self.strike,
            "expiry": self.expiry.isoformat(),
            "option_type": self.option_type.value,
            "market_price": self.market_price,
        }


@dataclass(frozen=True)
class MarketSnapshot:
    """Market inputs at a point in time."""
    spot: float
    rate: float  # Continuously-compounded, annualized; may be negative
    dividend_yield: float = 0.0
    as_of: datetime | None = None

    def __post_init__(self):
        if not _is_positive(self.spot):
            raise OptionValidationError(f"Spot price must be positive, got {self.spot}")
        if not math.isfinite(self.rate):
            raise OptionValidationError(f"Risk-free rate must be finite, got {self.rate}")
        if not math.isfinite(self.dividend_yield) or self.dividend_yield < 0:
            raise OptionValidationError(
                f"Dividend yield must be non-negative, got {self.dividend_yield}"
            )
        if self.as_of is None:
            object.__setattr__(self, "as_of", datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "spot": self.spot,
            "rate": self.rate,
            "dividend_yield": self.dividend_yield,
            "as_of": self.as_of.isoformat(),
        }


@dataclass(frozen=True)
class AnalysisResult:
    """
    Price, Greeks and resolved volatility for one contract/snapshot pair.

    theta is per calendar day, vega per 1 volatility point and rho per
    1 rate point.
    """
    theoretical_price: float
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float
    implied_volatility: float
    time_to_expiry: float
    contract: OptionContract
    snapshot: MarketSnapshot
    volatility_source: VolatilitySource = VolatilitySource.GIVEN

    def to_dict(self) -> dict[str, Any]:
        return {
            "theoretical_price": self.theoretical_price,
            "delta": self.delta,
            "gamma": self.gamma,
            "theta": self.theta,
            "vega": self.vega,
            "rho": self.rho,
            "implied_volatility": self.implied_volatility,
            "time_to_expiry": self.time_to_expiry,
            "volatility_source": self.volatility_source.value,
            "contract": self.contract.to_dict(),
            "snapshot": self.snapshot.to_dict(),
        }


@dataclass(frozen=True)
class TradingSignal:
    """Trading recommendation derived from an analysis."""
    action: TradingAction
    confidence: float
    rationale: str
    fair_value: float
    market_price: float
    edge: float  # (fair - market) / market

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action.value,
            "confidence": self.confidence,
            "rationale": self.rationale,
            "fair_value": self.fair_value,
            "market_price": self.market_price,
            "edge": self.edge,
        }


@dataclass(frozen=True)
class TargetPnL:
    """Position revaluation at one hypothetical underlying price."""
    target_price: float
    revalued_option_price: float
    total_target_value: float
    pnl: float
    pnl_percent: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "target_price": self.target_price,
            "revalued_option_price": self.revalued_option_price,
            "total_target_value": self.total_target_value,
            "pnl": self.pnl,
            "pnl_percent": self.pnl_percent,
        }


@dataclass(frozen=True)
class PnLProjection:
    """Scenario PnL for a position across up to three target prices."""
    position_size: int
    current_option_price: float
    total_investment: float
    targets: tuple[TargetPnL, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "position_size": self.position_size,
            "current_option_price": self.current_option_price,
            "total_investment": self.total_investment,
            "targets": [t.to_dict() for t in self.targets],
        }
