"""
Option Analysis
===============

Resolves the volatility to use for a contract and assembles the full
analysis result (price, Greeks, volatility, time to expiry).

Volatility precedence, evaluated once per call:
1. An explicit estimate supplied by the caller
2. Implied volatility solved from the contract's market price
3. The configured default (0.30) when 1 is absent and 2 is absent or fails
"""

from __future__ import annotations

import logging
import math

from core import black_scholes
from core.config import AnalyzerConfig
from core.implied_volatility import solve_implied_volatility
from core.logging_config import timed
from core.option_models import (
    AnalysisResult,
    MarketSnapshot,
    OptionContract,
    OptionValidationError,
    VolatilitySource,
    time_to_expiry,
)


logger = logging.getLogger(__name__)


def resolve_volatility(
    contract: OptionContract,
    snapshot: MarketSnapshot,
    T: float,
    volatility_estimate: float | None = None,
    config: AnalyzerConfig | None = None,
) -> tuple[float, VolatilitySource]:
    """
    Pick the volatility that feeds the final Greeks.

    Returns:
        (volatility, source)
    """
    config = config or AnalyzerConfig()

    if volatility_estimate is not None:
        return volatility_estimate, VolatilitySource.GIVEN

    if contract.market_price is not None:
        solver = config.iv_solver
        implied = solve_implied_volatility(
            contract.market_price,
            snapshot.spot,
            contract.strike,
            T,
            snapshot.rate,
            contract.option_type,
            snapshot.dividend_yield,
            max_iterations=solver.max_iterations,
            tolerance=solver.tolerance,
            initial_guess=solver.initial_guess,
            min_volatility=solver.min_volatility,
            max_volatility=solver.max_volatility,
        )
        if implied is not None:
            return implied, VolatilitySource.IMPLIED

        logger.info(
            f"{contract.underlying}: implied volatility unsolvable for market price "
            f"{contract.market_price:.4f}, using default {config.default_volatility:.2%}"
        )

    return config.default_volatility, VolatilitySource.DEFAULT


@timed(threshold_ms=50.0)
def analyze(
    contract: OptionContract,
    snapshot: MarketSnapshot,
    volatility_estimate: float | None = None,
    config: AnalyzerConfig | None = None,
) -> AnalysisResult:
    """
    Price a contract and compute its Greeks.

    Args:
        contract: Option under analysis
        snapshot: Market inputs (spot, rate, dividend yield, as-of time)
        volatility_estimate: Explicit volatility (decimal); None to derive it
        config: Analyzer settings (default volatility, IV solver tuning)

    Returns:
        Immutable AnalysisResult holding references to contract and snapshot

    Raises:
        OptionValidationError: Non-positive or non-finite volatility estimate,
            or expiry not after the snapshot time
    """
    config = config or AnalyzerConfig()

    if volatility_estimate is not None and not (
        math.isfinite(volatility_estimate) and volatility_estimate > 0
    ):
        raise OptionValidationError(
            f"Volatility estimate must be positive, got {volatility_estimate}"
        )

    T = time_to_expiry(contract.expiry, snapshot.as_of)
    if T <= 0:
        raise OptionValidationError(
            f"Expiration {contract.expiry.isoformat()} must be after "
            f"{snapshot.as_of.isoformat()}"
        )

    sigma, source = resolve_volatility(contract, snapshot, T, volatility_estimate, config)

    S = snapshot.spot
    K = contract.strike
    r = snapshot.rate
    q = snapshot.dividend_yield
    option_type = contract.option_type

    greeks = black_scholes.calculate_greeks(S, K, T, r, sigma, option_type, q)
    result = AnalysisResult(
        theoretical_price=black_scholes.price(S, K, T, r, sigma, option_type, q),
        delta=greeks["delta"],
        gamma=greeks["gamma"],
        theta=greeks["theta"],
        vega=greeks["vega"],
        rho=greeks["rho"],
        implied_volatility=sigma,
        time_to_expiry=T,
        contract=contract,
        snapshot=snapshot,
        volatility_source=source,
    )

    logger.debug(
        f"{contract.underlying} {K} {option_type.value}: price={result.theoretical_price:.4f} "
        f"vol={sigma:.4f} ({source.value}) T={T:.4f}y"
    )
    return result
