"""
Implied Volatility Solver
=========================

Newton-Raphson inversion of the Black-Scholes price.

    sigma_{n+1} = sigma_n - (BS_price(sigma_n) - market_price) / vega(sigma_n)

vega is used unscaled (per unit of volatility). Each iterate is clamped to
[min_volatility, max_volatility]. The solver reports failure as None rather
than raising; callers decide what to substitute.
"""

from __future__ import annotations

import logging

from core import black_scholes
from core.option_models import OptionType


logger = logging.getLogger(__name__)


MAX_ITERATIONS = 100
TOLERANCE = 1e-6
INITIAL_GUESS = 0.30
MIN_VOLATILITY = 0.001
MAX_VOLATILITY = 5.0


def solve_implied_volatility(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    option_type: OptionType,
    q: float = 0.0,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE,
    initial_guess: float = INITIAL_GUESS,
    min_volatility: float = MIN_VOLATILITY,
    max_volatility: float = MAX_VOLATILITY,
) -> float | None:
    """
    Calculate implied volatility using Newton-Raphson.

    Args:
        market_price: Observed option price
        S: Spot price of the underlying
        K: Strike price
        T: Time to expiry in years
        r: Risk-free rate (annualized)
        option_type: CALL or PUT
        q: Continuous dividend yield (annualized)
        max_iterations: Iteration budget
        tolerance: Absolute price tolerance for convergence
        initial_guess: Starting volatility
        min_volatility: Lower clamp applied after each step
        max_volatility: Upper clamp applied after each step

    Returns:
        Implied volatility as a decimal, or None when no solution was found
        (expired contract, zero vega, or no convergence)
    """
    if T <= 0 or market_price <= 0:
        logger.debug(f"IV solve skipped: T={T:.6f}, market_price={market_price:.4f}")
        return None

    sigma = initial_guess

    for iteration in range(max_iterations):
        bs_price = black_scholes.price(S, K, T, r, sigma, option_type, q)
        # Unscaled vega: dPrice/dSigma
        vega = black_scholes.vega(S, K, T, r, sigma, q) * 100

        price_diff = bs_price - market_price

        if abs(price_diff) < tolerance:
            logger.debug(f"IV converged to {sigma:.6f} after {iteration} iterations")
            return sigma

        if vega == 0:
            logger.debug(f"IV solve stopped: zero vega at sigma={sigma:.6f}")
            return None

        sigma -= price_diff / vega
        sigma = max(min_volatility, min(sigma, max_volatility))

    logger.debug(
        f"IV did not converge in {max_iterations} iterations "
        f"(last sigma={sigma:.6f}, market_price={market_price:.4f})"
    )
    return None
