"""
Black-Scholes Pricing Module
============================

Closed-form European option pricing with continuous dividend yield and
the five first/second order Greeks.

Conventions:
- theta is per calendar day (annual theta / 365.25)
- vega is per 1 volatility point (1%)
- rho is per 1 rate point (1%)

At or past expiry (T <= 0) every function falls back to intrinsic value
and boundary Greeks. A non-positive sigma takes the same path.
"""

from __future__ import annotations

import math

from core.normal_distribution import cdf, pdf
from core.option_models import OptionType


DAYS_PER_YEAR = 365.25


def _is_degenerate(T: float, sigma: float) -> bool:
    return T <= 0 or sigma <= 0


def _d1_d2(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float,
) -> tuple[float, float, float]:
    """Return (adjusted_spot, d1, d2)."""
    adjusted_spot = S * math.exp(-q * T)
    sigma_sqrt_T = sigma * math.sqrt(T)
    d1 = (math.log(adjusted_spot / K) + (r + 0.5 * sigma * sigma) * T) / sigma_sqrt_T
    d2 = d1 - sigma_sqrt_T
    return adjusted_spot, d1, d2


def intrinsic_value(S: float, K: float, option_type: OptionType) -> float:
    """Exercise value ignoring time value."""
    if option_type == OptionType.CALL:
        return max(S - K, 0.0)
    return max(K - S, 0.0)


def price(
    S: float,  # Spot price
    K: float,  # Strike
    T: float,  # Time to expiry (years)
    r: float,  # Risk-free rate
    sigma: float,  # Volatility
    option_type: OptionType,
    q: float = 0.0,  # Continuous dividend yield
) -> float:
    """
    Calculate Black-Scholes option price with continuous dividend yield.

    Black-Scholes Formula (with dividend yield q):
        Call: C = S' * N(d1) - K * e^(-rT) * N(d2)
        Put:  P = K * e^(-rT) * N(-d2) - S' * N(-d1)

    Where:
        S' = S * e^(-qT)  (dividend-adjusted spot)
        d1 = [ln(S'/K) + (r + sigma^2/2) * T] / (sigma * sqrt(T))
        d2 = d1 - sigma * sqrt(T)

    Args:
        S: Current spot price of the underlying asset
        K: Strike price
        T: Time to expiry in years
        r: Risk-free rate (annualized decimal, e.g. 0.05 for 5%)
        sigma: Volatility (annualized decimal, e.g. 0.20 for 20%)
        option_type: CALL or PUT
        q: Continuous dividend yield (annualized decimal)

    Returns:
        Theoretical option price; intrinsic value when T <= 0
    """
    if _is_degenerate(T, sigma):
        return intrinsic_value(S, K, option_type)

    adjusted_spot, d1, d2 = _d1_d2(S, K, T, r, sigma, q)
    discount_factor = math.exp(-r * T)

    if option_type == OptionType.CALL:
        return adjusted_spot * cdf(d1) - K * discount_factor * cdf(d2)
    return K * discount_factor * cdf(-d2) - adjusted_spot * cdf(-d1)


def delta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType,
    q: float = 0.0,
) -> float:
    """
    Sensitivity of price to the underlying.

    Call delta lies in [0, 1], put delta in [-1, 0]. At expiry the call is
    1.0 only when strictly in the money, likewise -1.0 for the put.
    """
    if _is_degenerate(T, sigma):
        if option_type == OptionType.CALL:
            return 1.0 if S > K else 0.0
        return -1.0 if S < K else 0.0

    _, d1, _ = _d1_d2(S, K, T, r, sigma, q)
    dividend_discount = math.exp(-q * T)

    if option_type == OptionType.CALL:
        return dividend_discount * cdf(d1)
    return -dividend_discount * cdf(-d1)


def gamma(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float = 0.0,
) -> float:
    """Rate of change of delta; identical for calls and puts."""
    if _is_degenerate(T, sigma):
        return 0.0

    _, d1, _ = _d1_d2(S, K, T, r, sigma, q)
    return math.exp(-q * T) * pdf(d1) / (S * sigma * math.sqrt(T))


def theta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType,
    q: float = 0.0,
) -> float:
    """
    Daily time decay.

    Annual theta has three terms: pure decay, interest on the strike, and
    the dividend carry. The sum is divided by 365.25.
    """
    if _is_degenerate(T, sigma):
        return 0.0

    adjusted_spot, d1, d2 = _d1_d2(S, K, T, r, sigma, q)
    discount_factor = math.exp(-r * T)

    decay = -adjusted_spot * pdf(d1) * sigma / (2 * math.sqrt(T))
    if option_type == OptionType.CALL:
        annual = (
            decay
            + q * adjusted_spot * cdf(d1)
            - r * K * discount_factor * cdf(d2)
        )
    else:
        annual = (
            decay
            - q * adjusted_spot * cdf(-d1)
            + r * K * discount_factor * cdf(-d2)
        )

    return annual / DAYS_PER_YEAR


def vega(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float = 0.0,
) -> float:
    """Price change per 1 volatility point; identical for calls and puts."""
    if _is_degenerate(T, sigma):
        return 0.0

    adjusted_spot, d1, _ = _d1_d2(S, K, T, r, sigma, q)
    return adjusted_spot * pdf(d1) * math.sqrt(T) / 100


def rho(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType,
    q: float = 0.0,
) -> float:
    """Price change per 1 rate point."""
    if _is_degenerate(T, sigma):
        return 0.0

    _, _, d2 = _d1_d2(S, K, T, r, sigma, q)
    discount_factor = math.exp(-r * T)

    if option_type == OptionType.CALL:
        return K * T * discount_factor * cdf(d2) / 100
    return -K * T * discount_factor * cdf(-d2) / 100


def calculate_greeks(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    option_type: OptionType,
    q: float = 0.0,
) -> dict[str, float]:
    """
    Calculate all five Greeks.

    Returns:
        Dictionary with delta, gamma, theta (per day), vega (per 1% vol)
        and rho (per 1% rate)
    """
    return {
        "delta": delta(S, K, T, r, sigma, option_type, q),
        "gamma": gamma(S, K, T, r, sigma, q),
        "theta": theta(S, K, T, r, sigma, option_type, q),
        "vega": vega(S, K, T, r, sigma, q),
        "rho": rho(S, K, T, r, sigma, option_type, q),
    }
