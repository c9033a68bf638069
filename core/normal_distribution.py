"""
Normal Distribution Module
==========================

Standard normal CDF and PDF used by the Black-Scholes pricer.

The CDF uses the Abramowitz-Stegun rational approximation (formula 7.1.26),
accurate to roughly 1e-7. The sign is applied to the correction term so
that cdf(-x) == 1 - cdf(x) holds exactly. The coefficients sum to
0.999999999 rather than 1, so x == 0 is returned directly as 0.5.
"""

from __future__ import annotations

import math


# Abramowitz-Stegun 7.1.26 coefficients
A1 = 0.254829592
A2 = -0.284496736
A3 = 1.421413741
A4 = -1.453152027
A5 = 1.061405429
P = 0.3275911

_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def cdf(x: float) -> float:
    """
    Standard normal cumulative distribution function.

    Args:
        x: Any finite real

    Returns:
        Probability in [0, 1]
    """
    if x == 0:
        return 0.5

    sign = -1.0 if x < 0 else 1.0
    z = abs(x) / math.sqrt(2.0)

    t = 1.0 / (1.0 + P * z)
    y = 1.0 - (((((A5 * t + A4) * t) + A3) * t + A2) * t + A1) * t * math.exp(-z * z)

    return 0.5 * (1.0 + sign * y)


def pdf(x: float) -> float:
    """Standard normal probability density function."""
    return _INV_SQRT_2PI * math.exp(-0.5 * x * x)
