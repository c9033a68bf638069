"""
PnL Projection Module
=====================

What-if revaluation of an option position at hypothetical underlying
prices.

Only spot changes between the analysis and each scenario: strike, time to
expiry, rate, dividend yield and the resolved volatility are taken from the
analysis, not re-solved.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from core import black_scholes
from core.config import AnalyzerConfig
from core.option_models import (
    AnalysisResult,
    OptionValidationError,
    PnLProjection,
    TargetPnL,
    TradingSignal,
)


logger = logging.getLogger(__name__)


def project(
    result: AnalysisResult,
    signal: TradingSignal,
    position_size: int | None,
    target_prices: Sequence[float] | None,
    config: AnalyzerConfig | None = None,
) -> PnLProjection | None:
    """
    Project position PnL at up to three target underlying prices.

    Args:
        result: Analysis to revalue from
        signal: Signal for the same analysis (supplies the market price)
        position_size: Number of contracts
        target_prices: Hypothetical underlying prices; entries beyond the
            configured maximum (3) are ignored
        config: Analyzer settings (contract multiplier, max targets)

    Returns:
        PnLProjection, or None when no position size or no targets given

    Raises:
        OptionValidationError: Negative/non-integer position size or a
            non-positive target price
    """
    config = config or AnalyzerConfig()

    if not position_size or not target_prices:
        return None

    if isinstance(position_size, bool) or not isinstance(position_size, int) or position_size < 0:
        raise OptionValidationError(
            f"Position size must be a positive whole number of contracts, got {position_size}"
        )

    targets = list(target_prices)
    if len(targets) > config.max_targets:
        logger.debug(
            f"Ignoring {len(targets) - config.max_targets} target(s) beyond the first "
            f"{config.max_targets}"
        )
        targets = targets[:config.max_targets]

    for target in targets:
        if not target > 0:
            raise OptionValidationError(f"Target prices must be positive, got {target}")

    multiplier = config.contract_multiplier
    current_option_price = (
        signal.market_price if signal.market_price > 0 else result.theoretical_price
    )
    total_investment = position_size * current_option_price * multiplier

    contract = result.contract
    snapshot = result.snapshot

    projections = []
    for target in targets:
        revalued = black_scholes.price(
            target,
            contract.strike,
            result.time_to_expiry,
            snapshot.rate,
            result.implied_volatility,
            contract.option_type,
            snapshot.dividend_yield,
        )
        total_target_value = position_size * revalued * multiplier
        pnl = total_target_value - total_investment
        pnl_percent = 100.0 * pnl / total_investment if total_investment != 0 else 0.0

        projections.append(
            TargetPnL(
                target_price=target,
                revalued_option_price=revalued,
                total_target_value=total_target_value,
                pnl=pnl,
                pnl_percent=pnl_percent,
            )
        )

    logger.debug(
        f"{contract.underlying}: projected {len(projections)} target(s) for "
        f"{position_size} contract(s), investment ${total_investment:,.2f}"
    )
    return PnLProjection(
        position_size=position_size,
        current_option_price=current_option_price,
        total_investment=total_investment,
        targets=tuple(projections),
    )
