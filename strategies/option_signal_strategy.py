"""
Option Signal Strategy
======================

Turns an option analysis into a BUY/SELL/HOLD/AVOID recommendation by
comparing the theoretical fair value with the observed market price.

Rules:
- No market price: HOLD with zero confidence
- Less than ~1 week to expiry: AVOID, whatever the edge
- edge > threshold: BUY; edge < -threshold: SELL (strict comparisons)
- Otherwise HOLD, with confidence measuring how fairly priced it is
"""

from __future__ import annotations

import logging
from typing import Any

from core.config import AnalyzerConfig
from core.option_models import (
    AnalysisResult,
    MarketSnapshot,
    OptionContract,
    OptionValidationError,
    TradingAction,
    TradingSignal,
)


logger = logging.getLogger(__name__)


class OptionSignalStrategy:
    """
    Mispricing-based signal generation for a single option.

    Stateless apart from its thresholds.
    """

    AVOID_CONFIDENCE = 0.8

    def __init__(self, config: AnalyzerConfig | dict[str, Any] | None = None):
        if config is None:
            config = AnalyzerConfig()
        elif isinstance(config, dict):
            config = AnalyzerConfig.from_dict(config)

        self._edge_threshold = config.edge_threshold
        self._min_time_to_expiry = config.min_time_to_expiry

    @property
    def edge_threshold(self) -> float:
        return self._edge_threshold

    def classify(
        self,
        contract: OptionContract,
        snapshot: MarketSnapshot,
        result: AnalysisResult,
        edge_threshold: float | None = None,
    ) -> TradingSignal:
        """
        Generate a trading signal.

        Args:
            contract: Analyzed contract (supplies the market price)
            snapshot: Market snapshot used for the analysis
            result: Output of analyze()
            edge_threshold: Relative mispricing needed to trade; defaults
                to the configured threshold

        Returns:
            TradingSignal
        """
        threshold = self._edge_threshold if edge_threshold is None else edge_threshold
        if threshold <= 0:
            raise OptionValidationError(f"Edge threshold must be positive, got {threshold}")

        fair_value = result.theoretical_price

        if contract.market_price is None:
            return TradingSignal(
                action=TradingAction.HOLD,
                confidence=0.0,
                rationale="No market price available for analysis",
                fair_value=fair_value,
                market_price=0.0,
                edge=0.0,
            )

        market_price = contract.market_price
        edge = (fair_value - market_price) / market_price if market_price > 0 else 0.0

        if result.time_to_expiry < self._min_time_to_expiry:
            logger.debug(
                f"{contract.underlying}: AVOID, {result.time_to_expiry:.4f}y to expiry "
                f"(edge {edge:.2%})"
            )
            return TradingSignal(
                action=TradingAction.AVOID,
                confidence=self.AVOID_CONFIDENCE,
                rationale=(
                    f"Option expires too soon ({result.time_to_expiry:.3f} years remaining)"
                ),
                fair_value=fair_value,
                market_price=market_price,
                edge=edge,
            )

        confidence = min(abs(edge) / threshold, 1.0)
        prices = f"Fair value: ${fair_value:.2f} vs Market: ${market_price:.2f}"

        if edge > threshold:
            action = TradingAction.BUY
            rationale = f"Option undervalued by {edge * 100:.1f}%. {prices}"
        elif edge < -threshold:
            action = TradingAction.SELL
            rationale = f"Option overvalued by {abs(edge) * 100:.1f}%. {prices}"
        else:
            action = TradingAction.HOLD
            rationale = f"Option fairly valued (edge: {edge * 100:.1f}%). {prices}"
            # HOLD confidence is certainty of fair pricing
            confidence = 1.0 - confidence

        rationale += (
            f"\nGreeks - Delta: {result.delta:.3f}, Theta: {result.theta:.2f}, "
            f"Vega: {result.vega:.2f}"
        )

        logger.debug(
            f"{contract.underlying}: {action.value} edge={edge:.2%} confidence={confidence:.2f}"
        )
        return TradingSignal(
            action=action,
            confidence=confidence,
            rationale=rationale,
            fair_value=fair_value,
            market_price=market_price,
            edge=edge,
        )


def classify(
    contract: OptionContract,
    snapshot: MarketSnapshot,
    result: AnalysisResult,
    edge_threshold: float = 0.10,
) -> TradingSignal:
    """Classify with default settings and the given edge threshold."""
    return OptionSignalStrategy().classify(contract, snapshot, result, edge_threshold)
