"""
Option Analyzer - Core Module
=============================

Pricing, implied volatility, analysis and PnL projection.
"""

from core.option_models import (
    AnalysisResult,
    MarketSnapshot,
    OptionContract,
    OptionType,
    OptionValidationError,
    PnLProjection,
    TargetPnL,
    TradingAction,
    TradingSignal,
    VolatilitySource,
    time_to_expiry,
)
from core.config import AnalyzerConfig, ConfigError, load_config
from core.implied_volatility import solve_implied_volatility
from core.option_analysis import analyze
from core.pnl_projection import project

__all__ = [
    "AnalysisResult",
    "MarketSnapshot",
    "OptionContract",
    "OptionType",
    "OptionValidationError",
    "PnLProjection",
    "TargetPnL",
    "TradingAction",
    "TradingSignal",
    "VolatilitySource",
    "time_to_expiry",
    "AnalyzerConfig",
    "ConfigError",
    "load_config",
    "solve_implied_volatility",
    "analyze",
    "project",
]
