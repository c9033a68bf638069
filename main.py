#!/usr/bin/env python3
"""
Option Analyzer - Command Line
==============================

Collects contract and market inputs, runs the analysis, classifies the
trade and projects scenario PnL, then prints a text report (or JSON).

Rates, dividend yield, volatility and edge threshold are entered as
percentages (5 means 5%).

Example:
    python main.py --symbol AAPL --strike 190 --expiry 2026-12-18 --type call \\
        --spot 187.5 --rate 4.5 --market-price 6.10 --position-size 5 \\
        --target 200 --target 210
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from core.config import AnalyzerConfig, ConfigError, load_config
from core.logging_config import LoggingConfig, configure_logging
from core.option_analysis import analyze
from core.option_models import (
    MarketSnapshot,
    OptionContract,
    OptionType,
    OptionValidationError,
)
from core.pnl_projection import project
from core.report import format_report
from strategies.option_signal_strategy import OptionSignalStrategy


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"


@dataclass
class AnalysisRequest:
    """Parsed and validated command-line inputs."""
    contract: OptionContract
    snapshot: MarketSnapshot
    volatility_estimate: float | None
    edge_threshold: float
    position_size: int | None
    target_prices: list[float]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Black-Scholes option fair value, Greeks, trade signal and scenario PnL",
    )
    parser.add_argument("--symbol", required=True, help="Underlying symbol")
    parser.add_argument("--strike", required=True, type=float, help="Strike price")
    parser.add_argument("--expiry", required=True, help="Expiration date (YYYY-MM-DD)")
    parser.add_argument(
        "--type", dest="option_type", required=True,
        choices=[t.value for t in OptionType], help="Option type",
    )
    parser.add_argument("--market-price", type=float, help="Observed option price")
    parser.add_argument("--spot", required=True, type=float, help="Underlying price")
    parser.add_argument("--rate", required=True, type=float, help="Risk-free rate, percent")
    parser.add_argument("--dividend-yield", type=float, default=0.0, help="Dividend yield, percent")
    parser.add_argument("--volatility", type=float, help="Volatility estimate, percent")
    parser.add_argument("--edge-threshold", type=float, help="Edge threshold, percent")
    parser.add_argument("--position-size", type=int, help="Number of contracts")
    parser.add_argument(
        "--target", dest="targets", type=float, action="append", default=[],
        help="Underlying target price (repeatable, up to 3)",
    )
    parser.add_argument(
        "--config",
        help=f"Path to YAML configuration (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a report")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def parse_expiry(value: str) -> datetime:
    """Parse an ISO date or datetime; dates mean midnight UTC."""
    try:
        expiry = datetime.fromisoformat(value)
    except ValueError:
        raise OptionValidationError(f"Invalid expiration date: {value!r}") from None
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    return expiry


def build_request(
    args: argparse.Namespace,
    config: AnalyzerConfig,
    now: datetime | None = None,
) -> AnalysisRequest:
    """
    Convert parsed arguments into core inputs.

    Raises:
        OptionValidationError: Missing symbol, non-future expiry, or any
            out-of-range field
    """
    now = now or datetime.now(timezone.utc)

    symbol = args.symbol.strip().upper()
    if not symbol:
        raise OptionValidationError("Please provide an underlying symbol")

    expiry = parse_expiry(args.expiry)
    if expiry <= now:
        raise OptionValidationError("Expiration date must be in the future")

    contract = OptionContract(
        underlying=symbol,
        strike=args.strike,
        expiry=expiry,
        option_type=OptionType(args.option_type),
        market_price=args.market_price,
    )
    snapshot = MarketSnapshot(
        spot=args.spot,
        rate=args.rate / 100,
        dividend_yield=args.dividend_yield / 100,
        as_of=now,
    )

    volatility = args.volatility / 100 if args.volatility is not None else None
    edge_threshold = (
        args.edge_threshold / 100 if args.edge_threshold is not None else config.edge_threshold
    )

    return AnalysisRequest(
        contract=contract,
        snapshot=snapshot,
        volatility_estimate=volatility,
        edge_threshold=edge_threshold,
        position_size=args.position_size,
        target_prices=[t for t in args.targets if t is not None],
    )


def _load_raw_config(config_path: str | None) -> dict:
    """Explicit path must exist; the default path is optional."""
    if config_path is not None:
        return load_config(config_path)
    if Path(DEFAULT_CONFIG_PATH).exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return {}


def run(argv: Sequence[str] | None = None) -> int:
    """Main entry point. Returns a process exit code."""
    args = build_parser().parse_args(argv)

    try:
        raw_config = _load_raw_config(args.config)
        config = AnalyzerConfig.from_dict(raw_config.get("analysis"))
        logging_config = LoggingConfig.from_dict(raw_config.get("logging"))
    except (FileNotFoundError, ConfigError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        logging_config.set_all_debug()
    configure_logging(logging_config)

    try:
        request = build_request(args, config)
        result = analyze(
            request.contract, request.snapshot, request.volatility_estimate, config
        )
        signal = OptionSignalStrategy(config).classify(
            request.contract, request.snapshot, result, request.edge_threshold
        )
        projection = project(
            result, signal, request.position_size, request.target_prices, config
        )
    except OptionValidationError as e:
        logger.error(f"Invalid input: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.json:
        payload = {
            "analysis": result.to_dict(),
            "signal": signal.to_dict(),
            "pnl": projection.to_dict() if projection else None,
        }
        print(json.dumps(payload, indent=2))
    else:
        print(format_report(result, signal, projection))

    return 0


if __name__ == "__main__":
    sys.exit(run())
