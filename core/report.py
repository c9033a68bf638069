"""
Analysis Report
===============

Plain-text rendering of an analysis, its trading signal and an optional
PnL projection.

Sections:
- Theoretical pricing (fair value, volatility)
- Greeks
- Trading recommendation (only when a market price was supplied)
- PnL analysis (only when a projection exists)
"""

from __future__ import annotations

from core.option_models import AnalysisResult, PnLProjection, TradingSignal


def format_currency(value: float) -> str:
    """$1,234.56 style; negative values as -$1,234.56."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_signed_currency(value: float) -> str:
    """+$1,234.56 / -$1,234.56."""
    return f"+{format_currency(value)}" if value >= 0 else format_currency(value)


def format_percent(fraction: float) -> str:
    """Decimal fraction rendered as a percentage with one decimal."""
    return f"{fraction * 100:.1f}%"


def _section(title: str) -> list[str]:
    return ["-" * 40, title, "-" * 40]


def format_report(
    result: AnalysisResult,
    signal: TradingSignal,
    projection: PnLProjection | None = None,
) -> str:
    """Render the results as a text report."""
    contract = result.contract
    lines = [
        "=" * 60,
        f"{contract.underlying} {contract.strike:g} {contract.option_type.value.upper()} "
        f"exp {contract.expiry.date().isoformat()}",
        "=" * 60,
        "",
    ]

    lines += _section("THEORETICAL PRICING")
    lines.append(f"  Fair value:  ${result.theoretical_price:.2f}")
    lines.append(
        f"  Volatility:  {format_percent(result.implied_volatility)} "
        f"({result.volatility_source.value})"
    )
    lines.append(f"  Time to expiry: {result.time_to_expiry:.4f} years")
    lines.append("")

    lines += _section("GREEKS")
    lines.append(f"  Delta: {result.delta:.4f}")
    lines.append(f"  Gamma: {result.gamma:.4f}")
    lines.append(f"  Theta: ${result.theta:.2f}/day")
    lines.append(f"  Vega:  ${result.vega:.2f}/1% vol")
    lines.append(f"  Rho:   ${result.rho:.2f}/1% rate")
    lines.append("")

    if signal.market_price > 0:
        lines += _section("TRADING RECOMMENDATION")
        lines.append(f"  Action:       {signal.action.value}")
        lines.append(f"  Confidence:   {format_percent(signal.confidence)}")
        lines.append(f"  Edge:         {format_percent(signal.edge)}")
        lines.append(f"  Market price: ${signal.market_price:.2f}")
        for rationale_line in signal.rationale.splitlines():
            lines.append(f"  {rationale_line}")
        lines.append("")

    if projection is not None:
        lines += _section("PNL ANALYSIS")
        lines.append(f"  Position size:    {projection.position_size} contracts")
        lines.append(f"  Total investment: {format_currency(projection.total_investment)}")
        for index, target in enumerate(projection.targets, start=1):
            lines.append(
                f"  Target {index}: ${target.target_price:.2f} | "
                f"Option Value: ${target.revalued_option_price:.2f} | "
                f"PnL: {format_signed_currency(target.pnl)} | "
                f"Return: {'+' if target.pnl_percent >= 0 else ''}{target.pnl_percent:.1f}%"
            )
        lines.append("")

    return "\n".join(lines)
