"""
Tests for the Text Report
=========================
"""

import pytest

from core.option_analysis import analyze
from core.pnl_projection import project
from core.report import (
    format_currency,
    format_percent,
    format_report,
    format_signed_currency,
)
from strategies.option_signal_strategy import classify
from tests.fixtures import make_contract


class TestFormatting:

    @pytest.mark.parametrize("value,expected", [
        (0.0, "$0.00"),
        (2.5, "$2.50"),
        (1234.567, "$1,234.57"),
        (-1234.5, "-$1,234.50"),
    ])
    def test_format_currency(self, value, expected):
        assert format_currency(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (1234.56, "+$1,234.56"),
        (0.0, "+$0.00"),
        (-12.0, "-$12.00"),
    ])
    def test_format_signed_currency(self, value, expected):
        assert format_signed_currency(value) == expected

    def test_format_percent(self):
        assert format_percent(0.2468) == "24.7%"
        assert format_percent(-0.05) == "-5.0%"


class TestReport:

    def test_sections_without_market_price(self, snapshot, atm_call):
        result = analyze(atm_call, snapshot, volatility_estimate=0.2)
        signal = classify(atm_call, snapshot, result)
        report = format_report(result, signal)

        assert "TEST 100 CALL exp 2026-02-04" in report
        assert "THEORETICAL PRICING" in report
        assert "GREEKS" in report
        assert "TRADING RECOMMENDATION" not in report
        assert "PNL ANALYSIS" not in report
        assert f"Fair value:  ${result.theoretical_price:.2f}" in report
        assert "20.0% (given)" in report

    def test_greek_units(self, snapshot, atm_call):
        result = analyze(atm_call, snapshot, volatility_estimate=0.2)
        report = format_report(result, classify(atm_call, snapshot, result))

        assert f"Delta: {result.delta:.4f}" in report
        assert f"Theta: ${result.theta:.2f}/day" in report
        assert f"Vega:  ${result.vega:.2f}/1% vol" in report
        assert f"Rho:   ${result.rho:.2f}/1% rate" in report

    def test_trading_and_pnl_sections(self, snapshot):
        contract = make_contract(market_price=2.00)
        result = analyze(contract, snapshot, volatility_estimate=0.2)
        signal = classify(contract, snapshot, result)
        projection = project(result, signal, 10, [110.0])
        report = format_report(result, signal, projection)

        assert "TRADING RECOMMENDATION" in report
        assert "Action:       BUY" in report
        assert "Market price: $2.00" in report
        assert "undervalued" in report

        assert "PNL ANALYSIS" in report
        assert "Position size:    10 contracts" in report
        assert "Total investment: $2,000.00" in report
        target = projection.targets[0]
        assert (
            f"Target 1: $110.00 | Option Value: ${target.revalued_option_price:.2f} | "
            f"PnL: {format_signed_currency(target.pnl)} | "
            f"Return: +{target.pnl_percent:.1f}%"
        ) in report

    def test_negative_return_rendering(self, snapshot):
        contract = make_contract(market_price=2.00)
        result = analyze(contract, snapshot, volatility_estimate=0.2)
        signal = classify(contract, snapshot, result)
        projection = project(result, signal, 1, [90.0])
        report = format_report(result, signal, projection)

        target = projection.targets[0]
        assert f"PnL: -${abs(target.pnl):,.2f}" in report
        assert f"Return: {target.pnl_percent:.1f}%" in report
        assert "Return: +" not in report
