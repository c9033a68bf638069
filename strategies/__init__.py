"""
Option Analyzer - Strategies Module
===================================

Signal generation on top of the core analysis.
"""

from strategies.option_signal_strategy import OptionSignalStrategy, classify

__all__ = [
    "OptionSignalStrategy",
    "classify",
]
