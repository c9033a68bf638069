"""
Logging Configuration Module
============================

Centralized logging configuration for the option analyzer.

Features:
- Consistent format and verbosity across modules
- Module-specific log level overrides (from the ``logging`` config section)
- Timing decorator that flags slow calculations
"""

from __future__ import annotations

import functools
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable


# Module-specific log level defaults
MODULE_LOG_LEVELS = {
    "core.black_scholes": logging.INFO,
    "core.implied_volatility": logging.INFO,
    "core.option_analysis": logging.INFO,
    "core.pnl_projection": logging.INFO,
    "strategies.option_signal_strategy": logging.INFO,
}


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


@dataclass
class LoggingConfig:
    """
    Centralized logging configuration.

    Provides consistent verbosity across the analyzer.
    """
    root_level: int = logging.INFO
    format_string: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    module_levels: dict[str, int] = field(default_factory=lambda: MODULE_LOG_LEVELS.copy())

    @classmethod
    def from_dict(cls, section: dict[str, Any] | None) -> "LoggingConfig":
        """Build from the ``logging`` config section."""
        section = section or {}
        config = cls()

        if "level" in section:
            config.root_level = _parse_level(section["level"])
        if "format" in section:
            config.format_string = section["format"]
        if "date_format" in section:
            config.date_format = section["date_format"]
        for module_name, level in (section.get("module_levels") or {}).items():
            config.module_levels[module_name] = _parse_level(level)

        return config

    def apply(self) -> None:
        """Apply logging configuration to the root logger and module loggers."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.root_level)

        # Clear existing handlers
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        handler = logging.StreamHandler()
        handler.setLevel(self.root_level)
        handler.setFormatter(logging.Formatter(self.format_string, self.date_format))
        root_logger.addHandler(handler)

        for module_name, level in self.module_levels.items():
            logging.getLogger(module_name).setLevel(level)

    def set_module_level(self, module_name: str, level: int) -> None:
        """Set log level for a specific module."""
        self.module_levels[module_name] = level
        logging.getLogger(module_name).setLevel(level)

    def set_all_debug(self) -> None:
        """Set all analyzer loggers to DEBUG."""
        self.root_level = logging.DEBUG
        for module_name in self.module_levels:
            self.set_module_level(module_name, logging.DEBUG)


def timed(
    logger: logging.Logger | None = None,
    threshold_ms: float = 50.0,
    operation_name: str | None = None,
):
    """
    Decorator to time function execution.

    Args:
        logger: Logger to use (default: function's module logger)
        threshold_ms: Log warning if exceeds this threshold
        operation_name: Custom operation name (default: function name)

    Example:
        @timed(threshold_ms=10.0)
        def analyze(...):
            ...
    """
    def decorator(func: Callable) -> Callable:
        log = logger or logging.getLogger(func.__module__)
        name = operation_name or func.__name__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration_ms = (time.perf_counter() - start) * 1000

                if duration_ms > threshold_ms:
                    log.warning(f"Slow operation: {name} took {duration_ms:.2f}ms")
                else:
                    log.debug(f"{name} completed in {duration_ms:.2f}ms")

        return wrapper
    return decorator


def configure_logging(config: LoggingConfig | dict[str, Any] | None = None) -> LoggingConfig:
    """
    Configure logging for the analyzer.

    Args:
        config: LoggingConfig, a raw ``logging`` config section, or None
            for defaults

    Returns:
        Applied configuration
    """
    if config is None:
        config = LoggingConfig()
    elif isinstance(config, dict):
        config = LoggingConfig.from_dict(config)

    config.apply()
    return config
