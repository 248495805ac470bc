"""Gauge utilities - shared helper functions and utilities."""

from gauge.utils.env import EnvVarError, EnvVarTypeError, get_env
from gauge.utils.logger import (
    Logger,
    LoggerNotConfiguredError,
    LogLevel,
)
from gauge.utils.timing import busy_wait

__all__ = [
    # Env
    "EnvVarError",
    "EnvVarTypeError",
    "get_env",
    # Logger
    "LogLevel",
    "Logger",
    "LoggerNotConfiguredError",
    # Timing
    "busy_wait",
]
