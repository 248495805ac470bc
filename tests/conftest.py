"""Shared pytest configuration."""

from io import StringIO

import pytest

from gauge.utils.logger import Logger


@pytest.fixture(autouse=True)
def log_output():
    """Configure the gauge logger into a buffer for every test."""
    output = StringIO()
    Logger.configure(level="DEBUG", output=output, timestamps=False)
    return output
