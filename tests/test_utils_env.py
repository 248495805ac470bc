"""Tests for the environment variable utility."""

import pytest

from gauge.utils.env import EnvVarTypeError, get_env


def test_get_env_basic(monkeypatch):
    """Test getting set variables and missing variables with defaults."""
    monkeypatch.setenv("GAUGE_TEST_VAR", "test_value")
    monkeypatch.delenv("GAUGE_MISSING_VAR", raising=False)

    assert get_env("GAUGE_TEST_VAR") == "test_value"
    assert get_env("GAUGE_MISSING_VAR", default="default") == "default"
    assert get_env("GAUGE_MISSING_VAR") is None


def test_get_env_coercion(monkeypatch):
    """Test type coercion for common types."""
    monkeypatch.setenv("GAUGE_BOOL_TRUE", "true")
    monkeypatch.setenv("GAUGE_BOOL_FALSE", "0")
    monkeypatch.setenv("GAUGE_INT", "123")
    monkeypatch.setenv("GAUGE_FLOAT", "1.5")
    monkeypatch.setenv("GAUGE_LIST", "a, b, c ")

    assert get_env("GAUGE_BOOL_TRUE", as_type=bool) is True
    assert get_env("GAUGE_BOOL_FALSE", as_type=bool) is False
    assert get_env("GAUGE_INT", as_type=int) == 123
    assert get_env("GAUGE_FLOAT", as_type=float) == 1.5
    assert get_env("GAUGE_LIST", as_type=list) == ["a", "b", "c"]


def test_get_env_coercion_failure(monkeypatch):
    """Test that unconvertible values raise EnvVarTypeError."""
    monkeypatch.setenv("GAUGE_WARMUP_TIME", "soon")

    with pytest.raises(EnvVarTypeError) as excinfo:
        get_env("GAUGE_WARMUP_TIME", default=2.0, as_type=float)
    assert excinfo.value.name == "GAUGE_WARMUP_TIME"
