"""Tests for filter parsing and resolution."""

import pytest

from gauge.benchmark import Benchmark
from gauge.errors import (
    BenchmarkNotFoundError,
    MalformedFilterError,
    TestcaseNotFoundError,
)
from gauge.filters import BenchmarkFilter, resolve_filter, resolve_filters
from gauge.registry import BenchmarkRegistry


class MockBenchmark(Benchmark):
    """A mock benchmark for filter testing."""

    def test_body(self):
        """Mock body."""
        pass


@pytest.fixture
def registry():
    registry = BenchmarkRegistry()
    registry.register(1, MockBenchmark, "A", "b2")
    registry.register(2, MockBenchmark, "A", "b1")
    registry.register(3, MockBenchmark, "B", "b1")
    registry.register(4, MockBenchmark, "B", "only_b")
    return registry


def names(descriptors):
    return [d.full_name for d in descriptors]


@pytest.mark.parametrize(
    "expression,testcase,benchmark",
    [
        ("A.b1", "A", "b1"),
        ("*.*", "*", "*"),
        ("A.*", "A", "*"),
        ("*.b1", "*", "b1"),
        ("A.b.c", "A", "b.c"),
    ],
)
def test_parse(expression, testcase, benchmark):
    """Test splitting expressions at the first separator."""
    parsed = BenchmarkFilter.parse(expression)
    assert (parsed.testcase, parsed.benchmark) == (testcase, benchmark)
    assert str(parsed) == expression


@pytest.mark.parametrize("expression", ["A", "", ".b1", "A.", "."])
def test_parse_malformed(expression):
    """Test that a missing separator or empty side is rejected."""
    with pytest.raises(MalformedFilterError) as excinfo:
        BenchmarkFilter.parse(expression)
    assert excinfo.value.expression == expression


def test_wildcard_both(registry):
    """Test that *.* selects every benchmark in id order."""
    selected = resolve_filter(BenchmarkFilter.parse("*.*"), registry)
    assert names(selected) == ["A.b2", "A.b1", "B.b1", "B.only_b"]


def test_wildcard_testcase(registry):
    """Test that *.name runs the benchmark under every testcase declaring it."""
    selected = resolve_filter(BenchmarkFilter.parse("*.b1"), registry)
    assert names(selected) == ["A.b1", "B.b1"]

    with pytest.raises(BenchmarkNotFoundError):
        resolve_filter(BenchmarkFilter.parse("*.missing"), registry)


def test_wildcard_benchmark(registry):
    """Test that name.* runs every benchmark of the testcase."""
    selected = resolve_filter(BenchmarkFilter.parse("A.*"), registry)
    assert names(selected) == ["A.b1", "A.b2"]

    with pytest.raises(TestcaseNotFoundError) as excinfo:
        resolve_filter(BenchmarkFilter.parse("Z.*"), registry)
    assert excinfo.value.testcase == "Z"


def test_literal(registry):
    """Test that a literal pair selects exactly one benchmark."""
    selected = resolve_filter(BenchmarkFilter.parse("B.only_b"), registry)
    assert names(selected) == ["B.only_b"]

    with pytest.raises(TestcaseNotFoundError):
        resolve_filter(BenchmarkFilter.parse("Z.b1"), registry)

    with pytest.raises(BenchmarkNotFoundError) as excinfo:
        resolve_filter(BenchmarkFilter.parse("A.only_b"), registry)
    assert excinfo.value.testcase == "A"


def test_overlapping_filters_not_deduplicated(registry):
    """Test that a benchmark matched by two filters is selected twice."""
    selected = resolve_filters(["A.b1", "*.b1"], registry)
    assert names(selected) == ["A.b1", "A.b1", "B.b1"]


def test_bad_filter_fails_whole_resolution(registry):
    """Test that one bad filter aborts resolution of all of them."""
    with pytest.raises(MalformedFilterError):
        resolve_filters(["A.*", "broken"], registry)
