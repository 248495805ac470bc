"""Tests for the benchmark base classes."""

import pytest

from gauge.benchmark import Benchmark, BenchmarkState
from gauge.config_set import ConfigSet
from gauge.errors import IndexOutOfRangeError, InvariantError
from gauge.options import Options
from gauge.table import ResultTable
from gauge.time_benchmark import TimeBenchmark


class MatrixBenchmark(Benchmark):
    """Declares one configuration per symbol count option value."""

    def get_options(self, options):
        for cs in ConfigSet.product(symbols=options["symbols"]):
            self.add_configuration(cs)

    def test_body(self):
        """Mock body."""
        pass


class LoopBenchmark(TimeBenchmark):
    """Runs an empty timed loop."""

    def test_body(self):
        for _ in self.iterations():
            pass


class NoLoopBenchmark(TimeBenchmark):
    """Forgets to run the timed loop."""

    def test_body(self):
        pass


def test_defaults_without_descriptor():
    """Test identity defaults of an unregistered benchmark."""
    benchmark = MatrixBenchmark()
    assert benchmark.state == BenchmarkState.CREATED
    assert benchmark.benchmark_name == "MatrixBenchmark"
    assert benchmark.testcase_name == ""
    assert benchmark.runs() == 1
    assert benchmark.get_current_configuration() == ConfigSet()


def test_request_configurations():
    """Test enumerating configurations from options."""
    benchmark = MatrixBenchmark()
    benchmark.request_configurations(Options({"symbols": (16, 32)}))

    assert benchmark.state == BenchmarkState.CONFIGURATIONS_ENUMERATED
    assert benchmark.configuration_count() == 2
    assert benchmark.has_configurations()

    benchmark.set_current_configuration(1)
    assert benchmark.current_configuration_index == 1
    assert benchmark.get_current_configuration().get_int("symbols") == 32


def test_no_configurations():
    """Test that zero emitted configurations are allowed."""
    benchmark = MatrixBenchmark()
    benchmark.request_configurations(Options({"symbols": ()}))

    assert not benchmark.has_configurations()
    assert len(benchmark.get_current_configuration()) == 0


def test_set_current_configuration_out_of_range():
    """Test selecting a configuration outside the enumerated set."""
    benchmark = MatrixBenchmark()
    benchmark.request_configurations(Options({"symbols": (16,)}))

    with pytest.raises(IndexOutOfRangeError) as excinfo:
        benchmark.set_current_configuration(1)
    assert excinfo.value.count == 1

    with pytest.raises(IndexOutOfRangeError):
        benchmark.set_current_configuration(-1)


def test_set_current_configuration_before_enumeration():
    """Test that selection requires enumerated configurations."""
    with pytest.raises(InvariantError):
        MatrixBenchmark().set_current_configuration(0)


def test_transitions():
    """Test the per-configuration state cycle."""
    benchmark = MatrixBenchmark()
    benchmark.request_configurations(Options({"symbols": (16, 32)}))

    for state in (
        BenchmarkState.INITIALIZED,
        BenchmarkState.WARMUP,
        BenchmarkState.MEASURING,
        BenchmarkState.FINISHED,
        BenchmarkState.INITIALIZED,
    ):
        benchmark.transition(state)
    assert benchmark.state == BenchmarkState.INITIALIZED


def test_illegal_transition():
    """Test that skipping states is refused."""
    benchmark = MatrixBenchmark()
    with pytest.raises(InvariantError):
        benchmark.transition(BenchmarkState.MEASURING)

    benchmark.request_configurations(Options({"symbols": (16,)}))
    benchmark.transition(BenchmarkState.INITIALIZED)
    with pytest.raises(InvariantError):
        benchmark.set_current_configuration(0)


def test_time_benchmark_rejects_short_cycles():
    """Test that too-short cycles double the iteration count."""
    benchmark = LoopBenchmark()
    benchmark.min_time_us = 1000.0

    benchmark._elapsed_ns = 400_000
    assert benchmark.accept_measurement() is False
    assert benchmark.iteration_count() == 2

    benchmark._elapsed_ns = 3_000_000
    assert benchmark.accept_measurement() is True
    assert benchmark.iteration_count() == 2
    assert benchmark.measurement() == 1500.0


def test_time_benchmark_measures_loop():
    """Test that running the loop records a measurement."""
    benchmark = LoopBenchmark()
    benchmark.min_time_us = 0.0
    benchmark.test_body()

    assert benchmark.accept_measurement() is True
    assert benchmark.measurement() >= 0.0
    assert benchmark.unit_text() == "microseconds"

    table = ResultTable()
    benchmark.prepare_table(table)
    table.add_row()
    benchmark.store_run(table)
    assert table.column("time") == [benchmark.measurement()]


def test_time_benchmark_requires_loop():
    """Test that a body without iterations() is a programming error."""
    benchmark = NoLoopBenchmark()
    benchmark.test_body()

    with pytest.raises(InvariantError):
        benchmark.accept_measurement()


def test_time_benchmark_resets_per_configuration():
    """Test that calibration restarts for each configuration."""
    benchmark = LoopBenchmark()
    benchmark.add_configuration(ConfigSet(size=1))
    benchmark.add_configuration(ConfigSet(size=2))
    benchmark.state = BenchmarkState.CONFIGURATIONS_ENUMERATED
    benchmark._iterations = 64

    benchmark.set_current_configuration(1)
    assert benchmark.iteration_count() == 1
