"""Gauge - micro-benchmark harness.

This package provides:
- Benchmark / TimeBenchmark: Base classes for measured work
- ConfigSet: One point of a benchmark's parameter matrix
- Runner: Registration, filtering and execution of benchmarks
- ResultTable: Results collected per benchmark configuration
- Printer: Output sinks for lifecycle events and result tables

Quick Start:
    from gauge import ConfigSet, Runner, TimeBenchmark

    runner = Runner.instance()

    @runner.benchmark("Sort", "builtin", runs=10)
    class SortBenchmark(TimeBenchmark):
        def test_body(self):
            data = list(range(1000, 0, -1))
            for _ in self.iterations():
                sorted(data)

    runner.run()
"""

from gauge.benchmark import Benchmark, BenchmarkState
from gauge.config_set import ConfigSet
from gauge.errors import (
    BenchmarkModuleError,
    BenchmarkNotFoundError,
    ColumnAlreadyExistsError,
    ConfigTypeError,
    DuplicateRegistrationError,
    GaugeError,
    IndexOutOfRangeError,
    InvariantError,
    MalformedColumnSpecError,
    MalformedFilterError,
    NotFoundError,
    TestcaseNotFoundError,
    UnknownOptionError,
)
from gauge.options import Options, RunSettings
from gauge.printers import FilePrinter, Printer
from gauge.registry import BenchmarkDescriptor, BenchmarkRegistry
from gauge.runner import Runner, run_benchmarks
from gauge.table import ResultTable
from gauge.time_benchmark import TimeBenchmark

__version__ = "0.1.0"

__all__ = [
    # Benchmarks
    "Benchmark",
    "BenchmarkState",
    "ConfigSet",
    "TimeBenchmark",
    # Registry and runner
    "BenchmarkDescriptor",
    "BenchmarkRegistry",
    "Options",
    "RunSettings",
    "Runner",
    "run_benchmarks",
    # Results and printers
    "FilePrinter",
    "Printer",
    "ResultTable",
    # Errors
    "BenchmarkModuleError",
    "BenchmarkNotFoundError",
    "ColumnAlreadyExistsError",
    "ConfigTypeError",
    "DuplicateRegistrationError",
    "GaugeError",
    "IndexOutOfRangeError",
    "InvariantError",
    "MalformedColumnSpecError",
    "MalformedFilterError",
    "NotFoundError",
    "TestcaseNotFoundError",
    "UnknownOptionError",
    "__version__",
]
