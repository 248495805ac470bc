"""Resolution of --gauge_filter expressions.

A filter has the form <testcase>.<benchmark>, where either side may be the
wildcard "*":

    *.*             every registered benchmark
    *.encode        "encode" under every testcase that declares it
    MyTest.*        every benchmark of testcase "MyTest"
    MyTest.encode   exactly one benchmark
"""

from dataclasses import dataclass

from gauge.errors import (
    BenchmarkNotFoundError,
    MalformedFilterError,
    TestcaseNotFoundError,
)
from gauge.registry import BenchmarkDescriptor, BenchmarkRegistry

WILDCARD = "*"


@dataclass(frozen=True)
class BenchmarkFilter:
    """A parsed filter expression."""

    testcase: str
    benchmark: str

    @classmethod
    def parse(cls, expression: str) -> "BenchmarkFilter":
        """Parse a filter expression.

        The expression is split at its first ".", so benchmark names may
        contain further dots.

        Raises:
            MalformedFilterError: If the separator is missing or either side
                is empty.
        """
        testcase, separator, benchmark = expression.partition(".")
        if not separator or not testcase or not benchmark:
            raise MalformedFilterError(expression)
        return cls(testcase=testcase, benchmark=benchmark)

    def __str__(self) -> str:
        return f"{self.testcase}.{self.benchmark}"


def resolve_filter(
    benchmark_filter: BenchmarkFilter, registry: BenchmarkRegistry
) -> list[BenchmarkDescriptor]:
    """Get the benchmarks a filter selects, in execution order.

    Raises:
        TestcaseNotFoundError: If a literal testcase is not registered.
        BenchmarkNotFoundError: If a literal benchmark matches nothing.
    """
    testcase = benchmark_filter.testcase
    benchmark = benchmark_filter.benchmark

    if testcase == WILDCARD and benchmark == WILDCARD:
        return registry.descriptors()

    if testcase == WILDCARD:
        matches = []
        for name in registry.testcases():
            descriptor = registry.find(name, benchmark)
            if descriptor is not None:
                matches.append(descriptor)
        if not matches:
            raise BenchmarkNotFoundError(benchmark)
        return matches

    if not registry.has_testcase(testcase):
        raise TestcaseNotFoundError(testcase)

    if benchmark == WILDCARD:
        return registry.benchmarks_in(testcase)

    descriptor = registry.find(testcase, benchmark)
    if descriptor is None:
        raise BenchmarkNotFoundError(benchmark, testcase)
    return [descriptor]


def resolve_filters(
    expressions: list[str], registry: BenchmarkRegistry
) -> list[BenchmarkDescriptor]:
    """Resolve several filters into one execution list.

    Every expression is parsed and resolved before anything is returned, so
    a bad filter aborts the run before any benchmark executes. Overlapping
    filters are not deduplicated: a benchmark matched twice runs twice.
    """
    selected: list[BenchmarkDescriptor] = []
    for expression in expressions:
        selected.extend(resolve_filter(BenchmarkFilter.parse(expression), registry))
    return selected
