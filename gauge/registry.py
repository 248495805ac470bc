"""Registry of benchmark factories.

Usage:
    from gauge.registry import BenchmarkRegistry

    registry = BenchmarkRegistry()
    registry.register(1, MyBenchmark, "MyTest", "encode", runs=10)

    # Look up a descriptor by id
    descriptor = registry.lookup(1)

    # List every (testcase, benchmark) pair in lexicographic order
    for testcase, benchmark in registry.enumerate():
        ...
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gauge.errors import DuplicateRegistrationError, NotFoundError

if TYPE_CHECKING:
    from gauge.benchmark import Benchmark

BenchmarkFactory = Callable[[], "Benchmark"]

INVALID_ID = 0


@dataclass(frozen=True)
class BenchmarkDescriptor:
    """Identity of a registered benchmark and how to build it."""

    id: int
    testcase_name: str
    benchmark_name: str
    factory: BenchmarkFactory
    runs: int = 1

    @property
    def full_name(self) -> str:
        """Return the filter-style name, e.g. "MyTest.encode"."""
        return f"{self.testcase_name}.{self.benchmark_name}"

    def create(self) -> "Benchmark":
        """Build a fresh benchmark instance bound to this descriptor."""
        benchmark = self.factory()
        benchmark.descriptor = self
        return benchmark


class BenchmarkRegistry:
    """Process-wide catalog of benchmarks.

    Maps a unique id to a descriptor and indexes ids by testcase name and
    benchmark name.

    Raises DuplicateRegistrationError if a testcase declares the same
    benchmark name under two different ids.

    Example:
        >>> registry = BenchmarkRegistry()
        >>> registry.register(1, MyBenchmark, "MyTest", "encode")
        >>> list(registry.enumerate())
        [('MyTest', 'encode')]
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._benchmarks: dict[int, BenchmarkDescriptor] = {}
        self._testcases: dict[str, dict[str, int]] = {}

    def register(
        self,
        benchmark_id: int,
        factory: BenchmarkFactory,
        testcase_name: str,
        benchmark_name: str,
        runs: int = 1,
    ) -> BenchmarkDescriptor:
        """Register a benchmark factory.

        Re-registering an id replaces its descriptor.

        Args:
            benchmark_id: Unique, non-zero benchmark id.
            factory: Callable producing a new Benchmark instance.
            testcase_name: Name of the testcase grouping the benchmark.
            benchmark_name: Name of the benchmark within its testcase.
            runs: Number of accepted runs the benchmark declares.

        Returns:
            The stored descriptor.

        Raises:
            ValueError: If the id is the reserved invalid id or runs < 1.
            DuplicateRegistrationError: If the names are taken by another id.
        """
        if benchmark_id == INVALID_ID:
            raise ValueError(f"Benchmark id {INVALID_ID} is reserved as invalid")
        if runs < 1:
            raise ValueError(f"Benchmark runs must be at least 1, got {runs}")

        existing_id = self._testcases.get(testcase_name, {}).get(benchmark_name)
        if existing_id is not None and existing_id != benchmark_id:
            raise DuplicateRegistrationError(testcase_name, benchmark_name, existing_id)

        previous = self._benchmarks.get(benchmark_id)
        if previous is not None:
            self._unindex(previous)

        descriptor = BenchmarkDescriptor(
            id=benchmark_id,
            testcase_name=testcase_name,
            benchmark_name=benchmark_name,
            factory=factory,
            runs=runs,
        )
        self._benchmarks[benchmark_id] = descriptor
        self._testcases.setdefault(testcase_name, {})[benchmark_name] = benchmark_id
        return descriptor

    def _unindex(self, descriptor: BenchmarkDescriptor) -> None:
        """Remove a descriptor's names from the testcase index."""
        benchmarks = self._testcases.get(descriptor.testcase_name, {})
        benchmarks.pop(descriptor.benchmark_name, None)
        if not benchmarks:
            self._testcases.pop(descriptor.testcase_name, None)

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def lookup(self, benchmark_id: int) -> BenchmarkDescriptor:
        """Get the descriptor registered under an id.

        Raises:
            NotFoundError: If no benchmark has that id.
        """
        if benchmark_id not in self._benchmarks:
            raise NotFoundError(benchmark_id)
        return self._benchmarks[benchmark_id]

    def find(self, testcase_name: str, benchmark_name: str) -> BenchmarkDescriptor | None:
        """Get a descriptor by its names, or None."""
        benchmark_id = self._testcases.get(testcase_name, {}).get(benchmark_name)
        if benchmark_id is None:
            return None
        return self._benchmarks[benchmark_id]

    def enumerate(self) -> Iterator[tuple[str, str]]:
        """Yield every (testcase, benchmark) pair in lexicographic order.

        Each call returns a new iterator.
        """
        for testcase_name in sorted(self._testcases):
            for benchmark_name in sorted(self._testcases[testcase_name]):
                yield testcase_name, benchmark_name

    def testcases(self) -> list[str]:
        """Get all testcase names in lexicographic order."""
        return sorted(self._testcases)

    def has_testcase(self, testcase_name: str) -> bool:
        return testcase_name in self._testcases

    def benchmarks_in(self, testcase_name: str) -> list[BenchmarkDescriptor]:
        """Get the descriptors of a testcase ordered by benchmark name."""
        benchmarks = self._testcases.get(testcase_name, {})
        return [self._benchmarks[benchmarks[name]] for name in sorted(benchmarks)]

    def descriptors(self) -> list[BenchmarkDescriptor]:
        """Get all descriptors in id order."""
        return [self._benchmarks[i] for i in sorted(self._benchmarks)]

    def __len__(self) -> int:
        """Return number of registered benchmarks."""
        return len(self._benchmarks)

    def __contains__(self, benchmark_id: object) -> bool:
        """Check if an id is registered."""
        return benchmark_id in self._benchmarks
