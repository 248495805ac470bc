"""Wall-clock timing benchmark."""

import time
from collections.abc import Iterator

from gauge.benchmark import Benchmark
from gauge.errors import InvariantError
from gauge.table import ResultTable


class TimeBenchmark(Benchmark):
    """Benchmark measuring the time per iteration of a hot loop.

    test_body() wraps the measured code in the iterations() loop. Cycles
    shorter than min_time_us are rejected and the iteration count doubled,
    so short operations are timed over enough iterations to rise above the
    clock's resolution.

    Example:
        >>> class AppendBenchmark(TimeBenchmark):
        ...     def test_body(self):
        ...         items = []
        ...         for _ in self.iterations():
        ...             items.append(1)
    """

    min_time_us: float = 1000.0

    def __init__(self) -> None:
        super().__init__()
        self._iterations = 1
        self._elapsed_ns: int | None = None

    def unit_text(self) -> str:
        return "microseconds"

    def set_current_configuration(self, index: int) -> None:
        super().set_current_configuration(index)
        self._iterations = 1

    def iterations(self) -> Iterator[int]:
        """Yield once per iteration while timing the whole loop."""
        self._elapsed_ns = None
        count = self._iterations
        start = time.perf_counter_ns()
        for i in range(count):
            yield i
        self._elapsed_ns = time.perf_counter_ns() - start

    def iteration_count(self) -> int:
        return self._iterations

    def elapsed_us(self) -> float:
        """Get the duration of the last measured loop in microseconds.

        Raises:
            InvariantError: If test_body() never completed iterations().
        """
        if self._elapsed_ns is None:
            raise InvariantError(
                f"{self.benchmark_name}: test_body() did not run self.iterations()"
            )
        return self._elapsed_ns / 1000.0

    def measurement(self) -> float:
        """Get the time per iteration of the last cycle in microseconds."""
        return self.elapsed_us() / self._iterations

    def accept_measurement(self) -> bool:
        if self.elapsed_us() < self.min_time_us:
            self._iterations *= 2
            return False
        return True

    def prepare_table(self, table: ResultTable) -> None:
        table.add_column("time")

    def store_run(self, table: ResultTable) -> None:
        table.set_value("time", self.measurement())
