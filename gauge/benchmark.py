"""Base class for benchmarks."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

from gauge.config_set import ConfigSet
from gauge.errors import IndexOutOfRangeError, InvariantError
from gauge.table import ResultTable

if TYPE_CHECKING:
    from gauge.options import Options
    from gauge.registry import BenchmarkDescriptor


class BenchmarkState(Enum):
    """Execution state of a benchmark instance."""

    CREATED = "created"
    CONFIGURATIONS_REQUESTED = "configurations_requested"
    CONFIGURATIONS_ENUMERATED = "configurations_enumerated"
    INITIALIZED = "initialized"
    WARMUP = "warmup"
    MEASURING = "measuring"
    FINISHED = "finished"


_TRANSITIONS: dict[BenchmarkState, frozenset[BenchmarkState]] = {
    BenchmarkState.CREATED: frozenset({BenchmarkState.CONFIGURATIONS_REQUESTED}),
    BenchmarkState.CONFIGURATIONS_REQUESTED: frozenset(
        {BenchmarkState.CONFIGURATIONS_ENUMERATED}
    ),
    BenchmarkState.CONFIGURATIONS_ENUMERATED: frozenset({BenchmarkState.INITIALIZED}),
    BenchmarkState.INITIALIZED: frozenset(
        {BenchmarkState.WARMUP, BenchmarkState.MEASURING}
    ),
    BenchmarkState.WARMUP: frozenset({BenchmarkState.MEASURING}),
    BenchmarkState.MEASURING: frozenset({BenchmarkState.FINISHED}),
    BenchmarkState.FINISHED: frozenset({BenchmarkState.INITIALIZED}),
}

# States in which another configuration may be selected
_SELECTABLE = frozenset(
    {BenchmarkState.CONFIGURATIONS_ENUMERATED, BenchmarkState.FINISHED}
)


class Benchmark(ABC):
    """Abstract base class for all benchmarks.

    A benchmark instance is created for a single invocation. The runner
    drives it through the following hooks:

    Lifecycle:
        1. get_options() - Emit zero or more configurations
        2. set_current_configuration() - Select a configuration
        3. skip() - Bypass the selected configuration
        4. init() - Per-configuration, one-time setup
        5. needs_warmup_iteration() - Run one unmeasured cycle first
        6. setup() / test_body() / tear_down() - One measurement cycle
        7. accept_measurement() - Decide whether the cycle counts
        8. store_run() - Write the accepted cycle's results

    Example:
        >>> class SortBenchmark(TimeBenchmark):
        ...     def get_options(self, options):
        ...         for cs in ConfigSet.product(size=options["sizes"]):
        ...             self.add_configuration(cs)
        ...
        ...     def test_body(self):
        ...         size = self.get_current_configuration().get_int("size")
        ...         data = list(range(size, 0, -1))
        ...         for _ in self.iterations():
        ...             sorted(data)
    """

    descriptor: "BenchmarkDescriptor | None" = None

    def __init__(self) -> None:
        """Initialize per-invocation state."""
        self._configurations: list[ConfigSet] = []
        self._current_index: int | None = None
        self.state = BenchmarkState.CREATED
        self.cycles = 0
        self.accepted_runs = 0

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def testcase_name(self) -> str:
        return self.descriptor.testcase_name if self.descriptor else ""

    @property
    def benchmark_name(self) -> str:
        if self.descriptor:
            return self.descriptor.benchmark_name
        return self.__class__.__name__

    def runs(self) -> int:
        """Get the number of accepted runs this benchmark declares."""
        return self.descriptor.runs if self.descriptor else 1

    def unit_text(self) -> str:
        """Get the unit of the benchmark's measurement."""
        return ""

    # -------------------------------------------------------------------------
    # Configurations
    # -------------------------------------------------------------------------

    def get_options(self, options: "Options") -> None:
        """Emit configurations from the parsed command-line options.

        Override to call add_configuration() once per configuration.
        Emitting none means a single implicit, empty configuration.
        """
        pass

    def add_configuration(self, config: ConfigSet) -> None:
        self._configurations.append(config)

    def has_configurations(self) -> bool:
        return bool(self._configurations)

    def configuration_count(self) -> int:
        return len(self._configurations)

    @property
    def configurations(self) -> list[ConfigSet]:
        return list(self._configurations)

    def set_current_configuration(self, index: int) -> None:
        """Select the configuration used by the next init() and runs.

        Raises:
            IndexOutOfRangeError: If index is outside the enumerated set.
            InvariantError: If called while a configuration is running.
        """
        if self.state not in _SELECTABLE:
            raise InvariantError(
                f"Cannot select a configuration in state {self.state.value}"
            )
        if not 0 <= index < len(self._configurations):
            raise IndexOutOfRangeError(index, len(self._configurations))
        self._current_index = index

    @property
    def current_configuration_index(self) -> int | None:
        return self._current_index

    def get_current_configuration(self) -> ConfigSet:
        """Get the selected configuration, or an empty one if there are none."""
        if self._current_index is None:
            return ConfigSet()
        return self._configurations[self._current_index]

    # -------------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------------

    def transition(self, state: BenchmarkState) -> None:
        """Move to a new execution state.

        Raises:
            InvariantError: If the transition is not allowed.
        """
        if state not in _TRANSITIONS[self.state]:
            raise InvariantError(
                f"{self.benchmark_name}: illegal transition "
                f"{self.state.value} -> {state.value}"
            )
        self.state = state

    def request_configurations(self, options: "Options") -> None:
        """Collect the configurations for this invocation."""
        self.transition(BenchmarkState.CONFIGURATIONS_REQUESTED)
        self._configurations = []
        self._current_index = None
        self.get_options(options)
        self.transition(BenchmarkState.CONFIGURATIONS_ENUMERATED)

    # -------------------------------------------------------------------------
    # Measurement hooks
    # -------------------------------------------------------------------------

    def skip(self) -> bool:
        """Return True to bypass the current configuration."""
        return False

    def init(self) -> None:
        """Prepare resources reused by every run of the configuration."""
        pass

    def needs_warmup_iteration(self) -> bool:
        """Return True to run one unmeasured cycle before measuring."""
        return False

    def setup(self) -> None:
        pass

    @abstractmethod
    def test_body(self) -> None:
        """Run the measured work."""
        pass

    def tear_down(self) -> None:
        pass

    def accept_measurement(self) -> bool:
        """Return False to discard the last cycle and repeat it."""
        return True

    def iteration_count(self) -> int:
        """Get the number of iterations the last cycle ran."""
        return 1

    def prepare_table(self, table: ResultTable) -> None:
        """Declare extra columns before any run is stored."""
        pass

    def store_run(self, table: ResultTable) -> None:
        """Write the results of an accepted cycle into the current row."""
        pass
