"""Exceptions raised by gauge.

Every user-facing failure derives from GaugeError so the runner can report
it at a single place. Violations of the runner's own execution invariants
raise InvariantError instead; those indicate a bug, not bad input.
"""


class GaugeError(Exception):
    """Base exception for gauge errors."""

    pass


class MalformedFilterError(GaugeError):
    """Raised when a --gauge_filter expression cannot be parsed."""

    def __init__(self, expression: str) -> None:
        self.expression = expression
        super().__init__(
            f"Error malformed gauge_filter '{expression}' (example MyTest.*)"
        )


class MalformedColumnSpecError(GaugeError):
    """Raised when an --add_column entry is not of the form key=value."""

    def __init__(self, spec: str, reason: str = "expected key=value") -> None:
        self.spec = spec
        self.reason = reason
        super().__init__(
            f"Error malformed add_column '{spec}': {reason} (example cpu=i7)"
        )


class TestcaseNotFoundError(GaugeError):
    """Raised when a filter names a testcase that is not registered."""

    __test__ = False  # Tell pytest not to collect this as a test class

    def __init__(self, testcase: str) -> None:
        self.testcase = testcase
        super().__init__(f"Error testcase not found: '{testcase}'")


class BenchmarkNotFoundError(GaugeError):
    """Raised when a filter names a benchmark that is not registered."""

    def __init__(self, benchmark: str, testcase: str | None = None) -> None:
        self.benchmark = benchmark
        self.testcase = testcase
        where = f" in testcase '{testcase}'" if testcase else ""
        super().__init__(f"Error benchmark not found: '{benchmark}'{where}")


class NotFoundError(GaugeError):
    """Raised when no benchmark is registered under an id."""

    def __init__(self, benchmark_id: int) -> None:
        self.benchmark_id = benchmark_id
        super().__init__(f"No benchmark registered with id {benchmark_id}")


class DuplicateRegistrationError(GaugeError):
    """Raised when two benchmarks share a testcase and benchmark name."""

    def __init__(self, testcase: str, benchmark: str, existing_id: int) -> None:
        self.testcase = testcase
        self.benchmark = benchmark
        self.existing_id = existing_id
        super().__init__(
            f"Benchmark '{testcase}.{benchmark}' is already registered "
            f"with id {existing_id}"
        )


class ColumnAlreadyExistsError(GaugeError):
    """Raised when a result table column is declared twice."""

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Column already exists: '{column}'")


class IndexOutOfRangeError(GaugeError):
    """Raised when selecting a configuration that was never enumerated."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(
            f"Configuration index {index} out of range "
            f"({count} configuration(s) available)"
        )


class ConfigTypeError(GaugeError):
    """Raised when a configuration value has an unexpected type."""

    def __init__(self, key: str, expected: type | str, actual: type) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        expected_name = getattr(expected, "__name__", str(expected))
        super().__init__(
            f"Configuration value '{key}' is {actual.__name__}, "
            f"expected {expected_name}"
        )


class UnknownOptionError(GaugeError, KeyError):
    """Raised when reading an option that was never declared."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown option: '{name}'")

    def __str__(self) -> str:
        return str(self.args[0])


class BenchmarkModuleError(GaugeError):
    """Raised when a benchmark module cannot be loaded."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load benchmark module {path}: {reason}")


class InvariantError(RuntimeError):
    """Raised when the runner's execution invariants are violated."""

    pass
