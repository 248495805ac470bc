"""Benchmark runner.

Usage:
    from gauge.runner import Runner
    from gauge.time_benchmark import TimeBenchmark

    runner = Runner()
    runner.add_default_printers()

    @runner.benchmark("MyTest", "append", runs=10)
    class AppendBenchmark(TimeBenchmark):
        def test_body(self):
            items = []
            for _ in self.iterations():
                items.append(1)

    # Parse the command line and run the selected benchmarks
    runner.run(["--gauge_filter=MyTest.*", "--use_csv"])
"""

import itertools
import sys
from collections.abc import Callable, Iterator, Sequence
from typing import Any, ClassVar, NoReturn, TypeVar

import click

from gauge.benchmark import Benchmark, BenchmarkState
from gauge.errors import InvariantError
from gauge.filters import resolve_filters
from gauge.options import DEFAULT_WARMUP_TIME, Options, RunSettings
from gauge.printers import PrinterDispatcher, default_printers
from gauge.printers.base import Printer
from gauge.registry import BenchmarkDescriptor, BenchmarkFactory, BenchmarkRegistry
from gauge.table import RESERVED_COLUMNS, ResultTable
from gauge.utils.env import get_env
from gauge.utils.logger import Logger, LogLevel
from gauge.utils.timing import busy_wait

B = TypeVar("B", bound=type[Benchmark])


class Runner:
    """Registers benchmarks and runs them through the measurement protocol.

    One runner is normally shared by the whole process (see instance()),
    but independent runners can be created, e.g. in tests. Benchmarks and
    printers are registered first; run() then parses the command line,
    selects benchmarks through the --gauge_filter expressions and runs each
    of their configurations, handing one result table per configuration to
    the enabled printers.

    Example:
        >>> runner = Runner()
        >>> runner.register_benchmark(AppendBenchmark, "MyTest", "append", runs=5)
        >>> runner.run(["--dry_run"])
    """

    _instance: ClassVar["Runner | None"] = None
    _ids: ClassVar[Iterator[int]] = itertools.count(1)

    def __init__(
        self,
        registry: BenchmarkRegistry | None = None,
        printers: list[Printer] | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            registry: Registry to use; a new empty one by default.
            printers: Printers to register, in dispatch order.
        """
        self.registry = registry if registry is not None else BenchmarkRegistry()
        self.dispatcher = PrinterDispatcher(printers)
        self._user_options: list[click.Option] = []
        self._options = Options()
        self._settings = RunSettings()
        self._columns: dict[str, str] = {}
        self._current: Benchmark | None = None

    @classmethod
    def instance(cls) -> "Runner":
        """Get the process-wide runner, created with the default printers."""
        if cls._instance is None:
            cls._instance = cls(printers=default_printers())
        return cls._instance

    @classmethod
    def register_id(cls) -> int:
        """Get a new unique benchmark id. Ids start at 1; 0 is invalid."""
        return next(cls._ids)

    @property
    def _log(self):
        return Logger.get("runner")

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def add_benchmark(
        self,
        benchmark_id: int,
        factory: BenchmarkFactory,
        testcase_name: str,
        benchmark_name: str,
        runs: int = 1,
    ) -> BenchmarkDescriptor:
        """Register a benchmark factory under an explicit id."""
        return self.registry.register(
            benchmark_id, factory, testcase_name, benchmark_name, runs
        )

    def register_benchmark(
        self,
        benchmark_cls: type[Benchmark],
        testcase_name: str,
        benchmark_name: str | None = None,
        runs: int = 1,
    ) -> BenchmarkDescriptor:
        """Register a Benchmark subclass under a new id.

        Args:
            benchmark_cls: Class instantiated once per invocation.
            testcase_name: Testcase grouping the benchmark.
            benchmark_name: Benchmark name; defaults to the class name.
            runs: Number of accepted runs per configuration.
        """
        return self.add_benchmark(
            self.register_id(),
            benchmark_cls,
            testcase_name,
            benchmark_name or benchmark_cls.__name__,
            runs,
        )

    def benchmark(
        self, testcase_name: str, benchmark_name: str | None = None, runs: int = 1
    ) -> Callable[[B], B]:
        """Class decorator form of register_benchmark()."""

        def decorator(benchmark_cls: B) -> B:
            self.register_benchmark(benchmark_cls, testcase_name, benchmark_name, runs)
            return benchmark_cls

        return decorator

    def add_option(self, *param_decls: str, **attrs: Any) -> None:
        """Declare a command-line option for benchmarks to read.

        Takes the same arguments as click.option(), e.g.:

            runner.add_option("--symbols", type=int, multiple=True, default=[16, 32])
        """
        self._user_options.append(click.Option(param_decls, **attrs))

    def add_printer(self, printer: Printer) -> None:
        self.dispatcher.add(printer)

    def add_default_printers(self) -> None:
        for printer in default_printers():
            self.add_printer(printer)

    @property
    def printers(self) -> list[Printer]:
        return self.dispatcher.printers

    # -------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------

    def build_command(self) -> click.Command:
        """Build the command-line parser for the current registrations."""
        params: list[click.Parameter] = [
            click.Option(["--print_tests"], is_flag=True, help="Print testcases"),
            click.Option(["--print_benchmarks"], is_flag=True, help="Print benchmarks"),
            click.Option(
                ["--result_filter"],
                multiple=True,
                help=(
                    "Drop result columns, comma separated or repeated, "
                    "e.g. --result_filter=time"
                ),
            ),
            click.Option(
                ["--gauge_filter"],
                multiple=True,
                help=(
                    "Select test-cases or benchmarks to run by name, e.g. "
                    "MyTest.* or *.MyBenchmark or *.*; may be repeated"
                ),
            ),
            click.Option(
                ["--runs"],
                type=click.IntRange(min=1),
                default=None,
                help="Number of runs, overrides the benchmarks' own setting",
            ),
            click.Option(
                ["--warmup_time"],
                type=click.FloatRange(min=0),
                default=get_env(
                    "GAUGE_WARMUP_TIME", default=DEFAULT_WARMUP_TIME, as_type=float
                ),
                show_default=True,
                help="Seconds to keep a CPU core busy before the first benchmark",
            ),
            click.Option(
                ["--add_column"],
                multiple=True,
                help="Add a constant column to all results, e.g. --add_column cpu=i7",
            ),
            click.Option(
                ["--dry_run"],
                is_flag=True,
                help="Resolve benchmarks and configurations without running them",
            ),
            click.Option(
                ["--log_level"],
                type=click.Choice([level.value for level in LogLevel], case_sensitive=False),
                default=None,
                help="Log verbosity of the runner",
            ),
        ]
        params.extend(self._user_options)
        params.extend(self.dispatcher.cli_options())
        return click.Command(
            "gauge",
            params=params,
            help="Run the registered benchmarks.",
            context_settings={"help_option_names": ["--help", "-h"]},
        )

    def parse_options(self, argv: Sequence[str]) -> Options | None:
        """Parse command-line arguments.

        Returns:
            The parsed options, or None if --help was handled.

        Raises:
            click.ClickException: On invalid arguments.
        """
        command = self.build_command()
        try:
            ctx = command.make_context("gauge", list(argv))
        except click.exceptions.Exit:
            return None
        return Options(ctx.params)

    def apply_options(self, options: Options) -> None:
        """Adopt parsed options for the next run and bind them to printers.

        Raises:
            MalformedColumnSpecError: If an --add_column entry is malformed.
        """
        settings = RunSettings.from_options(options)
        columns = settings.columns()
        if options.is_set("log_level"):
            Logger.set_level(options["log_level"])

        self._options = options
        self._settings = settings
        self._columns = columns
        self.dispatcher.bind_options(options)

    @property
    def options(self) -> Options:
        return self._options

    @property
    def settings(self) -> RunSettings:
        return self._settings

    # -------------------------------------------------------------------------
    # Running
    # -------------------------------------------------------------------------

    def run(self, argv: Sequence[str] | None = None) -> None:
        """Run the benchmarks, exiting the process on any error.

        Any failure is reported on stderr and ends the process with exit
        status 1.
        """
        try:
            self.run_unsafe(argv)
        except Exception as e:
            self.fail(e)

    def fail(self, error: Exception) -> NoReturn:
        """Report an error on stderr and exit with status 1."""
        if isinstance(error, click.ClickException):
            message = error.format_message()
        else:
            message = str(error) or type(error).__name__
        if Logger.is_configured():
            self._log.debug(f"Run aborted: {message}", exc_info=error)
        click.echo(message, err=True)
        sys.exit(1)

    def run_unsafe(self, argv: Sequence[str] | None = None) -> None:
        """Run the benchmarks, letting errors propagate."""
        self._ensure_logger()
        options = self.parse_options(sys.argv[1:] if argv is None else argv)
        if options is None:
            return
        self.apply_options(options)
        settings = self._settings

        if settings.print_tests:
            click.echo(" ".join(self.registry.testcases()))
            return

        if settings.print_benchmarks:
            for testcase_name, benchmark_name in self.registry.enumerate():
                click.echo(f"{testcase_name}.{benchmark_name}")
            return

        selected = self.select(settings.gauge_filter)
        self._log.debug(f"Selected {len(selected)} benchmark(s)")

        # The warm-up makes no sense for a dry run
        if not settings.dry_run and settings.warmup_time > 0:
            self._log.debug(f"Warming up CPU for {settings.warmup_time}s")
            busy_wait(settings.warmup_time)

        self.dispatcher.start()
        for descriptor in selected:
            self.run_benchmark_configurations(descriptor.create())
        self.dispatcher.end()

    def select(self, filters: list[str]) -> list[BenchmarkDescriptor]:
        """Resolve filters into descriptors; no filters selects everything."""
        if not filters:
            return self.registry.descriptors()
        return resolve_filters(filters, self.registry)

    def run_benchmark_configurations(self, benchmark: Benchmark) -> list[ResultTable]:
        """Run a benchmark once per configuration it declares.

        Returns:
            The result tables produced, one per measured configuration.
        """
        benchmark.request_configurations(self._options)
        count = benchmark.configuration_count()
        self._log.debug(
            f"{benchmark.testcase_name}.{benchmark.benchmark_name}: "
            f"{count} configuration(s)"
        )

        if not benchmark.has_configurations():
            table = self.run_benchmark(benchmark)
            return [table] if table is not None else []

        tables = []
        for index in range(count):
            benchmark.set_current_configuration(index)
            table = self.run_benchmark(benchmark)
            if table is not None:
                tables.append(table)
        return tables

    def run_benchmark(self, benchmark: Benchmark) -> ResultTable | None:
        """Run the selected configuration of a benchmark.

        Returns:
            The result table, or None for dry runs and skipped configurations.

        Raises:
            InvariantError: If another benchmark is already active.
        """
        if self._settings.dry_run:
            return None

        if self._current is not None:
            raise InvariantError(
                f"Cannot start {benchmark.benchmark_name} while "
                f"{self._current.benchmark_name} is active"
            )
        self._current = benchmark
        try:
            if benchmark.skip():
                self._log.debug(f"Skipping {benchmark.benchmark_name}")
                return None
            return self._measure(benchmark)
        finally:
            self._current = None

    def current_benchmark(self) -> Benchmark:
        """Get the active benchmark.

        Raises:
            InvariantError: If no benchmark is running.
        """
        if self._current is None:
            raise InvariantError("No benchmark is active")
        return self._current

    def resolve_runs(self, benchmark: Benchmark) -> int:
        """Get the run count: --runs wins over the benchmark's own count."""
        if self._settings.runs is not None:
            return self._settings.runs
        return benchmark.runs()

    def create_table(self, benchmark: Benchmark) -> ResultTable:
        """Create the result table of one configuration."""
        table = ResultTable()
        for name, value in self._columns.items():
            table.add_const_column(name, value)
        table.add_const_column("unit", benchmark.unit_text())
        table.add_const_column("benchmark", benchmark.benchmark_name)
        table.add_const_column("testcase", benchmark.testcase_name)
        table.add_column("iterations")
        table.add_column("run_number")
        benchmark.prepare_table(table)
        return table

    def _measure(self, benchmark: Benchmark) -> ResultTable:
        """Initialize, warm up and run the measured loop of a configuration."""
        benchmark.transition(BenchmarkState.INITIALIZED)
        benchmark.cycles = 0
        benchmark.accepted_runs = 0
        benchmark.init()

        if benchmark.needs_warmup_iteration():
            benchmark.transition(BenchmarkState.WARMUP)
            benchmark.setup()
            benchmark.test_body()
            benchmark.tear_down()

        runs = self.resolve_runs(benchmark)
        table = self.create_table(benchmark)

        self.dispatcher.start_benchmark(benchmark)
        benchmark.transition(BenchmarkState.MEASURING)

        # Rejected cycles are repeated without limit
        while benchmark.accepted_runs < runs:
            benchmark.setup()
            benchmark.test_body()
            benchmark.tear_down()
            benchmark.cycles += 1

            if not benchmark.accept_measurement():
                self._log.debug(
                    f"{benchmark.benchmark_name}: cycle {benchmark.cycles} rejected"
                )
                continue

            table.add_row()
            table.set_value("iterations", benchmark.iteration_count())
            table.set_value("run_number", benchmark.accepted_runs)
            benchmark.store_run(table)
            benchmark.accepted_runs += 1

        benchmark.transition(BenchmarkState.FINISHED)
        self._log.debug(
            f"{benchmark.benchmark_name}: {benchmark.accepted_runs} run(s) "
            f"accepted out of {benchmark.cycles}"
        )

        self.apply_result_filter(table)
        self.dispatcher.end_benchmark(benchmark)
        self.dispatcher.benchmark_result(benchmark, table)
        return table

    def apply_result_filter(self, table: ResultTable) -> None:
        """Drop the columns named by --result_filter."""
        for name in self._settings.result_filter:
            if name in RESERVED_COLUMNS:
                self._log.warning(f"Result filter cannot drop reserved column '{name}'")
                continue
            table.drop_column(name)

    def _ensure_logger(self) -> None:
        if not Logger.is_configured():
            Logger.configure(
                level=get_env("GAUGE_LOG_LEVEL", default="WARNING"), output="stderr"
            )


def run_benchmarks(argv: Sequence[str] | None = None) -> None:
    """Run the benchmarks registered with the process-wide runner."""
    Runner.instance().run(argv)
