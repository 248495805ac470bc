"""Human-readable progress and results on the terminal."""

from io import StringIO
from typing import TYPE_CHECKING, Any, TextIO

import click

from gauge.printers.base import Printer
from gauge.table import ResultTable

if TYPE_CHECKING:
    from gauge.benchmark import Benchmark

# Columns already shown in the benchmark header line
_HEADER_COLUMNS = ("testcase", "benchmark", "unit")


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def _describe(benchmark: "Benchmark") -> str:
    name = f"{benchmark.testcase_name}.{benchmark.benchmark_name}"
    if benchmark.has_configurations():
        config = benchmark.get_current_configuration()
        params = " ".join(f"{k}={v}" for k, v in config.items())
        return f"{name} ({params})"
    return name


class ConsolePrinter(Printer):
    """Prints one aligned table per benchmark configuration."""

    def __init__(self, stream: TextIO | None = None, enabled: bool = True) -> None:
        super().__init__("console", enabled)
        self._stream = stream
        self._count = 0

    def _echo(self, message: str = "") -> None:
        click.echo(message, file=self._stream)

    def start(self) -> None:
        self._count = 0
        self._echo("[==========] Running benchmarks.")

    def start_benchmark(self, benchmark: "Benchmark") -> None:
        self._echo(f"[ RUN      ] {_describe(benchmark)}")

    def end_benchmark(self, benchmark: "Benchmark") -> None:
        self._count += 1
        self._echo(f"[       OK ] {_describe(benchmark)}")

    def benchmark_result(self, benchmark: "Benchmark", table: ResultTable) -> None:
        self._echo(self.format_table(table))

    def end(self) -> None:
        self._echo(f"[==========] {self._count} benchmark run(s) completed.")

    @staticmethod
    def format_table(table: ResultTable) -> str:
        """Render a table as aligned text, one line per row."""
        output = StringIO()
        const = table.const_columns
        extra = [c for c in const if c not in _HEADER_COLUMNS]
        if extra:
            info = ", ".join(f"{c}={const[c]}" for c in extra)
            output.write(f"  {info}\n")

        columns = [c for c in table.columns if not table.is_const_column(c)]
        if "unit" in const and const["unit"]:
            output.write(f"  unit: {const['unit']}\n")

        cells = [[_format_value(row[c]) for c in columns] for row in table.rows]
        widths = [
            max([len(c)] + [len(line[i]) for line in cells])
            for i, c in enumerate(columns)
        ]
        output.write("  " + "  ".join(f"{c:>{w}}" for c, w in zip(columns, widths)))
        for line in cells:
            output.write("\n  ")
            output.write("  ".join(f"{v:>{w}}" for v, w in zip(line, widths)))
        return output.getvalue()
