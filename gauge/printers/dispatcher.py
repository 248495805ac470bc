"""Fan-out of lifecycle events to printers."""

from collections.abc import Iterator
from typing import TYPE_CHECKING

import click

from gauge.printers.base import Printer
from gauge.table import ResultTable

if TYPE_CHECKING:
    from gauge.benchmark import Benchmark
    from gauge.options import Options


class PrinterDispatcher:
    """Ordered set of printers.

    Option binding goes to every printer. Lifecycle events and results go
    only to enabled printers, in registration order.
    """

    def __init__(self, printers: list[Printer] | None = None) -> None:
        self._printers: list[Printer] = []
        for printer in printers or []:
            self.add(printer)

    def add(self, printer: Printer) -> None:
        """Register a printer.

        Raises:
            ValueError: If a printer with the same name is registered.
        """
        if any(p.name == printer.name for p in self._printers):
            raise ValueError(f"Printer name collision: '{printer.name}'")
        self._printers.append(printer)

    @property
    def printers(self) -> list[Printer]:
        return list(self._printers)

    def enabled(self) -> list[Printer]:
        return [p for p in self._printers if p.is_enabled()]

    def cli_options(self) -> list[click.Option]:
        return [option for p in self._printers for option in p.cli_options()]

    def bind_options(self, options: "Options") -> None:
        for printer in self._printers:
            printer.set_options(options)

    def start(self) -> None:
        for printer in self.enabled():
            printer.start()

    def end(self) -> None:
        for printer in self.enabled():
            printer.end()

    def start_benchmark(self, benchmark: "Benchmark") -> None:
        for printer in self.enabled():
            printer.start_benchmark(benchmark)

    def end_benchmark(self, benchmark: "Benchmark") -> None:
        for printer in self.enabled():
            printer.end_benchmark(benchmark)

    def benchmark_result(self, benchmark: "Benchmark", table: ResultTable) -> None:
        for printer in self.enabled():
            printer.benchmark_result(benchmark, table)

    def __iter__(self) -> Iterator[Printer]:
        return iter(self._printers)

    def __len__(self) -> int:
        return len(self._printers)
