"""Printers that write all results to a single file."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import click

from gauge.printers.base import Printer
from gauge.table import ResultTable
from gauge.utils.logger import Logger

if TYPE_CHECKING:
    from gauge.benchmark import Benchmark
    from gauge.options import Options


class FilePrinter(Printer, ABC):
    """Printer that buffers every result table and writes them at the end.

    Each buffered table is a copy of the delivered one, extended with the
    benchmark's current configuration as constant columns so rows from
    different configurations of one benchmark stay distinguishable. The
    file is written exactly once, when the run ends.
    """

    def __init__(self, name: str, default_filename: str, enabled: bool = False) -> None:
        super().__init__(name, enabled)
        self.default_filename = default_filename
        self.filename = default_filename
        self._tables: list[ResultTable] = []

    @property
    def file_option(self) -> str:
        return f"{self.name}_file"

    def cli_options(self) -> list[click.Option]:
        return super().cli_options() + [
            click.Option(
                [f"--{self.file_option}"],
                type=click.Path(dir_okay=False),
                default=self.default_filename,
                show_default=True,
                help=f"Set the output filename of the {self.name} printer",
            )
        ]

    def set_options(self, options: "Options") -> None:
        super().set_options(options)
        if options.is_set(self.file_option):
            self.filename = str(options[self.file_option])

    @property
    def tables(self) -> list[ResultTable]:
        return list(self._tables)

    def start(self) -> None:
        self._tables = []

    def benchmark_result(self, benchmark: "Benchmark", table: ResultTable) -> None:
        output = table.copy()
        if benchmark.has_configurations():
            for key, value in benchmark.get_current_configuration().items():
                output.add_const_column(key, value)
        self._tables.append(output)

    def end(self) -> None:
        path = Path(self.filename)
        with path.open("w", newline="") as stream:
            self.write(stream, self._tables)
        Logger.get(f"printers.{self.name}").debug(
            f"Wrote {len(self._tables)} table(s) to {path}"
        )

    @abstractmethod
    def write(self, stream: TextIO, tables: list[ResultTable]) -> None:
        """Serialize the buffered tables to an open stream."""
        pass
