"""Machine-readable results on stdout."""

import json
from typing import TYPE_CHECKING, TextIO

import click

from gauge.printers.base import Printer
from gauge.table import ResultTable

if TYPE_CHECKING:
    from gauge.benchmark import Benchmark


class StdoutPrinter(Printer):
    """Prints each result table as one line of JSON, for piping."""

    def __init__(self, stream: TextIO | None = None, enabled: bool = False) -> None:
        super().__init__("stdout", enabled)
        self._stream = stream

    def benchmark_result(self, benchmark: "Benchmark", table: ResultTable) -> None:
        click.echo(json.dumps(table.to_dict(), default=str), file=self._stream)
