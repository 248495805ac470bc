"""Comma-separated result file."""

import csv
from typing import TextIO

from gauge.printers.file_printer import FilePrinter
from gauge.table import ResultTable


class CSVPrinter(FilePrinter):
    """Writes all rows of all tables under a single header.

    The header is the union of every table's columns; cells a table does
    not have are left empty.
    """

    def __init__(self, default_filename: str = "out.csv", enabled: bool = False) -> None:
        super().__init__("csv", default_filename, enabled)

    def write(self, stream: TextIO, tables: list[ResultTable]) -> None:
        merged = ResultTable.concat(tables)
        writer = csv.DictWriter(stream, fieldnames=merged.columns)
        writer.writeheader()
        writer.writerows(merged.rows)
