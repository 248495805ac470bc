"""JSON result file."""

import json
from typing import TextIO

from gauge.printers.file_printer import FilePrinter
from gauge.table import ResultTable


class JSONPrinter(FilePrinter):
    """Writes a JSON list with one column-oriented object per table."""

    def __init__(
        self, default_filename: str = "out.json", enabled: bool = False, indent: int = 2
    ) -> None:
        super().__init__("json", default_filename, enabled)
        self.indent = indent

    def write(self, stream: TextIO, tables: list[ResultTable]) -> None:
        json.dump([t.to_dict() for t in tables], stream, indent=self.indent, default=str)
        stream.write("\n")
