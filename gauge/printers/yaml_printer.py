"""YAML result file."""

from typing import TextIO

import yaml  # type: ignore[import-untyped, unused-ignore]

from gauge.printers.file_printer import FilePrinter
from gauge.table import ResultTable


class YAMLPrinter(FilePrinter):
    """Writes the same document as the JSON printer, as YAML."""

    def __init__(
        self, default_filename: str = "out.yaml", enabled: bool = False, indent: int = 2
    ) -> None:
        super().__init__("yaml", default_filename, enabled)
        self.indent = indent

    def write(self, stream: TextIO, tables: list[ResultTable]) -> None:
        yaml.safe_dump(
            [t.to_dict() for t in tables],
            stream,
            indent=self.indent,
            default_flow_style=False,
            sort_keys=False,
        )
