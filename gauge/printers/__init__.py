"""Result printers.

- Printer: Base class with no-op lifecycle hooks
- FilePrinter: Buffers tables and writes one file at the end of the run
- PrinterDispatcher: Fans events out to enabled printers
"""

from gauge.printers.base import Printer
from gauge.printers.console_printer import ConsolePrinter
from gauge.printers.csv_printer import CSVPrinter
from gauge.printers.dispatcher import PrinterDispatcher
from gauge.printers.file_printer import FilePrinter
from gauge.printers.json_printer import JSONPrinter
from gauge.printers.stdout_printer import StdoutPrinter
from gauge.printers.yaml_printer import YAMLPrinter


def default_printers() -> list[Printer]:
    """Create the printers every gauge executable offers."""
    return [
        ConsolePrinter(),
        YAMLPrinter(),
        JSONPrinter(),
        CSVPrinter(),
        StdoutPrinter(),
    ]


__all__ = [
    "CSVPrinter",
    "ConsolePrinter",
    "FilePrinter",
    "JSONPrinter",
    "Printer",
    "PrinterDispatcher",
    "StdoutPrinter",
    "YAMLPrinter",
    "default_printers",
]
