"""Base class for result printers."""

from typing import TYPE_CHECKING

import click

from gauge.table import ResultTable

if TYPE_CHECKING:
    from gauge.benchmark import Benchmark
    from gauge.options import Options


class Printer:
    """Output sink for run lifecycle events and result tables.

    Every hook is a no-op, so a printer overrides only the events it cares
    about. Each printer contributes a --use_<name> option that enables or
    disables it; disabled printers receive option binding only.

    Example:
        >>> class RowCounter(Printer):
        ...     def __init__(self):
        ...         super().__init__("rows", enabled=True)
        ...         self.count = 0
        ...
        ...     def benchmark_result(self, benchmark, table):
        ...         self.count += len(table)
    """

    def __init__(self, name: str, enabled: bool = False) -> None:
        """Initialize the printer.

        Args:
            name: Printer name, used to build its option names.
            enabled: Default value of the --use_<name> option.
        """
        self.name = name
        self._default_enabled = enabled
        self._enabled = enabled

    @property
    def enable_option(self) -> str:
        """Get the parameter name of the enable option."""
        return f"use_{self.name}"

    def cli_options(self) -> list[click.Option]:
        """Get the command-line options this printer contributes."""
        return [
            click.Option(
                [f"--{self.enable_option}"],
                type=click.BOOL,
                is_flag=False,
                flag_value=True,
                default=self._default_enabled,
                show_default=True,
                help=f"Use the {self.name} printer",
            )
        ]

    def is_enabled(self) -> bool:
        return self._enabled

    def set_options(self, options: "Options") -> None:
        """Bind parsed options; toggles enablement from --use_<name>."""
        if self.enable_option in options:
            self._enabled = bool(options[self.enable_option])

    # -------------------------------------------------------------------------
    # Lifecycle hooks
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Called once before the first benchmark runs."""
        pass

    def end(self) -> None:
        """Called once after the last benchmark has run."""
        pass

    def start_benchmark(self, benchmark: "Benchmark") -> None:
        """Called before a configuration's measured runs."""
        pass

    def end_benchmark(self, benchmark: "Benchmark") -> None:
        """Called after a configuration's measured runs."""
        pass

    def benchmark_result(self, benchmark: "Benchmark", table: ResultTable) -> None:
        """Called with the result table of a configuration."""
        pass
