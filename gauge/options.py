"""Parsed command-line options.

Options is the key to typed-value store handed to benchmarks and printers.
RunSettings validates the runner's own options.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from gauge.errors import MalformedColumnSpecError, UnknownOptionError
from gauge.table import RESERVED_COLUMNS

DEFAULT_WARMUP_TIME = 2.0


class Options(Mapping[str, Any]):
    """Read-only view of parsed option values keyed by option name."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values = dict(values or {})

    def __getitem__(self, name: str) -> Any:
        if name not in self._values:
            raise UnknownOptionError(name)
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def is_set(self, name: str) -> bool:
        """Check if an option carries a value (not None and not empty)."""
        value = self._values.get(name)
        if value is None:
            return False
        if isinstance(value, tuple | list):
            return len(value) > 0
        return True


def _split_list(value: Any) -> list[str]:
    """Flatten repeated and comma-separated values into one list."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    items: list[str] = []
    for entry in value:
        items.extend(part.strip() for part in str(entry).split(",") if part.strip())
    return items


class RunSettings(BaseModel):
    """Validated built-in options of a run."""

    print_tests: bool = Field(False, description="Print testcase names and exit")
    print_benchmarks: bool = Field(False, description="Print benchmark names and exit")
    gauge_filter: list[str] = Field(
        default_factory=list, description="Filters selecting benchmarks to run"
    )
    result_filter: list[str] = Field(
        default_factory=list, description="Result columns to drop"
    )
    runs: int | None = Field(None, ge=1, description="Override of every benchmark's runs")
    warmup_time: float = Field(
        DEFAULT_WARMUP_TIME, ge=0, description="CPU warm-up time in seconds"
    )
    add_column: list[str] = Field(
        default_factory=list, description="Extra key=value result columns"
    )
    dry_run: bool = Field(False, description="Resolve configurations without running")

    @field_validator("gauge_filter", "result_filter", mode="before")
    @classmethod
    def _flatten(cls, value: Any) -> list[str]:
        return _split_list(value)

    @field_validator("add_column", mode="before")
    @classmethod
    def _listify(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)

    @classmethod
    def from_options(cls, options: Options) -> "RunSettings":
        """Build settings from the runner's entries in an Options store."""
        known = {name: options[name] for name in cls.model_fields if name in options}
        # Unset click values arrive as None; let the model defaults apply
        return cls(**{k: v for k, v in known.items() if v is not None})

    def columns(self) -> dict[str, str]:
        """Parse every --add_column entry.

        Raises:
            MalformedColumnSpecError: If an entry is malformed or repeated.
        """
        return parse_add_columns(self.add_column)


def parse_add_column(spec: str) -> tuple[str, str]:
    """Split an --add_column entry into name and value.

    Raises:
        MalformedColumnSpecError: If the entry is not a non-empty key=value
            pair or the key is a reserved result column.
    """
    name, separator, value = spec.partition("=")
    name = name.strip()
    if not separator:
        raise MalformedColumnSpecError(spec)
    if not name:
        raise MalformedColumnSpecError(spec, "empty column name")
    if not value:
        raise MalformedColumnSpecError(spec, "empty column value")
    if name in RESERVED_COLUMNS:
        raise MalformedColumnSpecError(spec, f"'{name}' is a reserved column")
    return name, value


def parse_add_columns(specs: list[str]) -> dict[str, str]:
    """Parse several --add_column entries, preserving their order."""
    columns: dict[str, str] = {}
    for spec in specs:
        name, value = parse_add_column(spec)
        if name in columns:
            raise MalformedColumnSpecError(spec, f"column '{name}' given twice")
        columns[name] = value
    return columns
