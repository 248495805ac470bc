"""Result tables.

A ResultTable collects one row per accepted measurement. Columns are either
constant (one value shared by every row) or per-row. Every row reports a
value for every declared column; per-row columns never written for a row
report their default.

Usage:
    from gauge.table import ResultTable

    table = ResultTable()
    table.add_const_column("benchmark", "encode")
    table.add_column("time")

    table.add_row()
    table.set_value("time", 12.5)

    table.rows  # [{"benchmark": "encode", "time": 12.5}]
"""

from collections.abc import Iterable, Iterator
from typing import Any

from gauge.errors import ColumnAlreadyExistsError, InvariantError

# Identity columns the runner writes into every table
RESERVED_COLUMNS: frozenset[str] = frozenset(
    {"benchmark", "testcase", "unit", "iterations", "run_number"}
)


class ResultTable:
    """Row/column accumulator for benchmark results.

    Row order is insertion order. Column order is declaration order.

    Example:
        >>> table = ResultTable()
        >>> table.add_const_column("cpu", "i7")
        >>> table.add_row()
        >>> table.set_value("time", 3.0)
        >>> table.columns
        ['cpu', 'time']
    """

    def __init__(self) -> None:
        """Initialize an empty table."""
        self._columns: list[str] = []
        self._const: dict[str, Any] = {}
        self._defaults: dict[str, Any] = {}
        self._rows: list[dict[str, Any]] = []

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------

    def add_const_column(self, name: str, value: Any) -> None:
        """Declare a column whose value is shared by all rows.

        Raises:
            ColumnAlreadyExistsError: If the column is already declared.
        """
        if self.has_column(name):
            raise ColumnAlreadyExistsError(name)
        self._columns.append(name)
        self._const[name] = value

    def add_column(self, name: str, default: Any = None) -> None:
        """Declare a per-row column.

        Args:
            name: Column name.
            default: Value reported by rows that never set this column.

        Raises:
            ColumnAlreadyExistsError: If the column is already declared.
        """
        if self.has_column(name):
            raise ColumnAlreadyExistsError(name)
        self._columns.append(name)
        self._defaults[name] = default

    def drop_column(self, name: str) -> bool:
        """Remove a column from the schema and every collected row.

        Reserved identity columns are never removed.

        Returns:
            True if the column was removed.
        """
        if name in RESERVED_COLUMNS or not self.has_column(name):
            return False
        self._columns.remove(name)
        self._const.pop(name, None)
        self._defaults.pop(name, None)
        for row in self._rows:
            row.pop(name, None)
        return True

    def has_column(self, name: str) -> bool:
        return name in self._const or name in self._defaults

    def is_const_column(self, name: str) -> bool:
        return name in self._const

    @property
    def columns(self) -> list[str]:
        """Get the column names in declaration order."""
        return list(self._columns)

    @property
    def const_columns(self) -> dict[str, Any]:
        """Get the constant columns and their values."""
        return dict(self._const)

    # -------------------------------------------------------------------------
    # Rows
    # -------------------------------------------------------------------------

    def add_row(self) -> None:
        """Append a row; constant columns apply to it automatically."""
        self._rows.append({})

    def set_value(self, column: str, value: Any) -> None:
        """Write a value into the most recently added row.

        Writing an undeclared column declares it as a per-row column.

        Raises:
            InvariantError: If no row has been added or the column is constant.
        """
        if not self._rows:
            raise InvariantError(f"set_value('{column}') called before add_row()")
        if column in self._const:
            raise InvariantError(f"Cannot set per-row value of constant column '{column}'")
        if column not in self._defaults:
            self.add_column(column)
        self._rows[-1][column] = value

    def _materialize(self, row: dict[str, Any]) -> dict[str, Any]:
        """Return a row with a value for every declared column."""
        result = {}
        for column in self._columns:
            if column in self._const:
                result[column] = self._const[column]
            else:
                result[column] = row.get(column, self._defaults[column])
        return result

    @property
    def rows(self) -> list[dict[str, Any]]:
        """Get all rows with every column filled in."""
        return [self._materialize(row) for row in self._rows]

    def column(self, name: str) -> list[Any]:
        """Get the values of one column across all rows."""
        if not self.has_column(name):
            raise KeyError(name)
        return [row[name] for row in self.rows]

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def copy(self) -> "ResultTable":
        """Return an independent copy of this table."""
        other = ResultTable()
        other._columns = list(self._columns)
        other._const = dict(self._const)
        other._defaults = dict(self._defaults)
        other._rows = [dict(row) for row in self._rows]
        return other

    def to_dict(self) -> dict[str, list[Any]]:
        """Convert to a column-oriented dictionary."""
        rows = self.rows
        return {column: [row[column] for row in rows] for column in self._columns}

    @classmethod
    def concat(cls, tables: Iterable["ResultTable"]) -> "ResultTable":
        """Merge tables into one, keeping row order.

        The merged schema is the union of all columns in first-seen order.
        Every column becomes per-row; rows from tables lacking a column
        report None for it.
        """
        merged = cls()
        for table in tables:
            for column in table.columns:
                if not merged.has_column(column):
                    merged.add_column(column)
            for row in table.rows:
                merged.add_row()
                for column, value in row.items():
                    merged.set_value(column, value)
        return merged

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.rows)

    def __len__(self) -> int:
        """Return number of rows."""
        return len(self._rows)
