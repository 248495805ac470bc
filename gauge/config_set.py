"""Configuration sets for parameterized benchmarks.

A ConfigSet is one point in a benchmark's parameter matrix: an ordered
mapping from option name to an int, float, str or bool value.

Usage:
    from gauge.config_set import ConfigSet

    cs = ConfigSet(symbols=16, type="encoder")
    cs.get_int("symbols")        # 16
    cs.get_str("symbols")        # raises ConfigTypeError

    # Cartesian product, first key is the outermost loop
    sets = ConfigSet.product(symbols=[16, 32], type=["encoder", "decoder"])
"""

import itertools
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TypeVar

from gauge.errors import ConfigTypeError

ConfigValue = int | float | str | bool

T = TypeVar("T", int, float, str, bool)

_VALUE_TYPES: tuple[type, ...] = (bool, int, float, str)


def _value_type(value: Any) -> type:
    """Return the tag of a configuration value."""
    # bool is checked first since it is a subclass of int
    for value_type in _VALUE_TYPES:
        if isinstance(value, value_type):
            return value_type
    return type(value)


class ConfigSet(Mapping[str, ConfigValue]):
    """Ordered, string-keyed store of typed configuration values."""

    def __init__(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        self._values: dict[str, ConfigValue] = {}
        for key, value in {**(values or {}), **kwargs}.items():
            self.set_value(key, value)

    def set_value(self, key: str, value: Any) -> None:
        """Set a value, which must be an int, float, str or bool.

        Raises:
            ConfigTypeError: If the value has any other type.
        """
        if _value_type(value) not in _VALUE_TYPES:
            raise ConfigTypeError(key, "int, float, str or bool", type(value))
        self._values[key] = value

    def get_value(self, key: str, as_type: type[T]) -> T:
        """Get a value, checking that it carries the requested type.

        Raises:
            KeyError: If the key is not present.
            ConfigTypeError: If the stored value has a different type.
        """
        value = self._values[key]
        actual = _value_type(value)
        # ints widen to float, nothing else converts implicitly
        if actual is as_type or (as_type is float and actual is int):
            return as_type(value)
        raise ConfigTypeError(key, as_type, actual)

    def get_int(self, key: str) -> int:
        return self.get_value(key, int)

    def get_float(self, key: str) -> float:
        return self.get_value(key, float)

    def get_str(self, key: str) -> str:
        return self.get_value(key, str)

    def get_bool(self, key: str) -> bool:
        return self.get_value(key, bool)

    @classmethod
    def product(cls, **value_lists: Iterable[Any]) -> list["ConfigSet"]:
        """Build one ConfigSet per point of the cartesian product.

        Args:
            **value_lists: Option name to the values it takes. The first
                option varies slowest.

        Returns:
            List of ConfigSets in nested-loop order.
        """
        keys = list(value_lists)
        values = [list(v) for v in value_lists.values()]
        return [cls(dict(zip(keys, combo))) for combo in itertools.product(*values)]

    def to_dict(self) -> dict[str, ConfigValue]:
        return dict(self._values)

    def __getitem__(self, key: str) -> ConfigValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"ConfigSet({items})"
