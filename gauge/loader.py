"""Loading benchmark modules from files.

A benchmark module defines a module-level register(runner) function that
registers its benchmarks, options and printers:

    def register(runner):
        runner.register_benchmark(AppendBenchmark, "MyTest", "append", runs=10)
"""

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING

from gauge.errors import BenchmarkModuleError
from gauge.utils.logger import Logger

if TYPE_CHECKING:
    from gauge.runner import Runner

REGISTER_HOOK = "register"


def _import_file(filepath: Path) -> ModuleType:
    """Import a Python file as a module named after its stem."""
    module_name = f"gauge_benchmarks.{filepath.stem}"

    if module_name in sys.modules:
        return sys.modules[module_name]

    spec = importlib.util.spec_from_file_location(module_name, filepath)
    if spec is None or spec.loader is None:
        raise BenchmarkModuleError(str(filepath), "not an importable Python file")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        del sys.modules[module_name]
        raise
    return module


def load_benchmark_file(filepath: Path, runner: "Runner") -> None:
    """Import one benchmark module and call its register(runner) hook.

    Raises:
        BenchmarkModuleError: If the module has no register() function.
    """
    module = _import_file(filepath)
    hook = getattr(module, REGISTER_HOOK, None)
    if not callable(hook):
        raise BenchmarkModuleError(str(filepath), f"no {REGISTER_HOOK}(runner) function")
    Logger.get("loader").debug(f"Registering benchmarks from {filepath}")
    hook(runner)


def load_benchmarks(path: str | Path, runner: "Runner") -> int:
    """Load a benchmark file, or every benchmark file in a directory.

    Files in a directory are loaded in name order; files starting with "_"
    are skipped.

    Returns:
        Number of modules loaded.

    Raises:
        BenchmarkModuleError: If the path does not exist or a module cannot
            be registered.
    """
    path = Path(path)
    if not path.exists():
        raise BenchmarkModuleError(str(path), "no such file or directory")

    if path.is_file():
        load_benchmark_file(path, runner)
        return 1

    files = [f for f in sorted(path.glob("*.py")) if not f.name.startswith("_")]
    for py_file in files:
        load_benchmark_file(py_file, runner)
    return len(files)
