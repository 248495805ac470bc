#!/usr/bin/env python3
"""Gauge CLI - run benchmarks defined in Python files.

CLI Examples:
    gauge benchmarks/                         # Run every benchmark in a directory
    gauge bench_sort.py --print_benchmarks    # List benchmarks of a file
    gauge bench_sort.py --gauge_filter=Sort.* --runs=5 --use_csv
"""

import sys
from collections.abc import Sequence

from gauge.loader import load_benchmarks
from gauge.runner import Runner
from gauge.utils.env import get_env
from gauge.utils.logger import Logger


def split_arguments(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split leading benchmark paths from the runner's options."""
    paths: list[str] = []
    args = list(argv)
    while args and not args[0].startswith("-"):
        paths.append(args.pop(0))
    return paths, args


def main(argv: Sequence[str] | None = None) -> None:
    """Load the given benchmark modules and run them."""
    if not Logger.is_configured():
        Logger.configure(
            level=get_env("GAUGE_LOG_LEVEL", default="WARNING"), output="stderr"
        )

    paths, args = split_arguments(sys.argv[1:] if argv is None else argv)
    runner = Runner.instance()

    try:
        for path in paths:
            load_benchmarks(path, runner)
    except Exception as e:
        runner.fail(e)

    runner.run(args)


if __name__ == "__main__":
    main()
