"""Parameterized benchmarks driven by command-line options.

Run with:
    gauge examples/option_benchmarks.py --warmup_time=0
    gauge examples/option_benchmarks.py --symbols 8 --symbols 64 --use_csv
    python examples/option_benchmarks.py --print_benchmarks
"""

import time

import click

from gauge import ConfigSet, Runner, TimeBenchmark


class SleepBenchmark(TimeBenchmark):
    """Sleeps for one millisecond per symbol."""

    def get_options(self, options):
        for cs in ConfigSet.product(
            symbols=options["symbols"],
            symbol_size=options["symbol_size"],
            type=options["type"],
        ):
            self.add_configuration(cs)

    def prepare_table(self, table):
        super().prepare_table(table)
        table.add_column("delay_ms")

    def test_body(self):
        delay = self.get_current_configuration().get_int("symbols") / 1000.0
        for _ in self.iterations():
            time.sleep(delay)

    def store_run(self, table):
        super().store_run(table)
        table.set_value("delay_ms", self.get_current_configuration().get_int("symbols"))


class JoinBenchmark(TimeBenchmark):
    """Joins a list of symbol_size strings."""

    def get_options(self, options):
        for cs in ConfigSet.product(symbol_size=options["symbol_size"]):
            self.add_configuration(cs)

    def init(self):
        size = self.get_current_configuration().get_int("symbol_size")
        self.parts = ["x"] * size

    def needs_warmup_iteration(self):
        return True

    def test_body(self):
        for _ in self.iterations():
            "".join(self.parts)


def register(runner):
    runner.add_option(
        "--symbols",
        type=int,
        multiple=True,
        default=[16, 32],
        show_default=True,
        help="Set the number of symbols",
    )
    runner.add_option(
        "--symbol_size",
        type=int,
        multiple=True,
        default=[1600],
        show_default=True,
        help="Set the symbol size in bytes",
    )
    runner.add_option(
        "--type",
        type=click.Choice(["encoder", "decoder"]),
        multiple=True,
        default=["encoder", "decoder"],
        show_default=True,
        help="Set type [encoder|decoder]",
    )
    runner.register_benchmark(SleepBenchmark, "options", "sleep", runs=1)
    runner.register_benchmark(JoinBenchmark, "strings", "join", runs=5)


if __name__ == "__main__":
    register(Runner.instance())
    Runner.instance().run()
