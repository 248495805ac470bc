"""Tests for result printers."""

import csv
import json
from io import StringIO

import pytest
import yaml

from gauge.benchmark import Benchmark
from gauge.config_set import ConfigSet
from gauge.printers import (
    ConsolePrinter,
    CSVPrinter,
    JSONPrinter,
    PrinterDispatcher,
    StdoutPrinter,
    YAMLPrinter,
    default_printers,
)
from gauge.printers.base import Printer
from gauge.runner import Runner
from gauge.table import ResultTable

NO_WARMUP = "--warmup_time=0"


class ConfiguredBenchmark(Benchmark):
    """Two configurations, reporting a fixed time."""

    def get_options(self, options):
        for cs in ConfigSet.product(symbols=[16, 32]):
            self.add_configuration(cs)

    def test_body(self):
        pass

    def unit_text(self):
        return "us"

    def store_run(self, table):
        table.set_value("time", 2.5)


class PlainBenchmark(Benchmark):
    """No configurations."""

    def test_body(self):
        pass


class NamedPrinter(Printer):
    """Records the events it receives into a shared list."""

    def __init__(self, name, log, enabled=True):
        super().__init__(name, enabled)
        self.log = log

    def start(self):
        self.log.append((self.name, "start"))

    def end(self):
        self.log.append((self.name, "end"))


@pytest.fixture
def runner():
    runner = Runner(printers=[CSVPrinter(), JSONPrinter(), YAMLPrinter()])
    runner.register_benchmark(ConfiguredBenchmark, "Codec", "encode", runs=2)
    return runner


def file_args(tmp_path):
    return [
        NO_WARMUP,
        "--use_csv",
        "--use_json",
        "--use_yaml",
        f"--csv_file={tmp_path / 'out.csv'}",
        f"--json_file={tmp_path / 'out.json'}",
        f"--yaml_file={tmp_path / 'out.yaml'}",
    ]


class TestDispatcher:
    """Tests for PrinterDispatcher."""

    def test_order_and_enablement(self):
        """Test that only enabled printers get events, in order."""
        log = []
        dispatcher = PrinterDispatcher(
            [
                NamedPrinter("first", log),
                NamedPrinter("off", log, enabled=False),
                NamedPrinter("second", log),
            ]
        )

        dispatcher.start()
        dispatcher.end()

        assert [p.name for p in dispatcher.enabled()] == ["first", "second"]
        assert log == [
            ("first", "start"),
            ("second", "start"),
            ("first", "end"),
            ("second", "end"),
        ]

    def test_duplicate_name(self):
        """Test that two printers cannot share a name."""
        dispatcher = PrinterDispatcher([CSVPrinter()])
        with pytest.raises(ValueError):
            dispatcher.add(CSVPrinter("other.csv"))
        assert len(dispatcher) == 1

    def test_cli_options(self):
        """Test the options contributed by the default printers."""
        names = [
            option.name
            for option in PrinterDispatcher(default_printers()).cli_options()
        ]
        assert names == [
            "use_console",
            "use_yaml",
            "yaml_file",
            "use_json",
            "json_file",
            "use_csv",
            "csv_file",
            "use_stdout",
        ]

    def test_options_toggle_printers(self):
        """Test enabling and disabling printers from the command line."""
        printers = default_printers()
        runner = Runner(printers=printers)
        runner.apply_options(
            runner.parse_options(["--use_console=no", "--use_csv", "--use_json=true"])
        )

        enabled = [p.name for p in runner.dispatcher.enabled()]
        assert enabled == ["json", "csv"]


class TestFilePrinters:
    """Tests for the printers writing result files."""

    def test_csv(self, runner, tmp_path):
        """Test that all rows land under one header with config columns."""
        runner.run_unsafe(file_args(tmp_path))

        with open(tmp_path / "out.csv", newline="") as f:
            rows = list(csv.DictReader(f))

        assert len(rows) == 4
        assert [r["symbols"] for r in rows] == ["16", "16", "32", "32"]
        assert [r["run_number"] for r in rows] == ["0", "1", "0", "1"]
        assert {r["benchmark"] for r in rows} == {"encode"}
        assert {r["time"] for r in rows} == {"2.5"}

    def test_json(self, runner, tmp_path):
        """Test one column-oriented object per configuration."""
        runner.run_unsafe(file_args(tmp_path) + ["--add_column", "cpu=i7"])

        with open(tmp_path / "out.json") as f:
            data = json.load(f)

        assert len(data) == 2
        assert data[0]["symbols"] == [16, 16]
        assert data[1]["symbols"] == [32, 32]
        assert data[0]["cpu"] == ["i7", "i7"]
        assert data[0]["unit"] == ["us", "us"]
        assert data[0]["run_number"] == [0, 1]

    def test_yaml_matches_json(self, runner, tmp_path):
        """Test that the YAML document carries the same data as the JSON one."""
        runner.run_unsafe(file_args(tmp_path))

        with open(tmp_path / "out.json") as f:
            from_json = json.load(f)
        with open(tmp_path / "out.yaml") as f:
            from_yaml = yaml.safe_load(f)

        assert from_yaml == from_json

    def test_disabled_printer_writes_nothing(self, runner, tmp_path):
        """Test that a disabled file printer creates no file."""
        runner.run_unsafe([NO_WARMUP, f"--csv_file={tmp_path / 'out.csv'}"])
        assert not (tmp_path / "out.csv").exists()

    def test_written_once_at_end(self, tmp_path):
        """Test that the file appears only when the run ends."""
        path = tmp_path / "results.csv"
        printer = CSVPrinter(str(path), enabled=True)

        table = ResultTable()
        table.add_row()
        table.set_value("time", 1.0)

        printer.start()
        printer.benchmark_result(PlainBenchmark(), table)
        assert not path.exists()
        assert len(printer.tables) == 1

        printer.end()
        assert path.read_text().splitlines() == ["time", "1.0"]

    def test_buffered_table_is_a_copy(self):
        """Test that configuration columns do not leak into the runner's table."""
        benchmark = ConfiguredBenchmark()
        benchmark.request_configurations({})
        benchmark.set_current_configuration(0)

        table = ResultTable()
        table.add_row()
        printer = JSONPrinter(enabled=True)
        printer.benchmark_result(benchmark, table)

        assert not table.has_column("symbols")
        assert printer.tables[0].const_columns == {"symbols": 16}


class TestConsolePrinter:
    """Tests for the terminal printer."""

    def test_output(self):
        """Test the progress lines and result table."""
        stream = StringIO()
        runner = Runner(printers=[ConsolePrinter(stream)])
        runner.register_benchmark(ConfiguredBenchmark, "Codec", "encode", runs=1)

        runner.run_unsafe([NO_WARMUP])
        lines = stream.getvalue().splitlines()

        assert lines[0] == "[==========] Running benchmarks."
        assert lines[1] == "[ RUN      ] Codec.encode (symbols=16)"
        assert lines[2] == "[       OK ] Codec.encode (symbols=16)"
        assert "[ RUN      ] Codec.encode (symbols=32)" in lines
        assert lines[-1] == "[==========] 2 benchmark run(s) completed."

    def test_format_table(self):
        """Test aligning the per-row columns."""
        table = ResultTable()
        table.add_const_column("unit", "us")
        table.add_const_column("cpu", "i7")
        table.add_column("run_number")
        table.add_column("time")
        for i, value in enumerate((12.3456, 1.5)):
            table.add_row()
            table.set_value("run_number", i)
            table.set_value("time", value)

        assert ConsolePrinter.format_table(table).splitlines() == [
            "  cpu=i7",
            "  unit: us",
            "  run_number   time",
            "           0  12.35",
            "           1   1.50",
        ]


class TestStdoutPrinter:
    """Tests for the JSON lines printer."""

    def test_one_line_per_table(self):
        """Test that every table becomes one JSON document."""
        stream = StringIO()
        runner = Runner(printers=[StdoutPrinter(stream)])
        runner.register_benchmark(ConfiguredBenchmark, "Codec", "encode", runs=2)

        runner.run_unsafe([NO_WARMUP, "--use_stdout"])
        lines = stream.getvalue().splitlines()

        assert len(lines) == 2
        assert json.loads(lines[0])["time"] == [2.5, 2.5]
