import json

import pytest

from sparktune.cli import MEMORY_BAR_WIDTH
from sparktune.cli import build_parser
from sparktune.cli import main
from sparktune.cli import memory_bar_cells
from sparktune.cli import resolve_config
from sparktune.config.settings import Settings
from sparktune.models.allocation import MemoryShares


def run_json(capsys, *argv):
    assert main(["--json", *argv]) == 0
    return json.loads(capsys.readouterr().out)


class TestJsonOutput:
    def test_defaults(self, capsys):
        payload = run_json(capsys)

        assert payload["config"]["nodes"] == 10
        assert payload["result"]["total_executors"] == 29
        assert payload["result"]["shuffle_partitions"] == 512
        assert "explanation" not in payload

    def test_flags_override_defaults(self, capsys):
        payload = run_json(
            capsys,
            "--nodes",
            "4",
            "--cores-per-node",
            "8",
            "--ram-per-node",
            "128",
            "--workload",
            "heavy",
            "--storage-format",
            "delta",
            "--off-heap",
        )

        assert payload["config"]["workload_type"] == "heavy"
        assert payload["config"]["enable_off_heap"] is True
        assert payload["result"]["total_executors"] == 3
        assert payload["result"]["warnings"][0].startswith("Large Heap")

    def test_volume_in_megabytes(self, capsys):
        payload = run_json(capsys, "--data-volume", "500", "--volume-unit", "MB")

        assert payload["config"]["data_volume_gb"] == pytest.approx(500 / 1024)
        assert payload["result"]["shuffle_partitions"] == 3

    def test_explanation_included(self, capsys):
        payload = run_json(capsys, "--explain")

        labels = [step["label"] for step in payload["explanation"]]
        assert labels[0] == "Executors Per Node"


class TestErrors:
    def test_out_of_range_node_count(self, capsys):
        assert main(["--nodes", "0"]) == 1
        assert "nodes must be between 1 and 100" in capsys.readouterr().out

    def test_volume_outside_unit_range(self, capsys):
        assert main(["--data-volume", "5000", "--volume-unit", "MB"]) == 1
        assert "--data-volume must be between 10 and 999 MB" in capsys.readouterr().out

    def test_missing_settings_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
        assert "Settings file not found" in capsys.readouterr().out

    def test_bad_log_level(self, capsys):
        assert main(["--log-level", "chatty"]) == 1

    @pytest.mark.parametrize("line", ["nodes: ten", "ramPerNode:", "enableOffHeap: 'false'"])
    def test_wrongly_typed_settings_value(self, tmp_path, capsys, line):
        path = tmp_path / "config.yaml"
        path.write_text(f"cluster:\n  {line}\n")

        assert main(["--config", str(path)]) == 1
        assert "Invalid cluster value" in capsys.readouterr().out


def test_settings_file_is_overridden_by_flags(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("cluster:\n  nodes: 20\n  ramPerNode: 128\n")
    args = build_parser().parse_args(["--config", str(path), "--nodes", "5"])

    from sparktune.config.settings import load_settings

    config = resolve_config(args, load_settings(args.config))

    assert config.nodes == 5
    assert config.ram_per_node == 128


def test_unset_flags_keep_settings():
    args = build_parser().parse_args([])

    assert resolve_config(args, Settings()) == Settings().cluster


def test_rendered_plan(capsys):
    assert main(["--explain"]) == 0
    out = capsys.readouterr().out

    assert "Allocation Summary" in out
    assert "--num-executors 29" in out
    assert "Live Math" in out
    assert "Critical Configuration Issue" not in out


def test_rendered_critical_warning(capsys):
    assert main(["--cores-per-node", "32", "--ram-per-node", "8"]) == 0
    out = capsys.readouterr().out

    assert "Critical Configuration Issue" in out
    assert "--num-executors" in out


def test_sink_path(tmp_path, capsys):
    sink_dir = tmp_path / "plans"

    assert main(["--json", "--sink-path", str(sink_dir)]) == 0
    assert any(sink_dir.iterdir())


def test_off_heap_from_settings_can_be_turned_off(tmp_path, capsys):
    path = tmp_path / "config.yaml"
    path.write_text("cluster:\n  enableOffHeap: true\n")

    assert run_json(capsys, "--config", str(path))["config"]["enable_off_heap"] is True
    payload = run_json(capsys, "--config", str(path), "--no-off-heap")
    assert payload["config"]["enable_off_heap"] is False
    assert payload["result"]["off_heap_memory"] == 0


class TestMemoryBar:
    def test_cells_fill_the_bar(self):
        shares = MemoryShares(overhead_pct=10.0, off_heap_pct=15.0, heap_pct=75.0)

        assert memory_bar_cells(shares) == (4, 6, 30)

    def test_overhead_larger_than_container_is_clamped(self):
        shares = MemoryShares(overhead_pct=160.0, off_heap_pct=15.0, heap_pct=0.0)

        assert memory_bar_cells(shares) == (MEMORY_BAR_WIDTH, 0, 0)

    def test_negative_heap_plan_renders(self, capsys):
        assert main(["--nodes", "1", "--cores-per-node", "128", "--ram-per-node", "8"]) == 0
        bar_lines = [line for line in capsys.readouterr().out.splitlines() if "█" in line]

        assert bar_lines
        assert all(line.count("█") == MEMORY_BAR_WIDTH for line in bar_lines)


class TestBeginnerMode:
    def test_notes_are_rendered(self, capsys):
        assert main(["--beginner"]) == 0
        out = capsys.readouterr().out

        assert "Beginner Notes" in out
        assert "Memory Split:" in out
        assert "Executor Cores:" in out

    def test_notes_are_off_by_default(self, capsys):
        assert main([]) == 0

        assert "Beginner Notes" not in capsys.readouterr().out

    def test_json_descriptions(self, capsys):
        payload = run_json(capsys, "--beginner")

        assert list(payload["descriptions"]) == [
            "Total Executors",
            "Executor Cores",
            "Executor Memory",
            "Shuffle Partitions",
            "Default Parallelism",
        ]
