import pytest

from sparktune.config.settings import ensure_within_bounds
from sparktune.config.settings import load_settings
from sparktune.config.settings import validate_bounds
from sparktune.models.cluster_config import ClusterConfig
from sparktune.models.cluster_config import WorkloadType


def write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


class TestLoadSettings:
    def test_camel_case_cluster_section(self, tmp_path):
        path = write(
            tmp_path,
            "cluster:\n"
            "  nodes: 20\n"
            "  coresPerNode: 32\n"
            "  workloadType: heavy\n"
            "logging:\n"
            "  level: debug\n",
        )

        settings = load_settings(path)

        assert settings.cluster.nodes == 20
        assert settings.cluster.cores_per_node == 32
        assert settings.cluster.ram_per_node == 64
        assert settings.cluster.workload_type is WorkloadType.HEAVY
        assert settings.log_level == "DEBUG"

    def test_empty_file_gives_defaults(self, tmp_path):
        settings = load_settings(write(tmp_path, ""))

        assert settings.cluster == ClusterConfig()
        assert settings.log_level == "WARNING"

    def test_example_file_loads(self):
        from pathlib import Path

        example = Path(__file__).resolve().parents[2] / "config.yaml.example"
        settings = load_settings(example)

        assert settings.cluster == ClusterConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        with pytest.raises(ValueError):
            load_settings(write(tmp_path, "cluster: [unclosed\n"))

    def test_non_mapping(self, tmp_path):
        with pytest.raises(ValueError):
            load_settings(write(tmp_path, "- just\n- a list\n"))

    def test_unknown_cluster_field(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid cluster section"):
            load_settings(write(tmp_path, "cluster:\n  gpus: 8\n"))

    def test_bad_enum_value(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid cluster value"):
            load_settings(write(tmp_path, "cluster:\n  storageFormat: hudi\n"))

    @pytest.mark.parametrize(
        "line, field_name",
        [
            ("nodes: ten", "nodes"),
            ("ramPerNode:", "ram_per_node"),
            ("coresPerNode: true", "cores_per_node"),
            ("dataVolumeGB: '100'", "data_volume_gb"),
        ],
    )
    def test_non_numeric_value(self, tmp_path, line, field_name):
        with pytest.raises(ValueError, match=f"{field_name} must be a number"):
            load_settings(write(tmp_path, f"cluster:\n  {line}\n"))

    def test_off_heap_must_be_boolean(self, tmp_path):
        with pytest.raises(ValueError, match="enable_off_heap must be true or false"):
            load_settings(write(tmp_path, "cluster:\n  enableOffHeap: 'false'\n"))

    def test_yaml_booleans_and_floats_are_accepted(self, tmp_path):
        settings = load_settings(
            write(tmp_path, "cluster:\n  enableOffHeap: yes\n  dataVolumeGB: 0.5\n")
        )

        assert settings.cluster.enable_off_heap is True
        assert settings.cluster.data_volume_gb == 0.5


class TestBounds:
    def test_defaults_are_in_range(self):
        assert validate_bounds(ClusterConfig()) == []

    def test_out_of_range_values(self):
        errors = validate_bounds(ClusterConfig(nodes=0, ram_per_node=1024))

        assert len(errors) == 2
        assert errors[0].startswith("nodes must be between 1 and 100")
        assert errors[1].startswith("ram_per_node must be between 8 and 512")

    def test_step_is_enforced(self):
        errors = validate_bounds(ClusterConfig(cores_per_node=15))

        assert errors == ["cores_per_node must be a multiple of 2, got 15"]

    def test_wrong_types_are_reported_not_raised(self):
        errors = validate_bounds(ClusterConfig(nodes="ten", enable_off_heap="no"))

        assert errors == [
            "nodes must be a number, got 'ten'",
            "enable_off_heap must be true or false, got 'no'",
        ]

    def test_ensure_within_bounds_raises(self):
        with pytest.raises(ValueError, match="nodes must be between"):
            ensure_within_bounds(ClusterConfig(nodes=101))

    def test_ensure_within_bounds_returns_config(self):
        config = ClusterConfig(nodes=100, cores_per_node=128, ram_per_node=512)

        assert ensure_within_bounds(config) is config
