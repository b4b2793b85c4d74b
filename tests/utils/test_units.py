import pytest

from sparktune.utils.units import VOLUME_RANGES
from sparktune.utils.units import VolumeUnit
from sparktune.utils.units import display_value
from sparktune.utils.units import format_volume
from sparktune.utils.units import switch_unit
from sparktune.utils.units import to_gb


class TestSwitchUnit:
    def test_to_mb_clamps_to_999mb(self):
        assert switch_unit(100, VolumeUnit.MB) == 999 / 1024
        assert display_value(switch_unit(100, VolumeUnit.MB), VolumeUnit.MB) == 999

    def test_to_mb_keeps_small_volumes(self):
        assert switch_unit(0.5, VolumeUnit.MB) == 0.5

    def test_to_gb_raises_to_one_gb(self):
        assert switch_unit(0.5, VolumeUnit.GB) == 1.0
        assert switch_unit(999 / 1024, "GB") == 1.0

    def test_to_gb_keeps_large_volumes(self):
        assert switch_unit(250, VolumeUnit.GB) == 250


def test_to_gb():
    assert to_gb(512, VolumeUnit.MB) == 0.5
    assert to_gb(100, VolumeUnit.GB) == 100.0
    assert to_gb(1024, "MB") == 1.0


def test_display_value_rounds_half_up():
    assert display_value(0.5, VolumeUnit.MB) == 512
    assert display_value(2.5, VolumeUnit.GB) == 3
    assert display_value(2.4, VolumeUnit.GB) == 2


@pytest.mark.parametrize("volume_gb", [0.01, 0.3, 0.5, 0.9, 100, 1000])
def test_mb_round_trip_within_one_unit(volume_gb):
    shown_gb = switch_unit(volume_gb, VolumeUnit.MB)
    shown_mb = display_value(shown_gb, VolumeUnit.MB)

    assert abs(to_gb(shown_mb, VolumeUnit.MB) - shown_gb) <= 0.5 / 1024


@pytest.mark.parametrize("volume_gb", [0.2, 1, 1.4, 99.6, 1000])
def test_gb_round_trip_within_one_unit(volume_gb):
    shown_gb = switch_unit(volume_gb, VolumeUnit.GB)
    shown = display_value(shown_gb, VolumeUnit.GB)

    assert abs(to_gb(shown, VolumeUnit.GB) - shown_gb) <= 0.5


def test_every_mb_slider_position_survives_round_trip():
    mb_range = VOLUME_RANGES[VolumeUnit.MB]
    for mb in range(mb_range.minimum, mb_range.maximum + 1, mb_range.step):
        assert display_value(to_gb(mb, VolumeUnit.MB), VolumeUnit.MB) == mb


def test_format_volume():
    assert format_volume(0.5) == "512MB"
    assert format_volume(1) == "1GB"
    assert format_volume(100) == "100GB"
