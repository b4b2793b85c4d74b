"""Daily data volume unit handling (GB <-> MB).

The engine always works in GB. Interactive surfaces may let the user enter the
volume in MB instead; these helpers convert the displayed value and apply the
clamps that keep it inside the range of the active unit.
"""
import math
from dataclasses import dataclass
from enum import Enum

from sparktune.utils.conversions import MB_PER_GB


class VolumeUnit(str, Enum):
    GB = "GB"
    MB = "MB"


@dataclass(frozen=True)
class VolumeRange:
    minimum: int
    maximum: int
    step: int


VOLUME_RANGES = {
    VolumeUnit.GB: VolumeRange(minimum=1, maximum=1000, step=1),
    VolumeUnit.MB: VolumeRange(minimum=10, maximum=999, step=10),
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_gb(value: float, unit: VolumeUnit) -> float:
    """Convert a displayed volume to the GB value the engine consumes."""
    if VolumeUnit(unit) is VolumeUnit.MB:
        return value / MB_PER_GB
    return float(value)


def display_value(volume_gb: float, unit: VolumeUnit) -> int:
    """Whole-number volume in the display unit."""
    if VolumeUnit(unit) is VolumeUnit.MB:
        return _round_half_up(volume_gb * MB_PER_GB)
    return _round_half_up(volume_gb)


def switch_unit(volume_gb: float, new_unit: VolumeUnit) -> float:
    """
    Return the GB value to keep after the display unit changes to ``new_unit``.

    Switching to MB caps the volume at 999 MB (the top of the MB range);
    switching to GB raises anything below 1 GB to 1 GB.
    """
    new_unit = VolumeUnit(new_unit)
    if new_unit is VolumeUnit.MB:
        ceiling = VOLUME_RANGES[VolumeUnit.MB].maximum
        if volume_gb * MB_PER_GB > ceiling:
            return ceiling / MB_PER_GB
        return volume_gb
    floor = VOLUME_RANGES[VolumeUnit.GB].minimum
    if volume_gb < floor:
        return float(floor)
    return volume_gb


def format_volume(volume_gb: float) -> str:
    """Human readable volume, e.g. ``512MB`` or ``100GB``."""
    if volume_gb < 1:
        return f"{display_value(volume_gb, VolumeUnit.MB)}MB"
    return f"{display_value(volume_gb, VolumeUnit.GB)}GB"
