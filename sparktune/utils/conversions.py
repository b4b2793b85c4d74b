"""Data conversion utilities for SparkTune.

This module provides conversion functions shared by the engine and its surfaces:
- camelCase keyword support for dataclasses
- Fixed-point rounding that matches the flag/display contract
- Number formatting for warning messages
- Memory unit conversions (GB to MB)
"""
import math
import re
from decimal import ROUND_HALF_UP
from decimal import Decimal
from typing import Any
from typing import Type
from typing import TypeVar

T = TypeVar("T")

MB_PER_GB = 1024


def camelcase(cls: Type[T]) -> Type[T]:
    """
    Decorator to allow a dataclass to be initialized from camelCase keys.
    Must be placed above the @dataclass decorator.
    """

    def _camel_to_snake(name: str) -> str:
        """
        Converts a camelCase string to snake_case, correctly handling acronyms.
        """
        name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name)
        name = re.sub(r"([A-Z])([A-Z][a-z])", r"\1_\2", name)
        return name.lower()

    original_init = cls.__init__

    def __init__(self, *args, **kwargs: Any):
        if args:
            raise TypeError(
                f"{cls.__name__} only supports keyword arguments for initialization."
            )

        snake_case_kwargs = {_camel_to_snake(k): v for k, v in kwargs.items()}
        original_init(self, **snake_case_kwargs)

    cls.__init__ = __init__
    return cls


def round_fixed(value: float, digits: int = 2) -> float:
    """Round half away from zero on the exact binary value of ``value``.

    Python's ``round`` sends exact ties to the even neighbour (``round(0.125, 2)``
    is ``0.12``); plans are rounded the way ``Number.toFixed`` does it, so the
    same tie gives ``0.13``.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_fixed(value: float, digits: int = 2) -> str:
    """String form of ``round_fixed`` padded to ``digits`` decimals."""
    return f"{round_fixed(value, digits):.{digits}f}"


def format_number(value: float) -> str:
    """Shortest form of a number: ``2.0`` renders as ``2``, ``0.75`` stays ``0.75``."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def gb_to_mb_ceil(value_gb: float) -> int:
    """GB to whole MB, rounded up so the flag never under-allocates."""
    return math.ceil(value_gb * MB_PER_GB)
