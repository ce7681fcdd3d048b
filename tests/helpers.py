"""Helpers shared by the indicator tests."""

import math
from typing import Iterable

import numpy as np


def run(indicator, data: Iterable) -> list:
    """Feed every data point through ``next`` and collect the outputs."""
    return [indicator.next(point) for point in data]


def as_array(outputs: list) -> np.ndarray:
    """Outputs (floats or NamedTuples) as a float array; numpy asserts treat NaNs as equal."""
    return np.asarray(outputs, dtype=float)


def is_nan(value) -> bool:
    return isinstance(value, float) and math.isnan(value)
