"""
Min/Max technical indicators.

Classes:
    Minimum: Lowest value over the last N ticks
    Maximum: Highest value over the last N ticks
"""

import math

from ..base import BaseIndicator
from ..quotes import DataPoint
from ..rolling import RollingMinMax


class Minimum(BaseIndicator[DataPoint]):
    """
    Rolling minimum.

    Reads the ``low`` of a bar by default; a bare number is used as-is.
    During warm-up the minimum covers the ticks seen so far.
    """

    def __init__(self, period: int, input_field: str = 'low'):
        super().__init__(period, input_field)
        self._extremes = RollingMinMax(period)

    def update(self, data_point: DataPoint) -> None:
        (value,) = self._read_inputs(data_point)
        self._extremes.push(value)
        self._update_metadata()

    @property
    def value(self) -> float:
        if not len(self._extremes):
            return math.nan
        return self._extremes.min

    def reset(self) -> None:
        super().reset()
        self._extremes.clear()


class Maximum(BaseIndicator[DataPoint]):
    """
    Rolling maximum.

    Reads the ``high`` of a bar by default; a bare number is used as-is.
    """

    def __init__(self, period: int, input_field: str = 'high'):
        super().__init__(period, input_field)
        self._extremes = RollingMinMax(period)

    def update(self, data_point: DataPoint) -> None:
        (value,) = self._read_inputs(data_point)
        self._extremes.push(value)
        self._update_metadata()

    @property
    def value(self) -> float:
        if not len(self._extremes):
            return math.nan
        return self._extremes.max

    def reset(self) -> None:
        super().reset()
        self._extremes.clear()
