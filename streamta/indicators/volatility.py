"""
Volatility technical indicators.

This module implements indicators that measure market volatility.

Classes:
    StandardDeviation: Rolling population standard deviation
    TrueRange: Greatest of the bar range and the gaps to the previous close
    AverageTrueRange: EMA of the true range
"""

import math
from typing import Any, Dict, Optional

from ..base import BaseIndicator
from ..quotes import DataPoint, HighLowCloseInput
from ..rolling import RollingWindow
from .trend import EMA


class StandardDeviation(BaseIndicator[DataPoint]):
    """
    Rolling population standard deviation.

    Uses Welford's running mean and sum of squared deviations (M2), adjusted
    in O(1) when a value leaves the window. This avoids the cancellation error
    of the naive ``sum(x^2) - sum(x)^2`` formula on large prices.

    Mathematical Formula:
        variance = M2 / n,  std_dev = sqrt(variance)
        where n = min(period, count)

    Window update when x_old is replaced by x_new:
        mean' = mean + (x_new - x_old) / n
        M2'   = M2 + (x_new - x_old) * (x_new - mean' + x_old - mean)
    """

    def __init__(self, period: int, input_field: str = 'close'):
        super().__init__(period, input_field)
        self._window = RollingWindow(period)
        self._mean = 0.0
        self._m2 = 0.0

    def update(self, data_point: DataPoint) -> None:
        (value,) = self._read_inputs(data_point)
        evicted = self._window.push(value)

        if evicted is None:
            # Window still growing
            delta = value - self._mean
            self._mean += delta / len(self._window)
            self._m2 += delta * (value - self._mean)
        else:
            old_mean = self._mean
            delta = value - evicted
            self._mean += delta / self.period
            self._m2 += delta * (value - self._mean + evicted - old_mean)

        self._update_metadata()

    @property
    def mean(self) -> float:
        """Mean of the current window, NaN before the first tick."""
        if not len(self._window):
            return math.nan
        return self._mean

    @property
    def variance(self) -> float:
        if not len(self._window):
            return math.nan
        # M2 can drift a hair below zero on a flat window
        return max(self._m2, 0.0) / len(self._window)

    @property
    def value(self) -> float:
        """Population standard deviation of the current window."""
        variance = self.variance
        if math.isnan(variance):
            return math.nan
        return math.sqrt(variance)

    def reset(self) -> None:
        super().reset()
        self._window.clear()
        self._mean = 0.0
        self._m2 = 0.0


class TrueRange(BaseIndicator[HighLowCloseInput]):
    """
    True Range.

    Mathematical Formula:
        TR = max(high - low, |high - prev_close|, |low - prev_close|)

    The first bar has no previous close, so TR = high - low. A bare price is
    treated as a bar with high = low = close, which reduces TR to the
    absolute change from the previous price (0 on the first tick).
    """

    def __init__(self):
        super().__init__(period=1)
        self.required_inputs = ('high', 'low', 'close')
        self._prev_close: Optional[float] = None
        self._tr_value: Optional[float] = None

    def update(self, data_point: HighLowCloseInput) -> None:
        high, low, close = self._read_inputs(data_point)

        if self._prev_close is None:
            self._tr_value = high - low
        else:
            self._tr_value = max(
                high - low,
                abs(high - self._prev_close),
                abs(low - self._prev_close),
            )

        self._prev_close = close
        self._update_metadata()

    @property
    def value(self) -> float:
        if self._tr_value is None:
            return math.nan
        return self._tr_value

    @property
    def config(self) -> Dict[str, Any]:
        return {}

    def reset(self) -> None:
        super().reset()
        self._prev_close = None
        self._tr_value = None


class AverageTrueRange(BaseIndicator[HighLowCloseInput]):
    """
    Average True Range (ATR).

    Exponential moving average of the true range, seeded with the first
    bar's range.

    Attributes:
        true_range (TrueRange): Owned true range calculator.
        ema (EMA): Owned smoother applied to the true range.
    """

    def __init__(self, period: int = 14):
        super().__init__(period)
        self.required_inputs = ('high', 'low', 'close')

        self.true_range = TrueRange()
        self.ema = EMA(period)
        self._children = [self.true_range, self.ema]

    def update(self, data_point: HighLowCloseInput) -> None:
        self.ema.update(self.true_range.next(data_point))
        self._update_metadata()

    @property
    def value(self) -> float:
        return self.ema.value

    @property
    def config(self) -> Dict[str, Any]:
        return {'period': self.period}
