"""
Trend-following technical indicators.

This module implements moving averages. All updates are O(1).

Classes:
    SMA: Simple Moving Average over a rolling window with a running sum
    EMA: Exponential Moving Average seeded with the first observation
    SMMA: Smoothed (modified) moving average, Wilder's α = 1/N
"""

import math
from typing import Any, Dict, Optional

from ..base import BaseIndicator
from ..exceptions import InvalidParameterError
from ..quotes import DataPoint
from ..rolling import RollingSum
from .smoothing import EmaSmoothing, FixedAlphaSmoothing, SmoothingStrategy, WildersSmoothing


class SMA(BaseIndicator[DataPoint]):
    """
    Simple Moving Average (SMA) indicator.

    Mathematical Formula:
        SMA = (P1 + P2 + ... + Pn) / n

    The window keeps the last ``period`` prices and a running sum. When the
    window is full the evicted price is subtracted before the new one is
    added, so the sum is never recomputed from scratch.

    Warm-up:
        Before ``period`` prices have been seen the output is the mean of the
        prices seen so far. SMA(3) over 1, 2, 3, 4, 5 yields
        1, 1.5, 2, 3, 4.

    Example:
        >>> sma = SMA(period=3)
        >>> [sma.next(p) for p in [1, 2, 3, 4, 5]]
        [1.0, 1.5, 2.0, 3.0, 4.0]
    """

    def __init__(self, period: int, input_field: str = 'close'):
        """
        Initialize Simple Moving Average indicator.

        Args:
            period (int): Window length, positive integer >= 1.
            input_field (str): Bar field to average. Defaults to 'close'.

        Raises:
            InvalidParameterError: If period is not a positive integer.
        """
        super().__init__(period, input_field)
        self._window = RollingSum(period)

    def update(self, data_point: DataPoint) -> None:
        (value,) = self._read_inputs(data_point)
        self._window.push(value)
        self._update_metadata()

    @property
    def value(self) -> float:
        """Mean of the last min(period, count) prices, NaN before the first tick."""
        if not len(self._window):
            return math.nan
        return self._window.mean

    def reset(self) -> None:
        super().reset()
        self._window.clear()


class EMA(BaseIndicator[DataPoint]):
    """
    Exponential Moving Average (EMA) indicator.

    Mathematical Formula:
        EMA_0 = Price_0
        EMA_t = α * Price_t + (1-α) * EMA_{t-1}
        where α = 2 / (period + 1) unless a custom alpha is given

    The first observation seeds the average as-is. The recurrence is an owned
    SmoothingStrategy, the same one the RSI uses for its gain and loss
    averages.

    Example:
        >>> ema = EMA(period=3)
        >>> ema.next(10.0)
        10.0
        >>> ema.next(20.0)
        15.0
    """

    def __init__(self, period: int, input_field: str = 'close', alpha: Optional[float] = None):
        """
        Initialize Exponential Moving Average indicator.

        Args:
            period (int): Smoothing length, positive integer >= 1.
            input_field (str): Bar field to smooth. Defaults to 'close'.
            alpha (Optional[float]): Custom smoothing factor in (0, 1].
                If None, uses α = 2/(period+1).

        Raises:
            InvalidParameterError: If period is not positive or alpha is out of range.
        """
        super().__init__(period, input_field)

        if alpha is not None:
            if isinstance(alpha, bool) or not isinstance(alpha, (int, float)) or not 0 < alpha <= 1:
                raise InvalidParameterError("alpha", alpha, "value between 0 and 1", self._name)
            self._smoother: SmoothingStrategy = FixedAlphaSmoothing(period, alpha)
        else:
            self._smoother = self._default_smoother(period)

        self._custom_alpha = alpha is not None

    @staticmethod
    def _default_smoother(period: int) -> SmoothingStrategy:
        return EmaSmoothing(period)

    def update(self, data_point: DataPoint) -> None:
        (value,) = self._read_inputs(data_point)
        self._smoother.update(value)
        self._update_metadata()

    @property
    def value(self) -> float:
        """Current EMA, NaN before the first tick."""
        if self._smoother.value is None:
            return math.nan
        return self._smoother.value

    @property
    def alpha(self) -> float:
        return self._smoother.alpha

    @property
    def config(self) -> Dict[str, Any]:
        config = super().config
        if self._custom_alpha:
            config['alpha'] = self.alpha
        return config

    def reset(self) -> None:
        super().reset()
        self._smoother.reset()


class SMMA(EMA):
    """
    Smoothed or Modified Moving Average.

    Mathematical Formula:
        SMMA_0 = Price_0
        SMMA_t = (SMMA_{t-1} * (N - 1) + Price_t) / N

    This is an EMA with Wilder's factor α = 1/N.
    """

    def __init__(self, period: int, input_field: str = 'close'):
        super().__init__(period, input_field)

    @staticmethod
    def _default_smoother(period: int) -> SmoothingStrategy:
        return WildersSmoothing(period)
