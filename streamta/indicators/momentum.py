"""
Momentum technical indicators.

This module implements indicators that measure the speed and strength of price movements.
All indicators use O(1) streaming updates.

Classes:
    RSI: Relative Strength Index with configurable smoothing strategies
    RateOfChange: Percentage change over N ticks
    EfficiencyRatio: Kaufman's efficiency ratio (net move / path length)
"""

import math
from typing import Any, Dict, Literal, Optional

from ..base import BaseIndicator
from ..quotes import DataPoint
from ..rolling import RollingSum, RollingWindow
from .smoothing import create_smoother

# RSI reported when the average loss is zero (no downward moves in memory)
RSI_ZERO_LOSS_VALUE = 100.0


class RSI(BaseIndicator[DataPoint]):
    """
    Relative Strength Index (RSI) momentum indicator.

    Mathematical Formula:
        RSI = 100 - (100 / (1 + RS))
        where RS = Average Gain / Average Loss

        Gains = max(0, current_price - previous_price)
        Losses = max(0, previous_price - current_price)

    Smoothing Methods:
        - 'ema': Standard EMA smoothing (α = 2/(N+1)), the default
        - 'wilders': Wilder's original smoothing (α = 1/N)

    Both averages are seeded with the first price change.

    Edge cases:
        - The first tick only records the price; there is no change to
          measure yet, so the value is NaN.
        - An average loss of zero maps to ``RSI_ZERO_LOSS_VALUE`` (100.0),
          including a flat series where the average gain is zero too.

    Example:
        >>> rsi = RSI(period=14)
        >>> for bar in bars:
        ...     value = rsi.next(bar)
        ...     if rsi.is_ready and value > 70:
        ...         print(f"Overbought: RSI = {value:.1f}")
    """

    def __init__(
        self,
        period: int = 14,
        input_field: str = 'close',
        smoothing: Literal['ema', 'wilders'] = 'ema'
    ):
        """
        Initialize Relative Strength Index indicator.

        Args:
            period (int): Smoothing length for gains and losses.
            input_field (str): Bar field to use. Defaults to 'close'.
            smoothing (str): 'ema' or 'wilders'.

        Raises:
            InvalidParameterError: If period is not positive or smoothing is unknown.
        """
        super().__init__(period, input_field)

        # One extra tick is spent establishing the first previous price
        self._ready_threshold = period + 1

        self._gain_smoother = create_smoother(smoothing, period, self._name)
        self._loss_smoother = create_smoother(smoothing, period, self._name)
        self.smoothing = smoothing

        self._previous_price: Optional[float] = None
        self._rsi_value: Optional[float] = None

    def update(self, data_point: DataPoint) -> None:
        (current_price,) = self._read_inputs(data_point)

        if self._previous_price is None:
            self._previous_price = current_price
            self._update_metadata()
            return

        price_change = current_price - self._previous_price
        gain = max(0.0, price_change)
        loss = max(0.0, -price_change)

        avg_gain = self._gain_smoother.update(gain)
        avg_loss = self._loss_smoother.update(loss)

        if avg_loss == 0:
            self._rsi_value = RSI_ZERO_LOSS_VALUE
        else:
            rs = avg_gain / avg_loss
            self._rsi_value = 100.0 - (100.0 / (1.0 + rs))

        self._previous_price = current_price
        self._update_metadata()

    @property
    def value(self) -> float:
        """Current RSI between 0 and 100, NaN until a price change has been seen."""
        if self._rsi_value is None:
            return math.nan
        return self._rsi_value

    @property
    def average_gain(self) -> float:
        if self._gain_smoother.value is None:
            return math.nan
        return self._gain_smoother.value

    @property
    def average_loss(self) -> float:
        if self._loss_smoother.value is None:
            return math.nan
        return self._loss_smoother.value

    @property
    def relative_strength(self) -> float:
        """
        Current RS = average_gain / average_loss.

        Returns:
            float: NaN before the first price change, infinity when the
                average loss is zero.
        """
        avg_gain = self.average_gain
        avg_loss = self.average_loss

        if math.isnan(avg_gain) or math.isnan(avg_loss):
            return math.nan

        if avg_loss == 0:
            return math.inf

        return avg_gain / avg_loss

    @property
    def config(self) -> Dict[str, Any]:
        config = super().config
        config['smoothing'] = self.smoothing
        return config

    def reset(self) -> None:
        super().reset()
        self._previous_price = None
        self._rsi_value = None
        self._gain_smoother.reset()
        self._loss_smoother.reset()


class RateOfChange(BaseIndicator[DataPoint]):
    """
    Rate of Change (ROC).

    Mathematical Formula:
        ROC = 100 * (Price_t - Price_{t-n}) / Price_{t-n}

    During warm-up the reference is the oldest price seen, and the first
    tick yields 0. A reference price of zero yields 0 rather than a division
    error.

    Example:
        >>> roc = RateOfChange(period=3)
        >>> [round(roc.next(p), 3) for p in [10.0, 10.4, 10.57, 10.8, 10.9]]
        [0.0, 4.0, 5.7, 8.0, 4.808]
    """

    def __init__(self, period: int = 9, input_field: str = 'close'):
        super().__init__(period, input_field)
        # Current price plus the `period` prices before it
        self._prices = RollingWindow(period + 1)
        self._roc_value: Optional[float] = None

    def update(self, data_point: DataPoint) -> None:
        (price,) = self._read_inputs(data_point)
        self._prices.push(price)

        reference = self._prices.oldest
        if len(self._prices) == 1 or reference == 0:
            self._roc_value = 0.0
        else:
            self._roc_value = (price - reference) / reference * 100.0

        self._update_metadata()

    @property
    def value(self) -> float:
        if self._roc_value is None:
            return math.nan
        return self._roc_value

    def reset(self) -> None:
        super().reset()
        self._prices.clear()
        self._roc_value = None


class EfficiencyRatio(BaseIndicator[DataPoint]):
    """
    Kaufman Efficiency Ratio (ER).

    Mathematical Formula:
        direction  = |Price_t - Price_{t-n}|
        volatility = sum(|Price_i - Price_{i-1}|) over the last n changes
        ER = direction / volatility

    Ranges from 0 (pure noise) to 1 (straight-line move). The ratio is 1.0
    while fewer than two price changes have been seen, and 0.0 when the
    window holds no movement at all.
    """

    def __init__(self, period: int = 14, input_field: str = 'close'):
        super().__init__(period, input_field)
        self._prices = RollingWindow(period + 1)
        self._changes = RollingSum(period)
        self._er_value: Optional[float] = None

    def update(self, data_point: DataPoint) -> None:
        (price,) = self._read_inputs(data_point)

        if len(self._prices):
            self._changes.push(abs(price - self._prices.newest))
        self._prices.push(price)

        if len(self._prices) <= 2:
            self._er_value = 1.0
        else:
            direction = abs(price - self._prices.oldest)
            volatility = self._changes.sum
            # Running-sum drift can push a straight-line move a hair above 1
            self._er_value = min(direction / volatility, 1.0) if volatility > 0 else 0.0

        self._update_metadata()

    @property
    def value(self) -> float:
        if self._er_value is None:
            return math.nan
        return self._er_value

    def reset(self) -> None:
        super().reset()
        self._prices.clear()
        self._changes.clear()
        self._er_value = None
