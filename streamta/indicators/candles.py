"""
Candle transforms.

Classes:
    HeikinAshi: Smoothed OHLC candles built from the previous candle's body
"""

import math
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional

from ..base import BaseIndicator
from ..quotes import OHLCInput


class TrendColor(str, Enum):
    """Direction of a Heikin-Ashi candle or an Ichimoku cloud."""

    GREEN = 'green'
    RED = 'red'


class HeikinAshiOutput(NamedTuple):
    open: float
    high: float
    low: float
    close: float


class HeikinAshi(BaseIndicator[OHLCInput]):
    """
    Heikin-Ashi candles.

    Mathematical Formula:
        HA_Close = (Open + High + Low + Close) / 4
        HA_Open  = (HA_Open_{t-1} + HA_Close_{t-1}) / 2   [Close on the first bar]
        HA_High  = max(High, HA_Open, HA_Close)
        HA_Low   = min(Low, HA_Open, HA_Close)

    ``color`` is green when HA_Open < HA_Close and red otherwise. A bare
    price is treated as a bar with all four prices equal.

    Example:
        >>> ha = HeikinAshi()
        >>> ha.next(Quote(open=10.0, high=20.0, low=10.0, close=20.0))
        HeikinAshiOutput(open=20.0, high=20.0, low=10.0, close=15.0)
        >>> ha.color
        <TrendColor.RED: 'red'>
    """

    def __init__(self):
        super().__init__(period=1)
        self.required_inputs = ('open', 'high', 'low', 'close')
        self._candle: Optional[HeikinAshiOutput] = None

    def update(self, data_point: OHLCInput) -> None:
        open_, high, low, close = self._read_inputs(data_point)

        if self._candle is None:
            ha_open = close
        else:
            ha_open = (self._candle.open + self._candle.close) / 2.0
        ha_close = (open_ + high + low + close) / 4.0

        self._candle = HeikinAshiOutput(
            open=ha_open,
            high=max(high, ha_open, ha_close),
            low=min(low, ha_open, ha_close),
            close=ha_close,
        )
        self._update_metadata()

    @property
    def value(self) -> HeikinAshiOutput:
        if self._candle is None:
            return HeikinAshiOutput(math.nan, math.nan, math.nan, math.nan)
        return self._candle

    @property
    def color(self) -> Optional[TrendColor]:
        """Color of the last candle, None before the first tick."""
        if self._candle is None:
            return None
        return TrendColor.GREEN if self._candle.open < self._candle.close else TrendColor.RED

    @property
    def config(self) -> Dict[str, Any]:
        return {}

    def reset(self) -> None:
        super().reset()
        self._candle = None

    def __repr__(self) -> str:
        return "HeikinAshi()"
