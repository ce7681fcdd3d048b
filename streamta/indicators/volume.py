"""
Volume-based technical indicators.

Classes:
    OnBalanceVolume: Cumulative volume signed by close-to-close direction
"""

import math
from typing import Any, Dict

from ..base import BaseIndicator
from ..quotes import CloseVolumeInput


class OnBalanceVolume(BaseIndicator[CloseVolumeInput]):
    """
    On Balance Volume (OBV).

    Mathematical Formula:
        OBV_t = OBV_{t-1} + volume_t   if close_t > close_{t-1}
        OBV_t = OBV_{t-1} - volume_t   if close_t < close_{t-1}
        OBV_t = OBV_{t-1}              otherwise

    The previous close starts at 0.0, so the first bar with a positive close
    contributes its full volume.

    Example:
        >>> obv = OnBalanceVolume()
        >>> obv.next({'close': 1.5, 'volume': 1000})
        1000.0
        >>> obv.next({'close': 5.0, 'volume': 5000})
        6000.0
    """

    accepts_scalar = False

    def __init__(self):
        super().__init__(period=1)
        self.required_inputs = ('close', 'volume')
        self._obv = 0.0
        self._prev_close = 0.0

    def update(self, data_point: CloseVolumeInput) -> None:
        close, volume = self._read_inputs(data_point)

        if close > self._prev_close:
            self._obv += volume
        elif close < self._prev_close:
            self._obv -= volume

        self._prev_close = close
        self._update_metadata()

    @property
    def value(self) -> float:
        if not self._data_count:
            return math.nan
        return self._obv

    @property
    def config(self) -> Dict[str, Any]:
        return {}

    def reset(self) -> None:
        super().reset()
        self._obv = 0.0
        self._prev_close = 0.0
