"""
Composite technical indicators.

Each indicator here owns the sub-indicators it is built from. The same tick
is forwarded to every owned component and the results are combined;
``reset()`` recurses through the owned components.
"""

import math
from typing import Any, Dict, Literal, NamedTuple, Optional, Tuple

from ..base import BaseIndicator
from ..exceptions import InvalidParameterError
from ..quotes import DataPoint, HighLowCloseInput
from ..rolling import RollingMinMax
from .candles import TrendColor
from .minmax import Maximum, Minimum
from .trend import SMA, EMA
from .volatility import StandardDeviation

# %K reported when the highest high equals the lowest low
STOCHASTIC_FLAT_VALUE = 50.0


class MACDOutput(NamedTuple):
    macd: float
    signal: float
    histogram: float


class StochasticOutput(NamedTuple):
    k: float
    d: float


class BollingerBandsOutput(NamedTuple):
    upper: float
    middle: float
    lower: float
    bandwidth: float


class IchimokuOutput(NamedTuple):
    tenkan_sen: float
    kijun_sen: float
    senkou_span_a: float
    senkou_span_b: float
    chikou_span: float


class MACD(BaseIndicator[DataPoint]):
    """
    Moving Average Convergence Divergence (MACD) indicator.

    Mathematical Formula:
        MACD Line = EMA(fast_period) - EMA(slow_period)
        Signal Line = EMA(MACD Line, signal_period)
        Histogram = MACD Line - Signal Line

    All three EMAs are seeded with their first input, so a value is produced
    from the first tick. ``is_ready`` turns true after
    ``slow_period + signal_period - 1`` ticks.

    Attributes:
        fast_ema (EMA): The fast EMA indicator.
        slow_ema (EMA): The slow EMA indicator.
        signal_ema (EMA): The signal line EMA, fed with the MACD line.

    Example:
        >>> macd = MACD(fast_period=12, slow_period=26, signal_period=9)
        >>> out = macd.next(101.2)
        >>> out.macd, out.signal, out.histogram
        (0.0, 0.0, 0.0)
    """

    def __init__(self, fast_period: int = 12, slow_period: int = 26, signal_period: int = 9, input_field: str = 'close'):
        """
        Initialize MACD indicator.

        Args:
            fast_period (int): The period for the fast EMA.
            slow_period (int): The period for the slow EMA. Must exceed fast_period.
            signal_period (int): The period for the signal line EMA.
            input_field (str): The input field to use.

        Raises:
            InvalidParameterError: If a period is not positive or fast_period >= slow_period.
        """
        self._validate_period(fast_period, "fast_period", "MACD")
        self._validate_period(slow_period, "slow_period", "MACD")
        self._validate_period(signal_period, "signal_period", "MACD")
        if fast_period >= slow_period:
            raise InvalidParameterError(
                "fast_period", fast_period, f"less than slow_period ({slow_period})", "MACD"
            )

        super().__init__(period=slow_period + signal_period - 1, input_field=input_field)

        self.fast_ema = EMA(fast_period)
        self.slow_ema = EMA(slow_period)
        self.signal_ema = EMA(signal_period)

        self._children = [self.fast_ema, self.slow_ema, self.signal_ema]
        self._output: Optional[MACDOutput] = None

    def update(self, data_point: DataPoint) -> None:
        (price,) = self._read_inputs(data_point)

        macd = self.fast_ema.next(price) - self.slow_ema.next(price)
        signal = self.signal_ema.next(macd)
        self._output = MACDOutput(macd, signal, macd - signal)

        self._update_metadata()

    @property
    def value(self) -> MACDOutput:
        if self._output is None:
            return MACDOutput(math.nan, math.nan, math.nan)
        return self._output

    @property
    def fast_period(self) -> int:
        return self.fast_ema.period

    @property
    def slow_period(self) -> int:
        return self.slow_ema.period

    @property
    def signal_period(self) -> int:
        return self.signal_ema.period

    @property
    def config(self) -> Dict[str, Any]:
        return {
            'fast_period': self.fast_period,
            'slow_period': self.slow_period,
            'signal_period': self.signal_period,
            'input_field': self.input_field,
        }

    def reset(self) -> None:
        super().reset()
        self._output = None

    def __repr__(self) -> str:
        return f"MACD({self.fast_period}, {self.slow_period}, {self.signal_period})"


class Stochastic(BaseIndicator[HighLowCloseInput]):
    """
    Stochastic Oscillator (fast, or slow with smooth_k > 1).

    Mathematical Formula:
        Raw %K = 100 * (Close - Lowest Low) / (Highest High - Lowest Low)
        %K = SMA(Raw %K, smooth_k)   [Raw %K when smooth_k = 1]
        %D = SMA or EMA of %K over d_period

    The lowest low and highest high cover the last ``period`` bars (all bars
    seen so far during warm-up) and are tracked with monotonic deques.
    A zero range yields ``STOCHASTIC_FLAT_VALUE`` (50.0), never NaN. A bare
    price is treated as a bar with high = low = close.

    Attributes:
        k_sma (Optional[SMA]): Smoother for raw %K when smooth_k > 1.
        d_line (SMA | EMA): The %D signal line.
    """

    def __init__(
        self,
        period: int = 14,
        d_period: int = 3,
        smooth_k: int = 1,
        d_smoothing: Literal['sma', 'ema'] = 'sma',
        input_field: str = 'close'
    ):
        """
        Initialize Stochastic Oscillator.

        Args:
            period (int): Lookback for the highest high / lowest low.
            d_period (int): Length of the %D signal line.
            smooth_k (int): Smoothing of raw %K (1 = fast stochastic).
            d_smoothing (str): 'sma' or 'ema' for the %D line.
            input_field (str): Field compared against the range. Defaults to 'close'.
        """
        self._validate_period(d_period, "d_period", "Stochastic")
        self._validate_period(smooth_k, "smooth_k", "Stochastic")
        if d_smoothing not in ('sma', 'ema'):
            raise InvalidParameterError("d_smoothing", d_smoothing, "either 'sma' or 'ema'", "Stochastic")

        super().__init__(period=period, input_field=input_field)
        self.required_inputs = ('high', 'low', input_field)
        self._ready_threshold = period + smooth_k + d_period - 2

        self._d_period = d_period
        self._smooth_k = smooth_k
        self._d_smoothing = d_smoothing

        self._lows = RollingMinMax(period)
        self._highs = RollingMinMax(period)

        self.k_sma: Optional[SMA] = SMA(smooth_k) if smooth_k > 1 else None
        self.d_line = SMA(d_period) if d_smoothing == 'sma' else EMA(d_period)

        self._children = [self.d_line] if self.k_sma is None else [self.k_sma, self.d_line]
        self._raw_k_value = math.nan
        self._output: Optional[StochasticOutput] = None

    def update(self, data_point: HighLowCloseInput) -> None:
        high, low, close = self._read_inputs(data_point)

        self._lows.push(low)
        self._highs.push(high)
        lowest_low = self._lows.min
        highest_high = self._highs.max

        if highest_high == lowest_low:
            self._raw_k_value = STOCHASTIC_FLAT_VALUE
        else:
            self._raw_k_value = 100.0 * (close - lowest_low) / (highest_high - lowest_low)

        k_value = self.k_sma.next(self._raw_k_value) if self.k_sma else self._raw_k_value
        d_value = self.d_line.next(k_value)
        self._output = StochasticOutput(k_value, d_value)

        self._update_metadata()

    @property
    def value(self) -> StochasticOutput:
        if self._output is None:
            return StochasticOutput(math.nan, math.nan)
        return self._output

    @property
    def raw_k(self) -> float:
        """Unsmoothed %K of the last tick."""
        return self._raw_k_value

    @property
    def config(self) -> Dict[str, Any]:
        return {
            'period': self.period,
            'd_period': self._d_period,
            'smooth_k': self._smooth_k,
            'd_smoothing': self._d_smoothing,
            'input_field': self.input_field,
        }

    def reset(self) -> None:
        super().reset()
        self._lows.clear()
        self._highs.clear()
        self._raw_k_value = math.nan
        self._output = None


class BollingerBands(BaseIndicator[DataPoint]):
    """
    Bollinger Bands (BBands) indicator.

    Mathematical Formula:
        Middle Band = mean(period)
        Upper Band = Middle Band + (K * StdDev(period))
        Lower Band = Middle Band - (K * StdDev(period))
        Bandwidth = (Upper Band - Lower Band) / Middle Band

    Mean and standard deviation both come from the owned
    StandardDeviation, which uses the partial window during warm-up.
    A zero middle band yields a bandwidth of 0.

    Attributes:
        std_dev (StandardDeviation): Rolling mean / standard deviation.
    """

    def __init__(self, period: int = 20, k: float = 2.0, input_field: str = 'close'):
        """
        Initialize Bollinger Bands indicator.

        Args:
            period (int): The lookback period for the mean and StdDev.
            k (float): The number of standard deviations for the bands.
            input_field (str): The input field to use.
        """
        super().__init__(period, input_field)

        if isinstance(k, bool) or not isinstance(k, (int, float)) or not k > 0:
            raise InvalidParameterError("k", k, "positive number (> 0)", self._name)
        self._k = float(k)

        self.std_dev = StandardDeviation(period)
        self._children = [self.std_dev]

    def update(self, data_point: DataPoint) -> None:
        (price,) = self._read_inputs(data_point)
        self.std_dev.update(price)
        self._update_metadata()

    @property
    def value(self) -> BollingerBandsOutput:
        if not self._data_count:
            return BollingerBandsOutput(math.nan, math.nan, math.nan, math.nan)

        middle = self.std_dev.mean
        width = self._k * self.std_dev.value
        upper = middle + width
        lower = middle - width
        bandwidth = (upper - lower) / middle if middle != 0 else 0.0

        return BollingerBandsOutput(upper, middle, lower, bandwidth)

    @property
    def k(self) -> float:
        return self._k

    @property
    def config(self) -> Dict[str, Any]:
        config = super().config
        config['k'] = self._k
        return config


class Ichimoku(BaseIndicator[HighLowCloseInput]):
    """
    Ichimoku Kinko Hyo.

    Mathematical Formula:
        midpoint(n)   = (Highest High(n) + Lowest Low(n)) / 2
        Tenkan-sen    = midpoint(tenkan_period)
        Kijun-sen     = midpoint(kijun_period)
        Senkou Span A = (Tenkan-sen + Kijun-sen) / 2
        Senkou Span B = midpoint(senkou_b_period)
        Chikou Span   = Close

    All lines are reported as of the current bar. Charting conventionally
    plots both Senkou spans ``kijun_period`` bars ahead and the Chikou span
    ``kijun_period`` bars behind; that displacement is left to the caller.
    Midpoints cover all bars seen so far during warm-up. ``kumo_color`` is
    green while Senkou Span A is above Senkou Span B and red otherwise.

    Attributes:
        highs / lows: Owned Maximum and Minimum per lookback, in
            (tenkan, kijun, senkou_b) order.
    """

    def __init__(self, tenkan_period: int = 9, kijun_period: int = 26, senkou_b_period: int = 52):
        """
        Initialize Ichimoku indicator.

        Args:
            tenkan_period (int): Lookback of the conversion line.
            kijun_period (int): Lookback of the base line. Must exceed tenkan_period.
            senkou_b_period (int): Lookback of Senkou Span B. Must exceed kijun_period.

        Raises:
            InvalidParameterError: If a period is not positive or the periods are not increasing.
        """
        self._validate_period(tenkan_period, "tenkan_period", "Ichimoku")
        self._validate_period(kijun_period, "kijun_period", "Ichimoku")
        self._validate_period(senkou_b_period, "senkou_b_period", "Ichimoku")
        if tenkan_period >= kijun_period:
            raise InvalidParameterError(
                "tenkan_period", tenkan_period, f"less than kijun_period ({kijun_period})", "Ichimoku"
            )
        if kijun_period >= senkou_b_period:
            raise InvalidParameterError(
                "kijun_period", kijun_period, f"less than senkou_b_period ({senkou_b_period})", "Ichimoku"
            )

        super().__init__(period=senkou_b_period)
        self.required_inputs = ('high', 'low', 'close')

        periods = (tenkan_period, kijun_period, senkou_b_period)
        self.highs: Tuple[Maximum, ...] = tuple(Maximum(p) for p in periods)
        self.lows: Tuple[Minimum, ...] = tuple(Minimum(p) for p in periods)
        self._children = [*self.highs, *self.lows]

        self._output: Optional[IchimokuOutput] = None

    def update(self, data_point: HighLowCloseInput) -> None:
        high, low, close = self._read_inputs(data_point)

        tenkan, kijun, senkou_b = (
            (highest.next(high) + lowest.next(low)) / 2.0
            for highest, lowest in zip(self.highs, self.lows)
        )
        self._output = IchimokuOutput(
            tenkan_sen=tenkan,
            kijun_sen=kijun,
            senkou_span_a=(tenkan + kijun) / 2.0,
            senkou_span_b=senkou_b,
            chikou_span=close,
        )

        self._update_metadata()

    @property
    def value(self) -> IchimokuOutput:
        if self._output is None:
            return IchimokuOutput(math.nan, math.nan, math.nan, math.nan, math.nan)
        return self._output

    @property
    def kumo_color(self) -> Optional[TrendColor]:
        """Color of the cloud at the current bar, None before the first tick."""
        if self._output is None:
            return None
        if self._output.senkou_span_a > self._output.senkou_span_b:
            return TrendColor.GREEN
        return TrendColor.RED

    @property
    def config(self) -> Dict[str, Any]:
        return {
            'tenkan_period': self.highs[0].period,
            'kijun_period': self.highs[1].period,
            'senkou_b_period': self.highs[2].period,
        }

    def reset(self) -> None:
        super().reset()
        self._output = None
