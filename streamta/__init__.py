"""
streamta - streaming technical analysis

Incremental technical indicators that consume one market data point at a
time and emit an updated value in constant time and memory, without
re-scanning history.

This library provides:
- A uniform indicator contract: ``next(data_point)``, ``reset()``
- Moving averages, oscillators, momentum, volatility and volume measures
- Heikin-Ashi candles and the Ichimoku cloud
- Composite indicators (MACD, Stochastic, Bollinger Bands) that own their
  sub-indicators
- Fixed-capacity rolling windows with O(1) sum and min/max
- A factory and YAML-driven indicator sets

Example Usage:
    import streamta as ta

    sma = ta.SMA(period=20)
    macd = ta.create('macd', fast_period=12, slow_period=26, signal_period=9)

    for bar in bars:
        average = sma.next(bar)
        macd_line, signal, histogram = macd.next(bar)
"""

__version__ = "1.0.0"

import logging

from .base import BaseIndicator
from .exceptions import (
    IndicatorError,
    InvalidParameterError,
    MissingInputError,
    InvalidDataError,
    IndicatorNotFoundError,
    ConfigurationError,
)
from .quotes import (
    Quote, HasClose, HasHighLowClose, HasOpenHighLowClose, HasCloseVolume,
    DataPoint, HighLowCloseInput, OHLCInput, CloseVolumeInput,
)
from .rolling import RollingWindow, RollingSum, RollingMinMax
from .indicators import (
    SMA, EMA, SMMA,
    Minimum, Maximum,
    StandardDeviation, TrueRange, AverageTrueRange,
    RSI, RateOfChange, EfficiencyRatio,
    OnBalanceVolume,
    MACD, Stochastic, BollingerBands, Ichimoku,
    MACDOutput, StochasticOutput, BollingerBandsOutput, IchimokuOutput,
    HeikinAshi, HeikinAshiOutput, TrendColor,
    SmoothingStrategy, WildersSmoothing, EmaSmoothing, FixedAlphaSmoothing,
    RSI_ZERO_LOSS_VALUE, STOCHASTIC_FLAT_VALUE,
)
from .factory import create, list_indicators, describe
from .indicator_set import IndicatorSet
from .configloader import ConfigLoader, setup_logging

# Library logging stays silent unless the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "BaseIndicator",
    "Quote",
    "HasClose",
    "HasHighLowClose",
    "HasOpenHighLowClose",
    "HasCloseVolume",
    "DataPoint",
    "HighLowCloseInput",
    "OHLCInput",
    "CloseVolumeInput",

    # Rolling windows
    "RollingWindow",
    "RollingSum",
    "RollingMinMax",

    # Factory functions
    "create",
    "list_indicators",
    "describe",

    # Indicator sets and configuration
    "IndicatorSet",
    "ConfigLoader",
    "setup_logging",

    # Basic indicators
    "SMA",
    "EMA",
    "SMMA",
    "Minimum",
    "Maximum",
    "StandardDeviation",
    "TrueRange",
    "AverageTrueRange",
    "RSI",
    "RateOfChange",
    "EfficiencyRatio",
    "OnBalanceVolume",

    # Composite indicators
    "MACD",
    "Stochastic",
    "BollingerBands",
    "MACDOutput",
    "StochasticOutput",
    "Ichimoku",
    "BollingerBandsOutput",
    "IchimokuOutput",

    # Candle transforms
    "HeikinAshi",
    "HeikinAshiOutput",
    "TrendColor",

    # Smoothing strategies
    "SmoothingStrategy",
    "WildersSmoothing",
    "EmaSmoothing",
    "FixedAlphaSmoothing",

    # Degenerate-case constants
    "RSI_ZERO_LOSS_VALUE",
    "STOCHASTIC_FLAT_VALUE",

    # Exceptions
    "IndicatorError",
    "InvalidParameterError",
    "MissingInputError",
    "InvalidDataError",
    "IndicatorNotFoundError",
    "ConfigurationError",

    # Metadata
    "__version__",
]
