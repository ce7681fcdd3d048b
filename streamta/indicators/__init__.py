"""
Concrete streaming indicators built on BaseIndicator.

Trend, momentum, volatility, volume, composite and candle indicators, all updated in
O(1) amortized time per tick.
"""

from .smoothing import SmoothingStrategy, WildersSmoothing, EmaSmoothing, FixedAlphaSmoothing
from .trend import SMA, EMA, SMMA
from .minmax import Minimum, Maximum
from .volatility import StandardDeviation, TrueRange, AverageTrueRange
from .momentum import RSI, RateOfChange, EfficiencyRatio, RSI_ZERO_LOSS_VALUE
from .volume import OnBalanceVolume
from .composite import (
    MACD, Stochastic, BollingerBands, Ichimoku,
    MACDOutput, StochasticOutput, BollingerBandsOutput, IchimokuOutput,
    STOCHASTIC_FLAT_VALUE,
)
from .candles import HeikinAshi, HeikinAshiOutput, TrendColor

__all__ = [
    # Trend indicators
    "SMA",
    "EMA",
    "SMMA",

    # Rolling extremes
    "Minimum",
    "Maximum",

    # Volatility indicators
    "StandardDeviation",
    "TrueRange",
    "AverageTrueRange",

    # Momentum indicators
    "RSI",
    "RateOfChange",
    "EfficiencyRatio",

    # Volume indicators
    "OnBalanceVolume",

    # Composite indicators and their outputs
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
]
