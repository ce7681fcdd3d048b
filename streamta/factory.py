"""Factory for creating technical indicators by name."""

import inspect
import logging
from typing import Dict, Any, Type, List, Optional

from .base import BaseIndicator
from .exceptions import InvalidParameterError, IndicatorNotFoundError
from .indicators.trend import SMA, EMA, SMMA
from .indicators.minmax import Minimum, Maximum
from .indicators.volatility import StandardDeviation, TrueRange, AverageTrueRange
from .indicators.momentum import RSI, RateOfChange, EfficiencyRatio
from .indicators.volume import OnBalanceVolume
from .indicators.composite import MACD, BollingerBands, Stochastic, Ichimoku
from .indicators.candles import HeikinAshi

logger = logging.getLogger(__name__)


class IndicatorRegistry:
    """Registry for managing indicators with aliases."""

    def __init__(self):
        """Initialize registry with built-in indicators."""
        self._registry: Dict[str, Type[BaseIndicator]] = {}
        self._canonical: Dict[Type[BaseIndicator], str] = {}
        self._register_builtin_indicators()

    def _register_builtin_indicators(self) -> None:
        """Register built-in indicators."""
        # Trend indicators
        self.register('sma', SMA, aliases=['simple_ma', 'simple_moving_average'])
        self.register('ema', EMA, aliases=['exp_ma', 'exponential_moving_average'])
        self.register('smma', SMMA, aliases=['rma', 'smoothed_moving_average', 'modified_moving_average'])

        # Rolling extremes
        self.register('minimum', Minimum, aliases=['min', 'lowest'])
        self.register('maximum', Maximum, aliases=['max', 'highest'])

        # Volatility indicators
        self.register('stddev', StandardDeviation, aliases=['sd', 'standard_deviation'])
        self.register('true_range', TrueRange, aliases=['tr'])
        self.register('atr', AverageTrueRange, aliases=['average_true_range'])

        # Momentum indicators
        self.register('rsi', RSI, aliases=['relative_strength_index'])
        self.register('roc', RateOfChange, aliases=['rate_of_change'])
        self.register('efficiency_ratio', EfficiencyRatio, aliases=['er'])

        # Volume indicators
        self.register('obv', OnBalanceVolume, aliases=['on_balance_volume'])

        # Composite indicators
        self.register('macd', MACD, aliases=['moving_average_convergence_divergence'])
        self.register('bollinger_bands', BollingerBands, aliases=['bbands', 'bb'])
        self.register('stochastic', Stochastic, aliases=['stoch'])
        self.register('ichimoku', Ichimoku, aliases=['ichimoku_kinko_hyo'])

        # Candle transforms
        self.register('heikin_ashi', HeikinAshi, aliases=['ha', 'heikinashi'])

    def register(self, name: str, indicator_class: Type[BaseIndicator], aliases: Optional[List[str]] = None) -> None:
        """Register indicator under a canonical name and optional aliases."""
        name_lower = name.lower()
        self._registry[name_lower] = indicator_class
        self._canonical.setdefault(indicator_class, name_lower)

        if aliases:
            for alias in aliases:
                self._registry[alias.lower()] = indicator_class

        logger.debug(f"Registered indicator '{name_lower}' -> {indicator_class.__name__}")

    def get(self, name: str) -> Type[BaseIndicator]:
        """Get indicator class by name or alias (case-insensitive)."""
        if not isinstance(name, str) or name.lower() not in self._registry:
            raise IndicatorNotFoundError(str(name), self.list_indicators())

        return self._registry[name.lower()]

    def list_indicators(self) -> List[str]:
        """Canonical names of the registered indicators, without aliases."""
        return sorted(self._canonical.values())

    def get_aliases(self, name: str) -> List[str]:
        """All names (canonical and aliases) that resolve to the same indicator."""
        try:
            target_class = self.get(name)
        except IndicatorNotFoundError:
            return []
        return [key for key, cls in self._registry.items() if cls is target_class]

    def canonical_name(self, indicator_class: Type[BaseIndicator]) -> str:
        return self._canonical[indicator_class]


# Global registry instance
_REGISTRY = IndicatorRegistry()


def create(name: str, **kwargs) -> BaseIndicator:
    """
    Create a technical indicator by name.

    Args:
        name (str): Indicator name or alias (case-insensitive). See
            ``list_indicators()``.
        **kwargs: Constructor parameters, e.g. ``period``, ``input_field``,
            ``fast_period`` / ``slow_period`` / ``signal_period`` for MACD.

    Returns:
        BaseIndicator: Configured indicator instance.

    Raises:
        IndicatorNotFoundError: If the indicator name is not recognized.
        InvalidParameterError: If parameters are invalid, unknown or missing.

    Examples:
        >>> import streamta as ta
        >>> sma = ta.create('sma', period=20)
        >>> macd = ta.create('MACD', fast_period=12, slow_period=26, signal_period=9)
        >>> stoch = ta.create('stoch', period=14, d_period=3)
    """
    indicator_class = _REGISTRY.get(name)
    sig = inspect.signature(indicator_class.__init__)

    # Reject a bad keyword set before construction, so a TypeError raised
    # inside a constructor is never mistaken for a signature mismatch
    try:
        sig.bind(None, **kwargs)
    except TypeError as e:
        params = list(sig.parameters.keys())[1:]
        raise InvalidParameterError(
            parameter_name="constructor",
            value=str(kwargs),
            expected=f"valid parameters for {name}: {params}",
            indicator_name=name
        ) from e

    return indicator_class(**kwargs)


def list_indicators() -> List[str]:
    """
    Get a list of all available indicator names.

    Returns:
        List[str]: Alphabetically sorted canonical names.
    """
    return _REGISTRY.list_indicators()


def describe(name: str) -> Dict[str, Any]:
    """
    Describe an indicator: parameters, aliases and documentation.

    Returns:
        Dict[str, Any]: Dictionary containing:
            - name: Canonical registry name
            - class_name: Python class name
            - aliases: All names resolving to the indicator
            - parameters: Constructor parameters (type, default, required)
            - docstring: Class documentation
            - required_inputs: Bar fields read with the default configuration

    Raises:
        IndicatorNotFoundError: If the indicator name is not recognized.

    Example:
        >>> import streamta as ta
        >>> list(ta.describe('macd')['parameters'])
        ['fast_period', 'slow_period', 'signal_period', 'input_field']
    """
    indicator_class = _REGISTRY.get(name)

    sig = inspect.signature(indicator_class.__init__)
    parameters = {}

    for param_name, param in sig.parameters.items():
        if param_name == 'self':
            continue

        param_info = {
            'type': param.annotation if param.annotation != inspect.Parameter.empty else 'Any',
            'default': param.default if param.default != inspect.Parameter.empty else None,
            'required': param.default == inspect.Parameter.empty
        }
        parameters[param_name] = param_info

    return {
        'name': _REGISTRY.canonical_name(indicator_class),
        'class_name': indicator_class.__name__,
        'aliases': _REGISTRY.get_aliases(name),
        'parameters': parameters,
        'docstring': indicator_class.__doc__,
        'required_inputs': _default_required_inputs(indicator_class, parameters),
    }


def _default_required_inputs(indicator_class: Type[BaseIndicator], parameters: Dict[str, Any]) -> tuple:
    """Required inputs of an instance built with default arguments, if it has defaults."""
    if any(info['required'] for info in parameters.values()):
        # Indicators without full defaults read a single `input_field`
        return (parameters['input_field']['default'],)
    return indicator_class().required_inputs
