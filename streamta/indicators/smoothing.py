"""
Exponential smoothing recurrences shared by several indicators.

Classes:
    SmoothingStrategy: Seeded exponential recurrence with a pluggable alpha
    EmaSmoothing: Standard EMA factor, α = 2/(N+1)
    FixedAlphaSmoothing: Explicit α, for EMAs configured with a custom factor
    WildersSmoothing: Wilder's factor, α = 1/N (SMMA, Wilder RSI)
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Type

from ..exceptions import InvalidParameterError


class SmoothingStrategy(ABC):
    """
    Seeded exponential smoothing.

    The first observation becomes the smoothed value unchanged; every later
    observation is blended as ``α·x + (1-α)·previous``. Subclasses only pick
    the smoothing factor.
    """

    def __init__(self, period: int):
        self.period = period
        self._alpha = self.get_alpha()
        self._current_value: Optional[float] = None

    @abstractmethod
    def get_alpha(self) -> float:
        """Smoothing factor for this strategy's period."""

    @property
    def alpha(self) -> float:
        return self._alpha

    def update(self, new_value: float) -> float:
        """
        Blend a new observation into the smoothed value.

        Returns:
            float: The updated smoothed value.
        """
        if self._current_value is None:
            self._current_value = new_value
        else:
            self._current_value = self._alpha * new_value + (1 - self._alpha) * self._current_value

        return self._current_value

    @property
    def value(self) -> Optional[float]:
        """Current smoothed value, or None before the first update."""
        return self._current_value

    def reset(self) -> None:
        self._current_value = None


class WildersSmoothing(SmoothingStrategy):
    """
    Wilder's smoothing, α = 1/N.

    Equivalent to ``(previous·(N-1) + x) / N``, the recurrence used by the
    smoothed moving average and Wilder's original RSI.
    """

    def get_alpha(self) -> float:
        return 1.0 / self.period


class EmaSmoothing(SmoothingStrategy):
    """Standard exponential smoothing, α = 2/(N+1)."""

    def get_alpha(self) -> float:
        return 2.0 / (self.period + 1)


class FixedAlphaSmoothing(SmoothingStrategy):
    """Exponential smoothing with a caller-supplied α in (0, 1]."""

    def __init__(self, period: int, alpha: float):
        self._fixed_alpha = float(alpha)
        super().__init__(period)

    def get_alpha(self) -> float:
        return self._fixed_alpha


SMOOTHING_STRATEGIES: Dict[str, Type[SmoothingStrategy]] = {
    'ema': EmaSmoothing,
    'wilders': WildersSmoothing,
}


def create_smoother(name: str, period: int, indicator_name: Optional[str] = None) -> SmoothingStrategy:
    """
    Build a smoothing strategy by name.

    Raises:
        InvalidParameterError: If ``name`` is not a known strategy.
    """
    try:
        strategy_class = SMOOTHING_STRATEGIES[name]
    except (KeyError, TypeError):
        expected = " or ".join(f"'{key}'" for key in SMOOTHING_STRATEGIES)
        raise InvalidParameterError("smoothing", name, f"either {expected}", indicator_name) from None
    return strategy_class(period)
