"""
Named collection of indicators driven by one quote stream.

One ``IndicatorSet`` per symbol/stream keeps every indicator's state
separate; the set forwards each tick to all of its members.
"""

import logging
from typing import Any, Dict, Iterator, Mapping, Optional

from .base import BaseIndicator, Output
from .exceptions import ConfigurationError, IndicatorError
from .factory import create
from .quotes import DataPoint

logger = logging.getLogger(__name__)


class IndicatorSet:
    """
    Ordered mapping of name -> indicator updated together.

    Example:
        >>> indicators = IndicatorSet({'fast': EMA(12), 'slow': EMA(26)})
        >>> indicators.next(Quote(close=100.0))
        {'fast': 100.0, 'slow': 100.0}
    """

    def __init__(self, indicators: Optional[Mapping[str, BaseIndicator]] = None):
        self._indicators: Dict[str, BaseIndicator] = {}
        for name, indicator in (indicators or {}).items():
            self.add(name, indicator)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'IndicatorSet':
        """
        Build a set from a configuration mapping.

        Each entry maps a name to the keyword arguments of ``create`` plus a
        ``type`` key naming the indicator::

            fast_ma: {type: ema, period: 12}
            macd: {type: macd, fast_period: 12, slow_period: 26}

        Raises:
            ConfigurationError: If an entry is not a mapping or lacks ``type``.
            IndicatorError: If the factory rejects an entry.
        """
        if not isinstance(config, Mapping):
            raise ConfigurationError("indicators", f"expected a mapping, got {type(config).__name__}")

        indicator_set = cls()
        for name, entry in config.items():
            if not isinstance(entry, Mapping):
                raise ConfigurationError(name, f"expected a mapping, got {type(entry).__name__}")
            if 'type' not in entry:
                raise ConfigurationError(name, "missing 'type' key")

            params = {key: value for key, value in entry.items() if key != 'type'}
            try:
                indicator_set.add(name, create(entry['type'], **params))
            except IndicatorError:
                logger.error(f"Could not build indicator '{name}' from {dict(entry)}")
                raise

        logger.info(f"Built indicator set with {len(indicator_set)} indicators: {', '.join(indicator_set.names)}")
        return indicator_set

    def add(self, name: str, indicator: BaseIndicator) -> None:
        """Add an indicator under a unique name."""
        if name in self._indicators:
            raise ConfigurationError(name, "duplicate indicator name")
        if not isinstance(indicator, BaseIndicator):
            raise ConfigurationError(name, f"expected an indicator, got {type(indicator).__name__}")
        self._indicators[name] = indicator

    def next(self, data_point: DataPoint) -> Dict[str, Output]:
        """Feed one tick to every indicator and return their values by name."""
        self.update(data_point)
        return self.values

    def update(self, data_point: DataPoint) -> None:
        """
        Feed one tick to every indicator.

        The tick is checked against every member's input contract first, so
        a tick rejected by one member is consumed by none.

        Raises:
            MissingInputError: If a member requires a field the tick lacks.
            InvalidDataError: If a field some member reads is invalid.
        """
        for indicator in self._indicators.values():
            indicator._read_inputs(data_point)
        for indicator in self._indicators.values():
            indicator.update(data_point)

    @property
    def values(self) -> Dict[str, Output]:
        return {name: indicator.value for name, indicator in self._indicators.items()}

    @property
    def is_ready(self) -> bool:
        """True once every member has finished warming up."""
        return all(indicator.is_ready for indicator in self._indicators.values())

    @property
    def names(self) -> list:
        return list(self._indicators)

    def reset(self) -> None:
        for indicator in self._indicators.values():
            indicator.reset()
        logger.debug(f"Reset indicator set ({len(self)} indicators)")

    def __getitem__(self, name: str) -> BaseIndicator:
        return self._indicators[name]

    def __contains__(self, name: object) -> bool:
        return name in self._indicators

    def __iter__(self) -> Iterator[str]:
        return iter(self._indicators)

    def __len__(self) -> int:
        return len(self._indicators)

    def __repr__(self) -> str:
        members = ", ".join(f"{name}={indicator!r}" for name, indicator in self._indicators.items())
        return f"IndicatorSet({members})"
