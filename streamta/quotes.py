"""
Numeric input model for indicators.

A ``Quote`` is one immutable price/volume bar. Indicators read only the
fields listed in their ``required_inputs``; the protocols below describe the
narrowest shape each family of indicators accepts so that a static type
checker can reject a bar that lacks a field before any data is fed in.

Indicators also accept plain mappings (``{'close': 10.0, ...}``) and,
except for volume indicators, bare numbers. Each indicator class is
parameterised with its input type, e.g. ``BaseIndicator[HighLowCloseInput]``.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Union, runtime_checkable

OHLCV_FIELDS = ('open', 'high', 'low', 'close', 'volume')


@runtime_checkable
class HasClose(Protocol):
    """Anything exposing a closing price."""

    @property
    def close(self) -> float: ...


@runtime_checkable
class HasHighLowClose(Protocol):
    """Bar exposing high, low and close prices."""

    @property
    def high(self) -> float: ...

    @property
    def low(self) -> float: ...

    @property
    def close(self) -> float: ...


@runtime_checkable
class HasOpenHighLowClose(Protocol):
    """Full OHLC candle."""

    @property
    def open(self) -> float: ...

    @property
    def high(self) -> float: ...

    @property
    def low(self) -> float: ...

    @property
    def close(self) -> float: ...


@runtime_checkable
class HasCloseVolume(Protocol):
    """Bar exposing close price and traded volume."""

    @property
    def close(self) -> float: ...

    @property
    def volume(self) -> float: ...


@dataclass(frozen=True)
class Quote:
    """
    Immutable OHLCV bar.

    Only ``close`` is mandatory. Optional fields default to ``None`` and are
    reported as missing by indicators that require them.

    Example:
        >>> bar = Quote(close=101.5, high=102.0, low=100.8, volume=1_500)
        >>> bar.close
        101.5
    """

    close: float
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    volume: Optional[float] = None
    timestamp: Optional[datetime] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'Quote':
        """Build a Quote from a dict-like bar, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> dict:
        """Return the populated fields as a plain dict."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


DataPoint = Union[float, int, Quote, Mapping[str, Any], HasClose]

# Narrow inputs for indicators that read more than one field
HighLowCloseInput = Union[float, HasHighLowClose, Mapping[str, Any]]
OHLCInput = Union[float, HasOpenHighLowClose, Mapping[str, Any]]
CloseVolumeInput = Union[HasCloseVolume, Mapping[str, Any]]
