"""Shared fixtures for the indicator test suite."""

from typing import List

import numpy as np
import pandas as pd
import pytest

from streamta import Quote


@pytest.fixture
def random_prices() -> List[float]:
    """Random-walk close prices, long enough for >10x any tested period."""
    rng = np.random.default_rng(42)
    return (100.0 + np.cumsum(rng.normal(0.0, 1.0, 500))).tolist()


@pytest.fixture
def ohlcv_frame() -> pd.DataFrame:
    """Random OHLCV bars with high >= close >= low."""
    rng = np.random.default_rng(7)
    n = 400
    close = 100.0 + np.cumsum(rng.normal(0.0, 1.0, n))
    frame = pd.DataFrame({
        'close': close,
        'high': close + rng.uniform(0.01, 2.0, n),
        'low': close - rng.uniform(0.01, 2.0, n),
        'volume': rng.integers(100, 10_000, n).astype(float),
    })
    frame['open'] = frame['close'].shift(1).fillna(frame['close'].iloc[0])
    return frame


@pytest.fixture
def ohlcv_bars(ohlcv_frame) -> List[Quote]:
    return [Quote.from_mapping(row) for row in ohlcv_frame.to_dict('records')]
