"""Tests for the Heikin-Ashi candle transform."""

import math

import pytest

from streamta import HeikinAshi, HeikinAshiOutput, MissingInputError, Quote, TrendColor
from helpers import run

BARS = [
    Quote(open=10.0, high=20.0, low=10.0, close=20.0),
    Quote(open=20.0, high=25.0, low=12.0, close=15.0),
    Quote(open=15.0, high=17.0, low=5.0, close=5.0),
]


class TestHeikinAshi:

    def test_candles(self):
        assert run(HeikinAshi(), BARS) == [
            HeikinAshiOutput(open=20.0, high=20.0, low=10.0, close=15.0),
            HeikinAshiOutput(open=17.5, high=25.0, low=12.0, close=18.0),
            HeikinAshiOutput(open=17.75, high=17.75, low=5.0, close=10.5),
        ]

    def test_color(self):
        ha = HeikinAshi()
        assert ha.color is None

        colors = []
        for bar in BARS:
            ha.next(bar)
            colors.append(ha.color)
        assert colors == [TrendColor.RED, TrendColor.GREEN, TrendColor.RED]
        assert TrendColor.GREEN == 'green'

    def test_requires_open(self):
        with pytest.raises(MissingInputError) as exc_info:
            HeikinAshi().next(Quote(close=10.0, high=11.0, low=9.0))
        assert exc_info.value.missing_fields == ['open']

    def test_bare_price(self):
        assert run(HeikinAshi(), [10.0, 12.0]) == [
            HeikinAshiOutput(10.0, 10.0, 10.0, 10.0),
            HeikinAshiOutput(10.0, 12.0, 10.0, 12.0),
        ]

    def test_reset(self):
        ha = HeikinAshi()
        first = run(ha, BARS)
        ha.reset()

        assert all(math.isnan(x) for x in ha.value)
        assert ha.color is None
        assert run(ha, BARS) == first
        assert ha.config == {}
