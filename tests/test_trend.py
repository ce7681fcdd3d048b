"""Tests for SMA, EMA and SMMA."""

import math

import pytest

from streamta import EMA, SMA, SMMA, EmaSmoothing, InvalidParameterError, Quote, WildersSmoothing
from helpers import run


class TestSMA:

    def test_partial_window_then_full_window_means(self):
        sma = SMA(period=3)
        assert run(sma, [1, 2, 3, 4, 5]) == [1.0, 1.5, 2.0, 3.0, 4.0]

    def test_converges_to_constant_price(self):
        sma = SMA(period=5)
        outputs = run(sma, [7.0, 3.0] + [42.0] * 10)
        assert outputs[-6:] == [42.0] * 6

    def test_value_is_nan_before_first_tick(self):
        assert math.isnan(SMA(period=3).value)

    def test_is_ready_after_period_ticks(self):
        sma = SMA(period=3)
        sma.next(1.0)
        sma.next(2.0)
        assert not sma.is_ready
        sma.next(3.0)
        assert sma.is_ready

    def test_constant_after_spike_stays_exact(self):
        outputs = run(SMA(period=3), [1e16] + [1.0] * 8)
        assert outputs[3:] == [1.0] * 6

    def test_period_one_tracks_input(self):
        assert run(SMA(period=1), [3.0, 8.0, -2.0]) == [3.0, 8.0, -2.0]

    def test_reads_configured_field(self):
        sma = SMA(period=2, input_field='high')
        sma.next(Quote(close=1.0, high=10.0))
        assert sma.next({'high': 20.0, 'close': 2.0}) == 15.0

    def test_reset_restores_initial_state(self):
        sma = SMA(period=3)
        run(sma, [1.0, 2.0, 3.0, 4.0])
        sma.reset()

        assert sma.count == 0
        assert math.isnan(sma.value)
        assert run(sma, [1, 2, 3, 4, 5]) == [1.0, 1.5, 2.0, 3.0, 4.0]

    @pytest.mark.parametrize("period", [0, -3, 1.5, "3", None, True])
    def test_rejects_invalid_period(self, period):
        with pytest.raises(InvalidParameterError) as exc_info:
            SMA(period=period)
        assert exc_info.value.parameter_name == "period"

    def test_repr_reports_warm_up(self):
        sma = SMA(period=3)
        sma.next(1.0)
        assert repr(sma) == "SMA(period=3, warming up (1/3))"


class TestEMA:

    def test_first_output_equals_first_input(self):
        assert EMA(period=3).next(10.0) == 10.0

    def test_recurrence(self):
        ema = EMA(period=3)  # alpha = 0.5
        assert run(ema, [10.0, 20.0, 30.0]) == [10.0, 15.0, 22.5]
        assert ema.alpha == 0.5

    def test_custom_alpha(self):
        ema = EMA(period=10, alpha=0.25)
        assert run(ema, [8.0, 16.0]) == [8.0, 10.0]
        assert ema.config['alpha'] == 0.25

    @pytest.mark.parametrize("alpha", [0, -0.1, 1.5, "0.5"])
    def test_rejects_invalid_alpha(self, alpha):
        with pytest.raises(InvalidParameterError):
            EMA(period=3, alpha=alpha)

    def test_period_one_tracks_input(self):
        assert run(EMA(period=1), [4.0, 9.0, 1.0]) == [4.0, 9.0, 1.0]

    def test_matches_ema_smoothing_strategy(self, random_prices):
        ema = EMA(period=5)
        smoother = EmaSmoothing(5)
        for price in random_prices[:50]:
            assert ema.next(price) == smoother.update(price)

    def test_reset_restores_seeding(self):
        ema = EMA(period=4)
        first = run(ema, [3.0, 5.0, 8.0])
        ema.reset()
        assert math.isnan(ema.value)
        assert run(ema, [3.0, 5.0, 8.0]) == first


class TestSMMA:

    def test_wilder_recurrence(self):
        smma = SMMA(period=4)
        # (prev * 3 + x) / 4
        assert run(smma, [4.0, 8.0, 0.0]) == [4.0, 5.0, 3.75]
        assert smma.alpha == 0.25

    def test_config_has_no_custom_alpha(self):
        assert SMMA(period=5).config == {'period': 5, 'input_field': 'close'}

    def test_rejects_invalid_period(self):
        with pytest.raises(InvalidParameterError):
            SMMA(period=0)

    def test_matches_wilders_smoothing_strategy(self, random_prices):
        smma = SMMA(period=7)
        smoother = WildersSmoothing(7)
        for price in random_prices[:50]:
            assert smma.next(price) == smoother.update(price)
