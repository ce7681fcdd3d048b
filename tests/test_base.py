"""Tests for the shared indicator contract and the Quote input model."""

import dataclasses
import math
import typing
from datetime import datetime
from types import SimpleNamespace

import pytest

from streamta import (
    MACD,
    SMA,
    AverageTrueRange,
    BaseIndicator,
    CloseVolumeInput,
    DataPoint,
    HasClose,
    HasCloseVolume,
    HasHighLowClose,
    HasOpenHighLowClose,
    HeikinAshi,
    HighLowCloseInput,
    IndicatorError,
    InvalidDataError,
    InvalidParameterError,
    MissingInputError,
    OHLCInput,
    OnBalanceVolume,
    Quote,
    Stochastic,
    TrueRange,
)


class TestQuote:

    def test_is_immutable(self):
        bar = Quote(close=10.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            bar.close = 11.0

    def test_from_mapping_ignores_unknown_keys(self):
        bar = Quote.from_mapping({'close': 10.0, 'high': 11.0, 'symbol': 'XYZ'})
        assert bar == Quote(close=10.0, high=11.0)

    def test_to_dict_skips_unset_fields(self):
        stamp = datetime(2024, 1, 2, 9, 30)
        assert Quote(close=10.0, volume=500.0, timestamp=stamp).to_dict() == {
            'close': 10.0,
            'volume': 500.0,
            'timestamp': stamp,
        }

    def test_protocols(self):
        assert isinstance(Quote(close=1.0), HasClose)
        assert isinstance(SimpleNamespace(high=2.0, low=1.0, close=1.5), HasHighLowClose)
        assert not isinstance(SimpleNamespace(open=1.0), HasClose)
        assert isinstance(Quote(open=1.0, high=2.0, low=0.5, close=1.5), HasOpenHighLowClose)
        assert isinstance(Quote(close=1.0, volume=10.0), HasCloseVolume)


class TestInputs:

    def test_scalar_mapping_and_quote_agree(self):
        outputs = [SMA(period=2).next(point) for point in (5.0, 5, {'close': 5.0}, Quote(close=5.0))]
        assert outputs == [5.0] * 4

    def test_arbitrary_object_with_attributes(self):
        assert TrueRange().next(SimpleNamespace(high=3.0, low=1.0, close=2.0)) == 2.0

    def test_missing_field_in_mapping(self):
        with pytest.raises(MissingInputError) as exc_info:
            SMA(period=3).next({'open': 10.0})

        error = exc_info.value
        assert error.missing_fields == ['close']
        assert error.required_fields == ['close']
        assert str(error).startswith('[SMA]')

    @pytest.mark.parametrize("bad_value, reason", [
        (None, 'None'),
        (math.nan, 'NaN'),
        (math.inf, 'infinite'),
        ('10.5', 'not numeric'),
        (True, 'not numeric'),
    ])
    def test_invalid_values(self, bad_value, reason):
        with pytest.raises(InvalidDataError) as exc_info:
            SMA(period=3).next({'close': bad_value})

        assert exc_info.value.field_name == 'close'
        assert reason in exc_info.value.reason

    def test_bare_nan_is_rejected(self):
        with pytest.raises(InvalidDataError):
            SMA(period=3).next(math.nan)

    def test_rejected_tick_leaves_state_untouched(self):
        sma = SMA(period=3)
        sma.next(3.0)
        with pytest.raises(InvalidDataError):
            sma.next(math.inf)

        assert sma.count == 1
        assert sma.next(5.0) == 4.0

    def test_volume_indicator_rejects_bare_price(self):
        with pytest.raises(MissingInputError) as exc_info:
            OnBalanceVolume().next(10.0)
        assert exc_info.value.missing_fields == ['close', 'volume']

    def test_errors_share_a_base_class(self):
        for error_class in (InvalidParameterError, MissingInputError, InvalidDataError):
            assert issubclass(error_class, IndicatorError)


class TestContract:

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            BaseIndicator(period=3)

    def test_children_is_a_copy(self):
        macd = MACD(3, 6, 2)
        children = macd.children
        children.clear()
        assert len(macd.children) == 3

    def test_leaf_has_no_children(self):
        assert SMA(period=3).children == []

    def test_config(self):
        assert SMA(period=7, input_field='open').config == {'period': 7, 'input_field': 'open'}
        assert TrueRange().config == {}

    def test_next_is_update_then_value(self):
        by_next, by_update = SMA(period=2), SMA(period=2)
        for price in [1.0, 4.0, 9.0]:
            by_update.update(price)
            assert by_next.next(price) == by_update.value

    def test_repr(self):
        sma = SMA(period=2)
        assert repr(sma) == "SMA(period=2, warming up (0/2))"
        sma.next(1.0)
        sma.next(1.0)
        assert str(sma) == "SMA(period=2, ready)"
        assert repr(MACD(12, 26, 9)) == "MACD(12, 26, 9)"

    @pytest.mark.parametrize("indicator_class, input_type", [
        (SMA, DataPoint),
        (MACD, DataPoint),
        (Stochastic, HighLowCloseInput),
        (TrueRange, HighLowCloseInput),
        (AverageTrueRange, HighLowCloseInput),
        (OnBalanceVolume, CloseVolumeInput),
        (HeikinAshi, OHLCInput),
    ])
    def test_declared_input_type(self, indicator_class, input_type):
        base = indicator_class.__orig_bases__[0]
        assert typing.get_origin(base) is BaseIndicator
        assert typing.get_args(base) == (input_type,)
        assert typing.get_type_hints(indicator_class.update)['data_point'] == input_type
