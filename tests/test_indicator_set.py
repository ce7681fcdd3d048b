"""Tests for IndicatorSet, ConfigLoader and logging setup."""

import logging
import math

import pytest
import yaml

from streamta import (
    EMA,
    MACD,
    SMA,
    ConfigLoader,
    ConfigurationError,
    IndicatorNotFoundError,
    IndicatorSet,
    InvalidDataError,
    InvalidParameterError,
    MACDOutput,
    MissingInputError,
    OnBalanceVolume,
    Quote,
    setup_logging,
)
from helpers import run

CONFIG = {
    'fast': {'type': 'ema', 'period': 3},
    'slow': {'type': 'sma', 'period': 5},
    'momentum': {'type': 'macd', 'fast_period': 3, 'slow_period': 6, 'signal_period': 2},
}


class TestIndicatorSet:

    def test_next_returns_values_by_name(self):
        indicators = IndicatorSet({'fast': EMA(3), 'slow': SMA(2)})

        indicators.next(Quote(close=10.0))
        assert indicators.next(Quote(close=20.0)) == {'fast': 15.0, 'slow': 15.0}
        assert indicators.values == {'fast': 15.0, 'slow': 15.0}

    def test_members_match_standalone_indicators(self, random_prices):
        indicators = IndicatorSet.from_config(CONFIG)
        standalone = MACD(3, 6, 2)

        for price in random_prices[:100]:
            outputs = indicators.next(price)
            assert outputs['momentum'] == standalone.next(price)

    def test_from_config(self):
        indicators = IndicatorSet.from_config(CONFIG)

        assert indicators.names == ['fast', 'slow', 'momentum']
        assert isinstance(indicators['momentum'], MACD)
        assert indicators['slow'].period == 5
        assert 'fast' in indicators and 'missing' not in indicators
        assert len(indicators) == 3

    def test_is_ready_waits_for_slowest_member(self):
        indicators = IndicatorSet({'fast': SMA(2), 'slow': SMA(4)})
        run(indicators, [1.0, 2.0, 3.0])
        assert indicators['fast'].is_ready
        assert not indicators.is_ready

        indicators.next(4.0)
        assert indicators.is_ready

    def test_update_then_values(self):
        indicators = IndicatorSet({'macd': MACD(2, 3, 2)})
        indicators.update(7.0)
        assert indicators.values == {'macd': MACDOutput(0.0, 0.0, 0.0)}

    def test_reset(self):
        indicators = IndicatorSet.from_config(CONFIG)
        run(indicators, [1.0, 2.0, 3.0])
        indicators.reset()

        assert all(indicators[name].count == 0 for name in indicators)
        assert math.isnan(indicators.values['fast'])

    def test_rejected_tick_is_consumed_by_no_member(self):
        indicators = IndicatorSet({'sma': SMA(3), 'obv': OnBalanceVolume()})

        with pytest.raises(MissingInputError):
            indicators.next(10.0)
        with pytest.raises(InvalidDataError):
            indicators.update({'close': 10.0, 'volume': math.nan})

        assert [indicators[name].count for name in indicators] == [0, 0]
        assert indicators.next({'close': 10.0, 'volume': 500.0}) == {'sma': 10.0, 'obv': 500.0}

    def test_rejects_duplicate_name(self):
        indicators = IndicatorSet({'ma': SMA(3)})
        with pytest.raises(ConfigurationError) as exc_info:
            indicators.add('ma', EMA(3))
        assert exc_info.value.entry_name == 'ma'

    def test_rejects_non_indicator(self):
        with pytest.raises(ConfigurationError):
            IndicatorSet({'ma': 'sma'})

    @pytest.mark.parametrize("config", [
        ['sma'],
        {'ma': 'sma'},
        {'ma': {'period': 3}},
    ])
    def test_from_config_rejects_malformed_entries(self, config):
        with pytest.raises(ConfigurationError):
            IndicatorSet.from_config(config)

    def test_from_config_propagates_factory_errors(self, caplog):
        with caplog.at_level(logging.ERROR, logger='streamta'):
            with pytest.raises(IndicatorNotFoundError):
                IndicatorSet.from_config({'cloud': {'type': 'renko'}})
        assert "Could not build indicator 'cloud'" in caplog.text

        with pytest.raises(InvalidParameterError):
            IndicatorSet.from_config({'ma': {'type': 'sma', 'period': 0}})

    def test_from_config_rejects_non_string_type(self):
        with pytest.raises(IndicatorNotFoundError):
            IndicatorSet.from_config({'ma': {'type': ['sma'], 'period': 3}})


class TestConfigLoader:

    def write_config(self, tmp_path, document):
        path = tmp_path / 'indicators.yaml'
        path.write_text(yaml.safe_dump(document, sort_keys=False))
        return str(path)

    def test_builds_indicator_set(self, tmp_path):
        loader = ConfigLoader(self.write_config(tmp_path, {'indicators': CONFIG}))

        indicators = loader.build_indicator_set()
        assert indicators.names == ['fast', 'slow', 'momentum']
        assert loader['indicators']['fast']['period'] == 3
        assert loader.get('logging') is None

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'empty.yaml'
        path.write_text('')

        loader = ConfigLoader(str(path))
        assert loader.config == {}
        with pytest.raises(ConfigurationError):
            loader.build_indicator_set()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader(str(tmp_path / 'absent.yaml'))

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / 'broken.yaml'
        path.write_text('indicators: {fast: [unclosed\n')

        with pytest.raises(yaml.YAMLError):
            ConfigLoader(str(path))

    def test_top_level_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigLoader(self.write_config(tmp_path, ['sma', 'ema']))

    def test_custom_section(self, tmp_path):
        loader = ConfigLoader(self.write_config(tmp_path, {'intraday': {'ma': {'type': 'sma', 'period': 2}}}))
        assert loader.build_indicator_set('intraday').names == ['ma']


class TestSetupLogging:

    def test_dict_config(self):
        setup_logging({
            'version': 1,
            'disable_existing_loggers': False,
            'loggers': {'streamta.tests': {'level': 'DEBUG'}},
        })
        assert logging.getLogger('streamta.tests').level == logging.DEBUG

    def test_malformed_config_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger='streamta'):
            setup_logging({'version': 99})
        assert 'Using basic config' in caplog.text
