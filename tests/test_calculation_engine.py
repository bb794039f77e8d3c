# 统计计算引擎测试
import pytest
import pandas as pd

from app.calculation.engine import CalculationEngine, StatisticalStrategy
from app.calculation.formulas import DescriptiveStatisticsStrategy, PercentileRankStrategy
from app.calculation.calculators import (
    CalculationStrategyRegistry,
    create_default_registry,
    initialize_calculation_system
)
from app.repositories import InvalidArgumentError

DEFAULT_STRATEGIES = [
    'descriptive_statistics',
    'percentile_rank',
    'fixed_band_distribution',
    'interval_distribution'
]


class TestDescriptiveStatisticsStrategy:
    """描述性统计策略测试"""

    def setup_method(self):
        self.strategy = DescriptiveStatisticsStrategy()

    def test_calculation_with_rounding(self):
        result = self.strategy.calculate(pd.Series([90, 60, 50]), {'decimal_places': 1})

        assert result['count'] == 3
        assert result['mean'] == 66.7
        assert result['median'] == 60.0
        assert result['variance'] == 288.9
        assert result['std'] == 17.0
        assert result['iqr'] == 40.0
        assert result['max'] == 90
        assert result['min'] == 50

    def test_calculation_without_rounding(self):
        result = self.strategy.calculate(pd.Series([90, 60, 50]), {})
        assert result['mean'] == pytest.approx(66.6667, abs=1e-4)

    def test_input_validation(self):
        assert self.strategy.validate_input(pd.Series([1, 2, 3]), {})['is_valid']
        assert not self.strategy.validate_input(pd.Series([1, "x"]), {})['is_valid']
        assert not self.strategy.validate_input(pd.Series([1, 2]), {'decimal_places': -1})['is_valid']

    def test_empty_input_is_a_warning(self):
        validation = self.strategy.validate_input(pd.Series([], dtype=float), {})

        assert validation['is_valid']
        assert validation['warnings']


class TestPercentileRankStrategy:

    def setup_method(self):
        self.strategy = PercentileRankStrategy()

    def test_single_score(self):
        result = self.strategy.calculate(pd.Series([90, 60, 50]), {'score': 60})
        assert result['percentile_rank'] == pytest.approx(100 / 3)

    def test_every_score(self):
        result = self.strategy.calculate(pd.Series([90, 60, 50]), {})
        assert result['percentile_ranks'] == pytest.approx([200 / 3, 100 / 3, 0.0])

    def test_invalid_target_score(self):
        validation = self.strategy.validate_input(pd.Series([90, 60]), {'score': "high"})
        assert not validation['is_valid']


class TestCalculationEngine:
    """计算引擎测试"""

    def setup_method(self):
        self.engine = initialize_calculation_system()

    def test_default_strategies_registered(self):
        assert sorted(self.engine.get_registered_strategies()) == sorted(DEFAULT_STRATEGIES)

    def test_accepts_plain_lists(self):
        result = self.engine.calculate('descriptive_statistics', [50, 60, 70, 80, 90])

        assert result['q1'] == 60.0
        assert result['q3'] == 80.0
        assert result['iqr'] == 20.0

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            self.engine.calculate('no_such_strategy', [1, 2, 3])

    def test_validation_failure_raises(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            self.engine.calculate('interval_distribution', [60, 70], {'interval': 0})
        assert "数据验证失败" in str(exc_info.value)

    def test_results_are_recomputed(self):
        """引擎不缓存结果，相同输入得到相同结果"""
        first = self.engine.calculate('descriptive_statistics', [90, 60, 50], {'decimal_places': 1})
        second = self.engine.calculate('descriptive_statistics', [90, 60, 50], {'decimal_places': 1})
        third = self.engine.calculate('descriptive_statistics', [90, 60, 50, 100], {'decimal_places': 1})

        assert first == second
        assert third['count'] == 4

    def test_strategy_info(self):
        info = self.engine.get_strategy_info('percentile_rank')

        assert info['name'] == 'percentile_rank'
        assert info['algorithm_info']['name'] == 'PercentileRank'
        with pytest.raises(ValueError):
            self.engine.get_strategy_info('missing')

    def test_separate_engines_are_independent(self):
        other = CalculationEngine()
        assert other.get_registered_strategies() == []
        assert self.engine.get_registered_strategies()


class TestStrategyRegistry:
    """策略注册表测试"""

    def test_default_registry(self):
        registry = create_default_registry()

        for name in DEFAULT_STRATEGIES:
            assert registry.get_strategy(name) is not None
            assert isinstance(registry.create_strategy(name), StatisticalStrategy)

    def test_register_rejects_non_strategy(self):
        registry = CalculationStrategyRegistry()
        with pytest.raises(ValueError):
            registry.register('bad', dict)

    def test_unknown_strategy(self):
        registry = CalculationStrategyRegistry()
        with pytest.raises(ValueError):
            registry.get_strategy('percentile_rank')

    def test_custom_registry_builds_engine(self):
        registry = CalculationStrategyRegistry()
        registry.register('percentile_rank', PercentileRankStrategy)

        engine = initialize_calculation_system(registry)

        assert engine.get_registered_strategies() == ['percentile_rank']
        assert engine.calculate('percentile_rank', [90, 60, 50], {'score': 90})['percentile_rank'] == pytest.approx(200 / 3)
