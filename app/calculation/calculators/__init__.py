# 计算器模块
from .strategy_registry import (
    CalculationStrategyRegistry,
    create_default_registry,
    initialize_calculation_system
)
from .distribution_calculator import (
    DistributionConfig,
    FixedBandDistributionStrategy,
    IntervalDistributionStrategy,
    calculate_fixed_distribution,
    calculate_interval_distribution
)
from .weighted_calculator import WeightedScoreCalculator

__all__ = [
    'CalculationStrategyRegistry',
    'create_default_registry',
    'initialize_calculation_system',
    'DistributionConfig',
    'FixedBandDistributionStrategy',
    'IntervalDistributionStrategy',
    'calculate_fixed_distribution',
    'calculate_interval_distribution',
    'WeightedScoreCalculator'
]
