# 统计计算引擎模块
from .engine import CalculationEngine, StatisticalStrategy
from .formulas import (
    calculate_iqr,
    calculate_max,
    calculate_mean,
    calculate_median,
    calculate_min,
    calculate_mode,
    calculate_percentile_rank,
    calculate_quantile,
    calculate_standard_deviation,
    calculate_variance,
    describe_scores
)
from .calculators import (
    DistributionConfig,
    WeightedScoreCalculator,
    calculate_fixed_distribution,
    calculate_interval_distribution,
    initialize_calculation_system
)

__all__ = [
    'CalculationEngine',
    'StatisticalStrategy',
    'calculate_iqr',
    'calculate_max',
    'calculate_mean',
    'calculate_median',
    'calculate_min',
    'calculate_mode',
    'calculate_percentile_rank',
    'calculate_quantile',
    'calculate_standard_deviation',
    'calculate_variance',
    'describe_scores',
    'DistributionConfig',
    'WeightedScoreCalculator',
    'calculate_fixed_distribution',
    'calculate_interval_distribution',
    'initialize_calculation_system'
]
