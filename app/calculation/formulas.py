# 描述性统计公式和策略实现
import logging
import math
import numbers
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .engine import StatisticalStrategy, create_validation_result
from ..utils.precision_handler import round_half_up

logger = logging.getLogger(__name__)

Number = Union[int, float]


# 函数式接口：所有统计均为全函数，空序列返回约定的默认值而不抛异常
def calculate_mean(scores: Sequence[Number]) -> float:
    """计算算术平均数，空序列返回0.0"""
    if len(scores) == 0:
        return 0.0
    return float(np.mean(np.asarray(scores, dtype=float)))


def calculate_median(scores: Sequence[Number]) -> float:
    """计算中位数：偶数个取中间两数的平均，奇数个取中间数，空序列返回0.0"""
    if len(scores) == 0:
        return 0.0
    return float(np.median(np.asarray(scores, dtype=float)))


def calculate_variance(scores: Sequence[Number]) -> float:
    """计算总体方差（除数为N）"""
    if len(scores) == 0:
        return 0.0
    return float(np.var(np.asarray(scores, dtype=float), ddof=0))


def calculate_standard_deviation(scores: Sequence[Number]) -> float:
    """计算总体标准差"""
    return math.sqrt(calculate_variance(scores))


def calculate_quantile(sorted_scores: Sequence[Number], quantile: float) -> float:
    """
    计算分位数（位置取整/中点平均规则）

    位置 pos = N * quantile：
    - pos 为整数时，取第 pos 与第 pos+1 个数（从1开始计）的平均值；
    - 否则取第 ceil(pos) 个数。

    例如 [50, 60, 70, 80, 90] 的 Q1 位置为1.25，取第2个数60；Q3 位置为3.75，取第4个数80。

    Args:
        sorted_scores: 已升序排列的分数
        quantile: 分位比例，如0.25、0.75

    Returns:
        分位数值，空序列返回0.0
    """
    n = len(sorted_scores)
    if n == 0:
        return 0.0

    pos = n * quantile
    if pos == math.floor(pos):
        lower = min(max(int(pos) - 1, 0), n - 1)
        upper = min(max(int(pos), 0), n - 1)
        return (float(sorted_scores[lower]) + float(sorted_scores[upper])) / 2.0

    index = min(max(math.ceil(pos) - 1, 0), n - 1)
    return float(sorted_scores[index])


def calculate_iqr(scores: Sequence[Number]) -> float:
    """计算四分位距 Q3 - Q1"""
    sorted_scores = sorted(scores)
    return calculate_quantile(sorted_scores, 0.75) - calculate_quantile(sorted_scores, 0.25)


def calculate_max(scores: Sequence[Number]) -> Number:
    """最高分，空序列返回0"""
    return max(scores, default=0)


def calculate_min(scores: Sequence[Number]) -> Number:
    """最低分，空序列返回0"""
    return min(scores, default=0)


def calculate_mode(scores: Sequence[Number]) -> List[Number]:
    """计算众数，返回所有出现频次最高的值（升序），空序列返回空列表"""
    if len(scores) == 0:
        return []
    return pd.Series(list(scores)).mode().tolist()


def calculate_percentile_rank(score: Number, reference_scores: Sequence[Number]) -> float:
    """
    计算百分等级(PR)：参照序列中严格小于该分数的比例 * 100

    空参照序列返回0.0
    """
    if len(reference_scores) == 0:
        return 0.0
    count_below = sum(1 for value in reference_scores if value < score)
    return count_below * 100.0 / len(reference_scores)


def describe_scores(scores: Sequence[Number], decimal_places: Optional[int] = None) -> Dict[str, Any]:
    """
    计算一组分数的完整描述统计

    Args:
        scores: 分数序列
        decimal_places: 舍入位数；为None时不舍入。
            平均数、中位数、标准差、方差、四分位距参与舍入，最值与众数保持原值。
    """
    values = list(scores)
    sorted_values = sorted(values)

    result = {
        'count': len(values),
        'mean': calculate_mean(values),
        'median': calculate_median(values),
        'variance': calculate_variance(values),
        'std': calculate_standard_deviation(values),
        'q1': calculate_quantile(sorted_values, 0.25),
        'q3': calculate_quantile(sorted_values, 0.75),
        'iqr': calculate_iqr(values),
        'max': calculate_max(values),
        'min': calculate_min(values),
        'mode': calculate_mode(values)
    }

    if decimal_places is not None:
        for key in ('mean', 'median', 'variance', 'std', 'iqr'):
            result[key] = round_half_up(result[key], decimal_places)

    return result


def _validate_numeric_scores(scores: pd.Series) -> Dict[str, Any]:
    """验证分数序列均为有效数值"""
    validation_result = create_validation_result()

    numeric = pd.to_numeric(scores, errors='coerce')
    invalid_count = int(numeric.isna().sum())
    if invalid_count > 0:
        validation_result['is_valid'] = False
        validation_result['errors'].append(f"发现{invalid_count}个无效分数值")

    if len(scores) == 0:
        validation_result['warnings'].append("分数序列为空，返回默认统计值")

    validation_result['stats']['total_records'] = len(scores)
    return validation_result


class DescriptiveStatisticsStrategy(StatisticalStrategy):
    """描述性统计策略：平均数、中位数、方差、标准差、四分位距、最值、众数"""

    def calculate(self, scores: pd.Series, config: Dict[str, Any]) -> Dict[str, Any]:
        decimal_places = config.get('decimal_places')
        return describe_scores(scores.tolist(), decimal_places)

    def validate_input(self, scores: pd.Series, config: Dict[str, Any]) -> Dict[str, Any]:
        validation_result = _validate_numeric_scores(scores)

        decimal_places = config.get('decimal_places')
        if decimal_places is not None and (not isinstance(decimal_places, int) or decimal_places < 0):
            validation_result['is_valid'] = False
            validation_result['errors'].append(f"舍入位数配置无效: {decimal_places}")

        return validation_result

    def get_algorithm_info(self) -> Dict[str, str]:
        return {
            'name': 'DescriptiveStatistics',
            'version': '1.0',
            'description': '描述性统计：总体方差、位置取整分位数、多值众数',
            'variance_formula': 'population_variance_ddof_0',
            'quantile_formula': 'pos = N * q; integer -> mean(x[pos-1], x[pos]); else x[ceil(pos)-1]',
            'rounding': 'half_away_from_zero(value * 10) / 10 when decimal_places=1'
        }


class PercentileRankStrategy(StatisticalStrategy):
    """百分等级计算策略"""

    def calculate(self, scores: pd.Series, config: Dict[str, Any]) -> Dict[str, Any]:
        reference = scores.tolist()
        if 'score' in config:
            return {'percentile_rank': calculate_percentile_rank(config['score'], reference)}
        return {
            'percentile_ranks': [calculate_percentile_rank(value, reference) for value in reference]
        }

    def validate_input(self, scores: pd.Series, config: Dict[str, Any]) -> Dict[str, Any]:
        validation_result = _validate_numeric_scores(scores)

        score = config.get('score')
        if 'score' in config and (isinstance(score, bool) or not isinstance(score, numbers.Real)):
            validation_result['is_valid'] = False
            validation_result['errors'].append(f"目标分数无效: {score!r}")

        return validation_result

    def get_algorithm_info(self) -> Dict[str, str]:
        return {
            'name': 'PercentileRank',
            'version': '1.0',
            'description': '百分等级：严格低于目标分数的人数占比',
            'formula': '100 * count(x < score) / N'
        }
