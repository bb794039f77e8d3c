# 分数段分布计算器
import logging
import math
import numbers
from typing import Any, Dict, List, Sequence, Tuple, Union

import pandas as pd

from ..engine import StatisticalStrategy, create_validation_result
from ...repositories.base import InvalidArgumentError

logger = logging.getLogger(__name__)

Number = Union[int, float]


class DistributionConfig:
    """分数段配置类"""

    # 固定分数段阈值：低于阈值即落入对应分数段，高于最后一个阈值进入最高段
    SCORE_THRESHOLDS = [60, 70, 80, 90]

    # 固定分数段名称（与阈值一一对应，最后一段为闭区间）
    SCORE_RANGES = ['0-59', '60-69', '70-79', '80-89', '90-100']

    # 分数段含义
    RANGE_NAMES = {
        '0-59': '不及格',
        '60-69': '及格',
        '70-79': '良好',
        '80-89': '优秀',
        '90-100': '卓越'
    }

    @classmethod
    def get_range_name(cls, range_key: str) -> str:
        """获取分数段含义，未知分数段返回原键"""
        return cls.RANGE_NAMES.get(range_key, range_key)

    @classmethod
    def locate_fixed_range(cls, score: Number) -> str:
        """定位分数所在的固定分数段"""
        for threshold, range_key in zip(cls.SCORE_THRESHOLDS, cls.SCORE_RANGES):
            if score < threshold:
                return range_key
        return cls.SCORE_RANGES[-1]


def initialize_fixed_distribution() -> Dict[str, int]:
    """初始化固定分数段，所有分数段计数为0"""
    return {range_key: 0 for range_key in DistributionConfig.SCORE_RANGES}


def calculate_fixed_distribution(scores: Sequence[Number]) -> Dict[str, int]:
    """
    按固定五段统计分数分布（用于加权总分）

    Args:
        scores: 分数序列

    Returns:
        分数段 -> 人数，分数段顺序为 0-59, 60-69, 70-79, 80-89, 90-100
    """
    distribution = initialize_fixed_distribution()
    for score in scores:
        distribution[DistributionConfig.locate_fixed_range(score)] += 1
    return distribution


def _validate_interval(interval) -> int:
    if isinstance(interval, bool) or not isinstance(interval, numbers.Integral) or interval <= 0:
        raise InvalidArgumentError(f"分数段间隔必须为正整数: {interval!r}")
    return int(interval)


def range_key_for(score: Number, interval: int) -> str:
    """计算分数所属的动态分数段键，如 interval=20 时 65 -> '60-79'"""
    range_start = math.floor(score / interval) * interval
    return f"{range_start}-{range_start + interval - 1}"


def calculate_interval_distribution(scores: Sequence[Number], interval: int) -> Dict[str, int]:
    """
    按动态间隔统计分数分布（用于单科原始分数）

    从 floor(最低分/间隔)*间隔 开始，以间隔为步长预先创建直到最高分的所有分数段，
    计数初始化为0，再逐个累计分数。

    Args:
        scores: 分数序列（未参加该科目的学生应已计为0分）
        interval: 分数段间隔，必须为正整数

    Returns:
        分数段 -> 人数，按分数段起点升序排列

    Raises:
        InvalidArgumentError: 间隔不是正整数
    """
    interval = _validate_interval(interval)
    values = list(scores)

    min_grade = min(values, default=0)
    max_grade = max(values, default=0)

    distribution: Dict[str, int] = {}
    range_start = math.floor(min_grade / interval) * interval
    while range_start <= max_grade:
        distribution[f"{range_start}-{range_start + interval - 1}"] = 0
        range_start += interval

    for score in values:
        distribution[range_key_for(score, interval)] += 1

    return distribution


def distribution_to_rows(distribution: Dict[str, int]) -> List[Tuple[str, int, float]]:
    """将分布转换为 (分数段, 人数, 占比) 列表"""
    total = sum(distribution.values())
    return [
        (range_key, count, count / total if total else 0.0)
        for range_key, count in distribution.items()
    ]


class FixedBandDistributionStrategy(StatisticalStrategy):
    """固定五段分数分布策略"""

    def calculate(self, scores: pd.Series, config: Dict[str, Any]) -> Dict[str, Any]:
        distribution = calculate_fixed_distribution(scores.tolist())
        return {
            'total_count': len(scores),
            'distribution': distribution,
            'labels': {key: DistributionConfig.get_range_name(key) for key in distribution}
        }

    def validate_input(self, scores: pd.Series, config: Dict[str, Any]) -> Dict[str, Any]:
        validation_result = create_validation_result()
        numeric = pd.to_numeric(scores, errors='coerce')
        invalid_count = int(numeric.isna().sum())
        if invalid_count > 0:
            validation_result['is_valid'] = False
            validation_result['errors'].append(f"发现{invalid_count}个无效分数值")
        return validation_result

    def get_algorithm_info(self) -> Dict[str, str]:
        return {
            'name': 'FixedBandDistribution',
            'version': '1.0',
            'description': '固定五段分数分布：0-59, 60-69, 70-79, 80-89, 90-100',
            'thresholds': ','.join(str(t) for t in DistributionConfig.SCORE_THRESHOLDS)
        }


class IntervalDistributionStrategy(StatisticalStrategy):
    """动态间隔分数分布策略"""

    def calculate(self, scores: pd.Series, config: Dict[str, Any]) -> Dict[str, Any]:
        interval = config['interval']
        return {
            'total_count': len(scores),
            'interval': interval,
            'distribution': calculate_interval_distribution(scores.tolist(), interval)
        }

    def validate_input(self, scores: pd.Series, config: Dict[str, Any]) -> Dict[str, Any]:
        validation_result = create_validation_result()

        numeric = pd.to_numeric(scores, errors='coerce')
        invalid_count = int(numeric.isna().sum())
        if invalid_count > 0:
            validation_result['is_valid'] = False
            validation_result['errors'].append(f"发现{invalid_count}个无效分数值")
        elif (numeric < 0).any():
            validation_result['is_valid'] = False
            validation_result['errors'].append("分数不能为负数")

        interval = config.get('interval')
        if isinstance(interval, bool) or not isinstance(interval, numbers.Integral) or interval <= 0:
            validation_result['is_valid'] = False
            validation_result['errors'].append(f"分数段间隔必须为正整数: {interval!r}")

        return validation_result

    def get_algorithm_info(self) -> Dict[str, str]:
        return {
            'name': 'IntervalDistribution',
            'version': '1.0',
            'description': '动态间隔分数分布：从最低分所在段到最高分逐段统计',
            'key_format': '<start>-<start+interval-1>'
        }
