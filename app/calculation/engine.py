# 核心统计计算引擎
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import pandas as pd

from ..repositories.base import InvalidArgumentError

logger = logging.getLogger(__name__)


class StatisticalStrategy(ABC):
    """统计计算策略抽象基类"""

    @abstractmethod
    def calculate(self, scores: pd.Series, config: Dict[str, Any]) -> Dict[str, Any]:
        """执行统计计算"""
        pass

    @abstractmethod
    def validate_input(self, scores: pd.Series, config: Dict[str, Any]) -> Dict[str, Any]:
        """验证输入数据"""
        pass

    @abstractmethod
    def get_algorithm_info(self) -> Dict[str, str]:
        """获取算法信息"""
        pass


def create_validation_result() -> Dict[str, Any]:
    """创建空的验证结果"""
    return {
        'is_valid': True,
        'errors': [],
        'warnings': [],
        'stats': {}
    }


class CalculationEngine:
    """统计计算引擎核心

    引擎只保存已注册的策略，不保存任何计算结果，每次调用都基于传入数据重新计算。
    """

    def __init__(self):
        self.strategies: Dict[str, StatisticalStrategy] = {}

    def register_strategy(self, name: str, strategy: StatisticalStrategy):
        """注册计算策略"""
        self.strategies[name] = strategy
        logger.info(f"已注册计算策略: {name}")

    def calculate(self, strategy_name: str, scores, config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        执行计算

        Args:
            strategy_name: 策略名称
            scores: 分数序列（列表或pandas Series）
            config: 策略配置

        Returns:
            策略计算结果

        Raises:
            ValueError: 策略未注册
            InvalidArgumentError: 输入数据或配置验证失败
        """
        config = config or {}
        if strategy_name not in self.strategies:
            raise ValueError(f"未知的计算策略: {strategy_name}")

        strategy = self.strategies[strategy_name]
        series = scores if isinstance(scores, pd.Series) else pd.Series(list(scores))

        validation_result = strategy.validate_input(series, config)
        if not validation_result['is_valid']:
            raise InvalidArgumentError(f"数据验证失败: {validation_result['errors']}")
        for warning in validation_result['warnings']:
            logger.warning(f"{strategy_name}: {warning}")

        start_time = time.time()
        result = strategy.calculate(series, config)
        logger.debug(
            f"策略 {strategy_name} 计算完成, 数据量={len(series)}, "
            f"耗时={time.time() - start_time:.4f}s"
        )
        return result

    def get_registered_strategies(self) -> List[str]:
        """获取已注册的策略列表"""
        return list(self.strategies.keys())

    def get_strategy_info(self, strategy_name: str) -> Dict[str, Any]:
        """
        获取特定策略的元数据信息

        Raises:
            ValueError: 当策略不存在时
        """
        if strategy_name not in self.strategies:
            raise ValueError(f"策略 '{strategy_name}' 不存在")

        algorithm_info = self.strategies[strategy_name].get_algorithm_info()
        return {
            'name': strategy_name,
            'description': algorithm_info.get('description', '无描述'),
            'version': algorithm_info.get('version', '1.0'),
            'algorithm_info': algorithm_info
        }
